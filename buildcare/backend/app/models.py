# backend/app/models.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    DateTime,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class Role(str, Enum):
    guest = "guest"
    member = "member"
    admin = "admin"
    revoked = "revoked"


class AgreementStatus(str, Enum):
    pending = "pending"
    checked = "checked"


# -----------------------------
# Identity
# -----------------------------
class AppUser(Base):
    __tablename__ = "app_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.guest.value)  # guest|member|admin|revoked
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)


class AuditEvent(Base):
    __tablename__ = "audit_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    actor_email: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, index=True)

    action: Mapped[str] = mapped_column(String(80), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(80), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(80), nullable=False)

    before_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    after_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)


# -----------------------------
# Agreement -> membership -> billing
# -----------------------------
class AgreementRequest(Base):
    __tablename__ = "agreement_requests"
    # one outstanding request per identity
    __table_args__ = (UniqueConstraint("email", name="uq_agreement_requests_email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    user_name: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)

    floor_no: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    block_name: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    apartment_no: Mapped[str] = mapped_column(String(40), nullable=False)
    rent: Mapped[float] = mapped_column(Float, nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default=AgreementStatus.pending.value)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    def model_dump(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "user_name": self.user_name,
            "floor_no": self.floor_no,
            "block_name": self.block_name,
            "apartment_no": self.apartment_no,
            "rent": self.rent,
            "status": self.status,
        }


class ActiveContract(Base):
    __tablename__ = "active_contracts"
    # one active contract per member until settled
    __table_args__ = (UniqueConstraint("email", name="uq_active_contracts_email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    user_name: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)

    floor_no: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    block_name: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    apartment_no: Mapped[str] = mapped_column(String(40), nullable=False)

    rent: Mapped[float] = mapped_column(Float, nullable=False)
    month: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # paid-through marker

    agreement_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    def model_dump(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "user_name": self.user_name,
            "floor_no": self.floor_no,
            "block_name": self.block_name,
            "apartment_no": self.apartment_no,
            "rent": self.rent,
            "month": self.month,
        }


class CouponCode(Base):
    __tablename__ = "coupon_codes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(60), nullable=False, unique=True, index=True)
    discount: Mapped[float] = mapped_column(Float, nullable=False)  # percent
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)


class Payment(Base):
    __tablename__ = "payments"
    # exactly-once settlement per identity (no renewal path)
    __table_args__ = (UniqueConstraint("email", name="uq_payments_email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)

    accept_request_id: Mapped[str] = mapped_column(String(80), nullable=False)
    month: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    transaction_id: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    paid_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    def model_dump(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "amount": self.amount,
            "accept_request_id": self.accept_request_id,
            "month": self.month,
            "transaction_id": self.transaction_id,
        }


# -----------------------------
# Inventory / notices (plain accessors)
# -----------------------------
class Apartment(Base):
    __tablename__ = "apartments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    floor_no: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    block_name: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    apartment_no: Mapped[str] = mapped_column(String(40), nullable=False)
    rent: Mapped[float] = mapped_column(Float, nullable=False, index=True)


class Announcement(Base):
    __tablename__ = "announcements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
