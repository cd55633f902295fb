# backend/app/repositories.py
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from .db import get_db
from .models import (
    ActiveContract,
    AgreementRequest,
    AgreementStatus,
    Announcement,
    Apartment,
    AppUser,
    CouponCode,
    Payment,
    Role,
)


def normalize_email(email: str) -> str:
    return str(email or "").strip().lower()


# -------------------------
# Per-entity repositories
# -------------------------
# Each repository works inside the caller's session and never commits;
# services decide where the transaction boundary of a lifecycle step is.


class UserRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, email: str) -> AppUser | None:
        return self.db.scalar(select(AppUser).where(AppUser.email == normalize_email(email)))

    def get_by_id(self, user_id: int) -> AppUser | None:
        return self.db.scalar(select(AppUser).where(AppUser.id == int(user_id)))

    def role_of(self, email: str) -> Role | None:
        row = self.get(email)
        if row is None:
            return None
        try:
            return Role(row.role)
        except ValueError:
            return None

    def create(self, *, email: str, name: str | None = None, photo_url: str | None = None, role: Role = Role.guest) -> AppUser:
        row = AppUser(email=normalize_email(email), name=name, photo_url=photo_url, role=role.value)
        self.db.add(row)
        self.db.flush()
        return row

    def set_role(self, row: AppUser, role: Role) -> AppUser:
        row.role = role.value
        self.db.add(row)
        self.db.flush()
        return row

    def list_by_role(self, role: Role) -> list[AppUser]:
        q = select(AppUser).where(AppUser.role == role.value).order_by(AppUser.id.asc())
        return list(self.db.scalars(q).all())


class AgreementRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, email: str) -> AgreementRequest | None:
        return self.db.scalar(select(AgreementRequest).where(AgreementRequest.email == normalize_email(email)))

    def get_by_id(self, agreement_id: int) -> AgreementRequest | None:
        return self.db.scalar(select(AgreementRequest).where(AgreementRequest.id == int(agreement_id)))

    def list_all(self) -> list[AgreementRequest]:
        return list(self.db.scalars(select(AgreementRequest).order_by(AgreementRequest.id.asc())).all())

    def create(self, row: AgreementRequest) -> AgreementRequest:
        row.email = normalize_email(row.email)
        row.status = AgreementStatus.pending.value
        self.db.add(row)
        self.db.flush()  # IntegrityError here when the email already has a request
        return row

    def mark_checked(self, agreement_id: int) -> int:
        res = self.db.execute(
            update(AgreementRequest)
            .where(AgreementRequest.id == int(agreement_id))
            .values(status=AgreementStatus.checked.value)
        )
        return int(res.rowcount or 0)

    def delete_for(self, email: str) -> int:
        res = self.db.execute(delete(AgreementRequest).where(AgreementRequest.email == normalize_email(email)))
        return int(res.rowcount or 0)


class ContractRepository:
    """Active contract ledger: plain storage, no business rules."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, email: str) -> ActiveContract | None:
        return self.db.scalar(select(ActiveContract).where(ActiveContract.email == normalize_email(email)))

    def get_by_id(self, contract_id: int) -> ActiveContract | None:
        return self.db.scalar(select(ActiveContract).where(ActiveContract.id == int(contract_id)))

    def create(self, row: ActiveContract) -> ActiveContract:
        row.email = normalize_email(row.email)
        self.db.add(row)
        self.db.flush()
        return row

    def set_rent(self, email: str, rent: float) -> int:
        res = self.db.execute(
            update(ActiveContract).where(ActiveContract.email == normalize_email(email)).values(rent=float(rent))
        )
        return int(res.rowcount or 0)

    def set_month(self, email: str, month: str) -> int:
        res = self.db.execute(
            update(ActiveContract).where(ActiveContract.email == normalize_email(email)).values(month=str(month))
        )
        return int(res.rowcount or 0)

    def delete(self, contract_id: int) -> int:
        res = self.db.execute(delete(ActiveContract).where(ActiveContract.id == int(contract_id)))
        return int(res.rowcount or 0)


class CouponRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_code(self, code: str) -> CouponCode | None:
        return self.db.scalar(select(CouponCode).where(CouponCode.code == str(code).strip()))

    def get_by_id(self, coupon_id: int) -> CouponCode | None:
        return self.db.scalar(select(CouponCode).where(CouponCode.id == int(coupon_id)))

    def list_all(self) -> list[CouponCode]:
        return list(self.db.scalars(select(CouponCode).order_by(CouponCode.id.asc())).all())

    def create(self, row: CouponCode) -> CouponCode:
        row.code = str(row.code).strip()
        self.db.add(row)
        self.db.flush()
        return row

    def delete(self, coupon_id: int) -> int:
        res = self.db.execute(delete(CouponCode).where(CouponCode.id == int(coupon_id)))
        return int(res.rowcount or 0)


class PaymentRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, email: str) -> Payment | None:
        return self.db.scalar(select(Payment).where(Payment.email == normalize_email(email)))

    def create(self, row: Payment) -> Payment:
        row.email = normalize_email(row.email)
        self.db.add(row)
        self.db.flush()  # IntegrityError here when the email already paid
        return row


class ApartmentRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def page(self, *, page: int, limit: int) -> list[Apartment]:
        offset = (max(int(page), 1) - 1) * int(limit)
        q = select(Apartment).order_by(Apartment.id.asc()).offset(offset).limit(int(limit))
        return list(self.db.scalars(q).all())

    def count(self) -> int:
        return int(self.db.scalar(select(func.count(Apartment.id))) or 0)

    def rent_at_most(self, ceiling: float) -> list[Apartment]:
        q = select(Apartment).where(Apartment.rent <= float(ceiling)).order_by(Apartment.rent.asc(), Apartment.id.asc())
        return list(self.db.scalars(q).all())


class AnnouncementRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_all(self) -> list[Announcement]:
        return list(self.db.scalars(select(Announcement).order_by(Announcement.id.desc())).all())

    def create(self, row: Announcement) -> Announcement:
        self.db.add(row)
        self.db.flush()
        return row


@dataclass(frozen=True)
class Repositories:
    db: Session
    users: UserRepository
    agreements: AgreementRepository
    contracts: ContractRepository
    coupons: CouponRepository
    payments: PaymentRepository
    apartments: ApartmentRepository
    announcements: AnnouncementRepository

    @classmethod
    def for_session(cls, db: Session) -> "Repositories":
        return cls(
            db=db,
            users=UserRepository(db),
            agreements=AgreementRepository(db),
            contracts=ContractRepository(db),
            coupons=CouponRepository(db),
            payments=PaymentRepository(db),
            apartments=ApartmentRepository(db),
            announcements=AnnouncementRepository(db),
        )


def get_repos(db: Session = Depends(get_db)) -> Repositories:
    return Repositories.for_session(db)
