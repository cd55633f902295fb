# backend/app/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecordOut(BaseModel):
    """Store ids leave the API as opaque strings."""

    id: str
    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v) if v is not None else v


# -------------------- Lifecycle results --------------------

ResultKind = Literal["inserted", "updated", "deleted", "conflict", "not_found"]


class OpResult(BaseModel):
    """
    Tagged outcome of a lifecycle write.

    Duplicate records and missing references are reported here with
    `inserted_id = None` and HTTP 200, not as HTTP errors; `kind` tells
    the two apart.
    """

    ok: bool
    kind: ResultKind
    message: Optional[str] = None
    inserted_id: Optional[str] = None
    modified_count: int = 0


class CouponApplyOut(OpResult):
    rent: Optional[float] = None
    discount: Optional[float] = None


# -------------------- Identity --------------------

class TokenRequest(BaseModel):
    email: str = Field(min_length=3, max_length=200)


class TokenOut(BaseModel):
    token: str


class UserCreate(BaseModel):
    email: str = Field(min_length=3, max_length=200)
    name: Optional[str] = None
    photo_url: Optional[str] = None


class UserOut(RecordOut):
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


# -------------------- Agreements / contracts --------------------

class AgreementCreate(BaseModel):
    user_name: Optional[str] = None
    floor_no: Optional[str] = None
    block_name: Optional[str] = None
    apartment_no: str
    rent: float = Field(gt=0)


class AgreementOut(RecordOut):
    email: str
    user_name: Optional[str] = None
    floor_no: Optional[str] = None
    block_name: Optional[str] = None
    apartment_no: str
    rent: float
    status: str
    created_at: Optional[datetime] = None


class ContractOut(RecordOut):
    email: str
    user_name: Optional[str] = None
    floor_no: Optional[str] = None
    block_name: Optional[str] = None
    apartment_no: str
    rent: float
    month: Optional[str] = None
    agreement_date: Optional[datetime] = None


# -------------------- Coupons --------------------

class CouponCreate(BaseModel):
    code: str = Field(min_length=1, max_length=60)
    discount: float = Field(gt=0)
    description: Optional[str] = None


class CouponOut(RecordOut):
    code: str
    discount: float
    description: Optional[str] = None


# -------------------- Payments --------------------

class CheckoutSessionIn(BaseModel):
    price: float = Field(gt=0)


class CheckoutSessionOut(BaseModel):
    clientSecret: str


class PaymentCreate(BaseModel):
    amount: float = Field(gt=0)
    month: Optional[str] = None
    transaction_id: Optional[str] = None


class PaymentOut(RecordOut):
    email: str
    amount: float
    accept_request_id: str
    month: Optional[str] = None
    transaction_id: Optional[str] = None
    paid_at: Optional[datetime] = None


# -------------------- Inventory / announcements --------------------

class ApartmentOut(RecordOut):
    image: Optional[str] = None
    floor_no: Optional[str] = None
    block_name: Optional[str] = None
    apartment_no: str
    rent: float


class ApartmentCountOut(BaseModel):
    total: int


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)


class AnnouncementOut(RecordOut):
    title: str
    description: str
    created_at: Optional[datetime] = None
