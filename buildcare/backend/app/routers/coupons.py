# backend/app/routers/coupons.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError

from ..auth import Identity, require_admin
from ..domain.audit import audit_write
from ..models import CouponCode
from ..repositories import Repositories, get_repos
from ..schemas import CouponApplyOut, CouponCreate, CouponOut, OpResult
from ..services import outcomes
from ..services.coupon_resolver import apply_coupon

router = APIRouter(tags=["coupons"])


@router.get("/couponCodes", response_model=list[CouponOut])
def list_coupons(repos: Repositories = Depends(get_repos)):
    return repos.coupons.list_all()


@router.post("/couponCodes", response_model=OpResult)
def create_coupon(
    payload: CouponCreate,
    repos: Repositories = Depends(get_repos),
    admin: Identity = Depends(require_admin),
):
    if repos.coupons.get_by_code(payload.code) is not None:
        return outcomes.conflict("Coupon code already exists")

    row = CouponCode(**payload.model_dump())
    try:
        repos.coupons.create(row)
        audit_write(
            repos.db,
            actor_email=admin.email,
            action="coupon.create",
            entity_type="CouponCode",
            entity_id=str(row.id),
            after={"code": row.code, "discount": row.discount},
        )
        repos.db.commit()
    except IntegrityError:
        repos.db.rollback()
        return outcomes.conflict("Coupon code already exists")
    return outcomes.inserted(row.id)


@router.delete("/couponCodes/{coupon_id}", response_model=OpResult)
def delete_coupon(
    coupon_id: int,
    repos: Repositories = Depends(get_repos),
    admin: Identity = Depends(require_admin),
):
    row = repos.coupons.get_by_id(coupon_id)
    if row is None:
        return outcomes.not_found("Coupon not found")

    audit_write(
        repos.db,
        actor_email=admin.email,
        action="coupon.delete",
        entity_type="CouponCode",
        entity_id=str(row.id),
        before={"code": row.code, "discount": row.discount},
    )
    removed = repos.coupons.delete(coupon_id)
    repos.db.commit()
    return outcomes.deleted(removed)


@router.get("/couponCheck/{code}", response_model=CouponApplyOut)
def check_coupon(
    code: str,
    email: str = Query(..., min_length=3),
    repos: Repositories = Depends(get_repos),
):
    return apply_coupon(repos, email=email, code=code)
