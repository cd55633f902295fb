# backend/app/services/coupon_resolver.py
from __future__ import annotations

import logging

from ..domain.audit import audit_write
from ..repositories import Repositories, normalize_email
from ..schemas import CouponApplyOut
from .runtime_metrics import METRICS

log = logging.getLogger("buildcare.coupons")


def discounted_rent(rent: float, discount_percent: float) -> tuple[float, float]:
    """
    Return (new_rent, discount) with discount = rent / discount_percent.

    Not idempotent at the ledger level: feeding the result back in compounds
    the reduction (1000 -> 950 -> 902.5 for a 20 coupon).
    """
    if discount_percent <= 0:
        raise ValueError("discount_percent must be > 0")
    discount = float(rent) / float(discount_percent)
    return float(rent) - discount, discount


def apply_coupon(repos: Repositories, *, email: str, code: str) -> CouponApplyOut:
    """Rewrite the active contract rent of `email` with the coupon applied."""
    email = normalize_email(email)

    coupon = repos.coupons.get_by_code(code)
    if coupon is None:
        log.warning("coupon not found", extra={"email": email, "coupon_code": code})
        return CouponApplyOut(ok=False, kind="not_found", message="Coupon not found")

    contract = repos.contracts.get(email)
    if contract is None:
        log.warning("coupon without active contract", extra={"email": email, "coupon_code": code})
        return CouponApplyOut(ok=False, kind="not_found", message="No active agreement")

    old_rent = float(contract.rent)
    new_rent, discount = discounted_rent(old_rent, float(coupon.discount))
    modified = repos.contracts.set_rent(email, new_rent)

    audit_write(
        repos.db,
        actor_email=None,
        action="coupon.apply",
        entity_type="ActiveContract",
        entity_id=str(contract.id),
        before={"rent": old_rent},
        after={"rent": new_rent, "coupon": coupon.code},
    )
    repos.db.commit()

    METRICS.inc("coupons_applied")
    log.info("coupon applied", extra={"email": email, "coupon_code": coupon.code, "contract_id": contract.id})
    return CouponApplyOut(ok=True, kind="updated", modified_count=modified, rent=new_rent, discount=discount)
