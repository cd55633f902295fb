# backend/app/services/payment_ledger.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from ..domain.audit import audit_write
from ..models import Payment
from ..repositories import Repositories, normalize_email
from ..schemas import OpResult, PaymentCreate
from . import outcomes
from .runtime_metrics import METRICS

log = logging.getLogger("buildcare.payments")

PAYMENT_EXISTS = "Payment Already Exists"


def _already_paid(email: str) -> OpResult:
    METRICS.inc("payments_conflict")
    log.warning("payment already exists", extra={"email": email})
    return outcomes.conflict(PAYMENT_EXISTS)


def _parse_contract_id(contract_id: str | int) -> int | None:
    try:
        return int(str(contract_id).strip())
    except (TypeError, ValueError):
        return None


def settle(
    repos: Repositories,
    *,
    email: str,
    contract_id: str | int,
    payload: PaymentCreate,
    actor_email: str | None = None,
) -> OpResult:
    """
    Record the single settlement of `email` and retire the active contract.

    The payment insert and the contract delete commit together. A second
    settle for the same identity (sequential or racing) returns the
    "already exists" conflict and changes nothing.
    """
    email = normalize_email(email)

    if repos.payments.get(email) is not None:
        return _already_paid(email)

    cid = _parse_contract_id(contract_id)
    contract = repos.contracts.get_by_id(cid) if cid is not None else None
    if contract is None:
        log.warning("settle for unknown contract", extra={"email": email, "contract_id": contract_id})
        return outcomes.not_found("Agreement not found")

    before = contract.model_dump()
    row = Payment(
        email=email,
        amount=float(payload.amount),
        accept_request_id=str(contract.id),
        month=payload.month or contract.month,
        transaction_id=payload.transaction_id,
    )

    try:
        repos.payments.create(row)
        retired = repos.contracts.delete(contract.id)
        if retired != 1:
            # another settle retired this contract after we read it
            repos.db.rollback()
            log.warning("contract already retired", extra={"email": email, "contract_id": contract_id})
            return outcomes.not_found("Agreement not found")
        audit_write(
            repos.db,
            actor_email=actor_email,
            action="payment.settle",
            entity_type="Payment",
            entity_id=str(row.id),
            before=before,
            after=row.model_dump(),
        )
        repos.db.commit()
    except IntegrityError:
        repos.db.rollback()
        return _already_paid(email)

    METRICS.inc("payments_settled")
    log.info(
        "payment settled",
        extra={"email": email, "payment_id": row.id, "contract_id": before["id"]},
    )
    return OpResult(ok=True, kind="inserted", inserted_id=str(row.id), modified_count=retired)
