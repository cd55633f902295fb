# backend/app/services/agreement_intake.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from ..models import AgreementRequest
from ..repositories import Repositories, normalize_email
from ..schemas import AgreementCreate, OpResult
from . import outcomes
from .runtime_metrics import METRICS

log = logging.getLogger("buildcare.agreements")

DUPLICATE_AGREEMENT = "One user one agreement"


def _duplicate(email: str) -> OpResult:
    METRICS.inc("agreements_conflict")
    log.warning("agreement already outstanding", extra={"email": email})
    return outcomes.conflict(DUPLICATE_AGREEMENT)


def submit_agreement(repos: Repositories, *, email: str, payload: AgreementCreate) -> OpResult:
    """
    Record a new pending agreement request for `email`.

    At most one request per identity: an existing row short-circuits to the
    conflict result, and two submissions racing past that check are settled
    by the unique constraint on agreement_requests.email (the loser gets the
    same conflict result, nothing is inserted for it).
    """
    email = normalize_email(email)

    if repos.agreements.get(email) is not None:
        return _duplicate(email)

    row = AgreementRequest(email=email, **payload.model_dump())
    try:
        repos.agreements.create(row)
        repos.db.commit()
    except IntegrityError:
        repos.db.rollback()
        return _duplicate(email)

    METRICS.inc("agreements_submitted")
    log.info("agreement submitted", extra={"email": email, "agreement_id": row.id})
    return outcomes.inserted(row.id)
