# backend/app/services/adjudication.py
from __future__ import annotations

import logging
from enum import Enum

from sqlalchemy.exc import IntegrityError

from ..domain.audit import audit_write
from ..models import ActiveContract, AgreementRequest, AppUser, Role
from ..repositories import Repositories, normalize_email
from ..schemas import OpResult
from . import outcomes
from .runtime_metrics import METRICS

log = logging.getLogger("buildcare.adjudication")

ONE_AGREEMENT_PER_USER = "One agreement per user"


class Decision(str, Enum):
    accept = "accept"
    reject = "reject"


def _promote_to_member(repos: Repositories, *, email: str, name: str | None) -> AppUser:
    """guest/revoked -> member; admins keep admin; unknown identities are created as members."""
    user = repos.users.get(email)
    if user is None:
        return repos.users.create(email=email, name=name, role=Role.member)
    if user.role != Role.admin.value:
        repos.users.set_role(user, Role.member)
    return user


def _materialize_contract(repos: Repositories, *, email: str, request_row: AgreementRequest) -> ActiveContract:
    return repos.contracts.create(
        ActiveContract(
            email=email,
            user_name=request_row.user_name,
            floor_no=request_row.floor_no,
            block_name=request_row.block_name,
            apartment_no=request_row.apartment_no,
            rent=float(request_row.rent),
        )
    )


def adjudicate(
    repos: Repositories,
    *,
    agreement_id: int,
    email: str,
    decision: Decision,
    actor_email: str | None = None,
) -> OpResult:
    """
    Resolve a pending agreement request.

    1. mark the request "checked"
    2. if `email` already holds an active contract: stop with a conflict
       (the checked marker is kept, nothing else changes)
    3. accept: member role + active contract from the request, request removed
    4. reject: request removed, role untouched, no contract

    Steps 3/4 share one transaction with step 1, so a failure part-way
    rolls back to the state before the call and the call can be retried.
    """
    email = normalize_email(email)

    request_row = repos.agreements.get_by_id(agreement_id)
    if request_row is None or request_row.email != email:
        # the request id and the email must name the same request
        return outcomes.not_found("Agreement request not found")

    before = request_row.model_dump()
    repos.agreements.mark_checked(agreement_id)

    if repos.contracts.get(email) is not None:
        repos.db.commit()
        METRICS.inc("adjudications_conflict")
        log.warning("active contract already exists", extra={"email": email, "agreement_id": agreement_id})
        return outcomes.conflict(ONE_AGREEMENT_PER_USER)

    try:
        if decision == Decision.accept:
            user = _promote_to_member(repos, email=email, name=request_row.user_name)
            contract = _materialize_contract(repos, email=email, request_row=request_row)
            removed = repos.agreements.delete_for(email)

            audit_write(
                repos.db,
                actor_email=actor_email,
                action="agreement.accept",
                entity_type="ActiveContract",
                entity_id=str(contract.id),
                before=before,
                after={"contract": contract.model_dump(), "role": user.role, "requests_removed": removed},
            )
            repos.db.commit()

            METRICS.inc("adjudications_accept")
            log.info(
                "agreement accepted",
                extra={"email": email, "agreement_id": agreement_id, "contract_id": contract.id, "decision": "accept"},
            )
            return OpResult(ok=True, kind="updated", inserted_id=str(contract.id), modified_count=1)

        removed = repos.agreements.delete_for(email)
        audit_write(
            repos.db,
            actor_email=actor_email,
            action="agreement.reject",
            entity_type="AgreementRequest",
            entity_id=str(agreement_id),
            before=before,
            after=None,
        )
        repos.db.commit()
    except IntegrityError:
        # a concurrent accept materialized the contract first
        repos.db.rollback()
        METRICS.inc("adjudications_conflict")
        log.warning("active contract created concurrently", extra={"email": email, "agreement_id": agreement_id})
        return outcomes.conflict(ONE_AGREEMENT_PER_USER)

    METRICS.inc("adjudications_reject")
    log.info("agreement rejected", extra={"email": email, "agreement_id": agreement_id, "decision": "reject"})
    return outcomes.deleted(removed)
