# backend/app/routers/contracts.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth import Identity, require_member
from ..repositories import Repositories, get_repos
from ..schemas import ContractOut, OpResult
from ..services import outcomes

router = APIRouter(tags=["contracts"])


@router.get("/acceptRequests/{email}", response_model=Optional[ContractOut])
def get_active_contract(
    email: str,
    repos: Repositories = Depends(get_repos),
    _member: Identity = Depends(require_member),
):
    return repos.contracts.get(email)


@router.patch("/acceptRequest/{email}", response_model=OpResult)
def set_paid_through_month(
    email: str,
    month: str = Query(..., min_length=1, max_length=20),
    repos: Repositories = Depends(get_repos),
    _member: Identity = Depends(require_member),
):
    modified = repos.contracts.set_month(email, month)
    if not modified:
        return outcomes.not_found("No active agreement")
    repos.db.commit()
    return outcomes.updated(modified)
