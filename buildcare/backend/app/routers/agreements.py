# backend/app/routers/agreements.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth import Identity, get_identity, require_admin
from ..repositories import Repositories, get_repos
from ..schemas import AgreementCreate, AgreementOut, OpResult
from ..services.adjudication import Decision, adjudicate
from ..services.agreement_intake import submit_agreement

router = APIRouter(tags=["agreements"])


@router.post("/agreements/{email}", response_model=OpResult)
def create_agreement(
    email: str,
    payload: AgreementCreate,
    repos: Repositories = Depends(get_repos),
    _ident: Identity = Depends(get_identity),
):
    return submit_agreement(repos, email=email, payload=payload)


@router.get("/agreements", response_model=list[AgreementOut])
def list_agreements(
    repos: Repositories = Depends(get_repos),
    _admin: Identity = Depends(require_admin),
):
    return repos.agreements.list_all()


@router.get("/agreements/{email}", response_model=Optional[AgreementOut])
def get_agreement(
    email: str,
    repos: Repositories = Depends(get_repos),
    _admin: Identity = Depends(require_admin),
):
    return repos.agreements.get(email)


@router.patch("/agreementsRequest/{agreement_id}", response_model=OpResult)
def adjudicate_agreement(
    agreement_id: int,
    button: Decision = Query(...),
    email: str = Query(..., min_length=3),
    repos: Repositories = Depends(get_repos),
    admin: Identity = Depends(require_admin),
):
    return adjudicate(repos, agreement_id=agreement_id, email=email, decision=button, actor_email=admin.email)
