# backend/app/routers/users.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError

from ..auth import Identity, get_identity, require_admin
from ..domain.audit import audit_write
from ..models import Role
from ..repositories import Repositories, get_repos
from ..schemas import OpResult, TokenOut, TokenRequest, UserCreate, UserOut
from ..services import outcomes
from ..services.auth_service import create_access_token

log = logging.getLogger("buildcare.users")

router = APIRouter(tags=["users"])

USER_EXISTS = "user already exists"


@router.post("/jwt", response_model=TokenOut)
def issue_token(payload: TokenRequest):
    return TokenOut(token=create_access_token(email=payload.email))


@router.post("/users", response_model=OpResult)
def register_user(payload: UserCreate, repos: Repositories = Depends(get_repos)):
    if repos.users.get(payload.email) is not None:
        return outcomes.conflict(USER_EXISTS)
    try:
        row = repos.users.create(email=payload.email, name=payload.name, photo_url=payload.photo_url)
        repos.db.commit()
    except IntegrityError:
        repos.db.rollback()
        return outcomes.conflict(USER_EXISTS)
    return outcomes.inserted(row.id)


@router.get("/users/{email}", response_model=Optional[UserOut])
def get_user(
    email: str,
    repos: Repositories = Depends(get_repos),
    _ident: Identity = Depends(get_identity),
):
    return repos.users.get(email)


@router.get("/members", response_model=list[UserOut])
def list_members(
    repos: Repositories = Depends(get_repos),
    _admin: Identity = Depends(require_admin),
):
    return repos.users.list_by_role(Role.member)


@router.patch("/members/{user_id}", response_model=OpResult)
def remove_member(
    user_id: int,
    repos: Repositories = Depends(get_repos),
    admin: Identity = Depends(require_admin),
):
    """Explicit demotion: member -> revoked. Contracts and payments are left alone."""
    row = repos.users.get_by_id(user_id)
    if row is None:
        return outcomes.not_found("User not found")

    before_role = row.role
    repos.users.set_role(row, Role.revoked)
    audit_write(
        repos.db,
        actor_email=admin.email,
        action="member.remove",
        entity_type="AppUser",
        entity_id=str(row.id),
        before={"role": before_role},
        after={"role": row.role},
    )
    repos.db.commit()
    log.info("member removed", extra={"email": row.email})
    return outcomes.updated(1)
