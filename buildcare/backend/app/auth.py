# backend/app/auth.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, Request

from .models import Role
from .repositories import Repositories, get_repos
from .services.auth_service import InvalidCredential, verify_credential


@dataclass(frozen=True)
class Identity:
    email: str
    role: Role | None = None


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="unauthorized access")
    scheme, _, token = str(authorization).partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="unauthorized access")
    return token.strip()


# -------------------------
# get_identity (bearer only)
# -------------------------
def get_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> Identity:
    """
    Verify `Authorization: Bearer <token>` and expose the asserted email.

    Runs before any store read, so a bad credential never touches the db.
    """
    token = _bearer_token(authorization)
    try:
        email = verify_credential(token)
    except InvalidCredential:
        raise HTTPException(status_code=401, detail="unauthorized access")

    request.state.identity_email = email
    return Identity(email=email)


def require_role(role: Role) -> Callable[..., Identity]:
    """Build a dependency that admits only identities stored with `role`."""

    def _dep(
        ident: Identity = Depends(get_identity),
        repos: Repositories = Depends(get_repos),
    ) -> Identity:
        current = repos.users.role_of(ident.email)
        if current != role:
            raise HTTPException(status_code=403, detail="forbidden access")
        return Identity(email=ident.email, role=current)

    _dep.__name__ = f"require_{role.value}"
    return _dep


require_admin = require_role(Role.admin)
require_member = require_role(Role.member)
