# backend/app/services/auth_service.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt  # PyJWT

from ..config import settings


class InvalidCredential(Exception):
    """Bearer credential is malformed, badly signed or expired."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(*, email: str, days: int | None = None) -> str:
    now = _now()
    ttl = int(days if days is not None else settings.jwt_exp_days)
    payload: dict[str, Any] = {
        "email": email.strip().lower(),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=ttl)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise InvalidCredential("token expired") from e
    except jwt.PyJWTError as e:
        raise InvalidCredential("invalid token") from e

    if not str(claims.get("email") or "").strip():
        raise InvalidCredential("token missing email")
    return claims


def verify_credential(token: str) -> str:
    """Return the email asserted by a valid token."""
    return str(decode_access_token(token)["email"]).strip().lower()
