# backend/app/services/outcomes.py
from __future__ import annotations

from typing import Any, Optional

from ..schemas import OpResult


def inserted(row_id: Any, message: Optional[str] = None) -> OpResult:
    return OpResult(ok=True, kind="inserted", inserted_id=str(row_id), modified_count=1, message=message)


def updated(modified_count: int, message: Optional[str] = None) -> OpResult:
    return OpResult(ok=True, kind="updated", modified_count=int(modified_count), message=message)


def deleted(deleted_count: int, message: Optional[str] = None) -> OpResult:
    return OpResult(ok=True, kind="deleted", modified_count=int(deleted_count), message=message)


def conflict(message: str) -> OpResult:
    return OpResult(ok=False, kind="conflict", inserted_id=None, message=message)


def not_found(message: str) -> OpResult:
    return OpResult(ok=False, kind="not_found", inserted_id=None, message=message)
