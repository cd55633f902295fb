# backend/tests/conftest.py
from __future__ import annotations

import os
import tempfile

# Settings are read at import time: point them at a throwaway sqlite file first.
_DB_DIR = tempfile.mkdtemp(prefix="buildcare-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["JWT_SECRET"] = "test-secret-not-for-prod"
os.environ["APP_ENV"] = "local"
os.environ["PAYMENTS_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from app import models  # noqa: E402,F401
from app.db import Base, SessionLocal, engine  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models import AppUser, Role  # noqa: E402
from app.services.auth_service import create_access_token  # noqa: E402
from app.services.runtime_metrics import METRICS  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    METRICS.reset()
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    return TestClient(create_app())


def mk_user(email: str, role: Role = Role.guest) -> int:
    s = SessionLocal()
    try:
        u = AppUser(email=email, name=email.split("@")[0], role=role.value)
        s.add(u)
        s.commit()
        s.refresh(u)
        return int(u.id)
    finally:
        s.close()


def bearer(email: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(email=email)}"}
