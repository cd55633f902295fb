# backend/tests/test_identity_gate.py
from __future__ import annotations

from conftest import bearer, mk_user
from starlette.middleware.cors import CORSMiddleware

from app.main import create_app
from app.middleware.request_id import RequestIDMiddleware
from app.middleware.structured_logging import StructuredLoggingMiddleware
from app.models import Role
from app.services.auth_service import create_access_token, verify_credential


def test_token_round_trip_normalizes_email():
    token = create_access_token(email="  Resident@Example.COM ")
    assert verify_credential(token) == "resident@example.com"


def test_missing_credential_is_unauthenticated(client):
    r = client.post("/agreements/a@t.local", json={"apartment_no": "A-101", "rent": 1200})
    assert r.status_code == 401
    assert r.json()["detail"] == "unauthorized access"


def test_bad_signature_and_expired_tokens_are_rejected(client):
    r1 = client.get("/users/a@t.local", headers={"Authorization": "Bearer not.a.jwt"})
    assert r1.status_code == 401

    expired = create_access_token(email="a@t.local", days=-1)
    r2 = client.get("/users/a@t.local", headers={"Authorization": f"Bearer {expired}"})
    assert r2.status_code == 401

    r3 = client.get("/users/a@t.local", headers={"Authorization": "Basic abc"})
    assert r3.status_code == 401


def test_role_gates(client):
    mk_user("guest@t.local", Role.guest)
    mk_user("boss@t.local", Role.admin)
    mk_user("member@t.local", Role.member)

    assert client.get("/agreements", headers=bearer("guest@t.local")).status_code == 403
    assert client.get("/agreements", headers=bearer("member@t.local")).status_code == 403
    assert client.get("/agreements", headers=bearer("boss@t.local")).status_code == 200

    # member-only: admins are not members
    assert client.get("/acceptRequests/boss@t.local", headers=bearer("boss@t.local")).status_code == 403
    assert client.get("/acceptRequests/member@t.local", headers=bearer("member@t.local")).status_code == 200


def test_unknown_identity_is_forbidden_not_unauthenticated(client):
    r = client.get("/agreements", headers=bearer("nobody@t.local"))
    assert r.status_code == 403


def test_request_id_is_echoed(client):
    r = client.get("/", headers={"X-Request-ID": "rid-123"})
    assert r.status_code == 200
    assert r.text == "hello from home"
    assert r.headers["X-Request-ID"] == "rid-123"


def test_request_id_wraps_logging_and_cors():
    # user_middleware is listed outermost first
    order = [m.cls for m in create_app().user_middleware]
    assert order == [RequestIDMiddleware, StructuredLoggingMiddleware, CORSMiddleware]


def test_cors_preflight_carries_request_id(client):
    r = client.options(
        "/couponCodes",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET", "X-Request-ID": "rid-pre"},
    )
    assert r.status_code == 200
    assert r.headers["X-Request-ID"] == "rid-pre"
