# backend/tests/test_accessors.py
from __future__ import annotations

from conftest import bearer, mk_user
from sqlalchemy import select

from app.cli.seed_demo import SAMPLE_APARTMENTS, seed_demo
from app.db import SessionLocal
from app.models import Apartment, AppUser, AuditEvent, Role


def _apartments(db, rents: list[float]) -> None:
    for i, rent in enumerate(rents, start=1):
        db.add(Apartment(floor_no=str(i), block_name="A", apartment_no=f"A-{i:03d}", rent=rent))
    db.commit()


def test_jwt_issue_and_user_registration(client):
    token = client.post("/jwt", json={"email": "Ann@T.local"}).json()["token"]
    assert token

    created = client.post("/users", json={"email": "Ann@T.local", "name": "Ann"}).json()
    assert created["kind"] == "inserted"
    dup = client.post("/users", json={"email": "ann@t.local"}).json()
    assert dup == {"ok": False, "kind": "conflict", "message": "user already exists", "inserted_id": None, "modified_count": 0}

    me = client.get("/users/ann@t.local", headers={"Authorization": f"Bearer {token}"}).json()
    assert me["email"] == "ann@t.local"
    assert me["role"] == "guest"
    assert client.get("/users/ann@t.local").status_code == 401


def test_members_listing_and_removal(client):
    mk_user("boss@t.local", Role.admin)
    mid = mk_user("ann@t.local", Role.member)
    mk_user("bob@t.local", Role.guest)
    boss = bearer("boss@t.local")

    assert client.get("/members", headers=bearer("ann@t.local")).status_code == 403
    assert [m["email"] for m in client.get("/members", headers=boss).json()] == ["ann@t.local"]

    removed = client.patch(f"/members/{mid}", headers=boss).json()
    assert removed["kind"] == "updated"
    assert client.get("/members", headers=boss).json() == []
    assert client.patch("/members/9999", headers=boss).json()["kind"] == "not_found"

    # a revoked identity no longer passes member gates
    assert client.get("/acceptRequests/ann@t.local", headers=bearer("ann@t.local")).status_code == 403

    s = SessionLocal()
    try:
        assert s.scalar(select(AppUser.role).where(AppUser.email == "ann@t.local")) == "revoked"
        assert s.scalar(select(AuditEvent.action).where(AuditEvent.entity_id == str(mid))) == "member.remove"
    finally:
        s.close()


def test_apartment_paging_count_and_search(client, db):
    _apartments(db, [1000, 1100, 1200, 1300, 1400, 1500, 1600, 1700])

    first = client.get("/apartments").json()
    assert len(first) == 6
    second = client.get("/apartments", params={"page": 2}).json()
    assert [a["rent"] for a in second] == [1600.0, 1700.0]
    small = client.get("/apartments", params={"page": 3, "limit": 3}).json()
    assert [a["apartment_no"] for a in small] == ["A-007", "A-008"]
    assert client.get("/apartments", params={"page": 0}).status_code == 422

    assert client.get("/apartmentsCount").json() == {"total": 8}

    cheap = client.get("/search", params={"search": 1200}).json()
    assert [a["rent"] for a in cheap] == [1000.0, 1100.0, 1200.0]


def test_announcements(client):
    mk_user("boss@t.local", Role.admin)
    mk_user("ann@t.local", Role.guest)

    body = {"title": "Water off", "description": "Tuesday 10-12"}
    assert client.post("/makeAnnouncements", json=body, headers=bearer("ann@t.local")).status_code == 403
    assert client.post("/makeAnnouncements", json=body, headers=bearer("boss@t.local")).json()["kind"] == "inserted"
    client.post("/makeAnnouncements", json={"title": "Lift", "description": "fixed"}, headers=bearer("boss@t.local"))

    listed = client.get("/makeAnnouncements", headers=bearer("ann@t.local")).json()
    assert [a["title"] for a in listed] == ["Lift", "Water off"]
    assert client.get("/makeAnnouncements").status_code == 401


def test_month_update_without_contract_is_not_found(client):
    mk_user("ann@t.local", Role.member)
    out = client.patch("/acceptRequest/ann@t.local", params={"month": "May"}, headers=bearer("ann@t.local")).json()
    assert out["kind"] == "not_found"


def test_seed_is_repeatable():
    first = seed_demo(admin_email="root@t.local", admin_name="Root")
    assert first.apartments_added == len(SAMPLE_APARTMENTS)
    assert first.coupons_added == 2

    again = seed_demo(admin_email="root@t.local")
    assert again.apartments_added == 0
    assert again.coupons_added == 0

    s = SessionLocal()
    try:
        assert s.scalar(select(AppUser.role).where(AppUser.email == "root@t.local")) == "admin"
    finally:
        s.close()
