# backend/tests/test_lifecycle_scenario.py
from __future__ import annotations

from conftest import bearer, mk_user

from app.models import Role


def test_request_to_settlement_end_to_end(client):
    mk_user("boss@t.local", Role.admin)
    mk_user("ann@t.local", Role.guest)
    ann = bearer("ann@t.local")
    boss = bearer("boss@t.local")

    body = {"user_name": "Ann", "floor_no": "1", "block_name": "A", "apartment_no": "A-101", "rent": 1200}
    submitted = client.post("/agreements/ann@t.local", json=body, headers=ann).json()
    assert submitted["kind"] == "inserted"

    # guests cannot see member-only views yet
    assert client.get("/acceptRequests/ann@t.local", headers=ann).status_code == 403

    decided = client.patch(
        f"/agreementsRequest/{submitted['inserted_id']}",
        params={"button": "accept", "email": "ann@t.local"},
        headers=boss,
    ).json()
    assert decided["ok"] is True
    assert client.get("/users/ann@t.local", headers=ann).json()["role"] == "member"
    assert client.get("/agreements/ann@t.local", headers=boss).json() is None

    contract = client.get("/acceptRequests/ann@t.local", headers=ann).json()
    assert contract["apartment_no"] == "A-101"
    assert contract["rent"] == 1200.0
    assert contract["id"] == decided["inserted_id"]

    month = client.patch("/acceptRequest/ann@t.local", params={"month": "October"}, headers=ann).json()
    assert month["kind"] == "updated"

    paid = client.post(
        "/payments",
        params={"acceptRequestId": contract["id"], "email": "ann@t.local"},
        json={"amount": 1200},
        headers=ann,
    ).json()
    assert paid["kind"] == "inserted"
    assert paid["modified_count"] == 1

    assert client.get("/acceptRequests/ann@t.local", headers=ann).json() is None
    history = client.get("/paymentHistory/ann@t.local", headers=ann).json()
    assert history["amount"] == 1200.0
    assert history["month"] == "October"
    assert history["accept_request_id"] == contract["id"]

    again = client.post(
        "/payments",
        params={"acceptRequestId": contract["id"], "email": "ann@t.local"},
        json={"amount": 1200},
        headers=ann,
    ).json()
    assert again["ok"] is False
    assert again["message"] == "Payment Already Exists"

    metrics = client.get("/metrics").text
    assert "buildcare_agreements_submitted_total 1" in metrics
    assert "buildcare_payments_settled_total 1" in metrics
