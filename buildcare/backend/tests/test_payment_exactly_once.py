# backend/tests/test_payment_exactly_once.py
from __future__ import annotations

from sqlalchemy import func, select

from app.models import ActiveContract, Payment
from app.repositories import ContractRepository, PaymentRepository, Repositories
from app.schemas import PaymentCreate
from app.services.payment_ledger import PAYMENT_EXISTS, settle
from app.services.runtime_metrics import METRICS


def _contract(db, email: str, rent: float = 1200.0, month: str | None = None) -> int:
    row = ActiveContract(email=email, apartment_no="A-101", rent=rent, month=month)
    db.add(row)
    db.commit()
    return int(row.id)


def _payments(db, email: str) -> list[Payment]:
    db.expire_all()
    return list(db.scalars(select(Payment).where(Payment.email == email)).all())


def _contracts(db, email: str) -> int:
    return int(db.scalar(select(func.count(ActiveContract.id)).where(ActiveContract.email == email)))


def test_settle_records_payment_and_retires_contract(db):
    cid = _contract(db, "ann@t.local", month="2026-10")
    repos = Repositories.for_session(db)

    out = settle(repos, email="ann@t.local", contract_id=str(cid), payload=PaymentCreate(amount=1200, transaction_id="pi_1"))
    assert out.ok is True
    assert out.kind == "inserted"
    assert out.modified_count == 1

    rows = _payments(db, "ann@t.local")
    assert len(rows) == 1
    assert rows[0].amount == 1200.0
    assert rows[0].accept_request_id == str(cid)
    assert rows[0].month == "2026-10"
    assert rows[0].transaction_id == "pi_1"
    assert _contracts(db, "ann@t.local") == 0


def test_second_settle_is_rejected_without_mutation(db):
    cid = _contract(db, "ann@t.local")
    repos = Repositories.for_session(db)
    assert settle(repos, email="ann@t.local", contract_id=cid, payload=PaymentCreate(amount=1200)).ok

    # a fresh contract for the same identity must not be consumed by a second settle
    cid2 = _contract(db, "ann@t.local", rent=800)
    again = settle(repos, email="ann@t.local", contract_id=cid2, payload=PaymentCreate(amount=800))

    assert again.ok is False
    assert again.kind == "conflict"
    assert again.message == PAYMENT_EXISTS
    assert again.inserted_id is None

    rows = _payments(db, "ann@t.local")
    assert [r.amount for r in rows] == [1200.0]
    assert _contracts(db, "ann@t.local") == 1
    assert METRICS.get("payments_settled") == 1
    assert METRICS.get("payments_conflict") == 1


def test_unknown_contract_is_not_found(db):
    repos = Repositories.for_session(db)
    for bad in ("424242", "not-an-id"):
        out = settle(repos, email="ann@t.local", contract_id=bad, payload=PaymentCreate(amount=10))
        assert out.kind == "not_found"
    assert _payments(db, "ann@t.local") == []


def test_race_past_existence_check_keeps_single_payment(db, monkeypatch):
    cid1 = _contract(db, "ann@t.local")
    repos = Repositories.for_session(db)
    monkeypatch.setattr(PaymentRepository, "get", lambda self, email: None)

    assert settle(repos, email="ann@t.local", contract_id=cid1, payload=PaymentCreate(amount=1200)).ok

    cid2 = _contract(db, "ann@t.local", rent=900)
    out = settle(repos, email="ann@t.local", contract_id=cid2, payload=PaymentCreate(amount=900))

    assert out.kind == "conflict"
    assert len(_payments(db, "ann@t.local")) == 1
    # the losing settle rolled back its contract delete too
    assert _contracts(db, "ann@t.local") == 1


def test_contract_retired_by_another_settle_records_nothing(db, monkeypatch):
    # another identity's settle deleted the contract between our read and our delete
    stale = ActiveContract(id=777, email="bob@t.local", apartment_no="A-101", rent=1200.0)
    monkeypatch.setattr(ContractRepository, "get_by_id", lambda self, contract_id: stale)
    repos = Repositories.for_session(db)

    out = settle(repos, email="ann@t.local", contract_id="777", payload=PaymentCreate(amount=1200))

    assert out.ok is False
    assert out.kind == "not_found"
    assert out.inserted_id is None
    assert _payments(db, "ann@t.local") == []
    assert METRICS.get("payments_settled") == 0
