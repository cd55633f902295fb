# backend/app/cli/seed_demo.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.db import SessionLocal, init_db
from app.models import Apartment, CouponCode, Role
from app.repositories import Repositories

SAMPLE_APARTMENTS = [
    # (floor, block, apartment_no, rent)
    ("1", "A", "A-101", 1200.0),
    ("1", "A", "A-102", 1150.0),
    ("2", "B", "B-201", 1400.0),
    ("3", "B", "B-301", 1650.0),
    ("4", "C", "C-401", 1900.0),
    ("5", "C", "C-501", 2200.0),
]

SAMPLE_COUPONS = [
    ("WELCOME20", 20.0, "new resident welcome"),
    ("LOYAL10", 10.0, "renewing resident"),
]


@dataclass(frozen=True)
class SeedResult:
    admin_email: str
    apartments_added: int
    coupons_added: int


def _ensure_admin(repos: Repositories, email: str, name: Optional[str]) -> None:
    row = repos.users.get(email)
    if row is None:
        repos.users.create(email=email, name=name, role=Role.admin)
    elif row.role != Role.admin.value:
        repos.users.set_role(row, Role.admin)


def _seed_apartments(db: Session) -> int:
    repos = Repositories.for_session(db)
    if repos.apartments.count() > 0:
        return 0
    for floor_no, block_name, apartment_no, rent in SAMPLE_APARTMENTS:
        db.add(Apartment(floor_no=floor_no, block_name=block_name, apartment_no=apartment_no, rent=rent))
    return len(SAMPLE_APARTMENTS)


def _seed_coupons(repos: Repositories) -> int:
    added = 0
    for code, discount, description in SAMPLE_COUPONS:
        if repos.coupons.get_by_code(code) is not None:
            continue
        repos.coupons.create(CouponCode(code=code, discount=discount, description=description))
        added += 1
    return added


def seed_demo(
    *,
    admin_email: str,
    admin_name: Optional[str] = None,
    with_inventory: bool = True,
) -> SeedResult:
    init_db()
    db = SessionLocal()
    try:
        repos = Repositories.for_session(db)
        _ensure_admin(repos, admin_email, admin_name)
        apartments = _seed_apartments(db) if with_inventory else 0
        coupons = _seed_coupons(repos) if with_inventory else 0
        db.commit()
        return SeedResult(admin_email=admin_email, apartments_added=apartments, coupons_added=coupons)
    finally:
        db.close()
