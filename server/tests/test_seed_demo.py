from __future__ import annotations

from clubfinance.auth.security import verify_password
from clubfinance.scripts.seed_demo import TREASURERS, ensure_member


def test_seeded_treasurers_carry_positions(db_session):
    admin, vlad = (ensure_member(db_session, *row) for row in TREASURERS)

    assert admin.position == "Administrador"
    assert vlad.position == "Tesoureiro"
    assert admin.role == vlad.role == "treasurer"
    assert admin.is_seed_treasurer is True
    assert vlad.is_seed_treasurer is False
    assert verify_password("vlad", vlad.password_hash)


def test_seeding_twice_reuses_existing_rows(db_session):
    first = ensure_member(db_session, *TREASURERS[0])
    second = ensure_member(db_session, *TREASURERS[0])
    assert first.id == second.id
