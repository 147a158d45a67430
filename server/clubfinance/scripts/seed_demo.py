from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from clubfinance.auth.security import hash_password
from clubfinance.core.config import settings
from clubfinance.core.db import Base, SessionLocal, engine
from clubfinance.models.campaign import CAMPAIGN_ACTIVE, Campaign, Contribution
from clubfinance.models.dues import PAYMENT_PENDING, PAYMENT_VALIDATED, DuesConfig, DuesPayment
from clubfinance.models.expense import Expense
from clubfinance.models.member import ROLE_MEMBER, ROLE_TREASURER, Member
from clubfinance.services.aggregation import current_month, shift_month

# nickname, display name, position, password, role, forced password change
TREASURERS = [
    ("admin", "Administrador", "Administrador", "admin", ROLE_TREASURER, False),
    ("vlad", "Vladimir", "Tesoureiro", "vlad", ROLE_TREASURER, False),
]

DEMO_MEMBERS = [
    ("ferrugem", "Carlos Ferreira", "Membro", "mudar123", ROLE_MEMBER, True),
    ("tanque", "Rodrigo Alves", "Road captain", "mudar123", ROLE_MEMBER, True),
    ("corvo", "Marcos Lima", "Membro", "mudar123", ROLE_MEMBER, True),
]

DEMO_DUES = Decimal("100.00")


def ensure_member(
    db: Session,
    nickname: str,
    display_name: str,
    position: str,
    password: str,
    role: str,
    requires_password_change: bool,
) -> Member:
    member = db.query(Member).filter_by(nickname=nickname).first()
    if member is None:
        member = Member(
            nickname=nickname,
            display_name=display_name,
            position=position,
            role=role,
            password_hash=hash_password(password),
            requires_password_change=requires_password_change,
            is_seed_treasurer=nickname == settings.SEED_TREASURER_NICKNAME,
        )
        db.add(member)
        db.commit()
        db.refresh(member)
    return member


def ensure_fee_configs(db: Session, months: list[str]) -> None:
    for month in months:
        if db.get(DuesConfig, month) is None:
            db.add(DuesConfig(month=month, expected_amount=DEMO_DUES))
    db.commit()


def ensure_payments(db: Session, members: list[Member], months: list[str]) -> None:
    if db.query(DuesPayment).count():
        return
    for index, member in enumerate(members):
        for month in months[:-1]:
            db.add(
                DuesPayment(
                    member_id=member.id,
                    amount=DEMO_DUES,
                    payment_date=date.fromisoformat(f"{month}-05"),
                    reference_month=month,
                    status=PAYMENT_VALIDATED,
                )
            )
        # the latest month shows every status on the dues board
        if index == 0:
            db.add(
                DuesPayment(
                    member_id=member.id,
                    amount=Decimal("60.00"),
                    payment_date=date.fromisoformat(f"{months[-1]}-03"),
                    reference_month=months[-1],
                    status=PAYMENT_VALIDATED,
                )
            )
        elif index == 1:
            db.add(
                DuesPayment(
                    member_id=member.id,
                    amount=DEMO_DUES,
                    payment_date=date.fromisoformat(f"{months[-1]}-04"),
                    reference_month=months[-1],
                    status=PAYMENT_PENDING,
                )
            )
    db.commit()


def ensure_campaign(db: Session, members: list[Member], month: str) -> None:
    if db.query(Campaign).count():
        return
    campaign = Campaign(
        name="Encontro anual",
        description="Arrecadação para o encontro anual do clube.",
        goal=Decimal("2000.00"),
        start_date=date.fromisoformat(f"{month}-01"),
        status=CAMPAIGN_ACTIVE,
    )
    db.add(campaign)
    db.flush()
    for member in members:
        db.add(
            Contribution(
                campaign_id=campaign.id,
                member_id=member.id,
                amount=Decimal("150.00"),
                date=date.fromisoformat(f"{month}-10"),
                status=PAYMENT_VALIDATED,
            )
        )
    db.commit()


def ensure_expenses(db: Session, treasurer: Member, months: list[str]) -> None:
    if db.query(Expense).count():
        return
    samples = [
        ("Aluguel da sede", Decimal("450.00"), "Sede"),
        ("Churrasco de confraternização", Decimal("220.00"), "Eventos"),
        ("Troca de óleo da moto de apoio", Decimal("90.00"), "Manutenção"),
    ]
    for month in months[-3:]:
        for description, amount, category in samples:
            db.add(
                Expense(
                    date=date.fromisoformat(f"{month}-15"),
                    description=description,
                    amount=amount,
                    category=category,
                    responsible_id=treasurer.id,
                    reference_month=month,
                )
            )
    db.commit()


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        treasurers = [ensure_member(db, *row) for row in TREASURERS]
        members = [ensure_member(db, *row) for row in DEMO_MEMBERS]

        latest = current_month()
        months = [shift_month(latest, offset) for offset in range(-5, 1)]
        ensure_fee_configs(db, months)
        ensure_payments(db, members, months)
        ensure_campaign(db, members, latest)
        ensure_expenses(db, treasurers[0], months)
    finally:
        db.close()


if __name__ == "__main__":
    main()
