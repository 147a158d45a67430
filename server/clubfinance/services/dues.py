from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from clubfinance.models.dues import PAYMENT_PENDING, PAYMENT_VALIDATED, DuesConfig, DuesPayment
from clubfinance.models.member import Member
from clubfinance.schemas.dues import DuesConfigIn, DuesPaymentCreate
from clubfinance.services.closures import ensure_month_open
from clubfinance.services.gateway import commit

logger = logging.getLogger(__name__)


def _resolve_member(db: Session, member_id: int) -> Member:
    member = db.get(Member, member_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Member not found")
    return member


def upsert_fee_config(db: Session, month: str, payload: DuesConfigIn) -> DuesConfig:
    config = db.get(DuesConfig, month)
    if config is None:
        config = DuesConfig(month=month)
    config.expected_amount = payload.expected_amount
    db.add(config)
    commit(db)
    db.refresh(config)
    return config


def record_payment(db: Session, payload: DuesPaymentCreate, actor: Member) -> DuesPayment:
    """Record a dues payment; treasurer entries are validated on the spot."""

    ensure_month_open(db, payload.reference_month)
    if actor.is_treasurer:
        member = _resolve_member(db, payload.member_id or actor.id)
        payment_status = PAYMENT_VALIDATED
    else:
        if payload.member_id is not None and payload.member_id != actor.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Members can only record their own payments")
        member = actor
        payment_status = PAYMENT_PENDING

    payment = DuesPayment(
        member_id=member.id,
        amount=payload.amount,
        payment_date=payload.payment_date,
        reference_month=payload.reference_month,
        status=payment_status,
        proof=payload.proof,
        note=payload.note,
    )
    db.add(payment)
    commit(db)
    db.refresh(payment)
    logger.info(
        "fee_payment_recorded",
        extra={"payment_id": payment.id, "member_id": member.id, "status": payment_status},
    )
    return payment


def get_payment(db: Session, payment_id: int) -> DuesPayment:
    payment = db.get(DuesPayment, payment_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")
    return payment


def update_payment_status(db: Session, payment_id: int, new_status: str) -> DuesPayment:
    payment = get_payment(db, payment_id)
    if payment.status != PAYMENT_PENDING:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only pending payments can be reviewed")
    if new_status == PAYMENT_PENDING:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Status must be validated or rejected")
    payment.status = new_status
    db.add(payment)
    commit(db)
    db.refresh(payment)
    return payment
