from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from clubfinance.models.expense import Expense
from clubfinance.models.member import Member
from clubfinance.schemas.expense import ExpenseIn
from clubfinance.services.audit import ACTION_EXPENSES, record_audit
from clubfinance.services.closures import ensure_month_open
from clubfinance.services.gateway import commit

logger = logging.getLogger(__name__)


def get_expense(db: Session, expense_id: int) -> Expense:
    expense = db.get(Expense, expense_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return expense


def _resolve_responsible(db: Session, responsible_id: int | None, fallback_id: int | None) -> int | None:
    if responsible_id is None:
        return fallback_id
    if not db.get(Member, responsible_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Responsible member not found")
    return responsible_id


def _apply(expense: Expense, payload: ExpenseIn, responsible_id: int | None) -> None:
    expense.date = payload.date
    expense.description = payload.description
    expense.amount = payload.amount
    expense.category = payload.category
    expense.responsible_id = responsible_id
    expense.reference_month = payload.reference_month
    expense.proof = payload.proof


def create_expense(db: Session, payload: ExpenseIn, actor: Member) -> Expense:
    ensure_month_open(db, payload.reference_month)
    expense = Expense()
    _apply(expense, payload, _resolve_responsible(db, payload.responsible_id, actor.id))
    db.add(expense)
    commit(db)
    db.refresh(expense)
    logger.info("expense_recorded", extra={"expense_id": expense.id, "month": expense.reference_month})
    return expense


def update_expense(db: Session, expense_id: int, payload: ExpenseIn, actor: Member) -> Expense:
    expense = get_expense(db, expense_id)
    ensure_month_open(db, expense.reference_month)
    ensure_month_open(db, payload.reference_month)
    # an edit without a responsible member keeps the current one
    _apply(expense, payload, _resolve_responsible(db, payload.responsible_id, expense.responsible_id))
    db.add(expense)
    commit(db)
    db.refresh(expense)
    logger.info("expense_updated", extra={"expense_id": expense.id, "actor": actor.nickname})
    return expense


def delete_expense(db: Session, expense_id: int, actor: Member) -> None:
    expense = get_expense(db, expense_id)
    description = expense.description
    db.delete(expense)
    record_audit(db, actor, ACTION_EXPENSES, f'Expense "{description}" deleted.')
    commit(db)
    logger.info("expense_deleted", extra={"expense_id": expense_id, "actor": actor.nickname})
