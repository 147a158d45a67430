from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from clubfinance.models.member import Member
from clubfinance.models.month_closure import MonthClosure
from clubfinance.services.audit import ACTION_CLOSURE, now_utc, record_audit
from clubfinance.services.gateway import commit

logger = logging.getLogger(__name__)


def get_closure(db: Session, month: str) -> MonthClosure | None:
    return db.get(MonthClosure, month)


def is_month_closed(db: Session, month: str) -> bool:
    closure = get_closure(db, month)
    return bool(closure and closure.is_closed)


def ensure_month_open(db: Session, month: str) -> None:
    if is_month_closed(db, month):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Month {month} has been closed. Reopen it before recording new entries.",
        )


def toggle_closure(db: Session, month: str, actor: Member) -> MonthClosure:
    closure = get_closure(db, month)
    if closure is None:
        closure = MonthClosure(month=month, is_closed=True)
    else:
        closure.is_closed = not closure.is_closed
    closure.closed_by = actor.nickname
    closure.closed_at = now_utc()
    db.add(closure)
    verb = "closed" if closure.is_closed else "reopened"
    record_audit(db, actor, ACTION_CLOSURE, f"Month {month} {verb}.")
    commit(db)
    db.refresh(closure)
    logger.info("month_closure_toggled", extra={"month": month, "is_closed": closure.is_closed, "actor": actor.nickname})
    return closure
