"""Table-level access to the backend and the cached finance snapshot."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from fastapi import Request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubfinance.core.config import settings
from clubfinance.models.audit_log import AuditEntry
from clubfinance.models.campaign import Campaign, Contribution
from clubfinance.models.dues import DuesConfig, DuesPayment
from clubfinance.models.expense import Expense
from clubfinance.models.member import Member
from clubfinance.models.month_closure import MonthClosure
from clubfinance.schemas.audit import AuditEntryOut
from clubfinance.schemas.campaign import CampaignOut, ContributionOut
from clubfinance.schemas.closure import MonthClosureOut
from clubfinance.schemas.dues import DuesConfigOut, DuesPaymentOut
from clubfinance.schemas.expense import ExpenseOut
from clubfinance.schemas.member import MemberOut
from clubfinance.services.aggregation import to_amount

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """A backend write failed; carries the backend's message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class FinanceSnapshot:
    members: List[MemberOut] = field(default_factory=list)
    fee_configs: List[DuesConfigOut] = field(default_factory=list)
    fee_payments: List[DuesPaymentOut] = field(default_factory=list)
    campaigns: List[CampaignOut] = field(default_factory=list)
    contributions: List[ContributionOut] = field(default_factory=list)
    expenses: List[ExpenseOut] = field(default_factory=list)
    closures: List[MonthClosureOut] = field(default_factory=list)
    audit_logs: List[AuditEntryOut] = field(default_factory=list)


def commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        message = str(getattr(exc, "orig", None) or exc)
        logger.warning("backend_write_failed", extra={"error": message})
        raise GatewayError(message) from exc


def select_members(db: Session) -> list[MemberOut]:
    rows = db.query(Member).order_by(Member.display_name.asc()).all()
    return [MemberOut.model_validate(row) for row in rows]


def select_fee_configs(db: Session) -> list[DuesConfigOut]:
    rows = db.query(DuesConfig).order_by(DuesConfig.month.asc()).all()
    return [DuesConfigOut(month=row.month, expected_amount=to_amount(row.expected_amount)) for row in rows]


def select_fee_payments(db: Session) -> list[DuesPaymentOut]:
    rows = db.query(DuesPayment).order_by(DuesPayment.payment_date.desc(), DuesPayment.id.desc()).all()
    return [
        DuesPaymentOut(
            id=row.id,
            member_id=row.member_id,
            amount=to_amount(row.amount),
            payment_date=row.payment_date,
            reference_month=row.reference_month,
            status=row.status,
            proof=row.proof,
            note=row.note,
        )
        for row in rows
    ]


def select_campaigns(db: Session) -> list[CampaignOut]:
    rows = db.query(Campaign).order_by(Campaign.start_date.desc(), Campaign.id.desc()).all()
    return [
        CampaignOut(
            id=row.id,
            name=row.name,
            description=row.description or "",
            goal=to_amount(row.goal),
            start_date=row.start_date,
            end_date=row.end_date,
            status=row.status,
        )
        for row in rows
    ]


def select_contributions(db: Session) -> list[ContributionOut]:
    rows = db.query(Contribution).order_by(Contribution.date.desc(), Contribution.id.desc()).all()
    return [
        ContributionOut(
            id=row.id,
            campaign_id=row.campaign_id,
            member_id=row.member_id,
            amount=to_amount(row.amount),
            date=row.date,
            status=row.status,
            proof=row.proof,
        )
        for row in rows
    ]


def select_expenses(db: Session) -> list[ExpenseOut]:
    rows = db.query(Expense).order_by(Expense.date.desc(), Expense.id.desc()).all()
    return [
        ExpenseOut(
            id=row.id,
            date=row.date,
            description=row.description,
            amount=to_amount(row.amount),
            category=row.category,
            responsible_id=row.responsible_id,
            reference_month=row.reference_month,
            proof=row.proof,
        )
        for row in rows
    ]


def select_closures(db: Session) -> list[MonthClosureOut]:
    rows = db.query(MonthClosure).order_by(MonthClosure.month.desc()).all()
    return [MonthClosureOut.model_validate(row) for row in rows]


def select_audit_logs(db: Session, limit: int | None = None) -> list[AuditEntryOut]:
    rows = (
        db.query(AuditEntry)
        .order_by(AuditEntry.timestamp.desc(), AuditEntry.id.desc())
        .limit(limit or settings.AUDIT_LOG_LIMIT)
        .all()
    )
    return [AuditEntryOut.model_validate(row) for row in rows]


def fetch_snapshot(db: Session) -> FinanceSnapshot:
    return FinanceSnapshot(
        members=select_members(db),
        fee_configs=select_fee_configs(db),
        fee_payments=select_fee_payments(db),
        campaigns=select_campaigns(db),
        contributions=select_contributions(db),
        expenses=select_expenses(db),
        closures=select_closures(db),
        audit_logs=select_audit_logs(db),
    )


class FinanceStore:
    """Last complete snapshot of the eight collections.

    ``refresh`` publishes a new snapshot only when every read succeeded; a
    failed refresh is logged and the previous snapshot stays in place.
    """

    def __init__(self) -> None:
        self._snapshot = FinanceSnapshot()
        self._lock = threading.Lock()
        self.refreshed_at: datetime | None = None

    @property
    def snapshot(self) -> FinanceSnapshot:
        return self._snapshot

    def refresh(self, db: Session) -> FinanceSnapshot:
        try:
            fresh = fetch_snapshot(db)
        except (SQLAlchemyError, ValidationError):
            db.rollback()
            logger.exception("finance_refresh_failed", extra={"refreshed_at": self.refreshed_at})
            return self._snapshot
        with self._lock:
            self._snapshot = fresh
            self.refreshed_at = datetime.now(timezone.utc)
        return fresh


def get_finance_store(request: Request) -> FinanceStore:
    return request.app.state.finance_store
