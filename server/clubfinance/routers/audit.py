from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from clubfinance.auth.deps import require_treasurer
from clubfinance.core.config import settings
from clubfinance.core.db import get_db
from clubfinance.models.member import Member
from clubfinance.schemas.audit import AuditEntryOut
from clubfinance.services.gateway import FinanceStore, get_finance_store

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=list[AuditEntryOut])
def list_audit_entries(
    action: str | None = Query(default=None, max_length=40),
    limit: int = Query(default=settings.AUDIT_LOG_LIMIT, ge=1, le=settings.AUDIT_LOG_LIMIT),
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(require_treasurer),
) -> list[AuditEntryOut]:
    entries = store.refresh(db).audit_logs
    if action:
        entries = [entry for entry in entries if entry.action == action]
    return entries[:limit]
