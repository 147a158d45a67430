from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from clubfinance.auth.deps import get_current_member
from clubfinance.core.db import get_db
from clubfinance.models.member import Member
from clubfinance.schemas.common import MONTH_PATTERN
from clubfinance.schemas.dashboard import DashboardResponse
from clubfinance.services.aggregation import build_dashboard, current_month
from clubfinance.services.closures import is_month_closed
from clubfinance.services.gateway import FinanceStore, get_finance_store

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    month: Optional[str] = Query(default=None, pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(get_current_member),
) -> DashboardResponse:
    target = month or current_month()
    snapshot = store.refresh(db)
    return build_dashboard(snapshot, target, is_month_closed(db, target))
