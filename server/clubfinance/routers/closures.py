from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from clubfinance.auth.deps import get_current_member, require_treasurer
from clubfinance.core.db import get_db
from clubfinance.models.member import Member
from clubfinance.schemas.closure import MonthClosureOut
from clubfinance.schemas.common import MONTH_PATTERN
from clubfinance.services import closures as closures_service
from clubfinance.services.gateway import FinanceStore, get_finance_store

router = APIRouter(prefix="/closures", tags=["closures"])


@router.get("", response_model=list[MonthClosureOut])
def list_closures(
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(get_current_member),
) -> list[MonthClosureOut]:
    return store.refresh(db).closures


@router.get("/{month}", response_model=MonthClosureOut)
def get_closure(
    month: str = Path(..., pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
    _: Member = Depends(get_current_member),
) -> MonthClosureOut:
    closure = closures_service.get_closure(db, month)
    if closure is None:
        return MonthClosureOut(month=month, is_closed=False)
    return MonthClosureOut.model_validate(closure)


@router.post("/{month}/toggle", response_model=MonthClosureOut)
def toggle_closure(
    month: str = Path(..., pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> MonthClosureOut:
    closure = closures_service.toggle_closure(db, month, treasurer)
    store.refresh(db)
    return MonthClosureOut.model_validate(closure)
