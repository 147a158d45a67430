from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from clubfinance.auth.deps import get_current_member, require_treasurer
from clubfinance.core.db import get_db
from clubfinance.models.member import Member
from clubfinance.schemas.common import MONTH_PATTERN, StatusUpdate
from clubfinance.schemas.dues import (
    DuesConfigIn,
    DuesConfigOut,
    DuesPaymentCreate,
    DuesPaymentOut,
    MemberMonthStatus,
    MemberStatusResponse,
)
from clubfinance.schemas.member import MemberSummary
from clubfinance.services import dues as dues_service
from clubfinance.services.aggregation import current_month, expected_for_month, member_month_status
from clubfinance.services.gateway import FinanceStore, get_finance_store

router = APIRouter(prefix="/fees", tags=["fees"])


@router.get("/payments", response_model=list[DuesPaymentOut])
def list_payments(
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    member: Member = Depends(get_current_member),
) -> list[DuesPaymentOut]:
    payments = store.refresh(db).fee_payments
    if member.is_treasurer:
        return payments
    return [payment for payment in payments if payment.member_id == member.id]


@router.post("/payments", response_model=DuesPaymentOut, status_code=status.HTTP_201_CREATED)
def create_payment(
    payload: DuesPaymentCreate,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    member: Member = Depends(get_current_member),
) -> DuesPaymentOut:
    payment = dues_service.record_payment(db, payload, member)
    store.refresh(db)
    return DuesPaymentOut.model_validate(payment)


@router.post("/payments/{payment_id}/status", response_model=DuesPaymentOut)
def update_payment_status(
    payment_id: int,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(require_treasurer),
) -> DuesPaymentOut:
    payment = dues_service.update_payment_status(db, payment_id, payload.status)
    store.refresh(db)
    return DuesPaymentOut.model_validate(payment)


@router.get("/configs", response_model=list[DuesConfigOut])
def list_configs(
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(get_current_member),
) -> list[DuesConfigOut]:
    return store.refresh(db).fee_configs


@router.put("/configs/{month}", response_model=DuesConfigOut)
def upsert_config(
    payload: DuesConfigIn,
    month: str = Path(..., pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(require_treasurer),
) -> DuesConfigOut:
    config = dues_service.upsert_fee_config(db, month, payload)
    store.refresh(db)
    return DuesConfigOut.model_validate(config)


@router.get("/status", response_model=MemberStatusResponse)
def member_status(
    month: str | None = Query(default=None, pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(require_treasurer),
) -> MemberStatusResponse:
    target = month or current_month()
    snapshot = store.refresh(db)
    rows = member_month_status(snapshot.members, snapshot.fee_configs, snapshot.fee_payments, target)
    return MemberStatusResponse(
        month=target,
        expected=expected_for_month(snapshot.fee_configs, target),
        items=[
            MemberMonthStatus(
                member=MemberSummary(
                    id=row.member.id,
                    display_name=row.member.display_name,
                    nickname=row.member.nickname,
                ),
                total_paid=row.total_paid,
                status=row.status,
            )
            for row in rows
        ],
    )
