from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from clubfinance.schemas.common import MONTH_PATTERN, CamelModel, PaymentStatus
from clubfinance.schemas.member import MemberSummary
from clubfinance.services.proofs import validate_proof

MonthStatus = Literal["none", "partial", "ok", "awaiting"]


class DuesConfigIn(CamelModel):
    expected_amount: Decimal = Field(..., ge=0)


class DuesConfigOut(CamelModel):
    month: str
    expected_amount: Decimal


class DuesPaymentCreate(CamelModel):
    member_id: Optional[int] = None
    amount: Decimal = Field(..., gt=0)
    payment_date: date
    reference_month: str = Field(..., pattern=MONTH_PATTERN)
    proof: Optional[str] = None
    note: Optional[str] = Field(None, max_length=500)

    @field_validator("proof")
    @classmethod
    def check_proof(cls, value: Optional[str]) -> Optional[str]:
        return validate_proof(value)


class DuesPaymentOut(CamelModel):
    id: int
    member_id: Optional[int] = None
    amount: Decimal
    payment_date: date
    reference_month: str
    status: PaymentStatus
    proof: Optional[str] = None
    note: Optional[str] = None


class MemberMonthStatus(CamelModel):
    member: MemberSummary
    total_paid: Decimal
    status: MonthStatus


class MemberStatusResponse(CamelModel):
    month: str
    expected: Decimal
    items: List[MemberMonthStatus]
