from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from clubfinance.models.expense import EXPENSE_CATEGORIES
from clubfinance.schemas.common import MONTH_PATTERN, CamelModel
from clubfinance.services.proofs import validate_proof


class ExpenseIn(CamelModel):
    date: dt.date
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0)
    category: str
    responsible_id: Optional[int] = None
    reference_month: str = Field(..., pattern=MONTH_PATTERN)
    proof: Optional[str] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, value: str) -> str:
        if value not in EXPENSE_CATEGORIES:
            raise ValueError(f"Category must be one of: {', '.join(EXPENSE_CATEGORIES)}")
        return value

    @field_validator("proof")
    @classmethod
    def check_proof(cls, value: Optional[str]) -> Optional[str]:
        return validate_proof(value)


class ExpenseOut(CamelModel):
    id: int
    date: dt.date
    description: str
    amount: Decimal
    category: str
    responsible_id: Optional[int] = None
    reference_month: str
    proof: Optional[str] = None
