from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator, model_validator

from clubfinance.schemas.common import CamelModel, CampaignStatus, PaymentStatus
from clubfinance.services.proofs import validate_proof


class CampaignIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = ""
    goal: Decimal = Field(..., ge=0)
    start_date: dt.date
    end_date: Optional[dt.date] = None
    status: CampaignStatus = "active"

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date(cls, value):
        # empty strings are not valid DATE values on the backend
        if value == "":
            return None
        return value

    @model_validator(mode="after")
    def check_dates(self) -> "CampaignIn":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("End date cannot be before the start date.")
        return self


class CampaignOut(CamelModel):
    id: int
    name: str
    description: str
    goal: Decimal
    start_date: dt.date
    end_date: Optional[dt.date] = None
    status: CampaignStatus
    raised: Decimal = Decimal("0")
    progress: int = 0


class ContributionCreate(CamelModel):
    member_id: Optional[int] = None
    amount: Decimal = Field(..., gt=0)
    date: dt.date
    proof: Optional[str] = None

    @field_validator("proof")
    @classmethod
    def check_proof(cls, value: Optional[str]) -> Optional[str]:
        return validate_proof(value)


class ContributionOut(CamelModel):
    id: int
    campaign_id: int
    member_id: Optional[int] = None
    amount: Decimal
    date: dt.date
    status: PaymentStatus
    proof: Optional[str] = None
