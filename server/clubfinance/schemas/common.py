from __future__ import annotations

from typing import Literal

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

PaymentStatus = Literal["pending", "validated", "rejected"]
MemberRole = Literal["treasurer", "member"]
MemberStatus = Literal["active", "inactive"]
CampaignStatus = Literal["active", "finished"]


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class StatusUpdate(CamelModel):
    status: PaymentStatus
