from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from clubfinance.core.config import settings
from clubfinance.schemas.common import CamelModel, MemberRole, MemberStatus


class MemberBase(CamelModel):
    display_name: str = Field(..., min_length=1, max_length=150)
    nickname: str = Field(..., min_length=1, max_length=60)
    position: Optional[str] = Field(None, max_length=120)
    role: MemberRole = "member"
    status: MemberStatus = "active"

    @field_validator("display_name", "nickname")
    @classmethod
    def strip_required(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Field cannot be blank")
        return cleaned


class MemberCreate(MemberBase):
    password: Optional[str] = Field(None, max_length=128)
    requires_password_change: bool = True

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        if len(value.strip()) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long.")
        return value.strip()


class MemberUpdate(MemberBase):
    requires_password_change: Optional[bool] = None


class MemberOut(CamelModel):
    id: int
    display_name: str
    nickname: str
    position: Optional[str] = None
    role: MemberRole
    status: MemberStatus
    requires_password_change: bool
    created_at: Optional[datetime] = None


class MemberSummary(CamelModel):
    id: int
    display_name: str
    nickname: str


class MemberListResponse(CamelModel):
    items: List[MemberOut]
    total: int
