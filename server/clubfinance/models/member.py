from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from clubfinance.core.db import Base

ROLE_TREASURER = "treasurer"
ROLE_MEMBER = "member"
MEMBER_ROLES = (ROLE_TREASURER, ROLE_MEMBER)

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True)
    display_name = Column(String(150), nullable=False)
    nickname = Column(String(60), unique=True, nullable=False, index=True)
    position = Column(String(120), nullable=True)
    role = Column(String(20), nullable=False, default=ROLE_MEMBER)
    status = Column(String(20), nullable=False, default=STATUS_ACTIVE)
    password_hash = Column(String(255), nullable=False)
    requires_password_change = Column(Boolean, nullable=False, default=True)
    is_seed_treasurer = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    @property
    def is_treasurer(self) -> bool:
        return self.role == ROLE_TREASURER
