from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String

from clubfinance.core.db import Base


class MonthClosure(Base):
    __tablename__ = "closures"

    month = Column(String(7), primary_key=True)
    is_closed = Column(Boolean, nullable=False, default=False)
    closed_by = Column(String(60), nullable=True)
    closed_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
