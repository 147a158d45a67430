from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from clubfinance.core.db import Base


class AuditEntry(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow, index=True)
    user_id = Column(Integer, ForeignKey("members.id", ondelete="SET NULL"), nullable=True)
    username = Column(String(60), nullable=False, default="system")
    action = Column(String(60), nullable=False)
    details = Column(Text, nullable=False, default="")
