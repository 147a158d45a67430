from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from clubfinance.core.db import Base

PAYMENT_PENDING = "pending"
PAYMENT_VALIDATED = "validated"
PAYMENT_REJECTED = "rejected"


class DuesConfig(Base):
    __tablename__ = "fee_configs"

    month = Column(String(7), primary_key=True)
    expected_amount = Column(Numeric(12, 2), nullable=False)


class DuesPayment(Base):
    __tablename__ = "fee_payments"

    id = Column(Integer, primary_key=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_date = Column(Date, nullable=False)
    reference_month = Column(String(7), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=PAYMENT_PENDING)
    proof = Column(Text, nullable=True)
    note = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    member = relationship("Member")
