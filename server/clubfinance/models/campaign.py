from __future__ import annotations

from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from clubfinance.core.db import Base
from clubfinance.models.dues import PAYMENT_PENDING

CAMPAIGN_ACTIVE = "active"
CAMPAIGN_FINISHED = "finished"


class Campaign(Base):
    __tablename__ = "vaquinhas"

    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=False, default="")
    goal = Column(Numeric(12, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default=CAMPAIGN_ACTIVE)

    contributions = relationship("Contribution", back_populates="campaign", cascade="all, delete-orphan")


class Contribution(Base):
    __tablename__ = "contributions"

    id = Column(Integer, primary_key=True)
    campaign_id = Column(Integer, ForeignKey("vaquinhas.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=PAYMENT_PENDING)
    proof = Column(Text, nullable=True)

    campaign = relationship("Campaign", back_populates="contributions")
    member = relationship("Member")
