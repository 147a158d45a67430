from __future__ import annotations

from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from clubfinance.core.db import Base

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Eventos",
    "Sede",
    "Manutenção",
    "Caridade",
    "Administrativo",
    "Viagens",
    "Outros",
)


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(40), nullable=False)
    responsible_id = Column(Integer, ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True)
    reference_month = Column(String(7), nullable=False, index=True)
    proof = Column(Text, nullable=True)

    responsible = relationship("Member")
