from __future__ import annotations

from decimal import Decimal
from typing import List

from clubfinance.schemas.common import CamelModel


class TrendPoint(CamelModel):
    month: str
    label: str
    inflow: Decimal
    outflow: Decimal


class CategoryTotal(CamelModel):
    category: str
    total: Decimal


class DashboardResponse(CamelModel):
    current_month: str
    balance: Decimal
    month_inflow: Decimal
    month_outflow: Decimal
    is_month_closed: bool
    active_members: int
    trend: List[TrendPoint]
    categories: List[CategoryTotal]
