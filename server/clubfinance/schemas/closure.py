from __future__ import annotations

from datetime import datetime
from typing import Optional

from clubfinance.schemas.common import CamelModel


class MonthClosureOut(CamelModel):
    month: str
    is_closed: bool
    closed_by: Optional[str] = None
    closed_at: Optional[datetime] = None
