from __future__ import annotations

from datetime import datetime
from typing import Optional

from clubfinance.schemas.common import CamelModel


class AuditEntryOut(CamelModel):
    id: int
    timestamp: datetime
    user_id: Optional[int] = None
    username: str
    action: str
    details: str
