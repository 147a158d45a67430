from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from clubfinance.models.audit_log import AuditEntry
from clubfinance.models.member import Member

logger = logging.getLogger(__name__)

SYSTEM_USERNAME = "system"

ACTION_MEMBERS = "Members"
ACTION_SECURITY = "Security"
ACTION_CAMPAIGN = "Campaign"
ACTION_EXPENSES = "Expenses"
ACTION_CLOSURE = "Closure"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def record_audit(db: Session, actor: Member | None, action: str, details: str) -> AuditEntry:
    """Stage one audit entry in the caller's transaction.

    The entry is committed together with the change it describes, so a failed
    write never leaves an orphan log line behind.
    """

    entry = AuditEntry(
        timestamp=now_utc(),
        user_id=actor.id if actor else None,
        username=actor.nickname if actor else SYSTEM_USERNAME,
        action=action,
        details=details,
    )
    db.add(entry)
    logger.info("audit_entry_recorded", extra={"action": action, "user_id": entry.user_id})
    return entry
