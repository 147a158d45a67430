"""Per-request session objects and their lifecycle.

A session is hydrated from a bearer token and re-validated against the members
table on every request; logging out tears it down by revoking the token id.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

from fastapi import HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from clubfinance.core.config import settings
from clubfinance.models.member import Member

logger = logging.getLogger(__name__)


@dataclass
class ClubSession:
    member: Member
    token_id: str | None = None
    expires_at: datetime | None = None

    @property
    def role(self) -> str:
        return self.member.role

    @property
    def requires_password_change(self) -> bool:
        return bool(self.member.requires_password_change)


class SessionRegistry:
    """Revoked token ids, kept until the token would have expired anyway."""

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def _prune(self) -> None:
        now = datetime.now(timezone.utc)
        for token_id in [key for key, expiry in self._revoked.items() if expiry <= now]:
            del self._revoked[token_id]

    def is_revoked(self, token_id: str | None) -> bool:
        if token_id is None:
            return False
        with self._lock:
            self._prune()
            return token_id in self._revoked

    def teardown(self, session: ClubSession) -> None:
        if session.token_id is None:
            return
        expiry = session.expires_at or datetime.now(timezone.utc)
        with self._lock:
            self._revoked[session.token_id] = expiry
        logger.info("session_teardown", extra={"member_id": session.member.id})


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def hydrate_session(db: Session, token: str, registry: SessionRegistry) -> ClubSession:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    subject = payload.get("sub")
    if subject is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    token_id = payload.get("jti")
    if registry.is_revoked(token_id):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session has ended")

    member: Member | None = None
    try:
        member = db.get(Member, int(subject))
    except (TypeError, ValueError):
        member = None

    if not member or not member.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive user")

    expires_at = None
    if payload.get("exp") is not None:
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
    return ClubSession(member=member, token_id=token_id, expires_at=expires_at)
