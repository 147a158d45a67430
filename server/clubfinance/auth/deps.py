from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from clubfinance.auth.session import ClubSession, SessionRegistry, get_session_registry, hydrate_session
from clubfinance.core.db import get_db
from clubfinance.models.member import ROLE_TREASURER, Member

bearer_scheme = HTTPBearer(auto_error=False)


class PasswordChangeRequired(Exception):
    """Raised while a member still has to replace a temporary password."""


def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    registry: SessionRegistry = Depends(get_session_registry),
) -> ClubSession:
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return hydrate_session(db, credentials.credentials, registry)


def get_optional_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    registry: SessionRegistry = Depends(get_session_registry),
) -> ClubSession | None:
    if not credentials:
        return None
    try:
        return hydrate_session(db, credentials.credentials, registry)
    except HTTPException:
        return None


def get_current_member(session: ClubSession = Depends(get_current_session)) -> Member:
    if session.requires_password_change:
        raise PasswordChangeRequired()
    return session.member


def require_roles(*roles: str) -> Callable[[Member], Member]:
    def checker(member: Member = Depends(get_current_member)) -> Member:
        if member.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return member

    return checker


require_treasurer = require_roles(ROLE_TREASURER)
