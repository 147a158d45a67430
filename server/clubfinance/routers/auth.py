import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from clubfinance.auth.deps import get_current_member, get_current_session, get_optional_session
from clubfinance.auth.routes import navigation_for, normalize_path, resolve_route
from clubfinance.auth.security import create_access_token
from clubfinance.auth.session import ClubSession, SessionRegistry, get_session_registry
from clubfinance.core.db import get_db
from clubfinance.models.member import Member
from clubfinance.schemas.auth import (
    LoginRequest,
    NavigationItem,
    PasswordChangeRequest,
    RouteResolution,
    SessionOut,
    TokenResponse,
)
from clubfinance.services import members as members_service
from clubfinance.services.gateway import FinanceStore, get_finance_store

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)


def _session_out(member: Member) -> SessionOut:
    return SessionOut(
        id=member.id,
        display_name=member.display_name,
        nickname=member.nickname,
        position=member.position,
        role=member.role,
        requires_password_change=bool(member.requires_password_change),
    )


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    member = members_service.authenticate(db, payload.nickname, payload.password)
    if not member:
        logger.info("login_failed", extra={"nickname": payload.nickname})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials or inactive account",
        )
    token = create_access_token(subject=str(member.id), role=member.role)
    logger.info("login_succeeded", extra={"member_id": member.id})
    return TokenResponse(
        access_token=token,
        role=member.role,
        requires_password_change=bool(member.requires_password_change),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    session: ClubSession = Depends(get_current_session),
    registry: SessionRegistry = Depends(get_session_registry),
) -> Response:
    registry.teardown(session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=SessionOut)
def me(session: ClubSession = Depends(get_current_session)) -> SessionOut:
    return _session_out(session.member)


@router.post("/change-password", response_model=SessionOut)
def change_password(
    payload: PasswordChangeRequest,
    session: ClubSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
) -> SessionOut:
    member = members_service.change_password(db, session.member, payload.new_password)
    store.refresh(db)
    return _session_out(member)


@router.get("/route", response_model=RouteResolution)
def route(
    path: str = Query(...),
    session: ClubSession | None = Depends(get_optional_session),
) -> RouteResolution:
    requested = normalize_path(path)
    destination = resolve_route(requested, session)
    return RouteResolution(path=requested, destination=destination, allowed=destination == requested)


@router.get("/navigation", response_model=list[NavigationItem])
def navigation(member: Member = Depends(get_current_member)) -> list[NavigationItem]:
    return [NavigationItem(name=name, href=href) for name, href in navigation_for(member.role)]
