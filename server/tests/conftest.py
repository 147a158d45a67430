from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import clubfinance.main as main_module
from clubfinance.auth.deps import get_current_session
from clubfinance.auth.security import hash_password
from clubfinance.auth.session import ClubSession, SessionRegistry
from clubfinance.core.db import Base, get_db
from clubfinance.main import app
from clubfinance.models.member import ROLE_MEMBER, ROLE_TREASURER, STATUS_ACTIVE, Member
from clubfinance.services.gateway import FinanceStore

SQLALCHEMY_TEST_URL = "sqlite+pysqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

DEFAULT_TEST_PASSWORD = "segredo1"


def override_get_db() -> Generator[Session, None, None]:
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def client(db_session: Session, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setattr(main_module, "SessionLocal", TestingSessionLocal)
    app.state.finance_store = FinanceStore()
    app.state.sessions = SessionRegistry()
    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def authorize(client: TestClient):
    def _apply(member: Member):
        app.dependency_overrides[get_current_session] = lambda: ClubSession(member=member)

    yield _apply
    app.dependency_overrides.pop(get_current_session, None)


def _create_member(
    session: Session,
    nickname: str,
    display_name: str,
    role: str = ROLE_MEMBER,
    requires_password_change: bool = False,
    password: str = DEFAULT_TEST_PASSWORD,
    status: str = STATUS_ACTIVE,
    is_seed_treasurer: bool = False,
) -> Member:
    member = Member(
        nickname=nickname,
        display_name=display_name,
        role=role,
        status=status,
        is_seed_treasurer=is_seed_treasurer,
        password_hash=hash_password(password),
        requires_password_change=requires_password_change,
    )
    session.add(member)
    session.commit()
    session.refresh(member)
    return member


@pytest.fixture()
def make_member(db_session: Session):
    def _make(nickname: str, display_name: str | None = None, **kwargs) -> Member:
        return _create_member(db_session, nickname, display_name or nickname.title(), **kwargs)

    return _make


@pytest.fixture()
def treasurer(db_session: Session) -> Member:
    return _create_member(db_session, "admin", "Administrador", role=ROLE_TREASURER, is_seed_treasurer=True)


@pytest.fixture()
def member(db_session: Session) -> Member:
    return _create_member(db_session, "ferrugem", "Carlos Ferreira")
