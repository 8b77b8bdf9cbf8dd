# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")

from campus_market.core.security import create_access_token
from campus_market.db.session import Base, enable_sqlite_savepoints
from campus_market.db.session import get_db as app_get_session
from campus_market.main import app as fastapi_app
from campus_market.models import Service, User
from campus_market.models.user import ROLE_ADMIN

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    # Service-level commits release a SAVEPOINT; the outer transaction is rolled back.
    session = Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def make_user(
    db_session: Session,
    uid: str,
    display_name: str | None,
    *,
    photo_url: str | None = None,
    role: str = "student",
    is_blacklisted: bool = False,
) -> User:
    """Persist a user row and return it."""
    user = User(
        uid=uid,
        email=f"{uid}@campus.test",
        display_name=display_name,
        photo_url=photo_url,
        role=role,
        is_blacklisted=is_blacklisted,
    )
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


def auth_headers(user: User) -> dict[str, str]:
    """Return bearer headers for `user`."""
    token = create_access_token(user.uid, role=user.role, email=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(db_session: Session) -> User:
    """Seeker in most scenarios."""
    return make_user(db_session, "uid-alice", "Alice", photo_url="https://cdn.test/alice.png")


@pytest.fixture()
def bob(db_session: Session) -> User:
    """Provider in most scenarios."""
    return make_user(db_session, "uid-bob", "Bob", photo_url="https://cdn.test/bob.png")


@pytest.fixture()
def carol(db_session: Session) -> User:
    """Third party with no stake in alice/bob conversations."""
    return make_user(db_session, "uid-carol", "Carol")


@pytest.fixture()
def nameless(db_session: Session) -> User:
    """User whose profile has no display name."""
    return make_user(db_session, "uid-nameless", None)


@pytest.fixture()
def suspended(db_session: Session) -> User:
    """Blacklisted user."""
    return make_user(db_session, "uid-suspended", "Mallory", is_blacklisted=True)


@pytest.fixture()
def admin(db_session: Session) -> User:
    """Administrator."""
    return make_user(db_session, "uid-admin", "Admin", role=ROLE_ADMIN)


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def carol_headers(carol: User) -> dict[str, str]:
    return auth_headers(carol)


@pytest.fixture()
def tutoring_service(db_session: Session, bob: User) -> Service:
    """A listing offered by bob."""
    service = Service(provider_uid=bob.uid, title="Calculus tutoring", category="tutoring")
    db_session.add(service)
    db_session.flush()
    db_session.refresh(service)
    return service


@pytest.fixture()
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)
