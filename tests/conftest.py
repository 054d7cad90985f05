"""Pytest fixtures for testing."""

import json
import logging
import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from agentxmap.core.config import get_settings
from agentxmap.core.database import get_db
from agentxmap.core.security import hash_password
from agentxmap.main import app
from agentxmap.models.base import Base
from agentxmap.models.enums import UserRole
from agentxmap.models.organization import Organization
from agentxmap.models.user import User
from agentxmap.services.identity_service import IdentityService

TEST_PASSWORD = "TestPass123!"
TEST_LOGGER_NAME = "tests.identity"


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a file-backed SQLite engine with all tables.

    pysqlite's implicit transaction handling is disabled so SQLAlchemy
    controls BEGIN and SAVEPOINT itself.
    """
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(test_engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
def test_logger(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    caplog.set_level(logging.DEBUG, logger=TEST_LOGGER_NAME)
    return logging.getLogger(TEST_LOGGER_NAME)


@pytest.fixture()
def service(db: AsyncSession, test_logger: logging.Logger) -> IdentityService:
    return IdentityService(db, settings=get_settings(), logger=test_logger)


def logged_events(caplog: pytest.LogCaptureFixture) -> list[dict]:
    """Decode the structured log lines emitted to the test logger."""
    return [
        json.loads(record.getMessage())
        for record in caplog.records
        if record.name == TEST_LOGGER_NAME
    ]


@pytest_asyncio.fixture(scope="function")
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database dependency override."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_org(db: AsyncSession) -> Organization:
    org = Organization(name="Test Organization", slug="test-organization")
    db.add(org)
    await db.flush()
    return org


async def create_user(
    db: AsyncSession,
    org: Organization,
    email: str,
    password: str = TEST_PASSWORD,
    role: UserRole = UserRole.USER,
) -> User:
    """User factory for creating test users.

    Args:
        db: Database session
        org: Organization the user belongs to
        email: User email
        password: User password (default: TestPass123!)
        role: User role (default: USER)

    Returns:
        Created User instance
    """
    user = User(
        org_id=org.id,
        organization=org,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    await db.flush()
    return user


@pytest_asyncio.fixture
async def test_admin_user(db: AsyncSession, test_org: Organization) -> User:
    return await create_user(db, test_org, "admin@test.com", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def test_manager_user(db: AsyncSession, test_org: Organization) -> User:
    return await create_user(db, test_org, "manager@test.com", role=UserRole.MANAGER)


@pytest_asyncio.fixture
async def test_member_user(db: AsyncSession, test_org: Organization) -> User:
    return await create_user(db, test_org, "member@test.com", role=UserRole.USER)
