"""Shared pytest fixtures configured to use SQLite in-memory for unit tests."""

import logging
import os

# must be set before the application settings are first read
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TSAAP_SKIP_LIFESPAN_DB", "1")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.tsaap.config import Settings
from src.tsaap.core.models import BaseModel, Context, Role, RoleEnum, User
from src.tsaap.core.repositories import RoleRepository
from src.tsaap.database import get_db_session
from src.tsaap.main import app
from src.tsaap.security.jwt import create_access_token

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "password123"


@pytest.fixture
def test_settings():
    """Settings pointing at an SQLite in-memory database."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key="test-secret-key",
        debug=True,
    )


@pytest.fixture
async def test_engine(test_settings):
    """Fresh in-memory database with the full schema for each test."""
    engine = create_async_engine(
        test_settings.database_url,
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # Ensure SQLite enforces foreign key constraints
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Session bound to the test database."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        # Avoid implicit attribute refreshes after commit which can cause
        # MissingGreenlet when accessed in sync contexts during async tests.
        expire_on_commit=False,
    )
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def count_rows(test_session):
    """Count the rows of a model matching the given criteria."""

    async def _count(model, *criteria):
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        result = await test_session.execute(stmt)
        return result.scalar()

    return _count


@pytest.fixture
def make_user(test_session):
    """Factory persisting enabled users with a known password."""

    async def _make_user(username: str, enabled: bool = True, **fields) -> User:
        fields.setdefault("email", f"{username}@example.com")
        fields.setdefault("password", TEST_PASSWORD)
        user = User(username=username, enabled=enabled, **fields)
        test_session.add(user)
        await test_session.commit()
        return user

    return _make_user


@pytest.fixture
async def test_user(make_user):
    """Author of most notes in the tests."""
    return await make_user("mary", first_name="Mary", last_name="Teacher")


@pytest.fixture
async def other_user(make_user):
    return await make_user("fred")


@pytest.fixture
async def roles(test_session):
    """The well-known roles, keyed by name."""
    repo = RoleRepository(test_session)
    created = {}
    for role_name in RoleEnum:
        created[role_name.value] = await repo.find_or_create(role_name.value)
    await test_session.commit()
    return created


@pytest.fixture
async def student_role(roles) -> Role:
    return roles[RoleEnum.STUDENT_ROLE.value]


@pytest.fixture
async def teacher_role(roles) -> Role:
    return roles[RoleEnum.TEACHER_ROLE.value]


@pytest.fixture
async def test_context(test_session, test_user):
    """A discussion context owned by the test user."""
    context = Context(
        context_name="Induction proofs",
        url="https://example.com/proofs",
        owner=test_user,
    )
    test_session.add(context)
    await test_session.commit()
    return context


@pytest.fixture
def override_get_db(test_session):
    """Override the get_db_session dependency."""

    async def _override_get_db():
        yield test_session

    return _override_get_db


@pytest.fixture
def test_app(override_get_db):
    """FastAPI app with the test database wired in."""
    app.dependency_overrides[get_db_session] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    """Async client calling the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
def headers_for():
    """Build bearer headers for any user."""
    return bearer


@pytest.fixture
def auth_headers(test_user):
    """Create authentication headers with a valid JWT token."""
    return bearer(test_user)


@pytest.fixture
def other_auth_headers(other_user):
    return bearer(other_user)
