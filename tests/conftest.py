"""
Test infrastructure for the Board API.

Strategy
--------
- SQLite in-memory via aiosqlite removes the need for a running Postgres
  instance, keeping the suite fast and self-contained.
- StaticPool makes every session share one connection, which an in-memory
  SQLite database needs: a second connection would see an empty database.
- The app's get_db dependency is overridden so requests made by the HTTP
  tests use the test session factory.
- Tables are created before each test and dropped after it, so every test
  starts from an empty database.
- The query counter is installed on the test engine so tests can assert how
  many SQL statements a service call issued.
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

import board.models  # noqa: F401  # register tables on Base.metadata
from board.database import Base, get_db
from board.main import app
from board.middleware import install_query_counter
from board.schemas import UserAccountDto
from board.services import user_account_service

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that call services or repositories directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def uno(db_session: AsyncSession) -> UserAccountDto:
    return await user_account_service.save_user_account(
        db_session,
        UserAccountDto(
            user_id="uno",
            user_password="hashed-pw",
            email="uno@mail.com",
            nickname="Uno",
            memo="This is memo",
        ),
    )


@pytest_asyncio.fixture
async def haco(db_session: AsyncSession) -> UserAccountDto:
    return await user_account_service.save_user_account(
        db_session,
        UserAccountDto(
            user_id="haco",
            user_password="hashed-pw",
            email="haco@mail.com",
            nickname="Haco",
        ),
    )


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
