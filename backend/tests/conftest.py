"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- HTTP client for API testing
- In-memory SQLite test database sessions
- Sample authors and courses
"""

import os
import uuid
from datetime import date

# Point the application at SQLite before app modules create their engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Author, Course

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory test database engine with the full schema.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncSession:
    """Create test database session with automatic rollback."""
    async with session_maker() as session:
        yield session
        await session.rollback()


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(session_maker):
    """Async test client for FastAPI app with test database.

    Overrides the app's get_db dependency to use the test database.
    """

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.pop(get_db, None)


# =============================================================================
# Sample Data
# =============================================================================

BERRY_ID = uuid.UUID("d28888e9-2ba9-473a-a40f-e38cb54f9b35")
NANCY_ID = uuid.UUID("da2fd609-d754-4feb-8acd-c4f9ff13ba96")
ELI_ID = uuid.UUID("2902b665-1190-4c70-9915-b9c2d7680450")
ARNOLD_ID = uuid.UUID("102b566b-ba1f-404c-b2df-e2cde39ade09")
ANNE_ID = uuid.UUID("5b3621c0-7b12-4e80-9c8b-3398cba7ee05")

SAMPLE_AUTHORS = [
    (BERRY_ID, "Berry", "Griffin", date(1650, 7, 23), "Ships"),
    (NANCY_ID, "Nancy", "Rye", date(1668, 5, 21), "Rum"),
    (ELI_ID, "Eli", "Sweet", date(1701, 12, 16), "Singing"),
    (ARNOLD_ID, "Arnold", "Stafford", date(1702, 3, 6), "Singing"),
    (ANNE_ID, "Anne", "Bonny", date(1697, 3, 8), "Singing"),
]


@pytest.fixture
def sample_authors() -> list[tuple]:
    """Raw sample author rows: (id, first_name, last_name, date_of_birth, main_category)."""
    return SAMPLE_AUTHORS


@pytest_asyncio.fixture
async def authors_in_db(session_maker) -> list[uuid.UUID]:
    """Insert the sample authors (Berry owns two courses) and return their IDs."""
    async with session_maker() as session:
        for author_id, first_name, last_name, date_of_birth, main_category in SAMPLE_AUTHORS:
            session.add(
                Author(
                    id=author_id,
                    first_name=first_name,
                    last_name=last_name,
                    date_of_birth=date_of_birth,
                    main_category=main_category,
                )
            )
        session.add_all(
            [
                Course(
                    title="Commandeering a Ship Without Getting Caught",
                    description="Commandeering a ship in rough waters isn't easy.",
                    author_id=BERRY_ID,
                ),
                Course(
                    title="Overthrowing Mutiny",
                    description="Tips to avoid, or if needed overthrow, pirate mutiny.",
                    author_id=BERRY_ID,
                ),
            ]
        )
        await session.commit()
    return [row[0] for row in SAMPLE_AUTHORS]
