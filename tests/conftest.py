"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database, settings, bearer tokens, recording sleep
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, python-jose
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fairform.boundary.db.base import Base
from fairform.configs.auth import AuthSettings
from fairform.configs.database import DatabaseSettings
from fairform.configs.lifecycle import LifecycleSettings
from fairform.configs.openai import OpenAISettings
from fairform.configs.settings import Settings

TEST_JWT_SECRET = "test-jwt-secret"
TEST_CRON_SECRET = "test-cron-secret"


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Factory bound to a fresh schema
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_async_db(session_factory):
    """
    Single session on the in-memory database.

    Yields:
        AsyncSession: Test database session, rolled back afterwards
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials and no external services."""
    return Settings(
        database=DatabaseSettings(url_override="sqlite+aiosqlite:///:memory:"),
        openai=OpenAISettings(api_key="sk-test"),
        lifecycle=LifecycleSettings(cron_secret=TEST_CRON_SECRET, retry_delay_ms=0),
        auth=AuthSettings(jwt_secret=TEST_JWT_SECRET),
    )


@pytest.fixture
def make_token():
    """Return a factory that signs HS256 tokens for a subject."""

    def _make(sub: str = "user-1", secret: str = TEST_JWT_SECRET, expires_in: int = 3600) -> str:
        claims = {
            "sub": sub,
            "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        }
        return jwt.encode(claims, secret, algorithm="HS256")

    return _make


@pytest.fixture
def recording_sleep():
    """Async sleep replacement that records requested delays in seconds."""
    delays: list[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep


@pytest.fixture
def session_id() -> uuid.UUID:
    """Generate a test session ID."""
    return uuid.uuid4()


@pytest.fixture
def classification_payload() -> dict:
    """Model reply that satisfies the intake classification schema."""
    return {
        "summary": "Tenant facing eviction after landlord refused repairs.",
        "primaryIssue": "Eviction",
        "caseType": "Landlord-tenant",
        "jurisdiction": {"state": "CA", "county": "Alameda"},
        "confidence": 0.82,
        "riskLevel": "high",
        "recommendedNextSteps": [
            "Gather the lease and repair requests",
            "Respond to the unlawful detainer within five days",
        ],
        "disclaimers": ["This is general information, not legal advice."],
    }


@pytest.fixture
def intake_text() -> str:
    """Problem description long enough to pass validation."""
    return "My landlord is evicting me because I asked for the heater to be repaired."
