"""
Test configuration and fixtures.

Provides:
- Fresh in-memory SQLite database per test
- Per-test rate limiters injected through dependency overrides
- JWT token minting for staff users
- HTTPX AsyncClient with proper headers
"""
import os
import uuid
from dataclasses import dataclass
from typing import AsyncGenerator, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["TESTING"] = "1"
os.environ["REDIS_URL"] = ""

from camp_api.main import app
from camp_api.core.deps import (
    COOKIE_NAME,
    get_application_limiter,
    get_click_limiter,
    get_db,
)
from camp_api.core.rate_limit import InMemoryRateLimiter
from camp_api.core.security import create_session_token
from camp_api.db.base import Base
from camp_api.db.models import User


CSRF_HEADERS = {"X-Requested-With": "XMLHttpRequest"}


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Creates a session on a private in-memory database.

    StaticPool keeps the single connection alive so app code can commit
    freely; the whole database disappears when the engine is disposed.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    yield session

    session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


# =============================================================================
# Rate Limiter Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def application_limiter() -> InMemoryRateLimiter:
    return InMemoryRateLimiter(limit=5, window_seconds=3600)


@pytest.fixture(scope="function")
def click_limiter() -> InMemoryRateLimiter:
    return InMemoryRateLimiter(limit=20, window_seconds=3600)


# =============================================================================
# User / Auth Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def admin_user(db: Session) -> User:
    """Create an admin staff user."""
    user = User(
        id=uuid.uuid4(),
        email=f"admin-{uuid.uuid4().hex[:8]}@test.com",
        display_name="Admin User",
        is_admin=True,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture(scope="function")
def staff_user(db: Session) -> User:
    """Create a signed-in but non-admin staff user."""
    user = User(
        id=uuid.uuid4(),
        email=f"staff-{uuid.uuid4().hex[:8]}@test.com",
        display_name="Staff User",
        is_admin=False,
    )
    db.add(user)
    db.commit()
    return user


@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str
    cookie_name: str = COOKIE_NAME


def make_auth(user: User) -> TestAuth:
    token = create_session_token(
        user_id=user.id,
        is_admin=user.is_admin,
        token_version=user.token_version,
    )
    return TestAuth(user=user, token=token)


@pytest.fixture(scope="function")
def admin_auth(admin_user: User) -> TestAuth:
    return make_auth(admin_user)


@pytest.fixture(scope="function")
def staff_auth(staff_user: User) -> TestAuth:
    return make_auth(staff_user)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def overrides(
    db: Session,
    application_limiter: InMemoryRateLimiter,
    click_limiter: InMemoryRateLimiter,
) -> Generator[None, None, None]:
    """Point the app at the test database and the per-test limiters."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_application_limiter] = lambda: application_limiter
    app.dependency_overrides[get_click_limiter] = lambda: click_limiter
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(overrides) -> AsyncGenerator[AsyncClient, None]:
    """
    Create unauthenticated AsyncClient for testing public endpoints.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture(scope="function")
async def admin_client(
    overrides,
    admin_auth: TestAuth,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create admin AsyncClient with JWT cookie and CSRF header.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={admin_auth.cookie_name: admin_auth.token},
        headers=CSRF_HEADERS,
    ) as c:
        yield c


@pytest.fixture(scope="function")
async def staff_client(
    overrides,
    staff_auth: TestAuth,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create non-admin AsyncClient with JWT cookie and CSRF header.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={staff_auth.cookie_name: staff_auth.token},
        headers=CSRF_HEADERS,
    ) as c:
        yield c
