"""Pytest configuration and fixtures for WineJournal tests."""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from winejournal.config import reset_settings

# Fixed "today" so undated purchases and tastings are deterministic
TODAY = date(2025, 11, 20)


@pytest.fixture
def today() -> date:
    """Return the fixed date used as "today" in parser tests."""
    return TODAY


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings for every test so env patches take effect."""
    reset_settings()
    yield
    reset_settings()


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client against the application."""
    from winejournal.main import app
    from winejournal.routers import import_router

    import_router.limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
