import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock

# Settings are read at import time; point them at SQLite before the app loads.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from estatehub.client.gateway import ApiGateway  # noqa: E402
from estatehub.client.storage import MemoryStorage  # noqa: E402
from estatehub.core.database import get_db  # noqa: E402
from estatehub.main import app  # noqa: E402
from estatehub.models import Base  # noqa: E402


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory database with the full schema for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Yield an ``httpx.AsyncClient`` wired to the FastAPI app."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def gateway(async_client) -> AsyncGenerator[ApiGateway, None]:
    """A real gateway talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test/api") as client:
        yield ApiGateway(client=client)


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Return an ``AsyncMock`` that behaves like ``ApiGateway``."""
    gateway = AsyncMock(spec=ApiGateway)
    gateway.get_properties = AsyncMock(return_value=[])
    gateway.get_leads = AsyncMock(return_value=[])
    gateway.get_site_visits = AsyncMock(return_value=[])
    return gateway


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def property_payload() -> dict:
    return {
        "title": "Skyline Residences 3BHK",
        "price": 8_500_000,
        "city": "Mumbai",
        "area": 2200,
        "bedrooms": 3,
        "bathrooms": 3,
        "propertyType": "apartment",
        "status": "hot-deal",
        "images": ["/images/skyline.jpg"],
        "amenities": ["Pool", "Gym"],
        "isFeatured": True,
        "location": {"lat": 19.076, "lng": 72.8777},
    }
