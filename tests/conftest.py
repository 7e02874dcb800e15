"""Pytest configuration and fixtures for Wine Journal tests.

Tests run against mongomock-motor unless TEST_MONGODB_URL points at a real
MongoDB server.
"""

import importlib
import os
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

# Keep the test run hermetic: no real API keys, telemetry or config files
for _var in (
    "ANTHROPIC_API_KEY",
    "WINEJOURNAL_ANTHROPIC_API_KEY",
    "OPENWEATHER_API_KEY",
    "WINEJOURNAL_OPENWEATHER_API_KEY",
    "WINEJOURNAL_POSTHOG_API_KEY",
):
    os.environ.pop(_var, None)
os.environ["WINEJOURNAL_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-jwt-signing"
os.environ["WINEJOURNAL_POSTHOG_ENABLED"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient
from motor.motor_asyncio import AsyncIOMotorClient

from winejournal import database as database_module
from winejournal.config import SecretsConfig, Settings, WineJournalConfig
from winejournal.models import User
from winejournal.services.auth import create_access_token, get_password_hash
from winejournal.services.email import get_email_service, reset_email_service
from winejournal.services.telemetry import posthog_service

TEST_MONGODB_URL = os.environ.get("TEST_MONGODB_URL")

settings_module = importlib.import_module("winejournal.config.settings")


def create_test_app():
    """The application's routes and middleware without the database lifespan."""
    from fastapi import FastAPI
    from slowapi import _rate_limit_exceeded_handler
    from slowapi.errors import RateLimitExceeded

    from winejournal import __version__
    from winejournal.main import SecurityHeadersMiddleware
    from winejournal.main import app as main_app

    @asynccontextmanager
    async def test_lifespan(app: FastAPI):
        yield

    test_app = FastAPI(title="Wine Journal Test", version=__version__, lifespan=test_lifespan)
    test_app.state.limiter = main_app.state.limiter
    test_app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    test_app.add_middleware(SecurityHeadersMiddleware)

    for route in main_app.routes:
        test_app.routes.append(route)

    return test_app


_test_app = None


def get_test_app():
    global _test_app
    if _test_app is None:
        _test_app = create_test_app()
    return _test_app


@pytest_asyncio.fixture(scope="function")
async def mongo_client():
    if TEST_MONGODB_URL:
        client = AsyncIOMotorClient(TEST_MONGODB_URL, tz_aware=True, maxPoolSize=10)
    else:
        client = AsyncMongoMockClient(tz_aware=True)
    yield client
    if TEST_MONGODB_URL:
        client.close()


@pytest_asyncio.fixture(scope="function")
async def init_test_db(mongo_client):
    """Initialize Beanie on a fresh, uniquely named database."""
    db_name = f"test_winejournal_{uuid.uuid4().hex[:8]}"
    await database_module.init_db(mongodb_database=db_name, motor_client=mongo_client)
    yield database_module.get_database()

    await mongo_client.drop_database(db_name)
    database_module.client = None
    database_module.database = None


@pytest.fixture
def test_user() -> dict:
    return {"email": "test@example.com", "password": "testpassword"}


@pytest_asyncio.fixture
async def user(init_test_db, test_user) -> User:
    """The test user, stored in the database."""
    db_user = User(
        email=test_user["email"],
        hashed_password=get_password_hash(test_user["password"]),
        is_active=True,
        is_verified=True,
    )
    await db_user.insert()
    return db_user


@pytest.fixture
def auth_headers(test_user) -> dict:
    access_token = create_access_token(data={"sub": test_user["email"]})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture(autouse=True)
def reset_rate_limits():
    from winejournal.main import limiter
    from winejournal.routers.auth import limiter as auth_limiter

    limiter.reset()
    auth_limiter.reset()
    yield


@pytest.fixture(autouse=True)
def image_dir(tmp_path, monkeypatch) -> Path:
    """Store uploaded images in a per-test directory."""
    from winejournal.routers.wines._common import image_storage

    images = tmp_path / "images"
    images.mkdir()
    monkeypatch.setattr(image_storage, "storage_path", images)
    return images


@pytest_asyncio.fixture(scope="function")
async def client(user, auth_headers) -> AsyncGenerator[AsyncClient, None]:
    """Async client authenticated as the test user."""
    transport = ASGITransport(app=get_test_app())
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers=auth_headers,
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def unauthenticated_client(init_test_db) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=get_test_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def other_user_headers(init_test_db) -> dict:
    """Auth headers for a second user, for ownership checks."""
    other = User(
        email="other@example.com",
        hashed_password=get_password_hash("otherpassword"),
        is_active=True,
        is_verified=True,
    )
    await other.insert()
    token = create_access_token(data={"sub": other.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def email_outbox():
    """Messages captured by the console email backend during the test."""
    reset_email_service()
    service = get_email_service()
    yield service.outbox
    reset_email_service()


@pytest.fixture
def override_settings(monkeypatch):
    """Swap the global settings for ones built from the given config and secrets."""

    def _override(config: WineJournalConfig | None = None, **secrets: str) -> Settings:
        secrets.setdefault("secret_key", os.environ["WINEJOURNAL_SECRET_KEY"])
        new_settings = Settings(config=config or WineJournalConfig(), secrets=SecretsConfig(**secrets))
        monkeypatch.setattr(settings_module, "_settings", new_settings)
        return new_settings

    return _override


@pytest.fixture(autouse=True)
def reset_telemetry():
    posthog_service.reset()
    yield
    posthog_service.reset()


@pytest.fixture
def sample_image_bytes() -> bytes:
    """A minimal valid 1x1 PNG."""
    return bytes([
        0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
        0x00, 0x00, 0x00, 0x0D,  # IHDR length
        0x49, 0x48, 0x44, 0x52,  # IHDR
        0x00, 0x00, 0x00, 0x01,  # width: 1
        0x00, 0x00, 0x00, 0x01,  # height: 1
        0x08, 0x02,  # bit depth: 8, color type: RGB
        0x00, 0x00, 0x00,  # compression, filter, interlace
        0x90, 0x77, 0x53, 0xDE,  # CRC
        0x00, 0x00, 0x00, 0x0C,  # IDAT length
        0x49, 0x44, 0x41, 0x54,  # IDAT
        0x08, 0xD7, 0x63, 0xF8, 0xFF, 0xFF, 0x3F, 0x00,
        0x05, 0xFE, 0x02, 0xFE,
        0xA3, 0x1A, 0x8D, 0xEB,  # CRC
        0x00, 0x00, 0x00, 0x00,  # IEND length
        0x49, 0x45, 0x4E, 0x44,  # IEND
        0xAE, 0x42, 0x60, 0x82,  # CRC
    ])
