"""Test fixtures for the backend."""
import os
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_backend.db")
os.environ.setdefault("SECRET_KEY", "test-secret")

from app import models  # noqa: E402
from app.database import engine  # noqa: E402
from app.main import app  # noqa: E402


test_db_path = Path("test_backend.db")


@pytest_asyncio.fixture(autouse=True)
async def prepare_database():
    """Give every test an empty schema and drop it afterwards."""

    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.drop_all)
        await conn.run_sync(models.Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.drop_all)
    await engine.dispose()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest_asyncio.fixture
async def client():
    """Provide an HTTP client for integration tests."""

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture
def login_as(client: AsyncClient):
    """Register a user and return bearer headers for it."""

    async def _login(username: str = "owner", account_id: str = "acme") -> dict[str, str]:
        payload = {
            "username": username,
            "password": "secret123",
            "account_id": account_id,
            "email": f"{username}@example.com",
        }
        response = await client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text
        login_response = await client.post("/auth/login", json=payload)
        assert login_response.status_code == 200, login_response.text
        token = login_response.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _login
