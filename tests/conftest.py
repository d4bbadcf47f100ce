"""Shared fixtures: an in-memory MongoDB, a mocked blob service and an HTTP client."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-fresh-harvest-connect-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from app.core.mongodb import MongoStore  # noqa: E402
from app.main import app  # noqa: E402
from app.scripts.manage import create_admin  # noqa: E402
from app.services.files import BlobUploader  # noqa: E402

BLOB_SERVICE_URL = "https://freshharvest.blob.core.windows.net/"


@pytest.fixture
async def store() -> MongoStore:
    mongo_store = MongoStore(AsyncMongoMockClient(), "fresh-harvest-test")
    await mongo_store.ensure_indexes()
    return mongo_store


@pytest.fixture
def blob_client() -> MagicMock:
    client = MagicMock()
    client.upload_blob = AsyncMock()
    return client


@pytest.fixture
def uploader(blob_client) -> BlobUploader:
    container_client = MagicMock()
    container_client.exists = AsyncMock(return_value=True)
    container_client.create_container = AsyncMock()
    container_client.get_blob_client.return_value = blob_client

    service_client = MagicMock()
    service_client.url = BLOB_SERVICE_URL
    service_client.get_container_client.return_value = container_client
    service_client.close = AsyncMock()
    return BlobUploader(container_name="user-content", blob_service_client=service_client)


@pytest.fixture
async def client(store, uploader):
    app.state.store = store
    app.state.uploader = uploader
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


async def signup(client, name, email, password="secret1", role=None):
    body = {"name": name, "email": email, "password": password}
    if role is not None:
        body["role"] = role
    return await client.post("/api/auth/signup", json=body)


async def login(client, email, password="secret1") -> dict:
    """Logs in and returns bearer headers. Cookies are dropped so each test
    controls exactly which session a request carries."""
    response = await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def farmer_headers_factory(client):
    async def factory(email="farmer@x.com", name="Farmer Joe"):
        response = await signup(client, name, email, role="FARMER")
        assert response.status_code == 201, response.text
        return await login(client, email)

    return factory


@pytest.fixture
async def farmer_headers(farmer_headers_factory) -> dict:
    return await farmer_headers_factory()


@pytest.fixture
async def consumer_headers(client) -> dict:
    response = await signup(client, "Ana", "ana@x.com")
    assert response.status_code == 201, response.text
    return await login(client, "ana@x.com")


@pytest.fixture
async def admin_headers(client, store) -> dict:
    await create_admin(store, "Root", "admin@x.com", "adminpass")
    return await login(client, "admin@x.com", "adminpass")
