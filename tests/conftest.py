import os

os.environ.setdefault("ADMIN_CODE", "test-admin-code")
os.environ.setdefault("STORE_BACKEND", "sql")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import AsyncGenerator, Awaitable, Callable, Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from educalendar.core.config import Settings
from educalendar.db.sql_store import SqlDocumentStore
from educalendar.main import create_app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_ADMIN_CODE = "test-admin-code"


@pytest.fixture()
def settings() -> Settings:
    return Settings(ADMIN_CODE=TEST_ADMIN_CODE, APP_ENV="test", STORE_BACKEND="sql", _env_file=None)


@pytest.fixture()
async def store() -> AsyncGenerator[SqlDocumentStore, None]:
    """Fresh in-memory document store per test (one shared connection)."""
    doc_store = SqlDocumentStore.from_url(TEST_DATABASE_URL, poolclass=StaticPool)
    await doc_store.create_tables()
    yield doc_store
    await doc_store.close()


@pytest.fixture()
async def client(settings: Settings, store: SqlDocumentStore) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to an app wired to the test store."""
    app = create_app(settings=settings, store=store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def admin_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TEST_ADMIN_CODE}"}


@pytest.fixture()
def create_student(
    client: AsyncClient, admin_headers: Dict[str, str]
) -> Callable[..., Awaitable[Dict]]:
    """Create a student through the API and return its JSON representation."""

    async def _create(name: str = "Ada Lovelace", rate: float = 40) -> Dict:
        response = await client.post("/api/students", json={"name": name, "rate": rate}, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["student"]

    return _create


@pytest.fixture()
def student_headers(
    client: AsyncClient, admin_headers: Dict[str, str]
) -> Callable[[str], Awaitable[Dict[str, str]]]:
    """Generate an access code for a student and return bearer headers for it."""

    async def _headers(student_id: str) -> Dict[str, str]:
        response = await client.post(f"/api/students/{student_id}/generate-code", headers=admin_headers)
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['accessCode']}"}

    return _headers
