import logging

from fastapi import Request

from educalendar.core.config import Settings
from educalendar.db.store import DocumentStore

logger = logging.getLogger(__name__)


async def open_store(settings: Settings) -> DocumentStore:
    """Build the configured backend. Called once from the application lifespan."""
    backend = settings.store_backend.lower()
    if backend == "sql":
        from educalendar.db.sql_store import SqlDocumentStore

        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is required when STORE_BACKEND=sql")
        store = SqlDocumentStore.from_url(settings.database_url)
        await store.create_tables()
    elif backend == "firestore":
        from educalendar.db.firestore_store import FirestoreDocumentStore

        store = FirestoreDocumentStore.from_settings(settings)
    else:
        raise RuntimeError(f"Unknown STORE_BACKEND {settings.store_backend!r}")
    logger.info("Document store ready (%s)", backend)
    return store


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
