"""SQLAlchemy-backed document store: one ``documents`` table, JSON payloads."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from educalendar.db.models import Base, StoredDocument
from educalendar.db.store import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    StoreError,
    WriteBatch,
    equality_filters,
)

logger = logging.getLogger(__name__)


def _json_field(field: str, value: Any):
    element = StoredDocument.data[field]
    if isinstance(value, bool):
        return element.as_boolean()
    if isinstance(value, int):
        return element.as_integer()
    if isinstance(value, float):
        return element.as_float()
    return element.as_string()


def _to_document(row: StoredDocument) -> Document:
    return Document(id=row.doc_id, data=dict(row.data or {}))


class SqlDocumentStore(DocumentStore):
    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._sessions = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str, **engine_kwargs: Any) -> "SqlDocumentStore":
        # pool_pre_ping: check connection is alive before use.
        engine_kwargs.setdefault("pool_pre_ping", True)
        engine = create_async_engine(database_url, echo=False, future=True, **engine_kwargs)
        return cls(engine)

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            async with self._sessions() as session:
                row = await session.get(StoredDocument, (collection, doc_id))
                return _to_document(row) if row else None
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read {collection}/{doc_id}") from e

    async def all(self, collection: str) -> List[Document]:
        stmt = (
            select(StoredDocument)
            .where(StoredDocument.collection == collection)
            .order_by(StoredDocument.doc_id)
        )
        return await self._select(stmt, collection)

    async def find(self, collection: str, equals: Mapping[str, Any]) -> List[Document]:
        stmt = select(StoredDocument).where(StoredDocument.collection == collection)
        for field, value in equality_filters(equals):
            stmt = stmt.where(_json_field(field, value) == value)
        stmt = stmt.order_by(StoredDocument.doc_id)
        return await self._select(stmt, collection)

    async def _select(self, stmt, collection: str) -> List[Document]:
        try:
            async with self._sessions() as session:
                result = await session.execute(stmt)
                return [_to_document(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to query {collection}") from e

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        await self.commit(WriteBatch().set(collection, doc_id, data))

    async def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        try:
            async with self._sessions() as session:
                row = await session.get(StoredDocument, (collection, doc_id))
                if row is None:
                    raise DocumentNotFoundError(collection, doc_id)
                merged: Dict[str, Any] = dict(row.data or {})
                merged.update(data)
                # Reassign so the JSON column is flagged dirty.
                row.data = merged
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to update {collection}/{doc_id}") from e

    async def delete(self, collection: str, doc_id: str) -> None:
        await self.commit(WriteBatch().delete(collection, doc_id))

    async def commit(self, batch: WriteBatch) -> None:
        if not batch.operations:
            return
        try:
            async with self._sessions() as session:
                async with session.begin():
                    for op in batch.operations:
                        row = await session.get(StoredDocument, (op.collection, op.doc_id))
                        if op.kind == "delete":
                            if row is not None:
                                await session.delete(row)
                        elif row is None:
                            session.add(StoredDocument(collection=op.collection, doc_id=op.doc_id, data=op.data))
                        else:
                            row.data = op.data
        except SQLAlchemyError as e:
            raise StoreError(f"Batch of {len(batch)} writes failed") from e
        logger.debug("Committed batch of %d writes", len(batch))

    async def close(self) -> None:
        await self.engine.dispose()
