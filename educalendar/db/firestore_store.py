"""Cloud Firestore-backed document store (firebase-admin async client)."""

import logging
from typing import Any, List, Mapping, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1 import FieldFilter

from educalendar.core.config import Settings
from educalendar.db.store import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    StoreError,
    WriteBatch,
    equality_filters,
)

logger = logging.getLogger(__name__)

# Firestore rejects batches larger than this.
MAX_BATCH_WRITES = 500


def _to_document(snapshot) -> Document:
    return Document(id=snapshot.id, data=snapshot.to_dict() or {})


def initialize_firebase(settings: Settings) -> firebase_admin.App:
    """Return the default firebase app, initialising it from the service-account settings once."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        cred = credentials.Certificate(settings.firebase_service_account())
        app = firebase_admin.initialize_app(cred)
        logger.info("Firebase initialized for project %s", settings.firebase_project_id)
        return app


class FirestoreDocumentStore(DocumentStore):
    def __init__(self, client) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirestoreDocumentStore":
        app = initialize_firebase(settings)
        return cls(firestore_async.client(app))

    def _ref(self, collection: str, doc_id: str):
        return self.client.collection(collection).document(doc_id)

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            snapshot = await self._ref(collection, doc_id).get()
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError(f"Failed to read {collection}/{doc_id}") from e
        return _to_document(snapshot) if snapshot.exists else None

    async def all(self, collection: str) -> List[Document]:
        return await self._stream(self.client.collection(collection), collection)

    async def find(self, collection: str, equals: Mapping[str, Any]) -> List[Document]:
        query = self.client.collection(collection)
        for field, value in equality_filters(equals):
            query = query.where(filter=FieldFilter(field, "==", value))
        return await self._stream(query, collection)

    async def _stream(self, query, collection: str) -> List[Document]:
        try:
            return [_to_document(snapshot) async for snapshot in query.stream()]
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError(f"Failed to query {collection}") from e

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        try:
            await self._ref(collection, doc_id).set(dict(data))
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError(f"Failed to write {collection}/{doc_id}") from e

    async def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        try:
            await self._ref(collection, doc_id).update(dict(data))
        except google_exceptions.NotFound as e:
            raise DocumentNotFoundError(collection, doc_id) from e
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError(f"Failed to update {collection}/{doc_id}") from e

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            await self._ref(collection, doc_id).delete()
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError(f"Failed to delete {collection}/{doc_id}") from e

    async def commit(self, batch: WriteBatch) -> None:
        """Apply the batch; past MAX_BATCH_WRITES it is split and each chunk commits on its own."""
        operations = batch.operations
        for start in range(0, len(operations), MAX_BATCH_WRITES):
            firestore_batch = self.client.batch()
            for op in operations[start:start + MAX_BATCH_WRITES]:
                ref = self._ref(op.collection, op.doc_id)
                if op.kind == "delete":
                    firestore_batch.delete(ref)
                else:
                    firestore_batch.set(ref, op.data)
            try:
                await firestore_batch.commit()
            except google_exceptions.GoogleAPICallError as e:
                raise StoreError(f"Batch of {len(batch)} writes failed at write {start}") from e
