"""Tests for the Firestore backend against a mocked async client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core import exceptions as google_exceptions

from educalendar.db import firestore_store
from educalendar.db.firestore_store import MAX_BATCH_WRITES, FirestoreDocumentStore
from educalendar.db.store import DocumentNotFoundError, StoreError, WriteBatch


class _RecordingFieldFilter:
    """Keeps the arguments the filter was built with."""

    def __init__(self, *args):
        self.args = args


def _snapshot(doc_id, data, exists=True):
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    return snapshot


def _streaming(snapshots):
    async def _stream():
        for snapshot in snapshots:
            yield snapshot

    return _stream


@pytest.fixture()
def fs_client():
    return MagicMock()


@pytest.fixture()
def doc_store(fs_client):
    return FirestoreDocumentStore(fs_client)


@pytest.mark.asyncio
async def test_get_returns_document_or_none(fs_client, doc_store):
    ref = fs_client.collection.return_value.document.return_value
    ref.get = AsyncMock(return_value=_snapshot("s1", {"name": "Ada"}))

    doc = await doc_store.get("students", "s1")

    fs_client.collection.assert_called_with("students")
    fs_client.collection.return_value.document.assert_called_with("s1")
    assert doc.id == "s1"
    assert doc.data == {"name": "Ada"}

    ref.get = AsyncMock(return_value=_snapshot("s2", None, exists=False))
    assert await doc_store.get("students", "s2") is None


@pytest.mark.asyncio
async def test_find_uses_field_filters(monkeypatch, fs_client, doc_store):
    monkeypatch.setattr(firestore_store, "FieldFilter", _RecordingFieldFilter)
    query = fs_client.collection.return_value
    query.where.return_value = query
    query.stream = _streaming([_snapshot("e1", {"date": "2024-05-01", "time": "10:00"})])

    docs = await doc_store.find("events", {"date": "2024-05-01", "time": "10:00"})

    assert [d.id for d in docs] == ["e1"]
    filters = [call.kwargs["filter"].args for call in query.where.call_args_list]
    assert filters == [("date", "==", "2024-05-01"), ("time", "==", "10:00")]


@pytest.mark.asyncio
async def test_find_without_fields_is_rejected(doc_store):
    with pytest.raises(ValueError):
        await doc_store.find("events", {})


@pytest.mark.asyncio
async def test_commit_splits_large_batches(fs_client, doc_store):
    committed = []

    def _new_batch():
        fs_batch = MagicMock()
        fs_batch.commit = AsyncMock()
        committed.append(fs_batch)
        return fs_batch

    fs_client.batch.side_effect = _new_batch

    batch = WriteBatch()
    for i in range(MAX_BATCH_WRITES):
        batch.set("events", f"e{i}", {"date": "2024-05-01"})
    batch.delete("students", "s1")

    await doc_store.commit(batch)

    assert len(committed) == 2
    assert committed[0].set.call_count == MAX_BATCH_WRITES
    assert committed[1].set.call_count == 0
    assert committed[1].delete.call_count == 1
    for fs_batch in committed:
        fs_batch.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_empty_batch_commits_nothing(fs_client, doc_store):
    await doc_store.commit(WriteBatch())
    fs_client.batch.assert_not_called()


@pytest.mark.asyncio
async def test_update_missing_document_raises_not_found(fs_client, doc_store):
    ref = fs_client.collection.return_value.document.return_value
    ref.update = AsyncMock(side_effect=google_exceptions.NotFound("no such document"))

    with pytest.raises(DocumentNotFoundError) as exc_info:
        await doc_store.update("students", "ghost", {"rate": 10})

    assert exc_info.value.collection == "students"
    assert exc_info.value.doc_id == "ghost"


@pytest.mark.asyncio
async def test_api_errors_are_wrapped(fs_client, doc_store):
    ref = fs_client.collection.return_value.document.return_value
    ref.set = AsyncMock(side_effect=google_exceptions.ServiceUnavailable("backend down"))

    with pytest.raises(StoreError):
        await doc_store.set("students", "s1", {"name": "Ada"})

    fs_batch = MagicMock()
    fs_batch.commit = AsyncMock(side_effect=google_exceptions.DeadlineExceeded("slow"))
    fs_client.batch.return_value = fs_batch

    with pytest.raises(StoreError):
        await doc_store.commit(WriteBatch().delete("events", "e1"))
