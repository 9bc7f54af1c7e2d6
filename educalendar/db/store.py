"""
Document store contract.

The service persists everything as schemaless documents grouped into named
collections. Backends implement get-by-id, get-all, field-equality queries,
set (overwrite), update (merge, document must exist), delete, and an atomic
multi-document write batch.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


class StoreError(Exception):
    """Raised by store backends for persistence failures."""


class DocumentNotFoundError(StoreError):
    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"{collection}/{doc_id} does not exist")
        self.collection = collection
        self.doc_id = doc_id


@dataclass(frozen=True)
class Document:
    id: str
    data: Dict[str, Any]


@dataclass
class WriteOperation:
    kind: str  # set | delete
    collection: str
    doc_id: str
    data: Optional[Dict[str, Any]] = None


@dataclass
class WriteBatch:
    """Writes collected here are applied all-or-nothing by ``DocumentStore.commit``."""

    operations: List[WriteOperation] = field(default_factory=list)

    def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> "WriteBatch":
        self.operations.append(WriteOperation("set", collection, doc_id, dict(data)))
        return self

    def delete(self, collection: str, doc_id: str) -> "WriteBatch":
        self.operations.append(WriteOperation("delete", collection, doc_id))
        return self

    def __len__(self) -> int:
        return len(self.operations)


class DocumentStore(ABC):
    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    @abstractmethod
    async def all(self, collection: str) -> List[Document]:
        """Every document in the collection, ordered by id."""

    @abstractmethod
    async def find(self, collection: str, equals: Mapping[str, Any]) -> List[Document]:
        """Documents whose fields equal every value in ``equals``, ordered by id."""

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        ...

    @abstractmethod
    async def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Merge ``data`` into an existing document; raises DocumentNotFoundError."""

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document; deleting an absent id is not an error."""

    @abstractmethod
    async def commit(self, batch: WriteBatch) -> None:
        ...

    def batch(self) -> WriteBatch:
        return WriteBatch()

    async def close(self) -> None:
        return None


def equality_filters(equals: Mapping[str, Any]) -> List[Tuple[str, Any]]:
    if not equals:
        raise ValueError("find() needs at least one field to compare")
    return list(equals.items())
