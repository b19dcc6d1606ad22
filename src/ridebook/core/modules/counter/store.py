"""Document stores offering optimistic read-modify-write transactions.

A transaction records every document it reads and stages every write in memory.
Nothing reaches the store until ``commit()``, which applies the staged writes only
if none of the documents read have changed since; otherwise it raises
``WriteConflictError`` and applies nothing.
"""

import asyncio
import copy
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from ridebook.core.modules.counter.models import COUNTERS_COLLECTION
from ridebook.errors import StoreUnavailableError

logger = structlog.get_logger(__name__)

Document = dict[str, Any]


class WriteConflictError(Exception):
    """A document read by the transaction was modified before it could commit."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Write conflict on '{key}'")
        self.key = key


class Transaction(ABC):
    """Single-use unit of work: reads go to the store, writes are staged until commit."""

    def __init__(self) -> None:
        self._reads: dict[str, Document | None] = {}
        self._writes: dict[str, Document] = {}
        self._finished = False

    async def get(self, key: str) -> Document | None:
        """Read the committed document for key and remember what was observed."""
        self._ensure_open()
        document = await self._read(key)
        self._reads[key] = copy.deepcopy(document)
        return document

    def set(self, key: str, document: Document) -> None:
        """Stage a full replacement of the document's fields, creating it if absent."""
        self._ensure_open()
        self._writes[key] = {k: v for k, v in document.items() if k != "_id"}

    async def commit(self) -> None:
        """Apply staged writes atomically, or raise WriteConflictError and apply none."""
        self._ensure_open()
        self._finished = True
        if self._writes:
            await self._apply()

    @property
    def staged_keys(self) -> list[str]:
        return list(self._writes)

    def _ensure_open(self) -> None:
        if self._finished:
            raise RuntimeError("Transaction already committed")

    @abstractmethod
    async def _read(self, key: str) -> Document | None: ...

    @abstractmethod
    async def _apply(self) -> None: ...


class TransactionalStore(ABC):
    """Key-document store with optimistic transactions."""

    @abstractmethod
    def begin(self) -> Transaction:
        """Start a new transaction."""

    @abstractmethod
    async def get(self, key: str) -> Document | None:
        """Read the committed document for key outside any transaction."""

    async def close(self) -> None:
        """Release backend resources on shutdown."""


class MongoTransaction(Transaction):
    """Transaction committed as a conditional single-document write.

    Absent documents are created with ``insert_one`` (a duplicate key means another
    writer got there first); existing documents are updated with a filter matching
    every field this transaction observed, and requiring staged fields it did not
    observe to still be absent (no match means someone changed it).
    """

    def __init__(self, collection: AsyncCollection[Document]) -> None:
        super().__init__()
        self._collection = collection

    async def _read(self, key: str) -> Document | None:
        try:
            document = await self._collection.find_one({"_id": key})
        except PyMongoError as e:
            logger.exception("counter_store_read_failed", key=key)
            raise StoreUnavailableError(f"Counter store read failed: {e}") from e
        return document

    async def _apply(self) -> None:
        if len(self._writes) > 1:
            raise ValueError("MongoDB transactions are limited to a single document")
        key, fields = next(iter(self._writes.items()))
        if key not in self._reads:
            raise ValueError(f"Document '{key}' must be read in the transaction before it is written")
        observed = self._reads[key]
        try:
            if observed is None:
                await self._collection.insert_one({"_id": key, **fields})
                return
            condition: Document = {"_id": key, **{k: v for k, v in observed.items() if k != "_id"}}
            condition.update({k: {"$exists": False} for k in fields if k not in observed})
            result = await self._collection.update_one(condition, {"$set": fields})
        except DuplicateKeyError as e:
            raise WriteConflictError(key) from e
        except PyMongoError as e:
            logger.exception("counter_store_write_failed", key=key)
            raise StoreUnavailableError(f"Counter store write failed: {e}") from e
        if result.matched_count == 0:
            raise WriteConflictError(key)


class MongoTransactionalStore(TransactionalStore):
    """Store backed by one MongoDB collection, documents keyed by ``_id``."""

    def __init__(self, collection: AsyncCollection[Document], client: AsyncMongoClient[Document] | None = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    def from_url(cls, database_url: str, collection_name: str) -> "MongoTransactionalStore":
        """Connect lazily to the database named in the URL path and own the client."""
        client: AsyncMongoClient[Document] = AsyncMongoClient(database_url)
        database = client.get_database(urlparse(database_url).path[1:] or "ridebook")
        return cls(database.get_collection(collection_name), client)

    def begin(self) -> MongoTransaction:
        return MongoTransaction(self._collection)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def get(self, key: str) -> Document | None:
        try:
            return await self._collection.find_one({"_id": key})
        except PyMongoError as e:
            logger.exception("counter_store_read_failed", key=key)
            raise StoreUnavailableError(f"Counter store read failed: {e}") from e


class MemoryTransaction(Transaction):
    """Transaction against MemoryTransactionalStore, validated by per-key revisions."""

    def __init__(self, store: "MemoryTransactionalStore") -> None:
        super().__init__()
        self._store = store
        self._revisions: dict[str, int] = {}

    async def _read(self, key: str) -> Document | None:
        revision, document = self._store.snapshot(key)
        self._revisions[key] = revision
        # Yield like a network round trip so concurrent transactions interleave
        await asyncio.sleep(0)
        return document

    async def _apply(self) -> None:
        await asyncio.sleep(0)
        # Validate and apply without awaiting in between: atomic on the event loop
        for key, revision in self._revisions.items():
            if self._store.revision(key) != revision:
                raise WriteConflictError(key)
        for key, fields in self._writes.items():
            self._store.put(key, fields)


class MemoryTransactionalStore(TransactionalStore):
    """In-process store for development and tests. Not shared across processes or event loops."""

    def __init__(self) -> None:
        self._documents: dict[str, tuple[int, Document]] = {}

    def begin(self) -> MemoryTransaction:
        return MemoryTransaction(self)

    async def get(self, key: str) -> Document | None:
        return self.snapshot(key)[1]

    def revision(self, key: str) -> int:
        entry = self._documents.get(key)
        return entry[0] if entry else 0

    def snapshot(self, key: str) -> tuple[int, Document | None]:
        entry = self._documents.get(key)
        if entry is None:
            return 0, None
        revision, document = entry
        return revision, {"_id": key, **copy.deepcopy(document)}

    def put(self, key: str, fields: Document) -> None:
        self._documents[key] = (self.revision(key) + 1, copy.deepcopy(fields))


def create_store(database_url: str) -> TransactionalStore:
    """Build the counter store named by a ``mongodb://`` or ``memory://`` URL."""
    if database_url.startswith("memory://"):
        return MemoryTransactionalStore()
    return MongoTransactionalStore.from_url(database_url, COUNTERS_COLLECTION)
