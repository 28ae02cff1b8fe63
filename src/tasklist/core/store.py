"""Document store abstraction.

Services talk to a ``DocumentStore`` rather than to pymongo directly, so the
same code runs against MongoDB in production and against the in-memory store
in tests. Queries are plain field-equality filters; sorts are lists of
``(field, direction)`` pairs with ``1`` for ascending and ``-1`` for descending.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Protocol
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from tasklist.errors import DuplicateKeyError, StoreError
from tasklist.utils import now

Document = dict[str, Any]
Query = dict[str, Any]
Sort = list[tuple[str, int]]

MEMORY_URL_SCHEME = "memory"


class Collection(Protocol):
    """A named set of documents with atomic single-document operations."""

    async def create_index(self, field: str, *, unique: bool = False, expire_after_seconds: int | None = None) -> None:
        """Declare an index; ``expire_after_seconds`` makes it a TTL index on a datetime field."""

    async def insert_one(self, document: Document) -> None:
        """Insert a document, raising DuplicateKeyError on a unique index violation."""

    async def find_one(self, query: Query, sort: Sort | None = None) -> Document | None: ...

    async def find(self, query: Query, sort: Sort | None = None) -> list[Document]: ...

    async def count(self, query: Query) -> int: ...

    async def update_one(self, query: Query, values: Document) -> int:
        """Set ``values`` on the first matching document and return the number matched."""

    async def delete_one(self, query: Query) -> int:
        """Delete the first matching document and return the number deleted."""

    async def find_one_and_delete(self, query: Query, sort: Sort | None = None) -> Document | None: ...


class DocumentStore(Protocol):
    def collection(self, name: str) -> Collection: ...

    async def close(self) -> None: ...


@contextmanager
def translate_mongo_errors() -> Iterator[None]:
    """Re-raise pymongo failures as store errors."""
    try:
        yield
    except MongoDuplicateKeyError as e:
        raise DuplicateKeyError(str(e)) from e
    except PyMongoError as e:
        raise StoreError(str(e)) from e


class MongoCollection:
    """Collection backed by a pymongo async collection."""

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def create_index(self, field: str, *, unique: bool = False, expire_after_seconds: int | None = None) -> None:
        options: dict[str, Any] = {"unique": unique}
        if expire_after_seconds is not None:
            options["expireAfterSeconds"] = expire_after_seconds
        with translate_mongo_errors():
            await self._collection.create_index([(field, 1)], **options)

    async def insert_one(self, document: Document) -> None:
        with translate_mongo_errors():
            await self._collection.insert_one(document)

    async def find_one(self, query: Query, sort: Sort | None = None) -> Document | None:
        with translate_mongo_errors():
            return await self._collection.find_one(query, sort=sort)

    async def find(self, query: Query, sort: Sort | None = None) -> list[Document]:
        with translate_mongo_errors():
            cursor = self._collection.find(query)
            if sort:
                cursor = cursor.sort(sort)
            return [item async for item in cursor]

    async def count(self, query: Query) -> int:
        with translate_mongo_errors():
            return await self._collection.count_documents(query)

    async def update_one(self, query: Query, values: Document) -> int:
        with translate_mongo_errors():
            result = await self._collection.update_one(query, {"$set": values})
        return result.matched_count

    async def delete_one(self, query: Query) -> int:
        with translate_mongo_errors():
            result = await self._collection.delete_one(query)
        return result.deleted_count

    async def find_one_and_delete(self, query: Query, sort: Sort | None = None) -> Document | None:
        with translate_mongo_errors():
            return await self._collection.find_one_and_delete(query, sort=sort)


class MongoDocumentStore:
    """MongoDB-backed store; the database name is taken from the URL path."""

    def __init__(self, database_url: str) -> None:
        self._client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            database_url, uuidRepresentation="standard", tz_aware=True
        )
        self._database = self._client.get_database(urlparse(database_url).path[1:])

    def collection(self, name: str) -> MongoCollection:
        return MongoCollection(self._database.get_collection(name))

    async def close(self) -> None:
        await self._client.aclose()


class MemoryCollection:
    """In-process collection that honours unique and TTL indexes.

    Expired documents are purged lazily, before every operation, against the
    store's clock.
    """

    def __init__(self, name: str, clock: Callable[[], datetime]) -> None:
        self.name = name
        self._clock = clock
        self._documents: list[Document] = []
        self._unique_fields: set[str] = {"_id"}
        self._ttl_fields: dict[str, timedelta] = {}

    async def create_index(self, field: str, *, unique: bool = False, expire_after_seconds: int | None = None) -> None:
        if unique:
            self._unique_fields.add(field)
        if expire_after_seconds is not None:
            self._ttl_fields[field] = timedelta(seconds=expire_after_seconds)

    async def insert_one(self, document: Document) -> None:
        self._purge_expired()
        self._check_unique(document)
        self._documents.append(copy.deepcopy(document))

    async def find_one(self, query: Query, sort: Sort | None = None) -> Document | None:
        matches = self._select(query, sort)
        return copy.deepcopy(matches[0]) if matches else None

    async def find(self, query: Query, sort: Sort | None = None) -> list[Document]:
        return [copy.deepcopy(document) for document in self._select(query, sort)]

    async def count(self, query: Query) -> int:
        return len(self._select(query))

    async def update_one(self, query: Query, values: Document) -> int:
        matches = self._select(query)
        if not matches:
            return 0
        target = matches[0]
        self._check_unique({**target, **values}, ignore=target)
        target.update(copy.deepcopy(values))
        return 1

    async def delete_one(self, query: Query) -> int:
        return 1 if await self.find_one_and_delete(query) is not None else 0

    async def find_one_and_delete(self, query: Query, sort: Sort | None = None) -> Document | None:
        matches = self._select(query, sort)
        if not matches:
            return None
        target = matches[0]
        self._documents = [document for document in self._documents if document is not target]
        return target

    def _select(self, query: Query, sort: Sort | None = None) -> list[Document]:
        self._purge_expired()
        matches = [document for document in self._documents if _matches(document, query)]
        # Stable sorts applied last-key-first give a multi-key ordering
        for field, direction in reversed(sort or []):
            matches.sort(key=lambda document, f=field: document[f], reverse=direction < 0)
        return matches

    def _check_unique(self, document: Document, ignore: Document | None = None) -> None:
        for field in self._unique_fields:
            if field not in document:
                continue
            for existing in self._documents:
                if existing is not ignore and existing.get(field) == document[field]:
                    raise DuplicateKeyError(f"duplicate key error collection: {self.name} index: {field}")

    def _purge_expired(self) -> None:
        if not self._ttl_fields:
            return
        current_time = self._clock()
        self._documents = [
            document
            for document in self._documents
            if not any(
                isinstance(document.get(field), datetime) and document[field] + ttl <= current_time
                for field, ttl in self._ttl_fields.items()
            )
        ]


class MemoryDocumentStore:
    """Dict-backed store for tests and local runs without MongoDB."""

    def __init__(self, clock: Callable[[], datetime] = now) -> None:
        self._clock = clock
        self._collections: dict[str, MemoryCollection] = {}

    def collection(self, name: str) -> MemoryCollection:
        if name not in self._collections:
            self._collections[name] = MemoryCollection(name, self._clock)
        return self._collections[name]

    async def close(self) -> None:
        self._collections.clear()


def _matches(document: Document, query: Query) -> bool:
    return all(field in document and document[field] == value for field, value in query.items())


def open_store(database_url: str) -> DocumentStore:
    """Open the store named by ``database_url`` (``memory://`` or a MongoDB URL)."""
    if urlparse(database_url).scheme == MEMORY_URL_SCHEME:
        return MemoryDocumentStore()
    return MongoDocumentStore(database_url)
