"""
app/db/store.py

Purpose: Document store adapter

- Collection-scoped get / set / update / add over MongoDB
- Equality-filter queries with optional ordering and limit
- Server-assigned timestamps via the SERVER_TIMESTAMP sentinel
- Documents are returned as plain dicts with a string "id" key
"""

import uuid
from typing import Optional, Dict, Any, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.core.logging import get_logger
from utils.time_utils import utc_now

logger = get_logger(__name__)


class _ServerTimestamp:
    """Placeholder replaced by the write time when the adapter stores a document."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


def _resolve_timestamps(data: Dict[str, Any], now) -> Dict[str, Any]:
    resolved = {}
    for key, value in data.items():
        if value is SERVER_TIMESTAMP:
            resolved[key] = now
        elif isinstance(value, dict):
            resolved[key] = _resolve_timestamps(value, now)
        else:
            resolved[key] = value
    return resolved


def _to_document(raw: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    document = dict(raw)
    document["id"] = str(document.pop("_id"))
    return document


class DocumentStore:
    """
    Thin wrapper issuing reads and writes to named collections.

    Every call is an independent round-trip; nothing here is transactional.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self._database = database

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    def collection(self, name: str):
        return self._database[name]

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetches a document by id.

        Returns:
            The document, or None if it does not exist
        """
        raw = await self.collection(collection).find_one({"_id": doc_id})
        return _to_document(raw)

    async def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Creates or replaces the document stored under `doc_id`.
        """
        body = _resolve_timestamps(data, utc_now())
        await self.collection(collection).replace_one({"_id": doc_id}, body, upsert=True)
        logger.debug(f"Set {collection}/{doc_id}")
        return {**body, "id": doc_id}

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        """
        Inserts a document under a newly generated id.

        Returns:
            The new document id
        """
        doc_id = self.new_id()
        body = _resolve_timestamps(data, utc_now())
        await self.collection(collection).insert_one({"_id": doc_id, **body})
        logger.debug(f"Added {collection}/{doc_id}")
        return doc_id

    async def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> bool:
        """
        Sets the given top-level fields on an existing document.

        An empty change set writes nothing.

        Returns:
            True if the document exists
        """
        if not changes:
            return await self.collection(collection).find_one({"_id": doc_id}, {"_id": 1}) is not None

        result = await self.collection(collection).update_one(
            {"_id": doc_id},
            {"$set": _resolve_timestamps(changes, utc_now())}
        )
        return result.matched_count > 0

    async def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Returns documents whose fields equal every value in `filters`.
        """
        options: Dict[str, Any] = {}
        if order_by:
            options["sort"] = [(order_by, DESCENDING if descending else ASCENDING)]
        if limit:
            options["limit"] = limit

        cursor = self.collection(collection).find(dict(filters or {}), **options)
        return [_to_document(raw) for raw in await cursor.to_list(length=None)]

    async def find_one(self, collection: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        documents = await self.query(collection, filters, limit=1)
        return documents[0] if documents else None

    async def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        return await self.collection(collection).count_documents(dict(filters or {}))

    async def ping(self) -> bool:
        """
        Checks if the database connection is healthy.
        """
        try:
            await self._database.command("ping")
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False
