# page_scout/storage/mongo.py
"""
MongoDB sink built on :mod:`pymongo`.

pymongo is blocking, so every call runs in a worker thread via
:func:`asyncio.to_thread`; the event loop keeps serving the extractor.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from page_scout.errors import PersistenceError

__all__ = ("MongoSink",)

logger = logging.getLogger("PageScout")


class MongoSink:
    """Inserts one document per crawled page into ``<database>.<collection>``."""

    def __init__(
        self,
        uri: str,
        database: str,
        *,
        client: Optional[MongoClient] = None,
        server_timeout_ms: int = 5000,
    ) -> None:
        self.uri = uri
        self.database = database
        self._server_timeout_ms = server_timeout_ms
        self._client: Optional[Any] = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = MongoClient(self.uri, serverSelectionTimeoutMS=self._server_timeout_ms)
        return self._client

    async def connect(self) -> None:
        """Ping the server; an unreachable database is a startup failure."""
        try:
            await asyncio.to_thread(self.client.admin.command, "ping")
        except PyMongoError as exc:
            raise PersistenceError(f"cannot reach MongoDB: {exc}") from exc
        logger.info("Connected to MongoDB!")

    async def store(self, collection: str, document: Mapping[str, str]) -> None:
        coll = self.client[self.database][collection]
        try:
            await asyncio.to_thread(coll.insert_one, dict(document))
        except PyMongoError as exc:
            raise PersistenceError(f"insert failed: {exc}", document.get("url")) from exc

    async def close(self) -> None:
        if self._client is not None:
            await asyncio.to_thread(self._client.close)
            self._client = None
            logger.info("Disconnected from MongoDB!")
