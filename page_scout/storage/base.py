# page_scout/storage/base.py
"""
Persistence capability consumed by the crawler.
"""
from __future__ import annotations

from typing import Dict, List, Mapping, Protocol, runtime_checkable

__all__ = ("Sink", "MemorySink")


@runtime_checkable
class Sink(Protocol):
    """Durably stores one page document keyed by URL.

    ``store`` raises :class:`~page_scout.errors.PersistenceError` on failure.
    Documents are already sanitized to valid UTF-8 by the caller.
    """

    async def connect(self) -> None: ...

    async def store(self, collection: str, document: Mapping[str, str]) -> None: ...

    async def close(self) -> None: ...


class MemorySink:
    """Keeps documents in memory; used for ``--dry-run`` and tests."""

    def __init__(self) -> None:
        self.collections: Dict[str, List[Dict[str, str]]] = {}

    async def connect(self) -> None:
        return None

    async def store(self, collection: str, document: Mapping[str, str]) -> None:
        self.collections.setdefault(collection, []).append(dict(document))

    async def close(self) -> None:
        return None

    def documents(self, collection: str) -> List[Dict[str, str]]:
        return list(self.collections.get(collection, []))
