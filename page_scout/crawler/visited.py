# page_scout/crawler/visited.py
"""
Visited set: URLs already scheduled or crawled during one run.
"""
from __future__ import annotations

import threading
from typing import Dict, List

__all__ = ("VisitedSet", "fnv1a_64")

_FNV_OFFSET: int = 0xCBF29CE484222325
_FNV_PRIME: int = 0x100000001B3
_MASK_64: int = 0xFFFFFFFFFFFFFFFF


def fnv1a_64(url: str) -> int:
    """64-bit FNV-1a hash of the UTF-8 bytes of *url*."""
    h = _FNV_OFFSET
    for byte in url.encode("utf-8", "surrogatepass"):
        h ^= byte
        h = (h * _FNV_PRIME) & _MASK_64
    return h


class VisitedSet:
    """Thread-safe membership set keyed by :func:`fnv1a_64`.

    Each hash bucket keeps the exact URLs that landed in it, so a collision
    between two different URLs never reports a false "already visited".
    """

    def __init__(self) -> None:
        self._buckets: Dict[int, List[str]] = {}
        self._length = 0
        self._lock = threading.Lock()

    def mark_if_absent(self, url: str) -> bool:
        """Add *url*; return True only for the caller that actually added it."""
        key = fnv1a_64(url)
        with self._lock:
            bucket = self._buckets.setdefault(key, [])
            if url in bucket:
                return False
            bucket.append(url)
            self._length += 1
            return True

    def contains(self, url: str) -> bool:
        key = fnv1a_64(url)
        with self._lock:
            return url in self._buckets.get(key, ())

    def size(self) -> int:
        with self._lock:
            return self._length

    __contains__ = contains
    __len__ = size
