# page_scout/crawler/frontier.py
"""
Frontier: FIFO work queue of URLs awaiting fetch.
"""
from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Optional, Tuple

__all__ = ("Frontier",)


class Frontier:
    """Thread-safe, unbounded FIFO of candidate URLs.

    Deduplication is not done here; callers consult a
    :class:`~page_scout.crawler.visited.VisitedSet` before enqueueing.
    """

    def __init__(self) -> None:
        self._urls: Deque[str] = deque()
        self._lock = threading.Lock()
        self.total_queued: int = 0

    def enqueue(self, url: str) -> None:
        with self._lock:
            self._urls.append(url)
            self.total_queued += 1

    def dequeue(self) -> Tuple[Optional[str], bool]:
        """Pop the head. Returns ``(None, False)`` on an empty queue, never blocks."""
        with self._lock:
            if not self._urls:
                return None, False
            return self._urls.popleft(), True

    def size(self) -> int:
        with self._lock:
            return len(self._urls)

    __len__ = size
