# page_scout/crawler/models.py
"""
Data models for the PageScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from page_scout.errors import CrawlError


@dataclass(slots=True)
class FetchOutcome:
    """Result of one dispatched fetch: either ``html`` or ``failure`` is set."""

    url: str
    html: Optional[str] = None
    failure: Optional[CrawlError] = None

    def __post_init__(self) -> None:
        if (self.html is None) == (self.failure is None):
            raise ValueError("FetchOutcome needs exactly one of html / failure")

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(slots=True)
class PageRecord:
    """One record per dequeued and fetched URL."""

    url: str
    title: str = ""
    body: str = ""
    failure: Optional[CrawlError] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_document(self) -> Dict[str, str]:
        """Field map handed to the sink."""
        return {"url": self.url, "title": self.title, "content": self.body}


@dataclass(slots=True)
class PageHarvest:
    """Everything a single traversal of a document yields."""

    title: str = ""
    body: str = ""
    links: List[str] = field(default_factory=list)
