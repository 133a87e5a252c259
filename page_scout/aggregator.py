# File: page_scout/aggregator.py
"""page_scout.aggregator: Сводный отчёт по результатам обхода."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, List, TypedDict

from page_scout.crawler.crawler import CrawlStats


class PageInfo(TypedDict):
    """Сохранённая страница в том виде, в каком она ушла в хранилище."""

    url: str
    title: str
    content: str


class CrawlSummary(TypedDict):
    """Счётчики одного прогона."""

    visited: int
    stored: int
    failed: int
    persist_failed: int
    total_queued: int
    pending: int
    duration: float


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода: сводка, ошибки по типам и сохранённые страницы."""

    summary: CrawlSummary
    failures: Dict[str, int] = field(default_factory=dict)
    pages: List[PageInfo] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление CrawlReport."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(stats: CrawlStats) -> CrawlReport:
    """Собирает CrawlReport из статистики краулера."""
    summary: CrawlSummary = {
        "visited": stats.visited,
        "stored": stats.stored,
        "failed": stats.failed,
        "persist_failed": stats.persist_failed,
        "total_queued": stats.total_queued,
        "pending": stats.pending,
        "duration": round(stats.duration, 3),
    }
    pages: List[PageInfo] = [
        {"url": p.url, "title": p.title, "content": p.body} for p in stats.pages
    ]
    return CrawlReport(summary=summary, failures=dict(sorted(stats.failures.items())), pages=pages)
