# page_scout/crawler/crawler.py
from __future__ import annotations

import asyncio
import enum
import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from aiohttp import ClientSession, ClientTimeout

from page_scout.config import CrawlerConfig
from page_scout.crawler.extractor import Extractor
from page_scout.crawler.fetcher import Fetcher
from page_scout.crawler.frontier import Frontier
from page_scout.crawler.models import FetchOutcome, PageRecord
from page_scout.crawler.visited import VisitedSet
from page_scout.errors import PersistenceError
from page_scout.storage.base import Sink
from page_scout.utils import sanitize_document

__all__ = ("AsyncCrawler", "CrawlState", "CrawlStats")


class CrawlState(enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


@dataclass(slots=True)
class CrawlStats:
    """Итоги одного прогона краулера."""

    visited: int = 0
    stored: int = 0
    failed: int = 0
    persist_failed: int = 0
    skipped: int = 0
    total_queued: int = 0
    pending: int = 0
    duration: float = 0.0
    failures: Dict[str, int] = field(default_factory=Counter)
    pages: List[PageRecord] = field(default_factory=list)


class AsyncCrawler:
    """Breadth-first crawler with a global budget and a fixed politeness delay.

    Fetch, parse and persist are serialized: the loop waits for the record of
    the current URL before dequeuing the next one, so only one fetch is ever
    in flight. The frontier and both visited sets belong to this object and
    are handed to the extractor by reference.

    A bounded pool of fetch workers draining the frontier concurrently would
    also be correct, since ``crawled.mark_if_absent`` alone prevents duplicate
    work.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        sink: Sink,
        *,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.config = config
        self.sink = sink
        self.session = session
        self._owns_session = session is None
        self.frontier = Frontier()
        self.discovered = VisitedSet()
        self.crawled = VisitedSet()
        self.state = CrawlState.RUNNING
        self.logger = logging.getLogger("PageScout")

    async def __aenter__(self) -> AsyncCrawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seed: Optional[str] = None) -> CrawlStats:
        if not self.session:
            raise RuntimeError("Session not initialized")
        if self.state is not CrawlState.RUNNING:
            raise RuntimeError("AsyncCrawler instances are single-use")

        root = seed or str(self.config.seed_url)
        self.discovered.mark_if_absent(root)
        self.frontier.enqueue(root)
        self.logger.info("Старт обхода: %s (бюджет %d)", root, self.config.budget)

        fetcher = Fetcher(self.session, timeout=self.config.timeout)
        extractor = Extractor(
            self.frontier,
            self.discovered,
            body_limit=self.config.body_limit,
            parser=self.config.html_parser,
        )
        outcomes: asyncio.Queue[Optional[FetchOutcome]] = asyncio.Queue(self.config.channel_size)
        records: asyncio.Queue[PageRecord] = asyncio.Queue(self.config.channel_size)
        worker = asyncio.create_task(extractor.run(outcomes, records))

        stats = CrawlStats()
        start = time.monotonic()
        try:
            while self.frontier.size() > 0 and self.crawled.size() < self.config.budget:
                url, found = self.frontier.dequeue()
                if not found:
                    break
                if not self.crawled.mark_if_absent(url):
                    stats.skipped += 1
                    continue

                record = await self._dispatch(fetcher, url, outcomes, records)
                await self._handle(record, stats)

                if self.config.delay:
                    await asyncio.sleep(self.config.delay)
        finally:
            self.state = CrawlState.DRAINING
            await outcomes.put(None)
            await worker
            self.state = CrawlState.DONE

        stats.visited = self.crawled.size()
        stats.total_queued = self.frontier.total_queued
        stats.pending = self.frontier.size()
        stats.duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d URL, сохранено %d, ошибок %d за %.2f с",
            stats.visited,
            stats.stored,
            stats.failed + stats.persist_failed,
            stats.duration,
        )
        return stats

    async def _dispatch(
        self,
        fetcher: Fetcher,
        url: str,
        outcomes: asyncio.Queue[Optional[FetchOutcome]],
        records: asyncio.Queue[PageRecord],
    ) -> PageRecord:
        """Fetch *url* and wait for its record; a crashed fetch task is re-raised."""
        fetch_task = asyncio.create_task(fetcher.fetch_into(url, outcomes))
        record_task = asyncio.create_task(records.get())
        done, _ = await asyncio.wait(
            {fetch_task, record_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if fetch_task in done and fetch_task.exception() is not None:
            record_task.cancel()
            raise fetch_task.exception()
        record = await record_task
        await fetch_task
        return record

    async def _handle(self, record: PageRecord, stats: CrawlStats) -> None:
        if record.failure is not None:
            stats.failed += 1
            stats.failures[record.failure.kind] += 1
            self.logger.warning("Error crawling %s: %s", record.url, record.failure)
            return

        try:
            await self.sink.store(self.config.collection, sanitize_document(record.to_document()))
        except PersistenceError as exc:
            stats.persist_failed += 1
            stats.failures[exc.kind] += 1
            self.logger.error("Error inserting %s: %s", record.url, exc)
            return

        stats.stored += 1
        stats.pages.append(record)
        self.logger.info("Crawled: %s, Title: %s", record.url, record.title)

