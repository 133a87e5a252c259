# File: page_scout/engine.py
"""page_scout.engine: Orchestration layer для запуска обхода и агрегации результатов."""

from __future__ import annotations

import asyncio
from typing import Optional

from page_scout.aggregator import CrawlReport, aggregate_results
from page_scout.config import CrawlerConfig, load_config
from page_scout.crawler.crawler import AsyncCrawler, CrawlStats
from page_scout.logger import logger
from page_scout.storage import Sink, build_sink

__all__ = ["Engine", "start_crawl"]


async def start_crawl(cfg: CrawlerConfig, sink: Optional[Sink] = None) -> CrawlStats:
    """
    Подключает хранилище, запускает AsyncCrawler и возвращает статистику обхода.

    Ошибка подключения к хранилищу (PersistenceError) фатальна и пробрасывается.
    """
    sink = sink if sink is not None else build_sink(cfg)
    await sink.connect()
    try:
        async with AsyncCrawler(cfg, sink) as crawler:
            return await crawler.crawl()
    finally:
        await sink.close()


class Engine:
    """Фасад для CLI и тестов: загрузка конфига, запуск обхода и агрегация результатов."""

    @staticmethod
    def load_config(path: Optional[str]) -> CrawlerConfig:
        """Загружает конфиг из YAML/JSON."""
        return load_config(path)

    def __init__(self, config: CrawlerConfig, sink: Optional[Sink] = None) -> None:
        self.config = config
        self.sink = sink

    def run(self) -> CrawlReport:
        """Синхронно выполняет обход и возвращает агрегированный отчёт."""
        logger.info("Starting crawl…")
        try:
            stats = asyncio.run(start_crawl(self.config, self.sink))
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise
        return aggregate_results(stats)
