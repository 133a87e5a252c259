# page_scout/crawler/__init__.py
"""Crawl pipeline: frontier, visited set, fetcher, extractor and the driving loop."""
from page_scout.crawler.crawler import AsyncCrawler, CrawlState, CrawlStats
from page_scout.crawler.extractor import Extractor, extract_page, resolve_link
from page_scout.crawler.fetcher import Fetcher
from page_scout.crawler.frontier import Frontier
from page_scout.crawler.models import FetchOutcome, PageHarvest, PageRecord
from page_scout.crawler.visited import VisitedSet, fnv1a_64

__all__ = [
    "AsyncCrawler",
    "CrawlState",
    "CrawlStats",
    "Extractor",
    "FetchOutcome",
    "Fetcher",
    "Frontier",
    "PageHarvest",
    "PageRecord",
    "VisitedSet",
    "extract_page",
    "fnv1a_64",
    "resolve_link",
]
