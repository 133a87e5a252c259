# page_scout/storage/__init__.py
"""page_scout.storage: sinks that persist crawled page documents."""
from __future__ import annotations

from page_scout.config import CrawlerConfig
from page_scout.storage.base import MemorySink, Sink
from page_scout.storage.jsonl import JsonLinesSink
from page_scout.storage.mongo import MongoSink


def build_sink(config: CrawlerConfig) -> Sink:
    """Pick the sink named by ``config.sink``."""
    if config.sink == "mongo":
        if not config.mongodb_uri:
            raise ValueError("MONGODB_URI is not set")
        return MongoSink(config.mongodb_uri, config.database)
    if config.sink == "jsonl":
        return JsonLinesSink(config.output_path)
    return MemorySink()


__all__ = ["Sink", "MemorySink", "JsonLinesSink", "MongoSink", "build_sink"]
