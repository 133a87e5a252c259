# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from aiohttp import web

from page_scout.config import CrawlerConfig
from page_scout.storage import MemorySink

ServeApp = Callable[[web.Application], Awaitable[str]]


@pytest.fixture()
def crawler_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig with no politeness delay and an in-memory sink.
    """
    return CrawlerConfig(
        seed_url="http://example.com",
        budget=10,
        timeout=2.0,
        delay=0,
        user_agent="TestAgent/1.0",
        sink="memory",
    )


@pytest.fixture()
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest_asyncio.fixture
async def serve_app(unused_tcp_port_factory) -> AsyncIterator[ServeApp]:
    """Start aiohttp apps on free ports, yield a starter returning the base URL."""
    runners: list[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    try:
        yield _start
    finally:
        for runner in runners:
            await runner.cleanup()
