# page_scout/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per URL with timeout and content-type gating.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from page_scout.crawler.models import FetchOutcome
from page_scout.errors import (
    FetchConnectionError,
    FetchTimeout,
    HTTPStatusError,
    UnsupportedContentType,
)

logger = logging.getLogger("PageScout")


class Fetcher:
    """Fetches a single page and turns every result into a :class:`FetchOutcome`.

    The session carries the User-Agent. *timeout* (seconds) is applied to every
    request, so it holds for injected sessions too; ``None`` keeps the
    session timeout.
    """

    def __init__(self, session: ClientSession, *, timeout: Optional[float] = None) -> None:
        self.session = session
        self.timeout = ClientTimeout(total=timeout) if timeout is not None else None

    async def fetch(self, url: str) -> FetchOutcome:
        """
        GET *url* once, no retries.

        Returns an outcome with ``html`` on a 200 ``text/html`` response,
        otherwise one with the matching failure.
        """
        kwargs = {"timeout": self.timeout} if self.timeout is not None else {}
        try:
            async with self.session.get(url, raise_for_status=False, **kwargs) as resp:
                if resp.status != 200:
                    return FetchOutcome(url, failure=HTTPStatusError(resp.status, url))
                ctype = resp.headers.get("Content-Type", "")
                if not ctype.lower().startswith("text/html"):
                    return FetchOutcome(url, failure=UnsupportedContentType(ctype, url))
                text = await resp.text(errors="replace")
                return FetchOutcome(url, html=text)
        except asyncio.TimeoutError as exc:
            # must precede ClientError: ServerTimeoutError subclasses both
            failure = FetchTimeout(f"timed out fetching {url}", url)
            failure.__cause__ = exc
        except (ClientError, ValueError) as exc:
            failure = FetchConnectionError(f"fetch error: {exc}", url)
            failure.__cause__ = exc
        except Exception as exc:
            # any other transport failure still yields an outcome for the extractor
            failure = FetchConnectionError(f"unexpected fetch error: {exc!r}", url)
            failure.__cause__ = exc
        logger.debug("Fetch failed %s: %r", url, failure.__cause__)
        return FetchOutcome(url, failure=failure)

    async def fetch_into(self, url: str, channel: asyncio.Queue[FetchOutcome]) -> None:
        """Fetch *url* and deliver the outcome on *channel*."""
        await channel.put(await self.fetch(url))
