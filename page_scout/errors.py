# page_scout/errors.py
"""
Failure taxonomy for the PageScout crawl pipeline.

Every per-URL failure is an instance of :class:`CrawlError`. Failures travel
inside :class:`~page_scout.crawler.models.FetchOutcome` and
:class:`~page_scout.crawler.models.PageRecord` instead of being raised through
the crawl loop; the original exception (if any) is kept as ``__cause__``.
"""
from __future__ import annotations

from typing import Optional

__all__ = (
    "CrawlError",
    "FetchConnectionError",
    "FetchTimeout",
    "HTTPStatusError",
    "UnsupportedContentType",
    "ParseError",
    "LinkResolutionError",
    "PersistenceError",
)


class CrawlError(Exception):
    """Base class for every failure produced by the crawler."""

    kind: str = "crawl_error"

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind} url={self.url!r}: {self}>"


class FetchConnectionError(CrawlError):
    """Transport-level failure (DNS, refused connection, invalid URL...)."""

    kind = "connection_error"


class FetchTimeout(CrawlError):
    """The request did not complete within the configured timeout."""

    kind = "timeout"


class HTTPStatusError(CrawlError):
    """The server answered with anything other than ``200 OK``."""

    kind = "http_status"

    def __init__(self, status: int, url: Optional[str] = None) -> None:
        super().__init__(f"status code {status}", url)
        self.status = status


class UnsupportedContentType(CrawlError):
    """The response is not ``text/html``; its body is never read."""

    kind = "unsupported_content_type"

    def __init__(self, content_type: str, url: Optional[str] = None) -> None:
        super().__init__(f"skipped non-HTML content: {content_type or '<none>'}", url)
        self.content_type = content_type


class ParseError(CrawlError):
    kind = "parse_error"


class LinkResolutionError(CrawlError):
    """A single ``href`` could not be resolved; only that link is dropped."""

    kind = "link_resolution_error"


class PersistenceError(CrawlError):
    kind = "persistence_error"
