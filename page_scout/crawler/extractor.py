# page_scout/crawler/extractor.py
"""
Extraction stage: turns fetched HTML into page records and feeds new links
back into the frontier.

Title, body excerpt and outgoing links all come out of one depth-first walk
over the parsed tree (:func:`extract_page`). The walk uses an explicit stack
and returns a :class:`PageHarvest`, so deep documents cannot hit the
recursion limit.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Tuple
from urllib.parse import urldefrag, urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from page_scout.crawler.frontier import Frontier
from page_scout.crawler.models import FetchOutcome, PageHarvest, PageRecord
from page_scout.crawler.visited import VisitedSet
from page_scout.errors import LinkResolutionError, ParseError

__all__ = ("BODY_LIMIT", "Extractor", "extract_page", "resolve_link")

logger = logging.getLogger("PageScout")

BODY_LIMIT: int = 500

# text under these tags is never shown to a reader
_INVISIBLE_TAGS = frozenset(("script", "style", "noscript", "template"))

# (node, inside <body>, text of this subtree counts as body text)
_Frame = Tuple[PageElement, bool, bool]


def resolve_link(base: str, href: str) -> str:
    """Resolve *href* against *base* and drop the fragment.

    Absolute, scheme-relative (``//host/x``) and relative hrefs are supported.
    Raises :class:`LinkResolutionError` when either value is malformed.
    """
    try:
        parsed_base = urlsplit(base)
        if not parsed_base.scheme or not parsed_base.netloc:
            raise LinkResolutionError(f"base is not absolute: {base!r}", base)
        absolute = urljoin(base, href)
        _ = urlsplit(absolute).port  # rejects non-numeric / out of range ports
    except ValueError as exc:
        raise LinkResolutionError(f"cannot resolve {href!r} against {base!r}: {exc}", base) from exc
    return urldefrag(absolute).url


def extract_page(
    html: str,
    url: str,
    *,
    body_limit: int = BODY_LIMIT,
    parser: str = "html.parser",
) -> PageHarvest:
    """Parse *html* and collect title, body excerpt and resolved links in one pass.

    Parser failures propagate to the caller.
    """
    soup = BeautifulSoup(html, parser)
    has_body = soup.body is not None

    harvest = PageHarvest()
    title_found = False
    chunks: List[str] = []
    body_full = False

    stack: List[_Frame] = [(soup, False, not has_body)]
    while stack:
        node, in_body, collect = stack.pop()

        if isinstance(node, NavigableString):
            if collect and not body_full and not isinstance(node, PreformattedString):
                chunks.append(str(node))
                body_full = len("".join(chunks).strip()) >= body_limit
            continue
        if not isinstance(node, Tag):
            continue

        name = node.name
        if name == "title" and not title_found:
            harvest.title = node.get_text().strip()
            title_found = True
        elif name == "a":
            href = node.get("href")
            if isinstance(href, str) and href.strip():
                try:
                    harvest.links.append(resolve_link(url, href.strip()))
                except LinkResolutionError:
                    pass

        if name == "body":
            in_body = collect = True
        elif name in ("head", "title") and not in_body:
            collect = False
        if name in _INVISIBLE_TAGS:
            collect = False

        for child in reversed(node.contents):
            stack.append((child, in_body, collect))

    harvest.body = "".join(chunks).strip()[:body_limit]
    return harvest


class Extractor:
    """Single long-lived consumer of fetch outcomes.

    Produces exactly one :class:`PageRecord` per :class:`FetchOutcome`, in
    arrival order. Newly discovered links are marked in *discovered* and pushed
    onto *frontier*; links already seen are dropped.
    """

    def __init__(
        self,
        frontier: Frontier,
        discovered: VisitedSet,
        *,
        body_limit: int = BODY_LIMIT,
        parser: str = "html.parser",
    ) -> None:
        self.frontier = frontier
        self.discovered = discovered
        self.body_limit = body_limit
        self.parser = parser
        self.processed: int = 0

    def process(self, outcome: FetchOutcome) -> PageRecord:
        self.processed += 1
        if outcome.failure is not None:
            return PageRecord(outcome.url, failure=outcome.failure)

        try:
            harvest = extract_page(
                outcome.html or "", outcome.url, body_limit=self.body_limit, parser=self.parser
            )
        except Exception as exc:
            failure = ParseError(f"parse error: {exc}", outcome.url)
            failure.__cause__ = exc
            return PageRecord(outcome.url, failure=failure)

        new_links = 0
        for link in harvest.links:
            if self.discovered.mark_if_absent(link):
                self.frontier.enqueue(link)
                new_links += 1
        logger.debug("%s: %d links, %d new", outcome.url, len(harvest.links), new_links)
        return PageRecord(outcome.url, title=harvest.title, body=harvest.body)

    async def run(
        self,
        outcomes: asyncio.Queue[Optional[FetchOutcome]],
        records: asyncio.Queue[PageRecord],
    ) -> None:
        """Consume *outcomes* until the ``None`` sentinel closes the channel."""
        while True:
            outcome = await outcomes.get()
            try:
                if outcome is None:
                    return
                await records.put(self.process(outcome))
            finally:
                outcomes.task_done()
