# File: tests/test_fetcher.py
from __future__ import annotations

import asyncio

import pytest
from aiohttp import ClientError, ClientSession, ClientTimeout, web

from page_scout.crawler.fetcher import Fetcher
from page_scout.errors import (
    FetchConnectionError,
    FetchTimeout,
    HTTPStatusError,
    UnsupportedContentType,
)


def make_app() -> web.Application:
    app = web.Application()

    async def page(_):
        return web.Response(text="<html><body>hello</body></html>", content_type="text/html")

    async def page_with_charset(_):
        return web.Response(
            body="<p>ünïcode</p>".encode("utf-8"),
            headers={"Content-Type": "text/html; charset=utf-8"},
        )

    async def missing(_):
        return web.Response(status=404, text="nope", content_type="text/html")

    async def server_error(_):
        return web.Response(status=500, text="boom", content_type="text/html")

    async def json_doc(_):
        return web.json_response({"a": 1})

    async def slow(_):
        await asyncio.sleep(2)
        return web.Response(text="late", content_type="text/html")

    app.router.add_get("/", page)
    app.router.add_get("/utf8", page_with_charset)
    app.router.add_get("/missing", missing)
    app.router.add_get("/error", server_error)
    app.router.add_get("/data.json", json_doc)
    app.router.add_get("/slow", slow)
    return app


@pytest.mark.asyncio()
async def test_fetch_returns_html(serve_app):
    base = await serve_app(make_app())
    async with ClientSession() as session:
        outcome = await Fetcher(session).fetch(f"{base}/")

    assert outcome.ok
    assert outcome.html == "<html><body>hello</body></html>"
    assert outcome.url == f"{base}/"


@pytest.mark.asyncio()
async def test_fetch_decodes_declared_charset(serve_app):
    base = await serve_app(make_app())
    async with ClientSession() as session:
        outcome = await Fetcher(session).fetch(f"{base}/utf8")

    assert outcome.html == "<p>ünïcode</p>"


@pytest.mark.asyncio()
@pytest.mark.parametrize("path,status", [("/missing", 404), ("/error", 500), ("/absent", 404)])
async def test_fetch_non_200_is_http_status_failure(serve_app, path, status):
    base = await serve_app(make_app())
    async with ClientSession() as session:
        outcome = await Fetcher(session).fetch(f"{base}{path}")

    assert outcome.html is None
    assert isinstance(outcome.failure, HTTPStatusError)
    assert outcome.failure.status == status
    assert outcome.failure.kind == "http_status"


@pytest.mark.asyncio()
async def test_fetch_rejects_non_html(serve_app):
    base = await serve_app(make_app())
    async with ClientSession() as session:
        outcome = await Fetcher(session).fetch(f"{base}/data.json")

    assert isinstance(outcome.failure, UnsupportedContentType)
    assert outcome.failure.content_type.startswith("application/json")


@pytest.mark.asyncio()
async def test_fetch_timeout(serve_app):
    base = await serve_app(make_app())
    async with ClientSession(timeout=ClientTimeout(total=0.3)) as session:
        outcome = await Fetcher(session).fetch(f"{base}/slow")

    assert isinstance(outcome.failure, FetchTimeout)
    assert outcome.failure.kind == "timeout"


@pytest.mark.asyncio()
async def test_fetch_connection_refused(unused_tcp_port):
    url = f"http://127.0.0.1:{unused_tcp_port}/"
    async with ClientSession() as session:
        outcome = await Fetcher(session).fetch(url)

    assert isinstance(outcome.failure, FetchConnectionError)
    assert isinstance(outcome.failure.__cause__, ClientError)
    assert outcome.failure.url == url


@pytest.mark.asyncio()
async def test_fetch_non_http_scheme_is_connection_failure():
    async with ClientSession() as session:
        outcome = await Fetcher(session).fetch("mailto:someone@example.com")

    assert isinstance(outcome.failure, FetchConnectionError)


@pytest.mark.asyncio()
async def test_fetch_into_delivers_on_channel(serve_app):
    base = await serve_app(make_app())
    channel: asyncio.Queue = asyncio.Queue(1)
    async with ClientSession() as session:
        await Fetcher(session).fetch_into(f"{base}/missing", channel)

    outcome = channel.get_nowait()
    assert outcome.failure.status == 404


@pytest.mark.asyncio()
async def test_fetch_timeout_applies_to_any_session(serve_app):
    base = await serve_app(make_app())
    # сессия без собственного таймаута: ограничение задаёт сам Fetcher
    async with ClientSession() as session:
        outcome = await Fetcher(session, timeout=0.3).fetch(f"{base}/slow")

    assert isinstance(outcome.failure, FetchTimeout)


@pytest.mark.asyncio()
async def test_fetch_unexpected_error_becomes_connection_failure():
    class BrokenSession:
        def get(self, *args, **kwargs):
            raise RuntimeError("socket exploded")

    outcome = await Fetcher(BrokenSession()).fetch("http://example.invalid/")

    assert isinstance(outcome.failure, FetchConnectionError)
    assert isinstance(outcome.failure.__cause__, RuntimeError)
