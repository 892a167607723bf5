# File: tests/test_fetcher.py
from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from site_migrate.crawler.fetcher import Fetcher, FetchError

from conftest import serve_app

KOREAN = "오시는 길"


@pytest_asyncio.fixture
async def flaky_server() -> AsyncIterator[tuple[str, dict]]:
    app = web.Application()
    calls = {"broken": 0, "flaky": 0, "choices": 0, "headers": {}}

    async def broken(_):
        calls["broken"] += 1
        return web.Response(status=500)

    async def flaky(_):
        calls["flaky"] += 1
        if calls["flaky"] <= 2:
            return web.Response(status=503)
        return web.Response(text="<h1>Recovered</h1>", content_type="text/html")

    async def legacy(request):
        calls["headers"] = dict(request.headers)
        return web.Response(
            body=f"<p>{KOREAN}</p>".encode("euc-kr"),
            headers={"Content-Type": "text/html; charset=euc-kr"},
        )

    async def moved(_):
        raise web.HTTPFound("/legacy")

    async def choices(_):
        calls["choices"] += 1
        return web.Response(status=300)

    app.router.add_get("/broken", broken)
    app.router.add_get("/flaky", flaky)
    app.router.add_get("/legacy", legacy)
    app.router.add_get("/moved", moved)
    app.router.add_get("/choices", choices)

    async for base in serve_app(app):
        yield base, calls


@pytest.mark.asyncio()
async def test_failure_attempted_exactly_three_times(make_config, flaky_server):
    base, calls = flaky_server
    async with Fetcher(make_config(base)) as fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.fetch_raw(f"{base}/broken")
    assert calls["broken"] == 3
    assert info.value.attempts == 3


@pytest.mark.asyncio()
async def test_retry_times_zero_means_single_attempt(make_config, flaky_server):
    base, calls = flaky_server
    async with Fetcher(make_config(base, retry_times=0)) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch_raw(f"{base}/broken")
    assert calls["broken"] == 1


@pytest.mark.asyncio()
async def test_recovers_within_retry_bound(make_config, flaky_server):
    base, calls = flaky_server
    async with Fetcher(make_config(base)) as fetcher:
        result = await fetcher.fetch_raw(f"{base}/flaky")
    assert calls["flaky"] == 3
    assert b"Recovered" in result.content
    assert result.content_type.startswith("text/html")


@pytest.mark.asyncio()
async def test_fetch_text_decodes_legacy_and_sends_browser_headers(make_config, flaky_server):
    base, calls = flaky_server
    config = make_config(base)
    async with Fetcher(config) as fetcher:
        doc = await fetcher.fetch_text(f"{base}/moved")
    assert KOREAN in doc.text
    assert calls["headers"]["User-Agent"] == config.headers["User-Agent"]
    assert calls["headers"]["Accept-Language"] == "ko,en;q=0.8"


@pytest.mark.asyncio()
async def test_connection_refused_raises_fetch_error(make_config):
    async with Fetcher(make_config("http://127.0.0.1:9")) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch_raw("http://127.0.0.1:9/nothing")


@pytest.mark.asyncio()
async def test_unfollowed_redirect_status_is_a_failure(make_config, flaky_server):
    base, calls = flaky_server
    async with Fetcher(make_config(base)) as fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.fetch_raw(f"{base}/choices")
    assert calls["choices"] == 3
    assert "300" in str(info.value)
