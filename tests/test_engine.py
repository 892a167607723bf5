# File: tests/test_engine.py
from __future__ import annotations

import json
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from site_migrate.config import BoardTarget, PageTarget
from site_migrate.crawler.models import Fragment
from site_migrate.engine import Engine

from conftest import serve_app


@pytest_asyncio.fixture
async def site(png_bytes) -> AsyncIterator[str]:
    app = web.Application()

    async def about(_):
        return web.Response(
            text="<body><div id='content'><p>About us</p><img src='/logo.png'></div></body>",
            content_type="text/html",
        )

    async def casino(_):
        return web.Response(
            text="<body><article>카지노 이야기</article></body>", content_type="text/html"
        )

    async def board(_):
        return web.Response(
            text="<body><a href='/news/101'>First</a><a href='/news/102'>Second</a></body>",
            content_type="text/html",
        )

    async def post(request):
        return web.Response(
            text=f"<body><article>Post {request.match_info['post_id']}"
            "<img src='/logo.png'></article></body>",
            content_type="text/html",
        )

    async def logo(_):
        return web.Response(body=png_bytes, content_type="image/png")

    async def broken(_):
        return web.Response(status=502)

    app.router.add_get("/about", about)
    app.router.add_get("/casino", casino)
    app.router.add_get("/news", board)
    app.router.add_get("/news/{post_id}", post)
    app.router.add_get("/logo.png", logo)
    app.router.add_get("/broken", broken)

    async for base in serve_app(app):
        yield base


@pytest.mark.asyncio()
async def test_run_isolates_failures_and_writes_fragments(make_config, site):
    config = make_config(
        site,
        retry_times=0,
        pages=[
            PageTarget(name="broken", url=f"{site}/broken"),
            PageTarget(name="about", url=f"{site}/about"),
            PageTarget(name="casino", url=f"{site}/casino"),
        ],
        boards=[
            BoardTarget(name="news", url=f"{site}/news", limit=5),
            BoardTarget(name="gone", url=f"{site}/broken"),
        ],
    )
    report = await Engine(config).run()

    assert [e["name"] for e in report.saved] == ["about", "casino", "news"]
    assert [e["name"] for e in report.failed] == ["broken", "gone"]
    assert not report.ok
    news = next(e for e in report.saved if e["name"] == "news")
    assert news["items"] == 2

    fragments = config.fragments_dir
    assert sorted(p.name for p in fragments.iterdir()) == ["about.html", "casino.html", "news.html"]
    # standalone pages are kept even when they look like spam
    assert "카지노" in (fragments / "casino.html").read_text(encoding="utf-8")
    board_html = (fragments / "news.html").read_text(encoding="utf-8")
    assert board_html.count("<article") == 2
    # the logo is shared by the page and both posts but stored once
    assert len(list(config.images_dir.iterdir())) == 1

    data = json.loads(report.json())
    assert data["failed"][0]["name"] == "broken"


@pytest.mark.asyncio()
async def test_rerun_is_idempotent(make_config, site):
    config = make_config(site, pages=[PageTarget(name="about", url=f"{site}/about")])
    first = await Engine(config).run()
    second = await Engine(config).run()
    assert first.saved[0]["path"] == second.saved[0]["path"]
    assert len(list(config.images_dir.iterdir())) == 1
    assert len(list(config.fragments_dir.iterdir())) == 1


@pytest.mark.asyncio()
async def test_fragments_are_written_by_name(make_config, site, monkeypatch):
    config = make_config(
        site,
        pages=[PageTarget(name="about", url=f"{site}/about")],
        boards=[BoardTarget(name="news", url=f"{site}/news")],
    )
    engine = Engine(config)
    written: list[Fragment] = []
    original = engine.writer.write

    def record(fragment: Fragment):
        written.append(fragment)
        return original(fragment)

    monkeypatch.setattr(engine.writer, "write", record)
    await engine.run()

    assert [f.name for f in written] == ["about", "news"]
    assert "About us" in written[0].html
    assert written[1].html.startswith('<div class="board-list">')
    assert (config.fragments_dir / "news.html").read_text(encoding="utf-8") == written[1].html
