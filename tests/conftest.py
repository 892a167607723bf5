# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any, Callable

import pytest
from aiohttp import web

from site_migrate.config import MigrationConfig


async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free local port, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    port = runner.addresses[0][1]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., MigrationConfig]:
    """
    Return a factory building a MigrationConfig that writes into *tmp_path*.
    Keyword arguments override any field.
    """

    def _factory(site_root: str = "http://legacy.test", **overrides: Any) -> MigrationConfig:
        values: dict[str, Any] = {
            "site_root": site_root,
            "fragments_dir": tmp_path / "fragments",
            "images_dir": tmp_path / "images",
            "timeout": 5.0,
            "pages": [],
            "boards": [],
        }
        values.update(overrides)
        return MigrationConfig(**values)

    return _factory


@pytest.fixture()
def png_bytes() -> bytes:
    """A tiny 1x1 PNG."""
    return bytes.fromhex(
        "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
        "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
    )
