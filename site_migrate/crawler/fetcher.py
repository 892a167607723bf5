# site_migrate/crawler/fetcher.py
"""
Fetcher module: HTTP GET with browser-like headers and a bounded retry loop.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_migrate.config import MigrationConfig
from site_migrate.crawler.encoding import decode, resolve_encoding
from site_migrate.crawler.models import DecodedDocument, FetchResult
from site_migrate.logger import logger


class FetchError(Exception):
    """Raised once every attempt for *url* has failed."""

    def __init__(self, url: str, attempts: int, reason: str = "") -> None:
        self.url = url
        self.attempts = attempts
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"GET {url} failed after {attempts} attempt(s){detail}")


class Fetcher:
    """Downloads raw bytes and decoded text over one shared aiohttp session.

    Usage::

        async with Fetcher(config) as fetcher:
            doc = await fetcher.fetch_text(url)
    """

    def __init__(self, config: MigrationConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self.attempts: int = config.retry_times + 1

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers=dict(self.config.headers),
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch_raw(self, url: str) -> FetchResult:
        """GET *url*; any status outside 2xx or a network error counts as a failed attempt.

        Attempts are retried back to back, without delay. After the last one
        :class:`FetchError` is raised, chained to the final underlying error.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        last_exc: Optional[BaseException] = None
        for attempt in range(1, self.attempts + 1):
            try:
                async with self.session.get(url, allow_redirects=True) as resp:
                    if not 200 <= resp.status < 300:
                        raise ClientError(f"unexpected status {resp.status}")
                    content = await resp.read()
                    ctype = resp.headers.get("Content-Type", "")
                    return FetchResult(url=url, content=content, content_type=ctype)
            except (ClientError, asyncio.TimeoutError) as exc:
                last_exc = exc
                logger.debug("Attempt %d/%d for %s failed: %s", attempt, self.attempts, url, exc)
        raise FetchError(url, self.attempts, str(last_exc) if last_exc else "") from last_exc

    async def fetch_text(self, url: str) -> DecodedDocument:
        """Fetch *url* and decode it according to its declared charset."""
        raw = await self.fetch_raw(url)
        text = decode(raw.content, resolve_encoding(raw.content_type))
        return DecodedDocument(url=url, text=text)


__all__ = ["Fetcher", "FetchError"]
