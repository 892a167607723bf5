"""site_migrate.assets: загрузка изображений в локальное хранилище с адресацией по содержимому.

Имя файла строится как ``<имя>_<sha1[:8]><расширение>``, поэтому одинаковые
байты с одинаковым исходным именем попадают в один файл. Хранилище общее на
весь запуск; повторные запросы одного URL (в том числе одновременные)
склеиваются в одну загрузку.
"""

from __future__ import annotations

import asyncio
import hashlib
import posixpath
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from urllib.parse import urlparse

from bs4.element import Tag

from site_migrate.config import MigrationConfig
from site_migrate.crawler.fetcher import Fetcher
from site_migrate.crawler.link_extractor import absolute_url
from site_migrate.crawler.models import AssetRecord
from site_migrate.logger import logger

__all__: Sequence[str] = (
    "AssetStore",
    "AssetLocalizer",
    "build_asset_filename",
    "sanitize_filename",
    "content_hash",
)

_UNSAFE_CHARS_RE = re.compile(r"[^a-zA-Z0-9._-]+")
_MAX_FILENAME = 100
_RESPONSIVE_RULE = "max-width:100%;height:auto;"
_RESPONSIVE_RE = re.compile(r"max-width\s*:\s*100%")


def sanitize_filename(name: str) -> str:
    """Заменяет каждую серию недопустимых символов на ``_`` и обрезает до 100 символов."""
    return _UNSAFE_CHARS_RE.sub("_", name)[:_MAX_FILENAME]


def content_hash(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()[:8]


def build_asset_filename(url: str, data: bytes) -> str:
    """Имя локального файла для *url* с содержимым *data*."""
    path = urlparse(url).path
    base = posixpath.basename(path) or "file"
    stem, ext = posixpath.splitext(base)
    if not ext:
        ext = ".bin"
    # only the stem is cut so the hash and extension always survive
    stem = sanitize_filename(stem or "file")
    return f"{stem}_{content_hash(data)}{_UNSAFE_CHARS_RE.sub('_', ext)}"


class AssetStore:
    """Хранилище изображений на диске, общее для всех страниц одного запуска."""

    def __init__(self, config: MigrationConfig, fetcher: Fetcher) -> None:
        self.config = config
        self.fetcher = fetcher
        self.directory = Path(config.images_dir)
        self._records: Dict[Path, AssetRecord] = {}
        self._inflight: Dict[str, asyncio.Future[Optional[AssetRecord]]] = {}
        self.writes = 0

    @property
    def records(self) -> List[AssetRecord]:
        return list(self._records.values())

    async def fetch(self, src: Optional[str]) -> Optional[AssetRecord]:
        """Локализует *src*; ``None`` если ссылку нельзя разрешить.

        Ошибки загрузки пробрасываются вызывающему коду, а неудачная загрузка
        не кэшируется, чтобы следующая ссылка могла попробовать снова.
        """
        url = absolute_url(src, self.config.site_root)
        if url is None:
            return None
        future = self._inflight.get(url)
        if future is None:
            future = asyncio.ensure_future(self._download(url))
            self._inflight[url] = future
        try:
            return await asyncio.shield(future)
        except Exception:
            if self._inflight.get(url) is future:
                del self._inflight[url]
            raise

    async def _download(self, url: str) -> AssetRecord:
        raw = await self.fetcher.fetch_raw(url)
        filename = build_asset_filename(url, raw.content)
        destination = self.directory / filename
        existing = self._records.get(destination)
        if existing is not None:
            logger.debug("Asset %s reuses %s", url, destination)
            return existing
        if not destination.exists():
            self.directory.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(raw.content)
            self.writes += 1
        record = AssetRecord(
            remote_url=url,
            local_path=str(destination),
            content_hash=content_hash(raw.content),
            public_path=f"{self.config.public_image_prefix}{filename}",
        )
        self._records[destination] = record
        return record


class AssetLocalizer:
    """Переписывает ``<img>`` внутри выбранного узла на локальные копии."""

    def __init__(self, config: MigrationConfig, store: AssetStore) -> None:
        self.config = config
        self.store = store

    async def localize(self, scope: Tag) -> int:
        """Загружает все картинки *scope* параллельно; возвращает число переписанных.

        Ошибка одной картинки не прерывает остальные: её ``src`` остаётся
        прежним, а оформление (lazy, alt, размеры, стиль) применяется всегда.
        """
        images = [img for img in scope.select("img[src]") if isinstance(img, Tag)]
        if not images:
            return 0
        results = await asyncio.gather(
            *(self.store.fetch(img.get("src")) for img in images),
            return_exceptions=True,
        )
        rewritten = 0
        for img, result in zip(images, results):
            if isinstance(result, Exception):
                logger.warning("Asset download failed for %s: %s", img.get("src"), result)
            elif isinstance(result, AssetRecord):
                img["src"] = result.public_path
                rewritten += 1
            elif isinstance(result, BaseException):
                raise result
            self._decorate(img)
        return rewritten

    def _decorate(self, img: Tag) -> None:
        img["loading"] = "lazy"
        if not img.get("alt"):
            img["alt"] = self.config.default_alt
        for attr in ("width", "height"):
            if attr in img.attrs:
                del img[attr]
        style = img.get("style") or ""
        if isinstance(style, list):
            style = " ".join(style)
        if not _RESPONSIVE_RE.search(style):
            img["style"] = (style + ";" if style else "") + _RESPONSIVE_RULE
