"""site_migrate.extractor: превращение одной страницы старого сайта в HTML-фрагмент."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from site_migrate.assets import AssetLocalizer
from site_migrate.config import MigrationConfig
from site_migrate.crawler.fetcher import Fetcher
from site_migrate.logger import logger
from site_migrate.parser.html_parser import inner_html, load_document
from site_migrate.parser.sanitizer import sanitize
from site_migrate.parser.selector import select_main
from site_migrate.spam import SpamFilter

__all__ = ["PageExtractor", "collapse_blank_lines", "prune_empty"]

_MEDIA_TAGS = ["img", "video", "iframe"]
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def collapse_blank_lines(html: str) -> str:
    """Сжимает три и более подряд идущих перевода строки до одной пустой строки."""
    return _BLANK_LINES_RE.sub("\n\n", html)


def prune_empty(scope: Tag) -> int:
    """Удаляет элементы без текста и без медиа. Обход снизу вверх, чтобы
    опустевшие после чистки родители тоже удалялись."""
    removed = 0
    for node in reversed(scope.find_all(True)):
        if node.name in _MEDIA_TAGS:
            continue
        if node.get_text().strip() or node.find(_MEDIA_TAGS):
            continue
        node.decompose()
        removed += 1
    return removed


def strip_markers(scope: Tag, markers: tuple[str, ...]) -> int:
    """Удаляет текстовые узлы с подписью движка старого сайта."""
    removed = 0
    for marker in markers:
        for text in scope.find_all(string=lambda s: isinstance(s, NavigableString) and marker in s):
            text.extract()
            removed += 1
    return removed


class PageExtractor:
    """Цепочка загрузка → очистка → выбор основного блока → локализация → HTML."""

    def __init__(
        self,
        config: MigrationConfig,
        fetcher: Fetcher,
        localizer: AssetLocalizer,
        spam_filter: Optional[SpamFilter] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.localizer = localizer
        self.spam_filter = spam_filter or SpamFilter(config.spam_keywords)

    async def load(self, url: str) -> BeautifulSoup:
        """Загружает и очищает страницу."""
        doc = await self.fetcher.fetch_text(url)
        return sanitize(load_document(doc.text), self.config.chrome_selectors)

    def select(self, soup: BeautifulSoup) -> Tag:
        """Выбирает основной блок и убирает из него иконки «домой»."""
        main = select_main(soup, self.config.content_selectors)
        for selector in self.config.breadcrumb_selectors:
            for node in main.select(selector):
                node.decompose()
        return main

    async def finish(self, main: Tag) -> str:
        """Локализует картинки, чистит пустые узлы и подпись, сериализует блок."""
        await self.localizer.localize(main)
        prune_empty(main)
        strip_markers(main, self.config.footer_markers)
        return inner_html(main)

    async def extract_page(self, url: str) -> str:
        """Полный цикл для отдельной страницы.

        Совпадение со спам-словами только логируется: страницы верхнего
        уровня сохраняются всегда.
        """
        soup = await self.load(url)
        main = self.select(soup)
        keyword = self.spam_filter.match(main.get_text())
        if keyword:
            logger.info("Page %s mentions spam keyword %r, keeping it", url, keyword)
        return collapse_blank_lines(await self.finish(main))
