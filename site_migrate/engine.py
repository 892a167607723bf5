# File: site_migrate/engine.py
"""site_migrate.engine: Оркестрация переноса: страницы, затем доски, строго по очереди."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

from site_migrate.aggregator import MigrationReport, TargetResult, aggregate_results
from site_migrate.assets import AssetLocalizer, AssetStore
from site_migrate.config import BoardTarget, MigrationConfig, PageTarget
from site_migrate.crawler.board import BoardCrawler
from site_migrate.crawler.fetcher import Fetcher
from site_migrate.crawler.models import Fragment, Outcome
from site_migrate.extractor import PageExtractor
from site_migrate.logger import logger
from site_migrate.report.fragment_writer import FragmentWriter
from site_migrate.spam import SpamFilter

__all__ = ["Engine", "ensure_dirs"]


def ensure_dirs(config: MigrationConfig) -> None:
    """Создаёт каталоги фрагментов и изображений."""
    Path(config.fragments_dir).mkdir(parents=True, exist_ok=True)
    Path(config.images_dir).mkdir(parents=True, exist_ok=True)


class Engine:
    """Фасад для CLI и тестов: один запуск по всем страницам и доскам из конфига.

    Ошибка отдельной цели записывается в отчёт и не прерывает запуск.
    """

    def __init__(self, config: MigrationConfig) -> None:
        self.config = config
        self.writer = FragmentWriter(config.fragments_dir)
        self.spam_filter = SpamFilter(config.spam_keywords)
        self.store: Optional[AssetStore] = None

    async def run(self) -> MigrationReport:
        """Обрабатывает все цели последовательно и возвращает сводку."""
        ensure_dirs(self.config)
        results: List[TargetResult] = []
        async with Fetcher(self.config) as fetcher:
            self.store = AssetStore(self.config, fetcher)
            extractor = PageExtractor(
                self.config, fetcher, AssetLocalizer(self.config, self.store), self.spam_filter
            )
            crawler = BoardCrawler(self.config, extractor, self.spam_filter)
            for page in self.config.pages:
                results.append(await self._run_page(extractor, page))
            for board in self.config.boards:
                results.append(await self._run_board(crawler, board))
        report = aggregate_results(results)
        logger.info("Migration finished: %s", report.summary())
        return report

    def start(self) -> MigrationReport:
        """Синхронная обёртка над :meth:`run`."""
        return asyncio.run(self.run())

    async def _run_page(self, extractor: PageExtractor, page: PageTarget) -> TargetResult:
        try:
            html = await extractor.extract_page(page.url)
            path = self.writer.write(Fragment(name=page.name, html=html))
        except Exception as exc:
            logger.error("Content page %s (%s) failed: %s", page.name, page.url, exc)
            return TargetResult(page.name, "page", Outcome.failure(page.name, exc))
        logger.info("Saved fragment %s", path.name)
        return TargetResult(page.name, "page", Outcome.success(page.name, path))

    async def _run_board(self, crawler: BoardCrawler, board: BoardTarget) -> TargetResult:
        try:
            html = await crawler.crawl_board(board.url, board.limit)
            path = self.writer.write(Fragment(name=board.name, html=html))
        except Exception as exc:
            logger.error("Board %s (%s) failed: %s", board.name, board.url, exc)
            return TargetResult(board.name, "board", Outcome.failure(board.name, exc))
        items = sum(1 for o in crawler.last_outcomes if o.ok)
        logger.info("Saved board fragment %s with %d item(s)", path.name, items)
        return TargetResult(board.name, "board", Outcome.success(board.name, path), items=items)
