# site_migrate/crawler/board.py
"""
Board crawler: turns a legacy listing page into one fragment of post cards.
"""
from __future__ import annotations

from typing import List, Optional

from site_migrate.config import MigrationConfig
from site_migrate.crawler.link_extractor import PostLink, extract_post_links
from site_migrate.crawler.models import BoardItem, Outcome
from site_migrate.extractor import PageExtractor
from site_migrate.logger import logger
from site_migrate.report.board_template import render_board
from site_migrate.spam import SpamFilter

__all__ = ("BoardCrawler", "DEFAULT_ITEM_LIMIT")

DEFAULT_ITEM_LIMIT = 20


class BoardCrawler:
    """Discovers post links on a listing page and extracts each post sequentially."""

    def __init__(
        self,
        config: MigrationConfig,
        extractor: PageExtractor,
        spam_filter: Optional[SpamFilter] = None,
    ) -> None:
        self.config = config
        self.extractor = extractor
        self.spam_filter = spam_filter or extractor.spam_filter
        self.last_outcomes: List[Outcome[BoardItem]] = []

    async def discover(self, list_url: str, item_limit: int = DEFAULT_ITEM_LIMIT) -> List[PostLink]:
        """Fetch the listing and return at most *item_limit* unique post links."""
        soup = await self.extractor.load(list_url)
        links = extract_post_links(soup, self.config.site_root)
        logger.debug("Board %s: %d candidate links", list_url, len(links))
        return links[:item_limit]

    async def crawl_board(self, list_url: str, item_limit: int = DEFAULT_ITEM_LIMIT) -> str:
        """Return the composite board fragment for *list_url*.

        Spam titles are dropped before fetching, spam bodies after. A failing
        post is dropped and the crawl moves on; survivors keep discovery order.
        Failures fetching the listing itself propagate to the caller.
        """
        links = await self.discover(list_url, item_limit)
        outcomes: List[Outcome[BoardItem]] = []
        for link in links:
            outcomes.append(await self._collect(link))
        self.last_outcomes = outcomes

        items = [o.value for o in outcomes if o.ok and o.value is not None]
        failed = sum(1 for o in outcomes if not o.ok and not o.skipped)
        skipped = sum(1 for o in outcomes if o.skipped)
        logger.info(
            "Board %s: %d items kept, %d skipped as spam, %d failed",
            list_url, len(items), skipped, failed,
        )
        return render_board(items)

    async def _collect(self, link: PostLink) -> Outcome[BoardItem]:
        keyword = self.spam_filter.match(link.title)
        if keyword:
            logger.info("Skipping %s: title matches %r", link.url, keyword)
            return Outcome.skip(link.url, f"spam title ({keyword})")
        try:
            soup = await self.extractor.load(link.url)
            main = self.extractor.select(soup)
            keyword = self.spam_filter.match(main.get_text())
            if keyword:
                logger.info("Skipping %s: body matches %r", link.url, keyword)
                return Outcome.skip(link.url, f"spam body ({keyword})")
            body = await self.extractor.finish(main)
        except Exception as exc:
            logger.warning("Dropping board item %s: %s", link.url, exc)
            return Outcome.failure(link.url, exc)
        title = link.title or self.config.default_title
        return Outcome.success(link.url, BoardItem(title=title, body_html=body))
