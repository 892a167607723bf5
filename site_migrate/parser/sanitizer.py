"""
In-place removal of legacy chrome, scripting and dead navigation.

Must run before :func:`site_migrate.parser.selector.select_main`, whose
scoring is based on the text that survives sanitizing.
"""
from __future__ import annotations

from typing import Iterable

from bs4 import BeautifulSoup

_SCRIPTING = ("script", "style", 'link[rel="stylesheet"]')
_IMAGE_MAPS = ("map", "area")


def _remove_all(soup: BeautifulSoup, selectors: Iterable[str]) -> int:
    removed = 0
    for selector in selectors:
        for node in soup.select(selector):
            # a node may already be gone together with a removed ancestor
            if node.decomposed:
                continue
            node.decompose()
            removed += 1
    return removed


def unwrap_script_links(soup: BeautifulSoup) -> int:
    """Replace ``<a href="javascript:...">`` with a ``<span>`` holding the same text."""
    count = 0
    for anchor in soup.select('a[href^="javascript:"]'):
        span = soup.new_tag("span")
        span.string = anchor.get_text()
        anchor.replace_with(span)
        count += 1
    return count


def sanitize(soup: BeautifulSoup, chrome_selectors: Iterable[str] = ()) -> BeautifulSoup:
    """Strip scripts, styles, stylesheets, *chrome_selectors*, image maps and
    ``javascript:`` links from *soup*. Returns the same tree for chaining."""
    _remove_all(soup, _SCRIPTING)
    _remove_all(soup, chrome_selectors)
    _remove_all(soup, _IMAGE_MAPS)
    unwrap_script_links(soup)
    return soup


__all__ = ["sanitize", "unwrap_script_links"]
