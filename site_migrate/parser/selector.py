"""
Main-content selection: the candidate element with the most visible text wins.
"""
from __future__ import annotations

from typing import Iterable

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_migrate.parser.html_parser import document_root


def text_length(node: Tag) -> int:
    return len(node.get_text().strip())


def select_main(soup: BeautifulSoup, candidates: Iterable[str]) -> Tag:
    """
    Evaluate *candidates* in order and return the matched element with the
    longest trimmed text. Ties keep the first element seen. Falls back to the
    document body when nothing matches or every match is empty, so the result
    is never ``None``.
    """
    best: Tag | None = None
    best_len = 0
    for selector in candidates:
        for node in soup.select(selector):
            length = text_length(node)
            if length > best_len:
                best, best_len = node, length
    return best if best is not None else document_root(soup)


__all__ = ["select_main", "text_length"]
