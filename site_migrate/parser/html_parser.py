"""HTML loading for SiteMigrate.

Pages are parsed into a mutable BeautifulSoup tree with the permissive
``lxml`` builder, which always produces ``<html>``/``<body>`` wrappers even
for broken legacy markup. Every stage downstream (sanitizer, content
selector, asset localizer) edits this tree in place; one tree belongs to one
page and is never shared.
"""
from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("load_document", "document_root", "inner_html")

PARSER = "lxml"


def load_document(html: str) -> BeautifulSoup:
    """Parse decoded page text into a queryable tree."""
    return BeautifulSoup(html, PARSER)


def document_root(soup: BeautifulSoup) -> Tag:
    """Return ``<body>`` or the soup itself for documents without one."""
    body = soup.body
    return body if body is not None else soup


def inner_html(node: Tag) -> str:
    """Serialize the children of *node* (not the node's own tag)."""
    return node.decode_contents()
