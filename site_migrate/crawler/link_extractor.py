# site_migrate/crawler/link_extractor.py
"""
URL resolution against the legacy site root and board post link discovery.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

# Board posts on the legacy site are addressed by a numeric id at the end of the URL.
_POST_ID_RE = re.compile(r"\d{3,}$")


@dataclass(slots=True, frozen=True)
class PostLink:
    url: str
    title: str


def absolute_url(src: Optional[str], site_root: str) -> Optional[str]:
    """
    Resolve *src* the way the legacy site's pages expect it.

    Absolute http(s) URLs are returned unchanged, protocol-relative ones get
    ``http:``, root-relative ones are appended to *site_root* and anything
    else is treated as relative to the site root (a leading ``./`` dropped).
    Empty values yield ``None``.
    """
    if not src:
        return None
    src = src.strip()
    if not src:
        return None
    if src.startswith(("http://", "https://")):
        return src
    if src.startswith("//"):
        return "http:" + src
    root = site_root.rstrip("/")
    if src.startswith("/"):
        return root + src
    return root + "/" + re.sub(r"^\./", "", src)


def extract_post_links(soup: BeautifulSoup | Tag, site_root: str) -> List[PostLink]:
    """
    Collect anchors that look like board posts: under *site_root* and ending in
    three or more digits. Deduplicated by URL, first occurrence wins.
    """
    root = site_root.rstrip("/")
    seen: set[str] = set()
    links: List[PostLink] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        url = absolute_url(href_val, root)
        if not url or not url.startswith(root) or not _POST_ID_RE.search(url):
            continue
        if url in seen:
            continue
        seen.add(url)
        links.append(PostLink(url=url, title=tag.get_text().strip()))
    return links


__all__ = ["PostLink", "absolute_url", "extract_post_links"]
