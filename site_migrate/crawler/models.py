"""
Data models for the SiteMigrate pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Raw response body and the declared Content-Type header."""

    url: str
    content: bytes
    content_type: str


@dataclass(slots=True, frozen=True)
class DecodedDocument:
    """Unicode page text together with the URL it came from."""

    url: str
    text: str


@dataclass(slots=True, frozen=True)
class AssetRecord:
    """Locally stored copy of a remote media file."""

    remote_url: str
    local_path: str
    content_hash: str
    public_path: str


@dataclass(slots=True, frozen=True)
class Fragment:
    name: str
    html: str


@dataclass(slots=True, frozen=True)
class BoardItem:
    title: str
    body_html: str


@dataclass(slots=True)
class Outcome(Generic[T]):
    """Result of one isolated unit of work (a page, a board, a board item).

    Exactly one of ``value`` / ``error`` is meaningful: ``ok`` tells which.
    ``skipped`` marks items rejected on purpose (spam), not failures.
    """

    name: str
    ok: bool
    value: Optional[T] = None
    error: str = ""
    skipped: bool = False

    @classmethod
    def success(cls, name: str, value: T) -> Outcome[T]:
        return cls(name=name, ok=True, value=value)

    @classmethod
    def failure(cls, name: str, error: BaseException | str) -> Outcome[T]:
        return cls(name=name, ok=False, error=str(error))

    @classmethod
    def skip(cls, name: str, reason: str) -> Outcome[T]:
        return cls(name=name, ok=False, error=reason, skipped=True)
