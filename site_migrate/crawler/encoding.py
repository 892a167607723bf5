"""
Charset negotiation for legacy pages.

The old site serves EUC-KR pages that often declare the charset under one of
its aliases (or not at all). Everything that is not recognised as the Korean
legacy family is decoded as UTF-8. Decoding never raises: broken byte
sequences become U+FFFD.
"""
from __future__ import annotations

import re
from typing import Final

DEFAULT_ENCODING: Final[str] = "utf-8"

_CHARSET_RE = re.compile(r"charset=([^;]+)", re.IGNORECASE)
_LEGACY_KOREAN_RE = re.compile(r"euc-kr|ks_c_5601|cp949", re.IGNORECASE)

# cp949 is a superset of EUC-KR, so it also covers the UHC extension
# characters legacy editors tend to produce.
_LEGACY_CODEC: Final[str] = "cp949"


def resolve_encoding(content_type: str | None) -> str:
    """Return the lower-cased ``charset=`` value of *content_type* or ``utf-8``."""
    match = _CHARSET_RE.search(content_type or "")
    if not match:
        return DEFAULT_ENCODING
    charset = match.group(1).strip().strip("\"'").lower()
    return charset or DEFAULT_ENCODING


def is_legacy_korean(encoding: str) -> bool:
    return bool(_LEGACY_KOREAN_RE.search(encoding or ""))


def decode(data: bytes, encoding: str) -> str:
    """Decode *data* with the legacy Korean codec or UTF-8, substituting bad bytes."""
    codec = _LEGACY_CODEC if is_legacy_korean(encoding) else DEFAULT_ENCODING
    return data.decode(codec, errors="replace")


__all__ = ["DEFAULT_ENCODING", "resolve_encoding", "is_legacy_korean", "decode"]
