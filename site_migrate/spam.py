"""site_migrate.spam: фильтр рекламного спама по ключевым словам."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple


class SpamFilter:
    """Регистронезависимый поиск подстрок из фиксированного набора."""

    def __init__(self, keywords: Iterable[str]) -> None:
        self.keywords: Tuple[str, ...] = tuple(k.lower() for k in keywords if k)

    def match(self, text: Optional[str]) -> Optional[str]:
        """Возвращает первое найденное ключевое слово или None."""
        lowered = (text or "").lower()
        for keyword in self.keywords:
            if keyword in lowered:
                return keyword
        return None

    def is_spam(self, text: Optional[str]) -> bool:
        return self.match(text) is not None


__all__ = ["SpamFilter"]
