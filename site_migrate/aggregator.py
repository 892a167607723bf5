"""site_migrate.aggregator: Сводка по итогам запуска переноса."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, List, Sequence, TypedDict

from site_migrate.crawler.models import Outcome


class TargetInfo(TypedDict, total=False):
    """Итог обработки одной страницы или доски."""

    name: str
    kind: str
    ok: bool
    path: str
    error: str
    items: int


@dataclass(slots=True)
class TargetResult:
    """Результат одной цели: страницы (``page``) или доски (``board``)."""

    name: str
    kind: str
    outcome: Outcome[Any]
    items: int = 0


@dataclass(slots=True)
class MigrationReport:
    """Сохранённые и упавшие цели одного запуска."""

    saved: List[TargetInfo] = field(default_factory=list)
    failed: List[TargetInfo] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)

    def summary(self) -> str:
        return f"{len(self.saved)} fragment(s) saved, {len(self.failed)} failed"


def _info(result: TargetResult) -> TargetInfo:
    info: TargetInfo = {"name": result.name, "kind": result.kind, "ok": result.outcome.ok}
    if result.outcome.ok:
        info["path"] = str(result.outcome.value)
    else:
        info["error"] = result.outcome.error
    if result.kind == "board":
        info["items"] = result.items
    return info


def aggregate_results(results: Sequence[TargetResult]) -> MigrationReport:
    """Собирает результаты целей в MigrationReport, сохраняя порядок обработки."""
    report = MigrationReport()
    for result in results:
        (report.saved if result.outcome.ok else report.failed).append(_info(result))
    return report
