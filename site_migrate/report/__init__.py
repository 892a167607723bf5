"""site_migrate.report: запись результатов переноса (фрагменты, шаблон доски, JSON-сводка)."""

from __future__ import annotations

from site_migrate.report.board_template import render_board
from site_migrate.report.fragment_writer import FragmentWriter
from site_migrate.report.json_report import render_json

__all__ = ["FragmentWriter", "render_board", "render_json"]
