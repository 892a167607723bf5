# site_migrate/report/json_report.py

"""
Сохранение сводки запуска переноса в JSON-файл.
"""
from __future__ import annotations

from pathlib import Path

from site_migrate.aggregator import MigrationReport


def render_json(report: MigrationReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект MigrationReport
    :param output_path: путь к JSON-файлу
    :param pretty: форматировать с отступом 2
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding="utf-8")
    return output
