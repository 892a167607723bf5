# site_migrate/report/fragment_writer.py

"""
Запись HTML-фрагментов в каталог фрагментов.

Фрагмент с тем же именем перезаписывается целиком, слияния нет.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

from site_migrate.crawler.models import Fragment
from site_migrate.logger import logger


class FragmentWriter:
    """Сохраняет фрагменты в ``directory/<name>.html``."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        filename = name if Path(name).suffix else f"{name}.html"
        return self.directory / filename

    def write_fragment(self, name: str, html: str) -> Path:
        """
        Записывает *html* под именем *name* и возвращает путь к файлу.

        :param name: имя фрагмента; ``.html`` добавляется, если расширения нет
        :param html: содержимое фрагмента
        """
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        logger.debug("Fragment %s written to %s (%d chars)", name, path, len(html))
        return path

    def write(self, fragment: Fragment) -> Path:
        return self.write_fragment(fragment.name, fragment.html)
