"""site_migrate.report.board_template: Сборка фрагмента доски с помощью Jinja2."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable

from jinja2 import Environment, PackageLoader, select_autoescape

from site_migrate.crawler.models import BoardItem

TEMPLATE_NAME = "board.html.j2"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("site_migrate", "templates"),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        keep_trailing_newline=False,
    )


def render_board(items: Iterable[BoardItem]) -> str:
    """Рендерит контейнер ``board-list`` с карточкой ``<article>`` на каждый пост.

    Заголовки экранируются, тело поста вставляется как готовая разметка.

    Пример:
    ```python
    from site_migrate.report.board_template import render_board
    html = render_board([BoardItem(title="공지", body_html="<p>…</p>")])
    ```
    """
    template = _environment().get_template(TEMPLATE_NAME)
    return template.render(items=list(items))
