"""
Модуль для загрузки и валидации конфигурации переноса сайта.
Используется Pydantic для описания схемы и проверки данных.

Конфигурация создаётся один раз при старте и передаётся во все компоненты;
модульных глобальных настроек (корень сайта, каталоги, ключевые слова) нет.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_SITE_ROOT = "http://www.hanuljari.com"

DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/121.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "ko,en;q=0.8",
}

# Порядок важен: при равной длине текста побеждает первый найденный элемент.
DEFAULT_CONTENT_SELECTORS: Tuple[str, ...] = (
    ".main_content",
    "#content",
    "#xe_content",
    "article",
    "section",
    ".content",
    ".contents",
    "#wrap",
    "#container",
)

DEFAULT_CHROME_SELECTORS: Tuple[str, ...] = (
    "header",
    "nav",
    "footer",
    "iframe",
    "noscript",
    "#slideWrap",
    ".layout_head",
    ".layout_foot",
    ".layout_topmenu",
    ".logo_line",
    ".leftside",
    ".lnb",
    ".s_location",
    ".update_news",
    ".bottom_menu_copy",
    ".wfsr",
    ".xe-widget-wrapper",
    ".xe_content",
    ".clear",
    ".skip",
    ".skipToContent",
)

DEFAULT_BREADCRUMB_SELECTORS: Tuple[str, ...] = (
    'img[alt*="홈페이지"]',
    'img[src*="btnHome"]',
)

DEFAULT_SPAM_KEYWORDS: Tuple[str, ...] = (
    "마사지", "안마", "성인", "섹스", "porn", "카지노", "바카라", "토토", "먹튀",
    "비아그라", "viagra", "에로", "escort", "대출", "텔레그램", "선물거래",
    "주식 리딩", "해외직구", "도박", "유흥",
)

_DEFAULT_PAGES: Tuple[str, ...] = (
    "sub06", "sub07", "sub06_02", "sub02", "sub02_04", "sub02_06",
    "sub02_02", "sub02_05", "sub09_02", "sub09_03", "ham",
)
_DEFAULT_BOARDS: Tuple[str, ...] = ("file", "data", "data02", "data03", "data04")


class PageTarget(BaseModel):
    """Отдельная страница: имя фрагмента и исходный URL."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)


class BoardTarget(BaseModel):
    """Доска объявлений: имя фрагмента, URL списка и лимит постов."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    limit: int = Field(20, ge=1, description="Сколько постов брать со страницы списка.")


def _default_pages() -> List[PageTarget]:
    return [PageTarget(name=n, url=f"{DEFAULT_SITE_ROOT}/{n}") for n in _DEFAULT_PAGES]


def _default_boards() -> List[BoardTarget]:
    return [BoardTarget(name=n, url=f"{DEFAULT_SITE_ROOT}/{n}") for n in _DEFAULT_BOARDS]


class MigrationConfig(BaseModel):
    """Конфигурация одного запуска переноса."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    site_root: str = Field(DEFAULT_SITE_ROOT, description="Корень старого сайта.")
    fragments_dir: Path = Field(Path("public/fragments"), description="Каталог HTML-фрагментов.")
    images_dir: Path = Field(Path("public/images/imported"), description="Каталог изображений.")
    public_image_prefix: str = Field("/images/imported/", description="Публичный префикс картинок.")
    headers: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))
    retry_times: int = Field(2, ge=0, description="Число повторов после неудачного запроса.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    spam_keywords: Tuple[str, ...] = DEFAULT_SPAM_KEYWORDS
    content_selectors: Tuple[str, ...] = DEFAULT_CONTENT_SELECTORS
    chrome_selectors: Tuple[str, ...] = DEFAULT_CHROME_SELECTORS
    breadcrumb_selectors: Tuple[str, ...] = DEFAULT_BREADCRUMB_SELECTORS
    footer_markers: Tuple[str, ...] = ("Skin By WebEngine",)
    default_alt: str = "이미지"
    default_title: str = "제목 없음"
    pages: List[PageTarget] = Field(default_factory=_default_pages)
    boards: List[BoardTarget] = Field(default_factory=_default_boards)

    @field_validator("site_root", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("public_image_prefix")
    def _ensure_prefix_slash(cls, v: str) -> str:
        return v if v.endswith("/") else v + "/"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> MigrationConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект MigrationConfig.
    Без пути возвращает встроенную конфигурацию со списком страниц и досок.
    """
    if path is None:
        return MigrationConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return MigrationConfig(**data)
    except ValidationError:
        raise
