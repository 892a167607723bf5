# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_migrate.config import DEFAULT_SITE_ROOT, MigrationConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("site_root: http://example.com/\npages: []", None),
        (json.dumps({"site_root": "http://example.com", "boards": []}), None),
        ("{}", None),
        ("retry_times: -1", ValidationError),
        ("unknown_field: 1", ValidationError),
        ("not: a: mapping", ValueError),
        ("::invalid yaml", TypeError),
    ],
)
def test_load_config_variants(tmp_path, content, expect_exc):
    suffix = ".yaml" if not content.strip().startswith("{") else ".json"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, MigrationConfig)
        assert not cfg.site_root.endswith("/")


def test_defaults_cover_compiled_targets():
    cfg = load_config(None)
    assert cfg.site_root == DEFAULT_SITE_ROOT
    assert cfg.retry_times == 2
    assert [p.name for p in cfg.pages][:3] == ["sub06", "sub07", "sub06_02"]
    assert "ham" in [p.name for p in cfg.pages]
    assert [b.name for b in cfg.boards] == ["file", "data", "data02", "data03", "data04"]
    assert all(b.limit == 20 for b in cfg.boards)
    assert cfg.pages[0].url == f"{DEFAULT_SITE_ROOT}/sub06"


def test_targets_from_yaml(tmp_path):
    cfg_path = write_file(
        tmp_path,
        "public_image_prefix: /img\n"
        "pages:\n  - {name: about, url: http://example.com/about}\n"
        "boards:\n  - {name: news, url: http://example.com/news, limit: 5}\n",
        ".yml",
    )
    cfg = load_config(cfg_path)
    assert cfg.public_image_prefix == "/img/"
    assert cfg.pages[0].name == "about"
    assert cfg.boards[0].limit == 5


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError):
        load_config(write_file(tmp_path, "x = 1", ".toml"))


def test_config_is_frozen():
    cfg = MigrationConfig()
    with pytest.raises(ValidationError):
        cfg.retry_times = 5
