# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_mapper.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("base_url: http://example.com\ntimeout: 3", ".yaml", None),
        (json.dumps({"base_url": "http://example.com", "max_concurrency": 4}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("base_url = 'http://example.com'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.base_url == "http://example.com"


def test_defaults():
    cfg = CrawlerConfig(base_url="https://example.com/")
    assert cfg.base_url == "https://example.com/"
    assert cfg.timeout == 10.0
    assert cfg.max_concurrency is None
    assert cfg.user_agent


def test_overrides_win_and_none_is_ignored(tmp_path):
    cfg_path = write_file(tmp_path, "base_url: http://example.com\nmax_concurrency: 2", ".yaml")
    cfg = load_config(cfg_path, base_url="https://other.example/", max_concurrency=None)
    assert cfg.base_url == "https://other.example/"
    assert cfg.max_concurrency == 2


def test_load_config_without_file():
    cfg = load_config(None, base_url="http://example.com")
    assert cfg.base_url == "http://example.com"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize("url", ["", "example.com", "/relative/path", "http://[::1"])
def test_unusable_seed_url_is_rejected(url):
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url=url)


@pytest.mark.parametrize(
    "field,value",
    [("timeout", 0), ("max_concurrency", 0), ("user_agent", ""), ("unknown", 1)],
)
def test_invalid_fields(field, value):
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url="http://example.com", **{field: value})


def test_config_is_frozen():
    cfg = CrawlerConfig(base_url="http://example.com")
    with pytest.raises(ValidationError):
        cfg.timeout = 1.0
