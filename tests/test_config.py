# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from wcag_scout.config import DEFAULT_AXE_SOURCE, AuditConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("start_url: example.com\nmax_depth: 2", ".yaml", None),
        (json.dumps({"start_url": "example.com", "max_depth": 2}), ".json", None),
        ("start_url: ''", ".yaml", ValidationError),
        ("max_depth: -1", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{not json", ".json", ValueError),
        ("start_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, AuditConfig)
        assert cfg.start_url == "https://example.com/"
        assert cfg.max_depth == 2
        assert cfg.domain == "example.com"


def test_defaults():
    cfg = load_config(None)
    assert cfg.start_url == "https://example.com/"
    assert cfg.max_depth == 1
    assert cfg.concurrency == 3
    assert cfg.politeness_delay == 0.5
    assert cfg.page_timeout == 60.0
    assert cfg.crawl_timeout is None
    assert cfg.axe_source == DEFAULT_AXE_SOURCE


def test_overrides_win_and_none_is_ignored(tmp_path):
    cfg_path = write_file(tmp_path, "start_url: site.test\nconcurrency: 5\nmax_depth: 3", ".yaml")
    cfg = load_config(cfg_path, start_url="https://other.test/x#top", max_depth=None, concurrency=2)
    assert cfg.start_url == "https://other.test/x"
    assert cfg.max_depth == 3
    assert cfg.concurrency == 2


def test_config_is_frozen():
    cfg = load_config(None)
    with pytest.raises(ValidationError):
        cfg.max_depth = 4


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_missing_axe_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AuditConfig(axe_source=str(tmp_path / "missing-axe.js"))
