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
        ("timeout: 5\nuser_agent: Bot/2.0", ".yaml", None),
        (json.dumps({"timeout": 5, "user_agent": "Bot/2.0"}), ".json", None),
        ("", ".yml", None),
        (json.dumps({"timeout": -1}), ".json", ValidationError),
        (json.dumps({"rate_limit": 1.0}), ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("::invalid yaml", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("timeout = 5", ".toml", ValueError),
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
        if content:
            assert cfg.timeout == 5
            assert cfg.user_agent == "Bot/2.0"


def test_defaults():
    cfg = CrawlerConfig()
    assert cfg.timeout == 30.0
    assert cfg.user_agent == "SiteMapper/1.0"
    assert cfg.concurrency is None


def test_zero_concurrency_means_unbounded():
    assert CrawlerConfig(concurrency=0).concurrency is None
    assert CrawlerConfig(concurrency=4).concurrency == 4
    with pytest.raises(ValidationError):
        CrawlerConfig(concurrency=-2)


def test_null_timeout_disables_timeout(tmp_path):
    cfg = load_config(write_file(tmp_path, "timeout: null", ".yaml"))
    assert cfg.timeout is None


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.timeout = 1.0


def test_load_config_default_missing(tmp_path, monkeypatch):
    # No configs/default.yaml in the working directory → defaults
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlerConfig()


def test_load_config_default_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("concurrency: 8\n", encoding="utf-8")
    assert load_config(None).concurrency == 8


def test_config_file_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")
