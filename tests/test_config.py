# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from text_scout.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("start_urls: [http://example.com/]\nmax_depth: 2", ".yaml", None),
        (json.dumps({"start_urls": ["http://example.com/"], "max_depth": 2}), ".json", None),
        ("max_depth: -1", ".yaml", ValidationError),
        ("concurrency: many", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("::invalid yaml", ".yaml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{broken", ".json", ValueError),
        ("max_depth = 1", ".toml", ValueError),
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
        assert cfg.start_urls == ["http://example.com/"]
        assert cfg.max_depth == 2


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_empty_file_gives_defaults(tmp_path):
    cfg = load_config(write_file(tmp_path, "", ".yaml"))
    assert cfg == CrawlerConfig()
    assert cfg.max_depth == 5
    assert cfg.concurrency == 8
    assert cfg.output_dir == Path("crawled_pages")
    assert cfg.content_selector == "main"
    assert cfg.same_domain is True
    assert cfg.max_pages is None


def test_start_urls_are_stripped_and_deduplicated():
    cfg = CrawlerConfig(start_urls=[" http://a.test/ ", "", "http://b.test/", "http://a.test/"])
    assert cfg.start_urls == ["http://a.test/", "http://b.test/"]


def test_blank_selector_means_whole_body():
    assert CrawlerConfig(content_selector="  ").content_selector is None


def test_with_overrides_revalidates():
    base = CrawlerConfig(start_urls=["http://a.test/"], max_depth=3)

    changed = base.with_overrides(max_depth=1, concurrency=None, output_dir=Path("out"))
    assert changed.max_depth == 1
    assert changed.concurrency == base.concurrency
    assert changed.output_dir == Path("out")
    assert base.max_depth == 3

    with pytest.raises(ValidationError):
        base.with_overrides(concurrency=0)


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.max_depth = 9
