# File: tests/test_cli.py
"""Tests for the click CLI (`text_scout.cli`) using CliRunner.
Cover the `crawl` and `config` commands, `--version` and error handling.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner
from text_scout.cli import cli
from text_scout.crawler.models import CrawlSummary

# text_scout/__init__ re-exports the `cli` group, shadowing the submodule attribute
cli_module = importlib.import_module("text_scout.cli")


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch):
    """Replace start_crawl with a stub that records the effective config."""
    seen = []

    async def fake_crawl(cfg):
        seen.append(cfg)
        return CrawlSummary(pages_fetched=3, pages_written=2, fetch_failures=1, elapsed=0.1234)

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return seen


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "start_urls:\n  - https://example.com/\nmax_depth: 2\nconcurrency: 4\n"
        f"output_dir: {tmp_path / 'out'}\n",
        encoding="utf-8",
    )
    return path


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "TextScout" in result.output


def test_show_config(cfg_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["start_urls"] == ["https://example.com/"]
    assert data["max_depth"] == 2


def test_crawl_stdout(cfg_file, patch_start_crawl):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["pages_fetched"] == 3
    assert data["failures"] == 1
    assert data["elapsed"] == 0.123
    assert patch_start_crawl[0].start_urls == ["https://example.com/"]


def test_crawl_overrides(cfg_file, tmp_path, patch_start_crawl):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "--config", str(cfg_file), "crawl",
            "http://other.test/", "http://other.test/",
            "--depth", "0", "-n", "2", "--limit", "10", "--clean",
            "--output-dir", str(tmp_path / "elsewhere"),
        ],
    )
    assert result.exit_code == 0, result.output
    cfg = patch_start_crawl[0]
    assert cfg.start_urls == ["http://other.test/"]
    assert cfg.max_depth == 0
    assert cfg.concurrency == 2
    assert cfg.max_pages == 10
    assert cfg.clean_output is True
    assert cfg.output_dir == tmp_path / "elsewhere"


def test_crawl_json_file(cfg_file, tmp_path):
    out = tmp_path / "summary.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--json", str(out), "--pretty"])
    assert result.exit_code == 0
    assert "JSON summary" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["pages_written"] == 2


def test_crawl_timeout(monkeypatch, cfg_file):
    async def slow(cfg):
        await asyncio.sleep(2)
        return CrawlSummary()

    monkeypatch.setattr(cli_module, "start_crawl", slow)

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--crawl-timeout", "0.1"])
    assert result.exit_code == 1
    assert "did not finish" in result.output


def test_invalid_config_exits(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("max_depth: -3\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_crawl_without_config_file(tmp_path, monkeypatch, patch_start_crawl):
    monkeypatch.chdir(tmp_path)

    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "http://seed.test/", "--depth", "1"])
    assert result.exit_code == 0, result.output
    cfg = patch_start_crawl[0]
    assert cfg.start_urls == ["http://seed.test/"]
    assert cfg.max_depth == 1
    assert cfg.concurrency == 8


def test_default_config_file_is_picked_up(tmp_path, monkeypatch):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_depth: 7\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    assert json.loads(result.output)["max_depth"] == 7
