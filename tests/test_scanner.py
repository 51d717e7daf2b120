# File: tests/test_scanner.py
import logging
import sys

import pytest

from text_scout.crawler.events import CrawlEvent, EventKind, log_event
from text_scout.logger import LOGGER_NAME, configure, get_logger
from text_scout.scanner import prepare_output, start_crawl


def test_prepare_output_keeps_previous_files(make_config, out_dir):
    out_dir.mkdir(parents=True)
    (out_dir / "old.txt").write_text("keep", encoding="utf-8")

    assert prepare_output(make_config()) == out_dir
    assert (out_dir / "old.txt").read_text(encoding="utf-8") == "keep"


def test_prepare_output_clean(make_config, out_dir):
    (out_dir / "nested").mkdir(parents=True)
    (out_dir / "old.txt").write_text("gone", encoding="utf-8")

    prepare_output(make_config(clean_output=True))
    assert out_dir.is_dir()
    assert list(out_dir.iterdir()) == []


@pytest.mark.asyncio()
async def test_start_crawl_without_seeds(make_config, out_dir):
    summary = await start_crawl(make_config())
    assert summary.pages_fetched == 0
    assert out_dir.is_dir()


def test_log_event_attaches_event(caplog):
    configure(level="DEBUG")
    get_logger().propagate = True
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        log_event(CrawlEvent(EventKind.FETCH_FAILED, "http://ex.test/a", 1, "HTTP 404"))

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.getMessage() == "fetch.failed | http://ex.test/a | depth=1 | HTTP 404"
    assert record.event["kind"] == "fetch.failed"


def test_log_file(tmp_path):
    path = tmp_path / "crawl.log"
    lg = configure(level="INFO", log_file=path)
    get_logger("crawler").info("hello file")
    for handler in lg.handlers:
        handler.flush()

    assert "TextScout.crawler | hello file" in path.read_text(encoding="utf-8")


def test_configure_replaces_handlers(tmp_path):
    configure(level="WARNING", log_file=tmp_path / "a.log")
    lg = configure(level="DEBUG")

    assert lg.level == logging.DEBUG
    assert len(lg.handlers) == 1
    assert lg.handlers[0].stream is sys.stderr
    assert lg.propagate is False
