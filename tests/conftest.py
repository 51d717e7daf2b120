# File: tests/conftest.py
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

import pytest

from text_scout.config import CrawlerConfig
from text_scout.crawler.models import FetchResult
from text_scout.logger import configure

BASE = "http://ex.test"


def html_page(text: str, *links: str) -> str:
    """Small HTML document: *text* inside <main>, *links* inside <nav>."""
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return (
        "<html><head><title>t</title></head><body>"
        f"<nav>{anchors}</nav><main><p>{text}</p></main>"
        "</body></html>"
    )


class StubWeb:
    """In-memory link graph standing in for the HTTP transport.

    *pages* maps a URL to HTML markup, to an ``(status, body, content_type)``
    tuple, or to an exception instance raised by :meth:`fetch`.
    Unknown URLs answer 404.
    """

    def __init__(
        self,
        pages: Dict[str, Union[str, tuple, BaseException]],
        *,
        delay: float = 0.0,
    ) -> None:
        self.pages = pages
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.peak = 0

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            entry = self.pages.get(url)
            if entry is None:
                return FetchResult(url=url, status=404, body=b"", content_type="text/html")
            if isinstance(entry, BaseException):
                raise entry
            if isinstance(entry, tuple):
                status, body, ctype = entry
                return FetchResult(url=url, status=status, body=body, content_type=ctype)
            return FetchResult(
                url=url, status=200, body=entry.encode("utf-8"), content_type="text/html", encoding="utf-8"
            )
        finally:
            self.in_flight -= 1


@pytest.fixture()
def out_dir(tmp_path) -> Path:
    return tmp_path / "crawled_pages"


@pytest.fixture()
def make_config(out_dir) -> Callable[..., CrawlerConfig]:
    """
    Build a CrawlerConfig writing into a temporary output directory.
    """

    def _make(seeds: Optional[Sequence[str]] = None, **overrides) -> CrawlerConfig:
        data = dict(
            start_urls=list(seeds or []),
            max_depth=1,
            concurrency=4,
            timeout=2.0,
            user_agent="TestAgent/1.0",
            output_dir=out_dir,
        )
        data.update(overrides)
        return CrawlerConfig(**data)

    return _make


@pytest.fixture(autouse=True)
def reset_logger():
    """CliRunner swaps the std streams; rebuild handlers after every test."""
    yield
    configure()
