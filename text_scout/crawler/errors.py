# text_scout/crawler/errors.py
"""
Recoverable crawl errors.

None of these abort a crawl: the scheduler catches them, counts them in the
:class:`~text_scout.crawler.models.CrawlSummary` and moves on.
"""
from __future__ import annotations

from pathlib import Path


class CrawlError(Exception):
    """Base class for per-URL crawl failures."""


class InvalidURL(CrawlError, ValueError):
    """URL is malformed or uses a scheme other than http(s)."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"{reason}: {raw!r}")
        self.raw = raw
        self.reason = reason


class NetworkError(CrawlError):
    """The fetch itself failed (connection, timeout, TLS, ...)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ParseFailure(CrawlError):
    """The fetched body could not be turned into a page result."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class WriteError(CrawlError):
    """Appending extracted text to its output file failed."""

    def __init__(self, url: str, target: Path, cause: OSError) -> None:
        super().__init__(f"{url} -> {target}: {cause}")
        self.url = url
        self.target = target
        self.cause = cause
