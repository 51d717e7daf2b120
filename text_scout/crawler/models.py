# text_scout/crawler/models.py
"""
Data models for the TextScout crawler.
"""
from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class WorkItem:
    """One unit of frontier work: a normalized URL and its discovery depth."""

    url: str
    depth: int


@dataclass(slots=True)
class FetchResult:
    """Raw HTTP response handed from the fetch capability to the extractor."""

    url: str
    status: int
    body: bytes
    content_type: Optional[str] = None
    encoding: Optional[str] = None
    final_url: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(slots=True)
class PageResult:
    """Extraction result for a single fetched page."""

    url: str
    main_text: str
    links: List[str] = field(default_factory=list)
    invalid_links: int = 0
    title: str = ""


class CrawlState(str, enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


@dataclass(slots=True)
class CrawlSummary:
    """Counters collected during one crawl run."""

    pages_fetched: int = 0
    pages_written: int = 0
    fetch_failures: int = 0
    parse_failures: int = 0
    write_failures: int = 0
    duplicates_skipped: int = 0
    over_depth_skipped: int = 0
    invalid_urls: int = 0
    external_skipped: int = 0
    empty_pages: int = 0
    abandoned: int = 0
    elapsed: float = 0.0

    @property
    def failures(self) -> int:
        return self.fetch_failures + self.parse_failures + self.write_failures

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
