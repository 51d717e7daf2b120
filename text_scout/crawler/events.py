# text_scout/crawler/events.py
"""
Structured crawl events.

The scheduler reports every fetch, extraction and write as a :class:`CrawlEvent`
and hands it to a sink callable. The default sink, :func:`log_event`, forwards
events to the project logger; tests and embedding code pass their own.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from text_scout.logger import get_logger

_log = get_logger("events")


class EventKind(str, enum.Enum):
    FETCH_OK = "fetch.ok"
    FETCH_FAILED = "fetch.failed"
    EXTRACT_OK = "extract.ok"
    EXTRACT_FAILED = "extract.failed"
    WRITE_OK = "write.ok"
    WRITE_FAILED = "write.failed"
    WRITE_SKIPPED = "write.skipped"
    LINK_INVALID = "link.invalid"
    SUMMARY = "crawl.summary"


_LEVELS: Dict[EventKind, int] = {
    EventKind.FETCH_OK: logging.INFO,
    EventKind.FETCH_FAILED: logging.WARNING,
    EventKind.EXTRACT_OK: logging.DEBUG,
    EventKind.EXTRACT_FAILED: logging.WARNING,
    EventKind.WRITE_OK: logging.DEBUG,
    EventKind.WRITE_FAILED: logging.ERROR,
    EventKind.WRITE_SKIPPED: logging.DEBUG,
    EventKind.LINK_INVALID: logging.DEBUG,
    EventKind.SUMMARY: logging.INFO,
}


@dataclass(frozen=True, slots=True)
class CrawlEvent:
    kind: EventKind
    url: str = ""
    depth: Optional[int] = None
    detail: str = ""
    data: Optional[Dict[str, Any]] = None

    def as_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["kind"] = self.kind.value
        return out


EventSink = Callable[[CrawlEvent], None]


def log_event(event: CrawlEvent) -> None:
    """Default sink: one log record per event, event dict attached as ``extra``."""
    level = _LEVELS.get(event.kind, logging.INFO)
    if not _log.isEnabledFor(level):
        return
    parts = [event.kind.value]
    if event.url:
        parts.append(event.url)
    if event.depth is not None:
        parts.append(f"depth={event.depth}")
    if event.detail:
        parts.append(event.detail)
    if event.data:
        parts.append(" ".join(f"{k}={v}" for k, v in event.data.items()))
    _log.log(level, "%s", " | ".join(parts), extra={"event": event.as_dict()})
