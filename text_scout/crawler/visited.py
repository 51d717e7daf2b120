# text_scout/crawler/visited.py
"""
Append-only record of URLs already scheduled during one crawl run.
"""
from __future__ import annotations

import threading
from typing import Iterator, Set


class VisitedSet:
    """Set of normalized URLs with an indivisible test-and-set."""

    def __init__(self) -> None:
        self._urls: Set[str] = set()
        self._lock = threading.Lock()

    def try_claim(self, url: str) -> bool:
        """Record *url*; True only for the first caller, False on every later call."""
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(sorted(self._urls))
