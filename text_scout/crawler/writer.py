# text_scout/crawler/writer.py
"""
Append-only persistence of extracted text.

Each URL maps to a file under the output root through :func:`target_name`:
the scheme is dropped, every character that is neither alphanumeric nor ``.``
becomes ``_``, the result is split on ``_`` and the first ``max_segments``
non-empty pieces are joined back with ``_``. So with the default of three
segments::

    https://ex.test/docs/guide/install  ->  ex.test_docs_guide.txt
    https://ex.test/docs/guide/usage    ->  ex.test_docs_guide.txt
    https://ex.test/                    ->  ex.test.txt

URLs that share their leading segments land in the same file. Every write
appends a record headed by the source URL, so merged files stay separable
(:func:`read_records`).
"""
from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Dict, List, Tuple, Union

from text_scout.crawler.errors import WriteError

__all__ = ("OutputWriter", "target_name", "format_record", "read_records", "RECORD_RULE")

RECORD_RULE = "=" * 40
MAX_NAME_LENGTH = 200

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_UNSAFE_RE = re.compile(r"[^\w.]")
_RECORD_HEADER_RE = re.compile(
    rf"^{RECORD_RULE}\nURL: (?P<url>[^\n]*)\n{RECORD_RULE}\n", re.MULTILINE
)


def target_name(url: str, max_segments: int = 3) -> str:
    """File name (relative to the output root) for *url*."""
    if max_segments < 1:
        raise ValueError("max_segments must be >= 1")
    stripped = _SCHEME_RE.sub("", url)
    segments = [s for s in _UNSAFE_RE.sub("_", stripped).split("_") if s]
    name = "_".join(segments[:max_segments])[:MAX_NAME_LENGTH].strip(".")
    return f"{name or 'index'}.txt"


def format_record(url: str, text: str) -> str:
    return f"{RECORD_RULE}\nURL: {url}\n{RECORD_RULE}\n{text.rstrip()}\n\n"


def read_records(path: Union[str, Path]) -> List[Tuple[str, str]]:
    """Split an output file back into ``(url, text)`` pairs, in write order."""
    content = Path(path).read_text(encoding="utf-8")
    headers = list(_RECORD_HEADER_RE.finditer(content))
    records: List[Tuple[str, str]] = []
    for index, match in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(content)
        records.append((match.group("url"), content[match.end():end].rstrip("\n")))
    return records


class OutputWriter:
    """Appends page text to per-target files, one writer at a time per file."""

    def __init__(self, root: Union[str, Path], *, max_segments: int = 3) -> None:
        self.root = Path(root)
        self.max_segments = max_segments
        self._locks: Dict[Path, asyncio.Lock] = {}

    def target_for(self, url: str) -> Path:
        return self.root / target_name(url, self.max_segments)

    async def write(self, url: str, text: str) -> Path:
        """Append *text* for *url*; raises :class:`WriteError` on any OS failure."""
        target = self.target_for(url)
        lock = self._locks.setdefault(target, asyncio.Lock())
        async with lock:
            try:
                await asyncio.to_thread(self._append, target, format_record(url, text))
            except OSError as exc:
                raise WriteError(url, target, exc) from exc
        return target

    @staticmethod
    def _append(target: Path, record: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as fh:
            fh.write(record)
