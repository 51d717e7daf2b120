# File: text_scout/utils.py
"""text_scout.utils: small helpers shared by the config layer and the crawler."""

from __future__ import annotations

from typing import Collection, List, Sequence

from text_scout.logger import logger

__all__: Sequence[str] = ("remove_duplicates",)


def remove_duplicates(items: Collection[str]) -> List[str]:
    """Remove duplicates from a list of strings, keeping the first occurrence order."""
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate entries", removed)
    return unique
