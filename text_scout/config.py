# === FILE: text_scout/config.py ===
"""
Loading and validation of the TextScout crawler configuration.
Pydantic describes the schema and checks the data; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from text_scout.utils import remove_duplicates


class CrawlerConfig(BaseModel):
    """Configuration for one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_urls: List[str] = Field(default_factory=list, description="Seed URLs, crawled at depth 0.")
    max_depth: int = Field(5, ge=0, description="Maximum link depth below a seed.")
    concurrency: int = Field(8, ge=1, description="Number of parallel fetch workers.")
    timeout: float = Field(10.0, gt=0, description="Timeout for a single request (seconds).")
    user_agent: str = Field("TextScout/1.0", min_length=1, description="User-Agent header.")
    output_dir: Path = Field(Path("crawled_pages"), description="Root directory for extracted text.")
    max_segments: int = Field(3, ge=1, description="URL segments kept in an output file name.")
    content_selector: Optional[str] = Field("main", description="CSS selector of the main content region.")
    require_selector: bool = Field(False, description="Skip pages where content_selector matches nothing.")
    same_domain: bool = Field(True, description="Only follow links to the host of the linking page.")
    max_pages: Optional[int] = Field(None, ge=1, description="Hard limit on the number of fetches.")
    max_body_bytes: int = Field(10 * 1024 * 1024, ge=1, description="Largest response body read per page (bytes).")
    clean_output: bool = Field(False, description="Wipe output_dir before the crawl starts.")

    @field_validator("start_urls", mode="after")
    def _clean_start_urls(cls, v: List[str]) -> List[str]:
        return remove_duplicates([url.strip() for url in v if url.strip()])

    @field_validator("content_selector", mode="after")
    def _blank_selector_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    def with_overrides(self, **changes: Any) -> CrawlerConfig:
        """Return a re-validated copy with *changes* applied; ``None`` values are ignored."""
        data = self.model_dump()
        data.update({key: value for key, value in changes.items() if value is not None})
        return CrawlerConfig(**data)


DEFAULT_CONFIG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.
    Raises FileNotFoundError when the config file does not exist.
    """
    if path is None:
        if not DEFAULT_CONFIG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(DEFAULT_CONFIG))
        path_obj = DEFAULT_CONFIG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)
