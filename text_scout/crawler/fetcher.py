# text_scout/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per call over a shared aiohttp session.

Failed requests are not retried; transport errors and bodies over the size
cap surface as :class:`~text_scout.crawler.errors.NetworkError`, HTTP error
statuses are returned as-is and judged by the caller.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from text_scout.config import CrawlerConfig
from text_scout.crawler.errors import NetworkError
from text_scout.crawler.models import FetchResult

FetchFn = Callable[[str], Awaitable[FetchResult]]

CHUNK_SIZE = 64 * 1024


def open_session(config: CrawlerConfig) -> ClientSession:
    """Create the client session used by :class:`Fetcher`."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Handles HTTP fetching with a per-request timeout and an optional body size cap."""

    def __init__(self, session: ClientSession, *, max_bytes: Optional[int] = None) -> None:
        self.session = session
        self.max_bytes = max_bytes

    async def fetch(self, url: str) -> FetchResult:
        """
        GET *url* and return status, body and content metadata.

        Raises NetworkError when no response could be obtained.
        """
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                body = await self._read_body(url, resp)
                ctype: Optional[str] = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                return FetchResult(
                    url=url,
                    status=resp.status,
                    body=body,
                    content_type=ctype or None,
                    encoding=resp.charset,
                    final_url=str(resp.url),
                )
        except asyncio.TimeoutError as exc:
            raise NetworkError(url, "timed out") from exc
        except ClientError as exc:
            raise NetworkError(url, f"{type(exc).__name__}: {exc}") from exc

    async def _read_body(self, url: str, resp: ClientResponse) -> bytes:
        if self.max_bytes is None:
            return await resp.read()
        declared = resp.content_length
        if declared is not None and declared > self.max_bytes:
            raise NetworkError(url, f"body of {declared} bytes exceeds limit of {self.max_bytes}")
        body = bytearray()
        async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
            body.extend(chunk)
            if len(body) > self.max_bytes:
                raise NetworkError(url, f"body exceeds limit of {self.max_bytes} bytes")
        return bytes(body)
