# === FILE: text_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Sequence

from aiohttp import ClientSession

from text_scout.config import CrawlerConfig
from text_scout.crawler.errors import InvalidURL, NetworkError, ParseFailure, WriteError
from text_scout.crawler.events import CrawlEvent, EventKind, EventSink, log_event
from text_scout.crawler.extractor import ContentExtractor
from text_scout.crawler.fetcher import FetchFn, Fetcher, open_session
from text_scout.crawler.frontier import Frontier
from text_scout.crawler.models import CrawlSummary, PageResult, WorkItem
from text_scout.crawler.normalizer import normalize, same_host
from text_scout.crawler.visited import VisitedSet
from text_scout.crawler.writer import OutputWriter
from text_scout.logger import get_logger

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Asynchronous breadth-first crawler: fetch, extract, append text, follow links.

    Used as an async context manager, it owns an aiohttp session for the
    duration of the block. Passing ``fetch=`` replaces the HTTP transport
    (no session is opened then), which is how tests drive it with a
    synthetic link graph.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        *,
        fetch: Optional[FetchFn] = None,
        extractor: Optional[ContentExtractor] = None,
        writer: Optional[OutputWriter] = None,
        on_event: Optional[EventSink] = None,
    ) -> None:
        self.config = config
        self._fetch = fetch
        self._session: Optional[ClientSession] = None
        self.extractor = extractor or ContentExtractor(
            config.content_selector, require_selector=config.require_selector
        )
        self.writer = writer or OutputWriter(config.output_dir, max_segments=config.max_segments)
        self._sink: EventSink = on_event or log_event
        self.logger = get_logger()
        self.visited = VisitedSet()
        self.summary = CrawlSummary()
        self.frontier: Optional[Frontier] = None
        self._stopped = False
        self._dispatched = 0

    async def __aenter__(self) -> AsyncCrawler:
        if self._fetch is None:
            self._session = open_session(self.config)
            self._fetch = Fetcher(self._session, max_bytes=self.config.max_body_bytes).fetch
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._session is not None:
            if not self._session.closed:
                await self._session.close()
            self._session = None
            self._fetch = None

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #

    def stop(self) -> None:
        """Ask workers to finish: queued items are drained without being fetched."""
        if not self._stopped:
            self.logger.info("Stop requested, draining %d queued item(s)",
                             self.frontier.pending if self.frontier else 0)
        self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped

    async def crawl(self, seeds: Optional[Sequence[str]] = None) -> CrawlSummary:
        """Crawl from *seeds* (default ``config.start_urls``) until the frontier is exhausted."""
        if self._fetch is None:
            raise RuntimeError("Fetcher not initialized: use 'async with AsyncCrawler(...)' or pass fetch=")
        seed_list: List[str] = list(self.config.start_urls if seeds is None else seeds)

        self.visited = VisitedSet()
        self.summary = CrawlSummary()
        self._stopped = False
        self._dispatched = 0
        frontier = self.frontier = Frontier(self.config.max_depth)

        self.logger.info(
            "Crawl started: %d seed(s), max_depth=%d, concurrency=%d",
            len(seed_list), self.config.max_depth, self.config.concurrency,
        )
        start = time.monotonic()

        for raw in seed_list:
            try:
                url = normalize(raw)
            except InvalidURL as exc:
                self.summary.invalid_urls += 1
                self.logger.warning("Skipping seed %r: %s", raw, exc.reason)
                self._emit(EventKind.LINK_INVALID, raw, 0, exc.reason)
                continue
            self._enqueue(frontier, url, 0)

        workers = [
            asyncio.create_task(self._worker(frontier), name=f"text-scout-worker-{i}")
            for i in range(self.config.concurrency)
        ]
        drained = asyncio.create_task(frontier.join())
        try:
            # a worker only finishes on its own by crashing
            await asyncio.wait([drained, *workers], return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (drained, *workers):
                task.cancel()
            outcomes = await asyncio.gather(drained, *workers, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                raise outcome

        self.summary.elapsed = time.monotonic() - start
        self._emit(EventKind.SUMMARY, data=self.summary.as_dict())
        duration = self.summary.elapsed
        self.logger.info(
            "Finished: %d pages fetched, %d written, %d failed in %.2f s (%.2f pages/s)",
            self.summary.pages_fetched, self.summary.pages_written, self.summary.failures,
            duration, self.summary.pages_fetched / duration if duration else 0,
        )
        return self.summary

    # alias for compatibility
    run = crawl

    # ------------------------------------------------------------------ #
    # Workers                                                            #
    # ------------------------------------------------------------------ #

    async def _worker(self, frontier: Frontier) -> None:
        while True:
            item = await frontier.pop()
            try:
                if self._stopped or not self._claim_budget():
                    self.summary.abandoned += 1
                    continue
                await self._process(frontier, item)
            finally:
                frontier.done(item)

    def _claim_budget(self) -> bool:
        max_pages = self.config.max_pages
        if max_pages is not None and self._dispatched >= max_pages:
            self.stop()
            return False
        self._dispatched += 1
        return True

    async def _process(self, frontier: Frontier, item: WorkItem) -> None:
        try:
            response = await self._fetch(item.url)
        except NetworkError as exc:
            self.summary.fetch_failures += 1
            self._emit(EventKind.FETCH_FAILED, item.url, item.depth, exc.reason)
            return
        if not response.ok:
            self.summary.fetch_failures += 1
            self._emit(EventKind.FETCH_FAILED, item.url, item.depth, f"HTTP {response.status}")
            return
        self.summary.pages_fetched += 1
        self._emit(EventKind.FETCH_OK, item.url, item.depth, f"HTTP {response.status}")

        base = item.url
        if response.final_url and response.final_url != item.url:
            try:
                base = normalize(response.final_url)
            except InvalidURL as exc:
                self.logger.debug("Ignoring redirect target of %s: %s", item.url, exc)

        try:
            page = self.extractor.extract(
                response.body,
                item.url,
                content_type=response.content_type,
                encoding=response.encoding,
                base_url=base,
            )
        except ParseFailure as exc:
            self.summary.parse_failures += 1
            self._emit(EventKind.EXTRACT_FAILED, item.url, item.depth, exc.reason)
            return
        self.summary.invalid_urls += page.invalid_links
        self._emit(
            EventKind.EXTRACT_OK, item.url, item.depth,
            data={
                "title": page.title,
                "links": len(page.links),
                "chars": len(page.main_text),
                "invalid": page.invalid_links,
            },
        )

        await self._persist(item, page)
        if not self._stopped:
            self._follow(frontier, item, base, page.links)

    async def _persist(self, item: WorkItem, page: PageResult) -> None:
        if not page.main_text.strip():
            self.summary.empty_pages += 1
            self._emit(EventKind.WRITE_SKIPPED, item.url, item.depth, "no main text")
            return
        try:
            target = await self.writer.write(item.url, page.main_text)
        except WriteError as exc:
            self.summary.write_failures += 1
            self._emit(EventKind.WRITE_FAILED, item.url, item.depth, f"{exc.target}: {exc.cause}")
            return
        self.summary.pages_written += 1
        self._emit(EventKind.WRITE_OK, item.url, item.depth, str(target))

    def _follow(self, frontier: Frontier, item: WorkItem, origin: str, links: Sequence[str]) -> None:
        depth = item.depth + 1
        for link in links:
            if self.config.same_domain and not same_host(link, origin):
                self.summary.external_skipped += 1
                continue
            self._enqueue(frontier, link, depth)

    def _enqueue(self, frontier: Frontier, url: str, depth: int) -> bool:
        # over-depth links stay unclaimed
        if url in self.visited:
            self.summary.duplicates_skipped += 1
            return False
        if not frontier.admits(depth):
            self.summary.over_depth_skipped += 1
            return False
        if not self.visited.try_claim(url):
            self.summary.duplicates_skipped += 1
            return False
        return frontier.push(WorkItem(url, depth))

    def _emit(
        self,
        kind: EventKind,
        url: str = "",
        depth: Optional[int] = None,
        detail: str = "",
        data: Optional[dict] = None,
    ) -> None:
        self._sink(CrawlEvent(kind=kind, url=url, depth=depth, detail=detail, data=data))
