"""text_scout.crawler: the crawl engine (frontier, dedup, fetch/extract/write pipeline)."""

from text_scout.crawler.crawler import AsyncCrawler
from text_scout.crawler.models import CrawlState, CrawlSummary, FetchResult, PageResult, WorkItem

__all__ = ["AsyncCrawler", "CrawlState", "CrawlSummary", "FetchResult", "PageResult", "WorkItem"]
