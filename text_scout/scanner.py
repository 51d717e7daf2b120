# === FILE: text_scout/scanner.py ===
"""
Wrapper that prepares the output directory and runs one crawl.
"""
import shutil
from pathlib import Path

from text_scout.config import CrawlerConfig
from text_scout.crawler.crawler import AsyncCrawler
from text_scout.crawler.models import CrawlSummary
from text_scout.logger import logger


def prepare_output(cfg: CrawlerConfig) -> Path:
    """Create ``cfg.output_dir``; wipe it first when ``clean_output`` is set."""
    output = Path(cfg.output_dir)
    if cfg.clean_output and output.exists():
        logger.info("Removing previous output in %s", output)
        shutil.rmtree(output)
    output.mkdir(parents=True, exist_ok=True)
    return output


async def start_crawl(cfg: CrawlerConfig) -> CrawlSummary:
    """
    Run the asynchronous crawler in its context and return the CrawlSummary.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl configuration.

    Returns
    -------
    CrawlSummary
        Counters of the finished run.
    """
    prepare_output(cfg)
    async with AsyncCrawler(cfg) as crawler:
        summary = await crawler.crawl()
    return summary

__all__ = ["start_crawl", "prepare_output"]
