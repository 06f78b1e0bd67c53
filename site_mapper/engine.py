"""site_mapper.engine: запуск обхода и запись артефактов (sitemap + журнал)."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Optional

from site_mapper.config import MapperConfig
from site_mapper.crawler.crawler import AsyncCrawler
from site_mapper.crawler.models import CrawlResult, RunResult
from site_mapper.errors import WriteError, ZeroResultsError
from site_mapper.history import append_record, exclusive_lock
from site_mapper.logger import logger
from site_mapper.sitemap import write_sitemap

__all__ = ["start_crawl", "run_crawl"]


async def start_crawl(config: MapperConfig) -> CrawlResult:
    """
    Runs the crawler inside its session context and returns the CrawlResult.

    Parameters
    ----------
    config : MapperConfig
        Seed URL, timeout and worker count.
    """
    async with AsyncCrawler(config) as crawler:
        return await crawler.crawl()


def run_crawl(config: MapperConfig, now: Optional[datetime] = None) -> RunResult:
    """The "run crawl now" trigger.

    Crawls, then writes the sitemap and appends the history record from the
    same result. Every failure comes back as ``RunResult(ok=False)``; when no
    page could be fetched nothing is written at all.
    """
    result = asyncio.run(start_crawl(config))
    if not result.urls:
        error = ZeroResultsError()
        logger.error("%s", error)
        return RunResult.failure(error)

    if result.failed:
        logger.info("%d pages were unreachable and left out", len(result.failed))

    lock_path = config.lock_path
    try:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        lock_fh = lock_path.open("a")
    except OSError as exc:
        return RunResult.failure(WriteError(lock_path, exc))

    with lock_fh, exclusive_lock(lock_fh):
        stamp = now or datetime.now().astimezone()
        try:
            write_sitemap(result.urls, stamp.date(), config.sitemap_path)
            append_record(stamp, result.count, config.history_path)
        except WriteError as exc:
            return RunResult.failure(exc)

    outcome = RunResult.success(result.urls, stamp, config.sitemap_path.name)
    logger.info(outcome.message)
    return outcome
