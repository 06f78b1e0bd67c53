from __future__ import annotations

import asyncio
import enum
import time
from typing import List, Optional, Set, cast

from aiohttp import ClientSession, TCPConnector

from site_mapper.config import MapperConfig
from site_mapper.crawler.fetcher import Fetcher
from site_mapper.crawler.link_extractor import extract_links, lower_scheme_host, normalize_url
from site_mapper.crawler.models import CrawlResult, CrawlTarget
from site_mapper.logger import logger

__all__ = ("CrawlState", "AsyncCrawler")


class CrawlState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class AsyncCrawler:
    """Breadth-first, single-host crawler over a shared FIFO frontier."""

    def __init__(self, config: MapperConfig) -> None:
        self.config = config
        self.target = CrawlTarget.parse(lower_scheme_host(config.start_url))
        self.visited: Set[str] = set()
        self.state = CrawlState.IDLE
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> AsyncCrawler:
        connector = None if self.config.verify_ssl else TCPConnector(ssl=False)
        self.session = ClientSession(
            headers={"User-Agent": self.config.user_agent},
            connector=connector,
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlResult:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        if self.state is not CrawlState.IDLE:
            raise RuntimeError(f"crawler already {self.state.value}")
        self.state = CrawlState.RUNNING
        logger.info("Crawl started: %s", self.target.url)
        start = time.monotonic()

        queue: asyncio.Queue[str] = asyncio.Queue()
        queue.put_nowait(self.target.url)
        results: List[str] = []
        failed: List[str] = []
        workers = [
            asyncio.create_task(self._worker(queue, results, failed))
            for _ in range(self.config.concurrency)
        ]
        await queue.join()
        for w in workers:
            w.cancel()
        await asyncio.gather(*workers, return_exceptions=True)

        self.state = CrawlState.DONE
        duration = time.monotonic() - start
        logger.info(
            "Crawl finished: %d pages, %d unreachable, %.2f s",
            len(results), len(failed), duration,
        )
        return CrawlResult(urls=sorted(results), visited=len(self.visited), failed=sorted(failed))

    async def _worker(self, queue: asyncio.Queue[str], results: List[str], failed: List[str]) -> None:
        fetcher = cast(Fetcher, self.fetcher)
        while True:
            url = await queue.get()
            try:
                # check-and-mark must not straddle an await
                if url in self.visited:
                    continue
                self.visited.add(url)

                page = await fetcher.fetch(url)
                if not page.ok:
                    failed.append(url)
                    continue
                hrefs = extract_links(page.content or "")
                results.append(url)

                for href in hrefs:
                    link = normalize_url(href, self.target.url, self.target.host)
                    if link is None:
                        logger.debug("Rejected link %r on %s", href, url)
                    elif link not in self.visited:
                        queue.put_nowait(link)
            except Exception:
                logger.exception("Unexpected error while processing %s", url)
                failed.append(url)
            finally:
                queue.task_done()
