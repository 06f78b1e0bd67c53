# site_mapper/crawler/fetcher.py
"""
Fetcher module: one bounded-timeout GET per URL, redirects followed, no retries.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_mapper.crawler.models import PageResult
from site_mapper.errors import FetchError
from site_mapper.logger import logger

#: final statuses treated as a successful fetch, redirects already followed
SUCCESS_RANGE = range(200, 400)


class Fetcher:
    """Retrieves raw page content and classifies the outcome."""

    def __init__(self, session: ClientSession, timeout: float) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be > 0")
        self.session = session
        self.timeout = ClientTimeout(total=timeout)

    async def fetch(self, url: str) -> PageResult:
        """
        Fetch *url* once.

        Returns PageResult with content on success, or with a FetchError for
        timeouts, TLS and connection failures, and statuses outside [200, 400).
        """
        try:
            async with self.session.get(
                url,
                timeout=self.timeout,
                allow_redirects=True,
                raise_for_status=False,
            ) as resp:
                status = resp.status
                if status not in SUCCESS_RANGE:
                    logger.debug("Skip %s: HTTP %d", url, status)
                    return PageResult(url, error=FetchError(url, f"HTTP {status}", status), status=status)
                body = await resp.read()
                charset = resp.charset or "utf-8"
                try:
                    text = body.decode(charset, errors="replace")
                except LookupError:
                    text = body.decode("utf-8", errors="replace")
                return PageResult(url, content=text, status=status)
        except asyncio.TimeoutError:
            logger.warning("Timeout fetching %s", url)
            return PageResult(url, error=FetchError(url, "timeout"))
        except (ClientError, ValueError) as exc:
            # TLS/certificate errors, refused connections, malformed URLs
            logger.warning("Failed %s: %s", url, exc)
            return PageResult(url, error=FetchError(url, str(exc) or type(exc).__name__))
