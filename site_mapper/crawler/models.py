"""
Data models for the SiteMapper crawler and its artifacts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional
from urllib.parse import urlsplit

from site_mapper.errors import FetchError, SiteMapperError


@dataclass(frozen=True, slots=True)
class CrawlTarget:
    """Absolute URL admitted into the frontier, with its parsed scheme and host."""

    url: str
    scheme: str
    host: str

    @classmethod
    def parse(cls, url: str) -> CrawlTarget:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
        if not host:
            raise ValueError(f"URL has no host: {url!r}")
        return cls(url=url, scheme=parts.scheme.lower(), host=host)


@dataclass(slots=True)
class PageResult:
    """Outcome of fetching one URL: HTML text on success, a FetchError otherwise."""

    url: str
    content: Optional[str] = None
    error: Optional[FetchError] = None
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.content is not None


@dataclass(slots=True)
class CrawlResult:
    """Finished crawl: sorted page URLs plus bookkeeping for logs."""

    urls: List[str] = field(default_factory=list)
    visited: int = 0
    failed: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.urls)


@dataclass(frozen=True, slots=True)
class SitemapEntry:
    loc: str
    lastmod: date


@dataclass(frozen=True, slots=True)
class RunRecord:
    """One line of the run history: ``<ISO-8601 timestamp>,<count>``."""

    timestamp: datetime
    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")

    def to_line(self) -> str:
        return f"{self.timestamp.isoformat(timespec='seconds')},{self.count}\n"

    @classmethod
    def from_line(cls, line: str) -> RunRecord:
        ts, _, cnt = line.strip().partition(",")
        return cls(timestamp=datetime.fromisoformat(ts), count=int(cnt))


@dataclass(slots=True)
class RunResult:
    """What the "run crawl now" trigger hands back to its caller."""

    ok: bool
    message: str
    urls: List[str] = field(default_factory=list)
    error: Optional[SiteMapperError] = None
    timestamp: Optional[datetime] = None

    @property
    def count(self) -> int:
        return len(self.urls)

    @classmethod
    def success(cls, urls: List[str], timestamp: datetime, name: str = "sitemap.xml") -> RunResult:
        n = len(urls)
        message = f"Generated {name} with {n} URL" + ("" if n == 1 else "s")
        return cls(ok=True, message=message, urls=list(urls), timestamp=timestamp)

    @classmethod
    def failure(cls, error: SiteMapperError) -> RunResult:
        return cls(ok=False, message=str(error), error=error)
