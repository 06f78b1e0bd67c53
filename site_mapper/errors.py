"""
Error kinds of a SiteMapper run.

``FetchError`` travels by value inside :class:`~site_mapper.crawler.models.PageResult`,
the run-level kinds end up in :class:`~site_mapper.crawler.models.RunResult`.
"""
from __future__ import annotations

from typing import Optional

__all__ = ("SiteMapperError", "FetchError", "ZeroResultsError", "WriteError")


class SiteMapperError(Exception):
    """Base class for all SiteMapper errors."""


class FetchError(SiteMapperError):
    """A single page could not be retrieved."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class ZeroResultsError(SiteMapperError):
    """Not a single page, the seed included, was fetched."""

    def __init__(self, message: str = "No URLs were discovered. The target site may be offline or blocking requests.") -> None:
        super().__init__(message)


class WriteError(SiteMapperError):
    """Sitemap or history file could not be written."""

    def __init__(self, path, cause: Exception) -> None:
        super().__init__(f"Failed to write {path}: {getattr(cause, 'strerror', None) or cause}")
        self.path = path
        self.cause = cause
