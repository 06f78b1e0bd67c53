"""Crawl engine: fetcher, link extractor, normalizer and the BFS driver."""

from site_mapper.crawler.crawler import AsyncCrawler, CrawlState
from site_mapper.crawler.fetcher import Fetcher
from site_mapper.crawler.link_extractor import extract_links, normalize_url
from site_mapper.crawler.models import CrawlResult, CrawlTarget, PageResult

__all__ = [
    "AsyncCrawler",
    "CrawlState",
    "CrawlResult",
    "CrawlTarget",
    "Fetcher",
    "PageResult",
    "extract_links",
    "normalize_url",
]
