"""site_mapper.sitemap: сборка, запись и чтение sitemap.xml (протокол sitemaps.org 0.9)."""

from __future__ import annotations

import contextlib
import os
from datetime import date
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from lxml import etree

from site_mapper.crawler.models import SitemapEntry
from site_mapper.errors import WriteError
from site_mapper.logger import logger

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

__all__ = ("SITEMAP_NS", "build_urlset", "write_sitemap", "read_sitemap")


def build_urlset(entries: Iterable[SitemapEntry]) -> etree._Element:
    """Build the ``<urlset>`` tree, one ``<url>`` per entry, in the given order."""
    root = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})
    for entry in entries:
        url = etree.SubElement(root, f"{{{SITEMAP_NS}}}url")
        etree.SubElement(url, f"{{{SITEMAP_NS}}}loc").text = entry.loc
        etree.SubElement(url, f"{{{SITEMAP_NS}}}lastmod").text = entry.lastmod.isoformat()
    return root


def write_sitemap(urls: Sequence[str], lastmod: date, path: Union[str, Path]) -> Path:
    """Serialize *urls* to *path*, every entry stamped with *lastmod*.

    The document goes to ``<path>.tmp`` first and is renamed over *path*, so a
    crash mid-write leaves the previous sitemap intact.

    Args:
        urls: page URLs, written in this order.
        lastmod: run date, used for every ``<lastmod>``.
        path: destination file.

    Returns:
        Path of the written sitemap.

    Raises:
        WriteError: a URL is not XML-safe, or the file could not be
            written or renamed. The destination is left untouched.
    """
    dest = Path(path)
    tmp = dest.with_name(dest.name + ".tmp")
    try:
        root = build_urlset(SitemapEntry(u, lastmod) for u in urls)
    except ValueError as exc:
        logger.error("Sitemap not serializable: %s", exc)
        raise WriteError(dest, exc) from exc
    data = etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, dest)
    except OSError as exc:
        logger.error("Sitemap write failed: %s", exc)
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise WriteError(dest, exc) from exc
    logger.info("Sitemap written: %s (%d URLs)", dest, len(urls))
    return dest


def read_sitemap(path: Union[str, Path]) -> List[str]:
    """Разбирает sitemap и возвращает список URL из тегов <loc>.

    Пример:
    ```python
    from site_mapper.sitemap import read_sitemap
    print(read_sitemap('sitemap.xml'))
    ```
    """
    parser = etree.XMLParser(ns_clean=True, recover=True)
    root = etree.fromstring(Path(path).read_bytes(), parser=parser)
    if root is None:
        return []
    locs = root.findall(".//{*}loc")
    return [loc.text.strip() for loc in locs if loc.text]
