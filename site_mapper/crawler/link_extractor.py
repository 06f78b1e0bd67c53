"""
Link extraction and URL normalization utilities for SiteMapper.
"""
from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

_SKIP_SCHEMES = re.compile(r"^(mailto:|tel:|javascript:)", re.IGNORECASE)
_ABSOLUTE_HTTP = re.compile(r"^https?://", re.IGNORECASE)
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def extract_links(html: str) -> List[str]:
    """
    Return the raw ``href`` of every anchor, stripped of whitespace.

    Uses the forgiving ``html.parser`` backend, so broken markup yields
    whatever anchors could be recovered instead of an error. Empty values are
    dropped; nothing is resolved, filtered or deduplicated here.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if raw:
            links.append(raw)
    return links


def normalize_url(href: str, base_url: str, base_host: str) -> Optional[str]:
    """
    Turn a raw href into an absolute, fragment-free URL on *base_host*.

    Returns None for mailto:/tel:/javascript: links and for other hosts.
    Relative hrefs are glued onto *base_url* (``base/ + href``) rather than
    resolved per RFC 3986, so ``a/b`` found on ``/x/y`` still becomes
    ``<base>/a/b``. Trailing slashes and query strings are left as they are;
    scheme and host are lowercased and control characters percent-encoded.
    """
    href = _CONTROL_CHARS.sub(lambda m: f"%{ord(m.group()):02X}", href.strip())
    if not href or _SKIP_SCHEMES.match(href):
        return None

    if href.startswith("//"):
        scheme = urlsplit(base_url).scheme or "https"
        href = f"{scheme}:{href}"
    elif not _ABSOLUTE_HTTP.match(href):
        href = base_url.rstrip("/") + "/" + href.lstrip("/")

    try:
        host = urlsplit(href).hostname or ""
    except ValueError:
        return None
    if host != base_host.lower():
        return None

    return lower_scheme_host(href.split("#", 1)[0])


def lower_scheme_host(url: str) -> str:
    """Lowercase the scheme and host of an absolute URL, leave the rest untouched."""
    parts = urlsplit(url)
    prefix_len = len(parts.scheme) + 3 + len(parts.netloc)
    if url[:prefix_len].lower() != f"{parts.scheme}://{parts.netloc}".lower():
        return url
    userinfo, at, hostport = parts.netloc.rpartition("@")
    return f"{parts.scheme.lower()}://{userinfo}{at}{hostport.lower()}" + url[prefix_len:]
