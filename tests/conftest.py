from __future__ import annotations

import logging
import ssl
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path
from typing import Dict, Optional, Union

import pytest
import pytest_asyncio
import trustme
from aiohttp import web

from site_mapper.config import MapperConfig
from site_mapper.logger import LOGGER_NAME

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def page(body: str) -> Handler:
    """Handler returning *body* as text/html."""

    async def _handle(_):
        return web.Response(text=body, content_type="text/html")

    return _handle


def links(*hrefs: str) -> Handler:
    """Handler for a page consisting only of anchors to *hrefs*."""
    return page("".join(f'<a href="{h}">{h}</a>' for h in hrefs))


def status(code: int) -> Handler:
    async def _handle(_):
        return web.Response(status=code, text="nope")

    return _handle


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[..., Awaitable[str]]]:
    """Start an aiohttp app for a ``{path: handler}`` map, yield its base URL."""
    runners: list[web.AppRunner] = []

    async def _serve(routes: Dict[str, Handler], ssl_context: Optional[ssl.SSLContext] = None) -> str:
        app = web.Application()
        for path, handler in routes.items():
            app.router.add_get(path, handler)
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        await web.TCPSite(runner, "127.0.0.1", port, ssl_context=ssl_context).start()
        runners.append(runner)
        scheme = "https" if ssl_context else "http"
        return f"{scheme}://127.0.0.1:{port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., MapperConfig]:
    """Build a MapperConfig whose artifacts live under tmp_path."""

    def _make(start_url: str, **overrides: Union[str, float, int, bool, Path]) -> MapperConfig:
        values = {
            "start_url": start_url,
            "timeout": 2.0,
            "user_agent": "TestAgent/1.0",
            "sitemap_path": tmp_path / "sitemap.xml",
            "history_path": tmp_path / "sitemap_log.csv",
        }
        values.update(overrides)
        return MapperConfig(**values)

    return _make


@pytest.fixture(autouse=True)
def _reset_logger():
    """CLI tests bind handlers to CliRunner streams; drop them afterwards."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    lg.handlers.clear()
    lg.propagate = True


@pytest.fixture()
def self_signed_tls() -> ssl.SSLContext:
    """Server-side TLS context with a certificate no client trusts."""
    ca = trustme.CA()
    cert = ca.issue_cert("127.0.0.1")
    ctx = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    cert.configure_cert(ctx)
    return ctx
