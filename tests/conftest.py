"""Shared fixtures: an in-process aiohttp server for request tests."""

import asyncio
import io
from collections.abc import Awaitable
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

Scenario = Callable[[TestServer], Awaitable[Any]]


async def _echo(request: web.Request) -> web.Response:
    form = await request.post() if request.can_read_body else {}
    lines = [
        f"method={request.method}",
        f"query={request.rel_url.raw_query_string}",
        f"x-token={request.headers.get('X-Token', '')}",
        f"form={'&'.join(f'{k}={v}' for k, v in form.items())}",
        f"cookie={request.cookies.get('session', '')}",
    ]
    return web.Response(text="\n".join(lines))


async def _not_found(request: web.Request) -> web.Response:
    return web.Response(status=404, text="nothing here")


async def _server_error(request: web.Request) -> web.Response:
    return web.Response(status=500, text="boom")


async def _set_cookie(request: web.Request) -> web.Response:
    response = web.Response(text="cookie set")
    response.set_cookie("session", request.query.get("value", "abc"))
    return response


async def _slow(request: web.Request) -> web.Response:
    await asyncio.sleep(float(request.query.get("delay", "0.2")))
    return web.Response(text=f"slow {request.query.get('delay', '0.2')}")


async def _redirect(request: web.Request) -> web.Response:
    raise web.HTTPFound("/echo")


def make_app() -> web.Application:
    app = web.Application()
    app.router.add_route("*", "/echo", _echo)
    app.router.add_get("/missing", _not_found)
    app.router.add_get("/error", _server_error)
    app.router.add_get("/cookie", _set_cookie)
    app.router.add_get("/slow", _slow)
    app.router.add_get("/redirect", _redirect)
    return app


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "http.log"


@pytest.fixture
def echo_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def serve() -> Callable[[Scenario], Any]:
    """Run an async scenario against a fresh in-process server and return its result."""

    def run(scenario: Scenario) -> Any:
        async def main() -> Any:
            async with TestServer(make_app()) as server:
                return await scenario(server)

        return asyncio.run(main())

    return run
