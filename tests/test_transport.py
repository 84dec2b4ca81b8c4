from __future__ import annotations

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from pytransit._transport import HttpTransport
from pytransit.exceptions import TransitTransportError


async def _vehicles(request: web.Request) -> web.Response:
    body = await request.json()
    return web.json_response({"vehicles": [{"route": body["route"]}]})


async def _broken(request: web.Request) -> web.Response:
    return web.Response(status=503, text="maintenance")


async def _not_json(request: web.Request) -> web.Response:
    return web.Response(status=200, text="<html>")


@pytest_asyncio.fixture
async def server():
    app = web.Application()
    app.router.add_post("/vehicles", _vehicles)
    app.router.add_get("/broken", _broken)
    app.router.add_get("/html", _not_json)
    test_server = test_utils.TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest.mark.asyncio
async def test_post_json_round_trip(server: test_utils.TestServer) -> None:
    async with aiohttp.ClientSession() as session:
        transport = HttpTransport(session)
        result = await transport.post_json(str(server.make_url("/vehicles")), {"route": "505"})

    assert result == {"vehicles": [{"route": "505"}]}


@pytest.mark.asyncio
async def test_non_200_raises_with_status(server: test_utils.TestServer) -> None:
    async with aiohttp.ClientSession() as session:
        transport = HttpTransport(session)
        with pytest.raises(TransitTransportError) as excinfo:
            await transport.get_json(str(server.make_url("/broken")))

    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_invalid_json_raises(server: test_utils.TestServer) -> None:
    async with aiohttp.ClientSession() as session:
        transport = HttpTransport(session)
        with pytest.raises(TransitTransportError, match="Invalid JSON"):
            await transport.get_json(str(server.make_url("/html")))


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error() -> None:
    async with aiohttp.ClientSession() as session:
        transport = HttpTransport(session, timeout=2.0)
        with pytest.raises(TransitTransportError) as excinfo:
            await transport.get_json("http://127.0.0.1:9/unreachable")

    assert excinfo.value.status_code is None
