import asyncio
from types import SimpleNamespace

import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer


@pytest_asyncio.fixture
async def http_server():
    hits: list[str] = []

    async def ok(request):
        hits.append(request.path_qs)
        return web.Response(text="ok")

    async def unavailable(request):
        hits.append(request.path_qs)
        return web.Response(status=503, text="busy")

    async def slow(request):
        hits.append(request.path_qs)
        await asyncio.sleep(1.0)
        return web.Response(text="late")

    async def truncated(request):
        hits.append(request.path_qs)
        resp = web.StreamResponse()
        resp.content_length = 100
        await resp.prepare(request)
        await resp.write(b"x" * 10)
        request.transport.close()
        return resp

    app = web.Application()
    app.router.add_get("/ok", ok)
    app.router.add_get("/unavailable", unavailable)
    app.router.add_get("/slow", slow)
    app.router.add_get("/truncated", truncated)

    server = TestServer(app)
    await server.start_server()
    yield SimpleNamespace(url=lambda path: str(server.make_url(path)), hits=hits)
    await server.close()
