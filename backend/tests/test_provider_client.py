"""
ローカルのaiohttpサーバーを使った ProviderClient のテスト
"""
import asyncio
import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from unittest.mock import MagicMock

from city_explorer.errors import MalformedResponse, NetworkFailure
from city_explorer.services.provider_client import ProviderClient


async def echo(request):
    return web.json_response({
        "query": dict(request.query),
        "authorization": request.headers.get("Authorization"),
    })


async def broken(request):
    return web.json_response({"error": "upstream down"}, status=503)


async def not_json(request):
    return web.Response(text="<html>maintenance</html>", content_type="text/html")


def make_app():
    app = web.Application()
    app.router.add_get("/echo", echo)
    app.router.add_get("/broken", broken)
    app.router.add_get("/html", not_json)
    return app


def run_against_server(call):
    """ローカルサーバーを起動して `call(client, server)` を実行し、後片付けする"""
    async def scenario():
        async with TestServer(make_app()) as server:
            client = ProviderClient()
            await client.connect()
            try:
                return await call(client, server)
            finally:
                await client.close()

    return asyncio.run(scenario())


class TestProviderClient:

    def test_returns_parsed_json_with_params_and_headers(self):
        body = run_against_server(lambda client, server: client.get_json(
            str(server.make_url("/echo")),
            params={"term": "restaurants", "latitude": "47.6"},
            headers={"Authorization": "Bearer yelp-key"},
        ))

        assert body == {
            "query": {"term": "restaurants", "latitude": "47.6"},
            "authorization": "Bearer yelp-key",
        }

    def test_non_2xx_raises_network_failure(self):
        with pytest.raises(NetworkFailure, match="503"):
            run_against_server(lambda client, server: client.get_json(str(server.make_url("/broken"))))

    def test_non_json_body_raises_malformed_response(self):
        with pytest.raises(MalformedResponse):
            run_against_server(lambda client, server: client.get_json(str(server.make_url("/html"))))

    def test_unreachable_host_raises_network_failure(self):
        async def scenario():
            server = TestServer(make_app())
            await server.start_server()
            url = str(server.make_url("/echo"))
            await server.close()

            client = ProviderClient()
            await client.connect()
            try:
                await client.get_json(url)
            finally:
                await client.close()

        with pytest.raises(NetworkFailure):
            asyncio.run(scenario())

    def test_not_connected_raises_network_failure(self):
        with pytest.raises(NetworkFailure):
            asyncio.run(ProviderClient().get_json("http://localhost/never"))

    def test_close_is_idempotent(self):
        async def scenario():
            client = ProviderClient()
            await client.connect()
            await client.close()
            await client.close()
            return client.session

        assert asyncio.run(scenario()) is None

    def test_session_has_no_timeout(self):
        """上流呼び出しにはタイムアウトを設けない"""
        async def scenario():
            client = ProviderClient()
            await client.connect()
            try:
                return client.session.timeout
            finally:
                await client.close()

        timeout = asyncio.run(scenario())

        assert timeout.total is None
        assert timeout.connect is None
        assert timeout.sock_connect is None
        assert timeout.sock_read is None

    def test_timeout_error_raises_network_failure(self):
        session = MagicMock(spec=aiohttp.ClientSession)
        session.get.side_effect = asyncio.TimeoutError()
        client = ProviderClient(session=session)

        with pytest.raises(NetworkFailure):
            asyncio.run(client.get_json("https://weather.test/forecast"))
