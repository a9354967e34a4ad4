"""Tests for the aiohttp transport against a fake session."""

import asyncio

import aiohttp
import pytest

from binance_api.client import Client
from binance_api.config.structs import RestClientConfig
from binance_api.exceptions import ConfigurationError, NetworkError
from binance_api.structs.requests import TickerPricesRequest
from binance_api.transport.rest_client import AiohttpRestClient, create_rest_client
from binance_api.transport.structs import HTTPMethod


class FakeResponse:

    def __init__(self, status=200, body=b"{}", headers=None):
        self.status = status
        self.headers = headers or {}
        self._body = body

    async def read(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.requests = []
        self.closed = False

    def request(self, method, url, data=None, headers=None):
        self.requests.append((method, url, data, headers))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


class TestAiohttpRestClient:

    @pytest.mark.asyncio
    async def test_url_and_query_sent_verbatim(self):
        session = FakeSession()
        rest_client = AiohttpRestClient(session=session)

        await rest_client.execute(
            HTTPMethod.GET, "/api/v3/ticker/price", TickerPricesRequest(symbols=["BTCUSDT", "BNBUSDT"])
        )

        method, url, data, headers = session.requests[0]
        assert method == "GET"
        assert url.host == "api.binance.com"
        assert url.path == "/api/v3/ticker/price"
        assert url.raw_query_string == "symbols=%5B%22BTCUSDT%22%2C%22BNBUSDT%22%5D"
        assert data is None
        assert headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_form_body(self):
        session = FakeSession()
        rest_client = AiohttpRestClient(RestClientConfig(api_key="key", api_secret="secret"), session=session)

        await rest_client.execute(HTTPMethod.POST, "/api/v3/userDataStream", stream=True)
        await rest_client.execute(HTTPMethod.POST, "/api/v3/order/test", sign=True)

        _, stream_url, stream_data, stream_headers = session.requests[0]
        assert stream_data is None
        assert stream_headers["X-MBX-APIKEY"] == "key"

        _, url, data, _ = session.requests[1]
        assert url.raw_query_string == ""
        assert data.startswith(b"timestamp=")
        assert b"&signature=" in data

    @pytest.mark.asyncio
    async def test_response_headers_update_usage(self):
        session = FakeSession(FakeResponse(headers={"X-MBX-USED-WEIGHT-1M": "12"}))
        rest_client = AiohttpRestClient(session=session)

        await rest_client.execute(HTTPMethod.GET, "/api/v3/ping")

        assert rest_client.used_weight() == {"1m": 12}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ])
    async def test_transport_failure_is_network_error(self, error):
        rest_client = AiohttpRestClient(session=FakeSession(error=error))

        with pytest.raises(NetworkError):
            await rest_client.execute(HTTPMethod.GET, "/api/v3/ping")

    @pytest.mark.asyncio
    async def test_caller_session_left_open(self):
        session = FakeSession()
        async with AiohttpRestClient(session=session) as rest_client:
            await rest_client.execute(HTTPMethod.GET, "/api/v3/ping")

        assert session.closed is False

    @pytest.mark.asyncio
    async def test_closed_caller_session_is_not_replaced(self):
        session = FakeSession()
        session.closed = True
        rest_client = AiohttpRestClient(session=session)

        with pytest.raises(NetworkError):
            await rest_client.execute(HTTPMethod.GET, "/api/v3/ping")

    @pytest.mark.asyncio
    async def test_owned_session_lifecycle(self):
        rest_client = AiohttpRestClient(RestClientConfig(max_connections=4))
        session = await rest_client._ensure_session()

        assert session.connector.limit == 4
        await rest_client.close()
        assert session.closed

    @pytest.mark.asyncio
    async def test_client_over_session(self):
        session = FakeSession(FakeResponse(body=b'{"serverTime": 1499827319559}'))
        async with Client(session=session) as client:
            assert await client.server_time() == 1499827319559
        assert session.closed is False

    def test_http_base_url_rejected(self):
        with pytest.raises(ConfigurationError):
            AiohttpRestClient(RestClientConfig(base_url="http://api.binance.com"))

    def test_factory(self):
        assert isinstance(create_rest_client(), AiohttpRestClient)
