"""
REST client facade.

Usage:
    config = load_config()
    async with Client(config.rest) as client:
        depth = await client.depth(DepthRequest(symbol="BTCUSDT", limit=5))
        ack = await client.new_order(OrderRequest(
            symbol="LTCBTC", side=Side.SELL, order_type=OrderType.LIMIT, quantity="1", price="0.1",
        ))
"""

from typing import Dict, Optional

import aiohttp

from binance_api.config.structs import RestClientConfig
from binance_api.rest import AccountApi, MarketDataApi, TradingApi
from binance_api.transport.rest_client import RestClient, create_rest_client
from binance_api.transport.structs import RateLimitUsage


class Client(MarketDataApi, TradingApi, AccountApi):
    """
    All REST endpoints over one transport.

    Args:
        config: REST configuration, defaults to the public endpoint without credentials
        rest_client: Prebuilt transport, takes precedence over config
        session: aiohttp session to use instead of an owned one
    """

    def __init__(
        self,
        config: Optional[RestClientConfig] = None,
        rest_client: Optional[RestClient] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        super().__init__(rest_client or create_rest_client(config, session))

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self._rest_client.close()

    def set_window(self, recv_window: int) -> "Client":
        """Set recvWindow in milliseconds for signed calls."""
        self._rest_client.set_window(recv_window)
        return self

    def used_weight(self) -> Dict[str, int]:
        return self._rest_client.used_weight()

    def order_count(self) -> Dict[str, int]:
        return self._rest_client.order_count()

    def retry_after(self) -> Optional[int]:
        return self._rest_client.retry_after()

    def usage_snapshot(self) -> RateLimitUsage:
        return self._rest_client.usage_snapshot()
