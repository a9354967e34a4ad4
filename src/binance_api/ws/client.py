"""
WebSocket client opening the named market streams and the user data stream.

Each call dials a new connection for one stream:
    <stream_url><lowercased symbol><stream suffix>

Usage:
    ws_client = WsClient(config.websocket)
    async with await ws_client.diff_depth("BTCUSDT", FREQUENCY_100MS) as depth:
        async for update in depth.stream():
            ...
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Type, Union

import websockets
from websockets.exceptions import WebSocketException

from binance_api.config.structs import WebSocketConfig
from binance_api.exceptions import (
    EmptySymbolError,
    InvalidTickerWindowError,
    NetworkError,
    RequestValidationError,
)
from binance_api.rest.account import mask_listen_key
from binance_api.structs.enums import KlineInterval, is_valid_window_size
from . import endpoints
from .account import AccountStream
from .connection import StreamConnection
from .events import (
    AggTradeUpdate,
    BookTickerUpdate,
    DepthLevelUpdate,
    DepthUpdate,
    KlineUpdate,
    MiniTickerUpdate,
    TickerUpdate,
    TradeUpdate,
)

Connector = Callable[[str], Awaitable[Any]]


def _symbol_path(symbol: str) -> str:
    if not symbol:
        raise EmptySymbolError()
    return symbol.lower()


def _check_frequency(frequency: str) -> None:
    if frequency not in endpoints.FREQUENCIES:
        raise RequestValidationError(f"invalid depth frequency: {frequency!r}")


def _check_window(window: str) -> None:
    if not is_valid_window_size(window):
        raise InvalidTickerWindowError()


class WsClient:
    """
    Factory for stream connections.

    Args:
        config: Stream host and connection settings
        connector: Async callable ``url -> websocket``, replaces the default dialer
    """

    def __init__(self, config: Optional[WebSocketConfig] = None, connector: Optional[Connector] = None):
        self.config = config or WebSocketConfig()
        self.config.validate()
        self._connector = connector or self._connect
        self.logger = logging.getLogger(__name__)

    async def _connect(self, url: str) -> Any:
        return await websockets.connect(
            url,
            open_timeout=self.config.open_timeout,
            ping_interval=self.config.ping_interval,
            ping_timeout=self.config.ping_timeout,
            close_timeout=self.config.close_timeout,
            max_size=self.config.max_message_size,
            # Disable compression for CPU optimization
            compression=None,
        )

    async def _dial(self, path: str, log_name: str) -> Any:
        url = f"{self.config.stream_url}{path}"
        try:
            ws = await self._connector(url)
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            self.logger.error("Failed to open stream %s: %s", log_name, e)
            raise NetworkError(f"Failed to open stream {log_name}: {e}") from e

        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info("Stream %s opened", log_name)
        return ws

    async def _open(self, path: str, event_type: Union[Type[Any], Any]) -> StreamConnection:
        ws = await self._dial(path, path)
        return StreamConnection(ws, event_type, self.config, name=path)

    # Depth

    async def diff_depth(
        self, symbol: str, frequency: str = endpoints.FREQUENCY_1000MS
    ) -> StreamConnection[DepthUpdate]:
        """Depth updates to manage a local order book."""
        _check_frequency(frequency)
        path = f"{_symbol_path(symbol)}{endpoints.DEPTH_STREAM}{frequency}"
        return await self._open(path, DepthUpdate)

    async def depth_level(
        self, symbol: str, level: int, frequency: str = endpoints.FREQUENCY_1000MS
    ) -> StreamConnection[DepthLevelUpdate]:
        """Top 5, 10 or 20 book levels."""
        if level not in endpoints.DEPTH_LEVELS:
            raise RequestValidationError(f"invalid depth level: {level!r}")
        _check_frequency(frequency)
        path = f"{_symbol_path(symbol)}{endpoints.DEPTH_STREAM}{level}{frequency}"
        return await self._open(path, DepthLevelUpdate)

    # Klines and trades

    async def klines(self, symbol: str, interval: Union[KlineInterval, str]) -> StreamConnection[KlineUpdate]:
        try:
            interval_value = KlineInterval(interval).value
        except ValueError:
            raise RequestValidationError(f"invalid kline interval: {interval!r}") from None
        path = f"{_symbol_path(symbol)}{endpoints.KLINE_STREAM}{interval_value}"
        return await self._open(path, KlineUpdate)

    async def agg_trades(self, symbol: str) -> StreamConnection[AggTradeUpdate]:
        return await self._open(f"{_symbol_path(symbol)}{endpoints.AGG_TRADE_STREAM}", AggTradeUpdate)

    async def trades(self, symbol: str) -> StreamConnection[TradeUpdate]:
        return await self._open(f"{_symbol_path(symbol)}{endpoints.TRADE_STREAM}", TradeUpdate)

    # Tickers

    async def individual_ticker(self, symbol: str) -> StreamConnection[TickerUpdate]:
        """24hr rolling window statistics for one symbol, every second."""
        return await self._open(f"{_symbol_path(symbol)}{endpoints.TICKER_STREAM}", TickerUpdate)

    async def individual_rolling_window_ticker(self, symbol: str, window: str) -> StreamConnection[TickerUpdate]:
        """Statistics for a custom window: 1h, 4h or 1d on the exchange side."""
        _check_window(window)
        path = f"{_symbol_path(symbol)}{endpoints.WINDOW_TICKER_STREAM}{window}"
        return await self._open(path, TickerUpdate)

    async def individual_mini_ticker(self, symbol: str) -> StreamConnection[MiniTickerUpdate]:
        return await self._open(f"{_symbol_path(symbol)}{endpoints.MINI_TICKER_STREAM}", MiniTickerUpdate)

    async def individual_book_ticker(self, symbol: str) -> StreamConnection[BookTickerUpdate]:
        """Best bid/ask updates in real time."""
        return await self._open(f"{_symbol_path(symbol)}{endpoints.BOOK_TICKER_STREAM}", BookTickerUpdate)

    async def all_market_tickers(self) -> StreamConnection[List[TickerUpdate]]:
        """24hr statistics of the symbols that changed, as one array per second."""
        return await self._open(endpoints.ALL_MARKET_TICKERS_STREAM, List[TickerUpdate])

    async def all_market_rolling_window_tickers(self, window: str) -> StreamConnection[List[TickerUpdate]]:
        _check_window(window)
        path = f"{endpoints.ALL_MARKET_WINDOW_TICKERS_STREAM}{window}{endpoints.ARRAY_SUFFIX}"
        return await self._open(path, List[TickerUpdate])

    async def all_market_mini_tickers(self) -> StreamConnection[List[MiniTickerUpdate]]:
        return await self._open(endpoints.ALL_MARKET_MINI_TICKERS_STREAM, List[MiniTickerUpdate])

    # User data

    async def account_info(self, listen_key: str, fast_path: bool = True) -> AccountStream:
        """
        User data stream for a listen key obtained from ``Client.data_stream()``.

        The listen key must be kept alive by the caller with ``data_stream_keep_alive``.
        """
        if not listen_key:
            raise RequestValidationError("listen key must be set")
        log_name = mask_listen_key(listen_key)
        ws = await self._dial(listen_key, log_name)
        return AccountStream(ws, self.config, name=log_name, fast_path=fast_path)
