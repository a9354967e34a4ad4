"""
Market data endpoints.

All calls are unsigned. ``historical_trades`` sends the API key header.
"""

from typing import List, Optional

import msgspec

from binance_api import endpoints
from binance_api.exceptions import EmptyIntervalError, EmptySymbolError, InvalidTickerWindowError
from binance_api.structs.enums import (
    TickerRespType,
    is_valid_window_size,
    DEFAULT_DEPTH_LIMIT,
    MAX_DEPTH_LIMIT,
    DEFAULT_KLINES_LIMIT,
    MAX_KLINES_LIMIT,
    DEFAULT_TRADES_LIMIT,
    MAX_TRADES_LIMIT,
)
from binance_api.structs.requests import (
    AggregatedTradeRequest,
    AvgPriceRequest,
    BookTickerRequest,
    BookTickersRequest,
    DepthRequest,
    HistoricalTradeRequest,
    KlinesRequest,
    Ticker24hRequest,
    Tickers24hRequest,
    TickerPriceRequest,
    TickerPricesRequest,
    TickerRequest,
    TickersRequest,
    TradeRequest,
)
from binance_api.structs.responses import (
    AggregatedTrade,
    AvgPrice,
    BookTicker,
    Depth,
    ExchangeInfo,
    Kline,
    ServerTime,
    SymbolPrice,
    TickerStat,
    TickerStatFull,
    TickerStatMini,
    Trade,
)
from binance_api.transport.structs import HTTPMethod
from .base import BaseRestApi, clamp_limit, require_request, require_symbol


def _check_window(window_size: Optional[str]) -> None:
    if window_size and not is_valid_window_size(window_size):
        raise InvalidTickerWindowError()


class MarketDataApi(BaseRestApi):
    """Public market data: order book, trades, klines and tickers."""

    async def ping(self) -> None:
        """Test connectivity to the REST API."""
        await self._request(HTTPMethod.GET, endpoints.PING)

    async def server_time(self) -> int:
        """Server time in milliseconds."""
        response = await self._request(HTTPMethod.GET, endpoints.SERVER_TIME, response_type=ServerTime)
        return response.server_time

    async def exchange_info(self) -> ExchangeInfo:
        """Trading rules and symbol information."""
        return await self._request(HTTPMethod.GET, endpoints.EXCHANGE_INFO, response_type=ExchangeInfo)

    async def depth(self, request: DepthRequest) -> Depth:
        """Order book snapshot. Limit defaults to 100, at most 5000."""
        require_symbol(request)
        request = msgspec.structs.replace(
            request, limit=clamp_limit(request.limit, DEFAULT_DEPTH_LIMIT, MAX_DEPTH_LIMIT)
        )
        return await self._request(HTTPMethod.GET, endpoints.DEPTH, request, Depth)

    async def trades(self, request: TradeRequest) -> List[Trade]:
        """Recent trades."""
        require_symbol(request)
        request = msgspec.structs.replace(
            request, limit=clamp_limit(request.limit, DEFAULT_TRADES_LIMIT, MAX_TRADES_LIMIT)
        )
        return await self._request(HTTPMethod.GET, endpoints.TRADES, request, List[Trade])

    async def historical_trades(self, request: HistoricalTradeRequest) -> List[Trade]:
        """Older trades, requires the API key."""
        require_symbol(request)
        request = msgspec.structs.replace(
            request, limit=clamp_limit(request.limit, DEFAULT_TRADES_LIMIT, MAX_TRADES_LIMIT)
        )
        return await self._request(
            HTTPMethod.GET, endpoints.HISTORICAL_TRADES, request, List[Trade], stream=True
        )

    async def aggregated_trades(self, request: AggregatedTradeRequest) -> List[AggregatedTrade]:
        """
        Compressed trades: fills at the same time, from the same order, at the same price
        are aggregated into one entry.
        """
        require_symbol(request)
        request = msgspec.structs.replace(
            request, limit=clamp_limit(request.limit, DEFAULT_TRADES_LIMIT, MAX_TRADES_LIMIT)
        )
        return await self._request(HTTPMethod.GET, endpoints.AGG_TRADES, request, List[AggregatedTrade])

    async def klines(self, request: KlinesRequest) -> List[Kline]:
        """Candlestick bars, uniquely identified by their open time."""
        return await self._klines(endpoints.KLINES, request)

    async def ui_klines(self, request: KlinesRequest) -> List[Kline]:
        """Candlestick bars tuned for chart presentation."""
        return await self._klines(endpoints.UI_KLINES, request)

    async def _klines(self, path: str, request: KlinesRequest) -> List[Kline]:
        require_request(request)
        if not request.symbol or not request.interval:
            raise EmptyIntervalError()
        request = msgspec.structs.replace(
            request, limit=clamp_limit(request.limit, DEFAULT_KLINES_LIMIT, MAX_KLINES_LIMIT)
        )
        return await self._request(HTTPMethod.GET, path, request, List[Kline])

    async def avg_price(self, request: AvgPriceRequest) -> AvgPrice:
        """Current average price."""
        require_symbol(request)
        return await self._request(HTTPMethod.GET, endpoints.AVG_PRICE, request, AvgPrice)

    # 24hr statistics

    async def ticker_24h(self, request: Ticker24hRequest) -> TickerStatFull:
        require_symbol(request)
        return await self._request(HTTPMethod.GET, endpoints.TICKER_24H, request, TickerStatFull)

    async def tickers_24h(self, request: Optional[Tickers24hRequest] = None) -> List[TickerStatFull]:
        return await self._request(HTTPMethod.GET, endpoints.TICKER_24H, request, List[TickerStatFull])

    async def ticker_24h_mini(self, request: Ticker24hRequest) -> TickerStatMini:
        require_symbol(request)
        request = msgspec.structs.replace(request, resp_type=TickerRespType.MINI)
        return await self._request(HTTPMethod.GET, endpoints.TICKER_24H, request, TickerStatMini)

    async def tickers_24h_mini(self, request: Optional[Tickers24hRequest] = None) -> List[TickerStatMini]:
        request = msgspec.structs.replace(request or Tickers24hRequest(), resp_type=TickerRespType.MINI)
        return await self._request(HTTPMethod.GET, endpoints.TICKER_24H, request, List[TickerStatMini])

    # Rolling window statistics

    async def ticker(self, request: TickerRequest) -> TickerStat:
        require_request(request)
        _check_window(request.window_size)
        require_symbol(request)
        return await self._request(HTTPMethod.GET, endpoints.TICKER, request, TickerStat)

    async def ticker_mini(self, request: TickerRequest) -> TickerStatMini:
        require_request(request)
        _check_window(request.window_size)
        require_symbol(request)
        request = msgspec.structs.replace(request, resp_type=TickerRespType.MINI)
        return await self._request(HTTPMethod.GET, endpoints.TICKER, request, TickerStatMini)

    async def tickers(self, request: TickersRequest) -> List[TickerStat]:
        require_request(request)
        if not request.symbols:
            raise EmptySymbolError()
        _check_window(request.window_size)
        return await self._request(HTTPMethod.GET, endpoints.TICKER, request, List[TickerStat])

    async def tickers_mini(self, request: Optional[TickersRequest] = None) -> List[TickerStatMini]:
        if request is not None:
            _check_window(request.window_size)
        request = msgspec.structs.replace(request or TickersRequest(), resp_type=TickerRespType.MINI)
        return await self._request(HTTPMethod.GET, endpoints.TICKER, request, List[TickerStatMini])

    # Prices

    async def price(self, request: TickerPriceRequest) -> SymbolPrice:
        """Latest price for a symbol."""
        require_symbol(request)
        return await self._request(HTTPMethod.GET, endpoints.TICKER_PRICE, request, SymbolPrice)

    async def prices(self, request: Optional[TickerPricesRequest] = None) -> List[SymbolPrice]:
        """Latest prices for the given symbols, or for all symbols."""
        return await self._request(HTTPMethod.GET, endpoints.TICKER_PRICE, request, List[SymbolPrice])

    async def book_ticker(self, request: BookTickerRequest) -> BookTicker:
        """Best price and quantity on the order book."""
        require_symbol(request)
        return await self._request(HTTPMethod.GET, endpoints.TICKER_BOOK, request, BookTicker)

    async def book_tickers(self, request: Optional[BookTickersRequest] = None) -> List[BookTicker]:
        return await self._request(HTTPMethod.GET, endpoints.TICKER_BOOK, request, List[BookTicker])
