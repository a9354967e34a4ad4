"""Stream name suffixes, appended to the lowercased symbol."""

from binance_api.config.structs import DEFAULT_STREAM_URL

DEPTH_STREAM = "@depth"
TICKER_STREAM = "@ticker"
WINDOW_TICKER_STREAM = "@ticker_"
MINI_TICKER_STREAM = "@miniTicker"
BOOK_TICKER_STREAM = "@bookTicker"
KLINE_STREAM = "@kline_"
AGG_TRADE_STREAM = "@aggTrade"
TRADE_STREAM = "@trade"
ALL_MARKET_TICKERS_STREAM = "!ticker@arr"
ALL_MARKET_WINDOW_TICKERS_STREAM = "!ticker_"
ALL_MARKET_MINI_TICKERS_STREAM = "!miniTicker@arr"
ARRAY_SUFFIX = "@arr"

# Depth update speed
FREQUENCY_1000MS = "@1000ms"
FREQUENCY_100MS = "@100ms"
FREQUENCIES = frozenset({FREQUENCY_1000MS, FREQUENCY_100MS})

# Partial book depth levels
DEPTH_LEVELS = frozenset({5, 10, 20})

__all__ = [
    "DEFAULT_STREAM_URL",
    "DEPTH_STREAM",
    "TICKER_STREAM",
    "WINDOW_TICKER_STREAM",
    "MINI_TICKER_STREAM",
    "BOOK_TICKER_STREAM",
    "KLINE_STREAM",
    "AGG_TRADE_STREAM",
    "TRADE_STREAM",
    "ALL_MARKET_TICKERS_STREAM",
    "ALL_MARKET_WINDOW_TICKERS_STREAM",
    "ALL_MARKET_MINI_TICKERS_STREAM",
    "ARRAY_SUFFIX",
    "FREQUENCY_1000MS",
    "FREQUENCY_100MS",
    "FREQUENCIES",
    "DEPTH_LEVELS",
]
