from .enums import (
    OrderType, OrderStatus, OrderFailure, Side, TimeInForce, OrderRespType, CancelReplaceMode,
    SelfTradePreventionMode, TickerRespType, KlineInterval, SymbolStatus, is_valid_window_size
)
from .requests import (
    Request, DepthRequest, TradeRequest, HistoricalTradeRequest, AggregatedTradeRequest, KlinesRequest,
    AvgPriceRequest, TickerPriceRequest, TickerPricesRequest, BookTickerRequest, BookTickersRequest,
    Ticker24hRequest, Tickers24hRequest, TickerRequest, TickersRequest,
    OrderRequest, CancelReplaceOrderRequest, QueryOrderRequest, CancelOrderRequest, CancelOpenOrdersRequest,
    OpenOrdersRequest, AllOrdersRequest,
    OCORequest, CancelOCORequest, QueryOCORequest, AllOCORequest,
    AccountTradesRequest, PreventedMatchesRequest, DataStreamRequest
)
from .responses import (
    ErrorResponse, ServerTime, PriceLevel, Depth, Trade, AggregatedTrade, Kline, AvgPrice, SymbolPrice,
    BookTicker, TickerStatMini, TickerStat, TickerStatFull,
    OrderRespAck, OrderRespResult, OrderRespFull, OrderFill, QueryOrder, CancelOrder, CancelReplaceOrder,
    OCOOrderRef, OCOOrder, Balance, CommissionRates, AccountInfo, AccountTrade, RateLimit, PreventedMatch,
    DataStream, SymbolFilter, SymbolInfo, ExchangeInfo
)

__all__ = [
    # Enums
    "OrderType", "OrderStatus", "OrderFailure", "Side", "TimeInForce", "OrderRespType", "CancelReplaceMode",
    "SelfTradePreventionMode", "TickerRespType", "KlineInterval", "SymbolStatus", "is_valid_window_size",
    # Requests
    "Request", "DepthRequest", "TradeRequest", "HistoricalTradeRequest", "AggregatedTradeRequest", "KlinesRequest",
    "AvgPriceRequest", "TickerPriceRequest", "TickerPricesRequest", "BookTickerRequest", "BookTickersRequest",
    "Ticker24hRequest", "Tickers24hRequest", "TickerRequest", "TickersRequest",
    "OrderRequest", "CancelReplaceOrderRequest", "QueryOrderRequest", "CancelOrderRequest",
    "CancelOpenOrdersRequest", "OpenOrdersRequest", "AllOrdersRequest",
    "OCORequest", "CancelOCORequest", "QueryOCORequest", "AllOCORequest",
    "AccountTradesRequest", "PreventedMatchesRequest", "DataStreamRequest",
    # Responses
    "ErrorResponse", "ServerTime", "PriceLevel", "Depth", "Trade", "AggregatedTrade", "Kline", "AvgPrice",
    "SymbolPrice", "BookTicker", "TickerStatMini", "TickerStat", "TickerStatFull",
    "OrderRespAck", "OrderRespResult", "OrderRespFull", "OrderFill", "QueryOrder", "CancelOrder",
    "CancelReplaceOrder", "OCOOrderRef", "OCOOrder", "Balance", "CommissionRates", "AccountInfo",
    "AccountTrade", "RateLimit", "PreventedMatch", "DataStream", "SymbolFilter", "SymbolInfo", "ExchangeInfo",
]
