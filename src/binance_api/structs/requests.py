"""
Request structures for the REST endpoints.

Field names are snake_case in Python and camelCase on the wire. Optional fields
default to None and are left out of the encoded query when empty. Sequence fields
are sent as repeated key=value pairs unless listed in ``json_array_fields``, in
which case the whole sequence is sent as one JSON array value (e.g. the
``symbols=["BTCUSDT","BNBUSDT"]`` convention of the ticker endpoints).
"""

from typing import ClassVar, FrozenSet, List, Optional, Union

import msgspec

from .enums import (
    CancelReplaceMode,
    KlineInterval,
    OrderRespType,
    OrderType,
    SelfTradePreventionMode,
    Side,
    TickerRespType,
    TimeInForce,
    DEFAULT_DEPTH_LIMIT,
    DEFAULT_KLINES_LIMIT,
    DEFAULT_TRADES_LIMIT,
)

Decimalish = Union[str, int, float]


class Request(msgspec.Struct, kw_only=True, rename="camel"):
    """Base for all request structures."""
    json_array_fields: ClassVar[FrozenSet[str]] = frozenset()


# Market data

class DepthRequest(Request, kw_only=True):
    symbol: str
    limit: int = DEFAULT_DEPTH_LIMIT


class TradeRequest(Request, kw_only=True):
    symbol: str
    limit: int = DEFAULT_TRADES_LIMIT


class HistoricalTradeRequest(Request, kw_only=True):
    symbol: str
    limit: int = DEFAULT_TRADES_LIMIT
    from_id: Optional[int] = None


class AggregatedTradeRequest(Request, kw_only=True):
    symbol: str
    from_id: Optional[int] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    limit: int = DEFAULT_TRADES_LIMIT


class KlinesRequest(Request, kw_only=True):
    symbol: str
    interval: KlineInterval
    limit: int = DEFAULT_KLINES_LIMIT
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    time_zone: Optional[str] = None


class AvgPriceRequest(Request, kw_only=True):
    symbol: str


class TickerPriceRequest(Request, kw_only=True):
    symbol: str


class TickerPricesRequest(Request, kw_only=True):
    json_array_fields: ClassVar[FrozenSet[str]] = frozenset({"symbols"})

    symbols: Optional[List[str]] = None


class BookTickerRequest(Request, kw_only=True):
    symbol: str


class BookTickersRequest(Request, kw_only=True):
    json_array_fields: ClassVar[FrozenSet[str]] = frozenset({"symbols"})

    symbols: Optional[List[str]] = None


class Ticker24hRequest(Request, kw_only=True):
    symbol: str
    resp_type: Optional[TickerRespType] = msgspec.field(default=None, name="type")


class Tickers24hRequest(Request, kw_only=True):
    json_array_fields: ClassVar[FrozenSet[str]] = frozenset({"symbols"})

    symbols: Optional[List[str]] = None
    resp_type: Optional[TickerRespType] = msgspec.field(default=None, name="type")


class TickerRequest(Request, kw_only=True):
    """Rolling window statistics for one symbol."""
    symbol: str
    window_size: Optional[str] = None
    resp_type: Optional[TickerRespType] = msgspec.field(default=None, name="type")


class TickersRequest(Request, kw_only=True):
    """Rolling window statistics for several symbols."""
    json_array_fields: ClassVar[FrozenSet[str]] = frozenset({"symbols"})

    symbols: List[str] = []
    window_size: Optional[str] = None
    resp_type: Optional[TickerRespType] = msgspec.field(default=None, name="type")


# Orders

class OrderRequest(Request, kw_only=True):
    symbol: str
    side: Side
    order_type: OrderType = msgspec.field(name="type")
    time_in_force: Optional[TimeInForce] = None
    quantity: Optional[Decimalish] = None
    quote_order_qty: Optional[Decimalish] = None
    price: Optional[Decimalish] = None
    new_client_order_id: Optional[str] = None
    strategy_id: Optional[int] = None
    strategy_type: Optional[int] = None
    stop_price: Optional[Decimalish] = None
    trailing_delta: Optional[int] = None
    iceberg_qty: Optional[Decimalish] = None
    new_order_resp_type: Optional[OrderRespType] = None
    self_trade_prevention_mode: Optional[SelfTradePreventionMode] = None


class CancelReplaceOrderRequest(OrderRequest, kw_only=True):
    """Cancel an existing order and place a new one on the same symbol."""
    cancel_replace_mode: Optional[CancelReplaceMode] = None
    cancel_order_id: Optional[int] = None
    cancel_orig_client_order_id: Optional[str] = None
    cancel_new_client_order_id: Optional[str] = None


class QueryOrderRequest(Request, kw_only=True):
    """Either order_id or orig_client_order_id must be set."""
    symbol: str
    order_id: Optional[int] = None
    orig_client_order_id: Optional[str] = None


class CancelOrderRequest(Request, kw_only=True):
    """Either order_id or orig_client_order_id must be set."""
    symbol: str
    order_id: Optional[int] = None
    orig_client_order_id: Optional[str] = None
    new_client_order_id: Optional[str] = None


class CancelOpenOrdersRequest(Request, kw_only=True):
    symbol: str


class OpenOrdersRequest(Request, kw_only=True):
    symbol: Optional[str] = None


class AllOrdersRequest(Request, kw_only=True):
    """If order_id is set, orders >= that id are returned, otherwise the most recent."""
    symbol: str
    order_id: Optional[int] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    limit: int = DEFAULT_TRADES_LIMIT


# OCO

class OCORequest(Request, kw_only=True):
    symbol: str
    side: Side
    quantity: Optional[Decimalish] = None
    price: Optional[Decimalish] = None
    stop_price: Optional[Decimalish] = None
    list_client_order_id: Optional[str] = None
    limit_client_order_id: Optional[str] = None
    limit_strategy_id: Optional[int] = None
    limit_strategy_type: Optional[int] = None
    limit_iceberg_qty: Optional[Decimalish] = None
    trailing_delta: Optional[int] = None
    stop_client_order_id: Optional[str] = None
    stop_strategy_id: Optional[int] = None
    stop_strategy_type: Optional[int] = None
    stop_limit_price: Optional[Decimalish] = None
    stop_iceberg_qty: Optional[Decimalish] = None
    stop_limit_time_in_force: Optional[TimeInForce] = None
    new_order_resp_type: Optional[OrderRespType] = None
    self_trade_prevention_mode: Optional[SelfTradePreventionMode] = None


class CancelOCORequest(Request, kw_only=True):
    """Either order_list_id or list_client_order_id must be set."""
    symbol: str
    order_list_id: Optional[int] = None
    list_client_order_id: Optional[str] = None
    new_client_order_id: Optional[str] = None


class QueryOCORequest(Request, kw_only=True):
    """Either order_list_id or orig_client_order_id must be set."""
    order_list_id: Optional[int] = None
    orig_client_order_id: Optional[str] = None


class AllOCORequest(Request, kw_only=True):
    from_id: Optional[int] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    limit: int = DEFAULT_TRADES_LIMIT


# Account

class AccountTradesRequest(Request, kw_only=True):
    symbol: str
    order_id: Optional[int] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    from_id: Optional[int] = None
    limit: int = DEFAULT_TRADES_LIMIT


class PreventedMatchesRequest(Request, kw_only=True):
    symbol: str
    prevented_match_id: Optional[int] = None
    order_id: Optional[int] = None
    from_prevented_match_id: Optional[int] = None
    limit: int = DEFAULT_TRADES_LIMIT


class DataStreamRequest(Request, kw_only=True):
    listen_key: str
