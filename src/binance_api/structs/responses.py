"""REST response structures, decoded with msgspec straight from the response body."""

from typing import Any, List, Optional

import msgspec


class Response(msgspec.Struct, kw_only=True, rename="camel"):
    pass


class ErrorResponse(msgspec.Struct):
    """Error body returned with every non-200 status."""
    code: int
    msg: str


class ServerTime(Response, kw_only=True):
    server_time: int


class PriceLevel(msgspec.Struct, array_like=True):
    """Order book entry sent as ["price", "qty"]."""
    price: float
    quantity: float


class Depth(Response, kw_only=True):
    last_update_id: int
    bids: List[PriceLevel] = []
    asks: List[PriceLevel] = []


class Trade(Response, kw_only=True):
    id: int
    price: str
    qty: str
    quote_qty: str = "0"
    time: int
    is_buyer_maker: bool
    is_best_match: bool = False


class AggregatedTrade(msgspec.Struct, kw_only=True):
    trade_id: int = msgspec.field(name="a")
    price: str = msgspec.field(name="p")
    quantity: str = msgspec.field(name="q")
    first_trade_id: int = msgspec.field(name="f")
    last_trade_id: int = msgspec.field(name="l")
    time: int = msgspec.field(name="T")
    maker: bool = msgspec.field(name="m")  # buyer is the maker
    best_match: bool = msgspec.field(default=False, name="M")


class Kline(msgspec.Struct, array_like=True):
    """Kline row: open time, OHLCV, close time, quote volume, trade count, taker volumes."""
    open_time: int
    open_price: float
    high: float
    low: float
    close_price: float
    volume: float
    close_time: int
    quote_asset_volume: float
    trades: int
    taker_buy_base_asset_volume: float
    taker_buy_quote_asset_volume: float
    ignore: Optional[Any] = None


class AvgPrice(Response, kw_only=True):
    mins: int
    price: str
    close_time: Optional[int] = None


class SymbolPrice(Response, kw_only=True):
    symbol: str
    price: str


class BookTicker(Response, kw_only=True):
    symbol: str
    bid_price: str
    bid_qty: str
    ask_price: str
    ask_qty: str


class TickerStatMini(Response, kw_only=True):
    symbol: str = ""
    open_price: str = "0"
    high_price: str = "0"
    low_price: str = "0"
    last_price: str = "0"
    volume: str = "0"
    quote_volume: str = "0"
    open_time: int = 0
    close_time: int = 0
    first_id: int = 0
    last_id: int = 0
    count: int = 0


class TickerStat(TickerStatMini, kw_only=True):
    """Rolling window price change statistics."""
    price_change: str = "0"
    price_change_percent: str = "0"
    weighted_avg_price: str = "0"


class TickerStatFull(TickerStat, kw_only=True):
    """24hr price change statistics."""
    prev_close_price: str = "0"
    last_qty: str = "0"
    bid_price: str = "0"
    bid_qty: str = "0"
    ask_price: str = "0"
    ask_qty: str = "0"


# Orders

class OrderRespAck(Response, kw_only=True):
    symbol: str
    order_id: int
    order_list_id: int = -1
    client_order_id: str = ""
    transact_time: int = 0


class OrderRespResult(OrderRespAck, kw_only=True):
    price: str = "0"
    orig_qty: str = "0"
    executed_qty: str = "0"
    cummulative_quote_qty: str = "0"
    status: str = ""
    time_in_force: str = ""
    order_type: str = msgspec.field(default="", name="type")
    side: str = ""
    working_time: Optional[int] = None
    self_trade_prevention_mode: Optional[str] = None


class OrderFill(Response, kw_only=True):
    price: str
    qty: str
    commission: str
    commission_asset: str
    trade_id: Optional[int] = None


class OrderRespFull(OrderRespResult, kw_only=True):
    fills: List[OrderFill] = []


class QueryOrder(Response, kw_only=True):
    symbol: str
    order_id: int
    order_list_id: int = -1
    client_order_id: str = ""
    price: str = "0"
    orig_qty: str = "0"
    executed_qty: str = "0"
    cummulative_quote_qty: str = "0"
    status: str = ""
    time_in_force: str = ""
    order_type: str = msgspec.field(default="", name="type")
    side: str = ""
    stop_price: str = "0"
    iceberg_qty: str = "0"
    time: int = 0
    update_time: int = 0
    is_working: bool = False
    orig_quote_order_qty: str = "0"
    self_trade_prevention_mode: Optional[str] = None


class CancelOrder(Response, kw_only=True):
    symbol: str
    orig_client_order_id: str = ""
    order_id: int
    order_list_id: int = -1
    client_order_id: str = ""
    transact_time: int = 0
    price: str = "0"
    orig_qty: str = "0"
    executed_qty: str = "0"
    cummulative_quote_qty: str = "0"
    status: str = ""
    time_in_force: str = ""
    order_type: str = msgspec.field(default="", name="type")
    side: str = ""
    self_trade_prevention_mode: Optional[str] = None


class CancelReplaceOrder(Response, kw_only=True):
    cancel_result: str
    new_order_result: str
    cancel_response: Optional[CancelOrder] = None
    new_order_response: Optional[OrderRespFull] = None


# OCO

class OCOOrderRef(Response, kw_only=True):
    symbol: str
    order_id: int
    client_order_id: str


class OCOOrder(Response, kw_only=True):
    order_list_id: int
    contingency_type: str = ""
    list_status_type: str = ""
    list_order_status: str = ""
    list_client_order_id: str = ""
    transaction_time: int = 0
    symbol: str = ""
    orders: List[OCOOrderRef] = []
    order_reports: List[CancelOrder] = []


# Account

class Balance(Response, kw_only=True):
    asset: str
    free: str
    locked: str


class CommissionRates(Response, kw_only=True):
    maker: str = "0"
    taker: str = "0"
    buyer: str = "0"
    seller: str = "0"


class AccountInfo(Response, kw_only=True):
    maker_commission: int = 0
    taker_commission: int = 0
    buyer_commission: int = 0
    seller_commission: int = 0
    commission_rates: Optional[CommissionRates] = None
    can_trade: bool = False
    can_withdraw: bool = False
    can_deposit: bool = False
    brokered: bool = False
    require_self_trade_prevention: bool = False
    update_time: int = 0
    account_type: str = ""
    balances: List[Balance] = []
    permissions: List[str] = []


class AccountTrade(Response, kw_only=True):
    symbol: str
    id: int
    order_id: int
    order_list_id: int = -1
    price: str
    qty: str
    quote_qty: str = "0"
    commission: str
    commission_asset: str
    time: int
    is_buyer: bool
    is_maker: bool
    is_best_match: bool = False


class RateLimit(Response, kw_only=True):
    rate_limit_type: str
    interval: str
    interval_num: int
    limit: int
    count: int = 0


class PreventedMatch(Response, kw_only=True):
    symbol: str
    prevented_match_id: int
    taker_order_id: int
    maker_order_id: int
    trade_group_id: int
    self_trade_prevention_mode: str
    price: str
    maker_prevented_quantity: str
    transact_time: int


class DataStream(Response, kw_only=True):
    listen_key: str


# Exchange info

class SymbolFilter(Response, kw_only=True):
    filter_type: str
    min_price: Optional[str] = None
    max_price: Optional[str] = None
    tick_size: Optional[str] = None
    min_qty: Optional[str] = None
    max_qty: Optional[str] = None
    step_size: Optional[str] = None
    min_notional: Optional[str] = None
    max_num_orders: Optional[int] = None


class SymbolInfo(Response, kw_only=True):
    symbol: str
    status: str
    base_asset: str
    base_asset_precision: int = 8
    quote_asset: str
    quote_asset_precision: int = 8
    order_types: List[str] = []
    iceberg_allowed: bool = False
    oco_allowed: bool = False
    is_spot_trading_allowed: bool = False
    is_margin_trading_allowed: bool = False
    filters: List[SymbolFilter] = []
    permissions: List[str] = []


class ExchangeInfo(Response, kw_only=True):
    timezone: str = "UTC"
    server_time: int = 0
    rate_limits: List[RateLimit] = []
    symbols: List[SymbolInfo] = []
