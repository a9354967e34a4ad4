"""
WebSocket event structures.

The exchange uses single-letter keys on the streams, mapped here to readable field
names with ``msgspec.field(name=...)``. Status values are kept as plain strings so that
new values published by the exchange do not break decoding.
"""

from typing import List, Optional

import msgspec

from binance_api.structs.responses import PriceLevel


class UpdateType:
    """Event discriminator values (the ``e`` field)."""
    UNKNOWN = "unknown"
    DEPTH = "depthUpdate"
    TICKER = "24hrTicker"
    MINI_TICKER = "24hrMiniTicker"
    KLINE = "kline"
    AGG_TRADE = "aggTrade"
    TRADE = "trade"

    # User data stream
    OUTBOUND_ACCOUNT_POSITION = "outboundAccountPosition"
    ORDER_REPORT = "executionReport"
    BALANCE_UPDATE = "balanceUpdate"
    OCO_REPORT = "listStatus"


ACCOUNT_EVENT_TYPES = frozenset({
    UpdateType.OUTBOUND_ACCOUNT_POSITION,
    UpdateType.ORDER_REPORT,
    UpdateType.BALANCE_UPDATE,
    UpdateType.OCO_REPORT,
})


class EventType(msgspec.Struct):
    """Discriminator only, every other key is ignored."""
    event_type: str = msgspec.field(name="e")


# Market streams

class DepthUpdate(msgspec.Struct, kw_only=True):
    """Diff depth event used to maintain a local order book."""
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    symbol: str = msgspec.field(name="s")
    first_update_id: int = msgspec.field(name="U")
    final_update_id: int = msgspec.field(name="u")
    bids: List[PriceLevel] = msgspec.field(default_factory=list, name="b")
    asks: List[PriceLevel] = msgspec.field(default_factory=list, name="a")


class DepthLevelUpdate(msgspec.Struct, kw_only=True, rename="camel"):
    """Partial book depth snapshot (top 5, 10 or 20 levels)."""
    last_update_id: int
    bids: List[PriceLevel] = []
    asks: List[PriceLevel] = []


class KlineData(msgspec.Struct, kw_only=True):
    start_time: int = msgspec.field(name="t")
    end_time: int = msgspec.field(name="T")
    symbol: str = msgspec.field(name="s")
    interval: str = msgspec.field(name="i")
    first_trade_id: int = msgspec.field(name="f")
    last_trade_id: int = msgspec.field(name="L")
    open_price: str = msgspec.field(name="o")
    close_price: str = msgspec.field(name="c")
    high: str = msgspec.field(name="h")
    low: str = msgspec.field(name="l")
    volume: str = msgspec.field(name="v")
    trades: int = msgspec.field(name="n")
    final: bool = msgspec.field(name="x")  # bar closed, no further updates
    volume_quote: str = msgspec.field(name="q")
    volume_active_buy: str = msgspec.field(name="V")
    volume_quote_active_buy: str = msgspec.field(name="Q")


class KlineUpdate(msgspec.Struct, kw_only=True):
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    symbol: str = msgspec.field(name="s")
    kline: KlineData = msgspec.field(name="k")


class AggTradeUpdate(msgspec.Struct, kw_only=True):
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    symbol: str = msgspec.field(name="s")
    trade_id: int = msgspec.field(name="a")
    price: str = msgspec.field(name="p")
    quantity: str = msgspec.field(name="q")
    first_trade_id: int = msgspec.field(name="f")
    last_trade_id: int = msgspec.field(name="l")
    trade_time: int = msgspec.field(name="T")
    maker: bool = msgspec.field(name="m")  # buyer is the maker


class TradeUpdate(msgspec.Struct, kw_only=True):
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    symbol: str = msgspec.field(name="s")
    trade_id: int = msgspec.field(name="t")
    price: str = msgspec.field(name="p")
    quantity: str = msgspec.field(name="q")
    trade_time: int = msgspec.field(name="T")
    maker: bool = msgspec.field(name="m")


class TickerUpdate(msgspec.Struct, kw_only=True):
    """
    Ticker statistics for a 24h or custom rolling window.

    Rolling window events omit the last quantity and book fields, those keep their
    defaults.
    """
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    symbol: str = msgspec.field(name="s")
    price_change: str = msgspec.field(name="p")
    price_change_percent: str = msgspec.field(name="P")
    weighted_avg_price: str = msgspec.field(name="w")
    first_trade_price: str = msgspec.field(default="", name="x")
    last_price: str = msgspec.field(name="c")
    last_qty: str = msgspec.field(default="", name="Q")
    best_bid_price: str = msgspec.field(default="", name="b")
    best_bid_qty: str = msgspec.field(default="", name="B")
    best_ask_price: str = msgspec.field(default="", name="a")
    best_ask_qty: str = msgspec.field(default="", name="A")
    open_price: str = msgspec.field(name="o")
    high_price: str = msgspec.field(name="h")
    low_price: str = msgspec.field(name="l")
    volume_base: str = msgspec.field(name="v")
    volume_quote: str = msgspec.field(name="q")
    open_time: int = msgspec.field(name="O")
    close_time: int = msgspec.field(name="C")
    first_trade_id: int = msgspec.field(name="F")
    last_trade_id: int = msgspec.field(name="L")
    total_trades: int = msgspec.field(name="n")


class MiniTickerUpdate(msgspec.Struct, kw_only=True):
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    symbol: str = msgspec.field(name="s")
    last_price: str = msgspec.field(name="c")
    open_price: str = msgspec.field(name="o")
    high_price: str = msgspec.field(name="h")
    low_price: str = msgspec.field(name="l")
    volume_base: str = msgspec.field(name="v")
    volume_quote: str = msgspec.field(name="q")


class BookTickerUpdate(msgspec.Struct, kw_only=True):
    """Best bid/ask update. Carries no event type."""
    update_id: int = msgspec.field(name="u")
    symbol: str = msgspec.field(name="s")
    bid_price: str = msgspec.field(name="b")
    bid_qty: str = msgspec.field(name="B")
    ask_price: str = msgspec.field(name="a")
    ask_qty: str = msgspec.field(name="A")


# User data stream

class OrderUpdate(msgspec.Struct, kw_only=True):
    """Execution report."""
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    symbol: str = msgspec.field(name="s")
    client_order_id: str = msgspec.field(name="c")
    side: str = msgspec.field(name="S")
    order_type: str = msgspec.field(name="o")
    time_in_force: str = msgspec.field(name="f")
    orig_qty: str = msgspec.field(name="q")
    price: str = msgspec.field(name="p")
    stop_price: str = msgspec.field(default="0", name="P")
    iceberg_qty: str = msgspec.field(default="0", name="F")
    order_list_id: int = msgspec.field(default=-1, name="g")
    orig_client_order_id: str = msgspec.field(default="", name="C")
    execution_type: str = msgspec.field(name="x")
    status: str = msgspec.field(name="X")
    reject_reason: str = msgspec.field(default="NONE", name="r")
    order_id: int = msgspec.field(name="i")
    last_filled_qty: str = msgspec.field(name="l")
    total_filled_qty: str = msgspec.field(name="z")
    last_filled_price: str = msgspec.field(name="L")
    commission: str = msgspec.field(default="0", name="n")
    commission_asset: Optional[str] = msgspec.field(default=None, name="N")  # null until the first fill
    trade_time: int = msgspec.field(name="T")
    trade_id: int = msgspec.field(default=-1, name="t")
    working: bool = msgspec.field(default=False, name="w")
    maker: bool = msgspec.field(default=False, name="m")
    order_created_time: int = msgspec.field(default=0, name="O")
    quote_total_filled_qty: str = msgspec.field(default="0", name="Z")
    quote_last_filled_qty: str = msgspec.field(default="0", name="Y")
    quote_order_qty: str = msgspec.field(default="0", name="Q")


class BalanceUpdate(msgspec.Struct, kw_only=True):
    """Deposit, withdrawal or transfer between accounts."""
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    asset: str = msgspec.field(name="a")
    balance_delta: str = msgspec.field(name="d")
    clear_time: int = msgspec.field(name="T")


class AccountBalance(msgspec.Struct, kw_only=True):
    asset: str = msgspec.field(name="a")
    free: str = msgspec.field(name="f")
    locked: str = msgspec.field(name="l")


class AccountUpdate(msgspec.Struct, kw_only=True):
    """Balances of the assets that changed (outboundAccountPosition)."""
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    last_update: int = msgspec.field(name="u")
    balances: List[AccountBalance] = msgspec.field(default_factory=list, name="B")


class OCOOrderRef(msgspec.Struct, kw_only=True):
    symbol: str = msgspec.field(name="s")
    order_id: int = msgspec.field(name="i")
    client_order_id: str = msgspec.field(name="c")


class OCOUpdate(msgspec.Struct, kw_only=True):
    """Order list status (listStatus)."""
    event_type: str = msgspec.field(name="e")
    time: int = msgspec.field(name="E")
    symbol: str = msgspec.field(name="s")
    order_list_id: int = msgspec.field(name="g")
    contingency_type: str = msgspec.field(name="c")
    list_status_type: str = msgspec.field(name="l")
    list_order_status: str = msgspec.field(name="L")
    list_reject_reason: str = msgspec.field(default="NONE", name="r")
    list_client_order_id: str = msgspec.field(name="C")
    transaction_time: int = msgspec.field(name="T")
    orders: List[OCOOrderRef] = msgspec.field(default_factory=list, name="O")
