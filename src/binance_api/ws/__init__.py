from .events import (
    UpdateType, EventType, DepthUpdate, DepthLevelUpdate, KlineData, KlineUpdate, AggTradeUpdate, TradeUpdate,
    TickerUpdate, MiniTickerUpdate, BookTickerUpdate, OrderUpdate, BalanceUpdate, AccountBalance, AccountUpdate,
    OCOOrderRef, OCOUpdate
)
from .endpoints import FREQUENCY_100MS, FREQUENCY_1000MS
from .connection import EventStream, WebSocketConnection, StreamConnection
from .account import AccountStream, sniff_event_type, decode_event_type, classify_event
from .client import WsClient

__all__ = [
    # Events
    "UpdateType", "EventType", "DepthUpdate", "DepthLevelUpdate", "KlineData", "KlineUpdate", "AggTradeUpdate",
    "TradeUpdate", "TickerUpdate", "MiniTickerUpdate", "BookTickerUpdate", "OrderUpdate", "BalanceUpdate",
    "AccountBalance", "AccountUpdate", "OCOOrderRef", "OCOUpdate",
    # Connections
    "FREQUENCY_100MS", "FREQUENCY_1000MS",
    "EventStream", "WebSocketConnection", "StreamConnection", "AccountStream",
    "sniff_event_type", "decode_event_type", "classify_event",
    "WsClient",
]
