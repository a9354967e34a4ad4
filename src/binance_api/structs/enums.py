import re
from enum import Enum


class OrderType(Enum):
    """Order type definitions."""
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP_LOSS = "STOP_LOSS"
    STOP_LOSS_LIMIT = "STOP_LOSS_LIMIT"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_LIMIT = "TAKE_PROFIT_LIMIT"
    LIMIT_MAKER = "LIMIT_MAKER"


class OrderStatus(Enum):
    """Order execution status."""
    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"
    PENDING_CANCEL = "PENDING_CANCEL"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    REPLACED = "REPLACED"
    TRADE = "TRADE"


class OrderFailure(Enum):
    """Order rejection reasons reported in execution reports."""
    NONE = "NONE"
    UNKNOWN_INSTRUMENT = "UNKNOWN_INSTRUMENT"
    MARKET_CLOSED = "MARKET_CLOSED"
    PRICE_QTY_EXCEED_HARD_LIMITS = "PRICE_QTY_EXCEED_HARD_LIMITS"
    UNKNOWN_ORDER = "UNKNOWN_ORDER"
    DUPLICATE_ORDER = "DUPLICATE_ORDER"
    UNKNOWN_ACCOUNT = "UNKNOWN_ACCOUNT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    ACCOUNT_CANNOT_SETTLE = "ACCOUNT_CANNOT_SETTLE"


class Side(Enum):
    BUY = "BUY"
    SELL = "SELL"


class TimeInForce(Enum):
    GTC = "GTC"  # Good Till Cancel
    IOC = "IOC"  # Immediate or Cancel
    FOK = "FOK"  # Fill or Kill


class OrderRespType(Enum):
    ACK = "ACK"
    RESULT = "RESULT"
    FULL = "FULL"


class CancelReplaceMode(Enum):
    STOP_ON_FAILURE = "STOP_ON_FAILURE"
    ALLOW_FAILURE = "ALLOW_FAILURE"


class SelfTradePreventionMode(Enum):
    NONE = "NONE"
    EXPIRE_TAKER = "EXPIRE_TAKER"
    EXPIRE_MAKER = "EXPIRE_MAKER"
    EXPIRE_BOTH = "EXPIRE_BOTH"


class TickerRespType(Enum):
    FULL = "FULL"
    MINI = "MINI"


class KlineInterval(Enum):
    """Kline/candlestick intervals."""
    ONE_MINUTE = "1m"
    THREE_MINUTES = "3m"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    THIRTY_MINUTES = "30m"
    ONE_HOUR = "1h"
    TWO_HOURS = "2h"
    FOUR_HOURS = "4h"
    SIX_HOURS = "6h"
    EIGHT_HOURS = "8h"
    TWELVE_HOURS = "12h"
    ONE_DAY = "1d"
    THREE_DAYS = "3d"
    ONE_WEEK = "1w"
    ONE_MONTH = "1M"


class SymbolStatus(Enum):
    TRADING = "TRADING"
    HALT = "HALT"
    BREAK = "BREAK"


# Request limits
DEFAULT_DEPTH_LIMIT = 100
MAX_DEPTH_LIMIT = 5000
DEFAULT_TRADES_LIMIT = 500
MAX_TRADES_LIMIT = 1000
DEFAULT_KLINES_LIMIT = 500
MAX_KLINES_LIMIT = 1000
DEFAULT_ORDER_LIMIT = 500
MAX_ORDER_LIMIT = 1000
DEFAULT_ACCOUNT_TRADES_LIMIT = 500
MAX_ACCOUNT_TRADES_LIMIT = 1000

MIN_STRATEGY_TYPE = 1000000

# Rolling window sizes: 1m-59m, 1h-23h, 1d-7d
_WINDOW_SIZE_RE = re.compile(r"^([1-9][0-9]?)([mhd])$")
_WINDOW_SIZE_MAX = {"m": 59, "h": 23, "d": 7}


def is_valid_window_size(window: str) -> bool:
    """Check a rolling ticker window such as "15m", "4h" or "7d"."""
    match = _WINDOW_SIZE_RE.match(window)
    if match is None:
        return False
    return int(match.group(1)) <= _WINDOW_SIZE_MAX[match.group(2)]
