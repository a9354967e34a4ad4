"""REST endpoint paths (spot API v3)."""

# Market data
PING = "/api/v3/ping"
SERVER_TIME = "/api/v3/time"
EXCHANGE_INFO = "/api/v3/exchangeInfo"
DEPTH = "/api/v3/depth"
TRADES = "/api/v3/trades"
HISTORICAL_TRADES = "/api/v3/historicalTrades"
AGG_TRADES = "/api/v3/aggTrades"
KLINES = "/api/v3/klines"
UI_KLINES = "/api/v3/uiKlines"
AVG_PRICE = "/api/v3/avgPrice"
TICKER_24H = "/api/v3/ticker/24hr"
TICKER_PRICE = "/api/v3/ticker/price"
TICKER_BOOK = "/api/v3/ticker/bookTicker"
TICKER = "/api/v3/ticker"

# Trading
ORDER = "/api/v3/order"
ORDER_TEST = "/api/v3/order/test"
ORDER_CANCEL_REPLACE = "/api/v3/order/cancelReplace"
OPEN_ORDERS = "/api/v3/openOrders"
ALL_ORDERS = "/api/v3/allOrders"
ORDER_OCO = "/api/v3/order/oco"
ORDER_LIST = "/api/v3/orderList"
ALL_ORDER_LIST = "/api/v3/allOrderList"
OPEN_ORDER_LIST = "/api/v3/openOrderList"

# Account
ACCOUNT = "/api/v3/account"
MY_TRADES = "/api/v3/myTrades"
RATE_LIMIT_ORDER = "/api/v3/rateLimit/order"
MY_PREVENTED_MATCHES = "/api/v3/myPreventedMatches"

# User data stream
USER_DATA_STREAM = "/api/v3/userDataStream"
