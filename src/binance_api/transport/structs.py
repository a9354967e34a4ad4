from enum import Enum
from typing import Dict, Optional

import msgspec


class HTTPMethod(Enum):
    """HTTP methods supported by the REST transport."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# Parameters travel in the query string for these methods, in a form body otherwise
QUERY_METHODS = frozenset({HTTPMethod.GET, HTTPMethod.DELETE})


class RateLimitUsage(msgspec.Struct, frozen=True):
    """
    Point-in-time copy of the usage counters reported by the exchange.

    Attributes:
        used_weight: Request weight per interval, e.g. {"1m": 25}
        order_count: Order count per interval, e.g. {"10s": 1, "1d": 7}
        retry_after: Last Retry-After value in seconds, None if never received
    """
    used_weight: Dict[str, int] = {}
    order_count: Dict[str, int] = {}
    retry_after: Optional[int] = None
