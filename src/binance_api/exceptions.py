from typing import Dict, Optional, Type

import msgspec


class BinanceError(Exception):
    """Base exception for all client errors."""
    pass


# Validation errors (raised before any network call)

class RequestValidationError(BinanceError, ValueError):
    """Caller input rejected before it reaches the transport."""
    default_message = "invalid request"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NilRequestError(RequestValidationError):
    default_message = "request is nil"


class EmptySymbolError(RequestValidationError):
    default_message = "symbol are missing"


class EmptySideError(RequestValidationError):
    default_message = "order side must be set"


class EmptyOrderIdError(RequestValidationError):
    default_message = "order id must be set"


class EmptyPriceError(RequestValidationError):
    default_message = "empty price"


class EmptyQuantityError(RequestValidationError):
    default_message = "quantity or quote quantity expected"


class EmptyStopPriceError(RequestValidationError):
    default_message = "stop price or trailing delta expected"


class EmptyIntervalError(RequestValidationError):
    default_message = "symbol or interval are missing"


class InvalidOrderTypeError(RequestValidationError):
    default_message = "invalid order type"


class MinStrategyTypeError(RequestValidationError):
    default_message = "strategy type must be at least 1000000"


class InvalidTickerWindowError(RequestValidationError):
    default_message = "invalid ticker window size"


# Internal errors (should not occur for well-formed requests)

class EncodingError(BinanceError):
    """Request field could not be converted to a query value."""
    pass


class SigningError(BinanceError):
    """HMAC computation failed."""
    pass


# Transport errors

class NetworkError(BinanceError):
    """Connection, DNS or timeout failure. Never retried by the transport."""
    pass


class APIError(BinanceError):
    """Well-formed error response returned by the exchange."""

    def __init__(self, status_code: int, message: str, code: int = 0) -> None:
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self):
        return msgspec.json.encode({"code": self.code, "msg": self.message}).decode()


class RateLimitError(APIError):
    """HTTP 429 (or 418 when the IP is banned)."""

    def __init__(self, status_code: int, message: str, code: int = 0, retry_after: Optional[int] = None) -> None:
        super().__init__(status_code, message, code)
        self.retry_after = retry_after


class TimestampError(APIError):
    """Timestamp outside of recvWindow."""
    pass


class InvalidSignatureError(APIError):
    pass


class InvalidApiKeyError(APIError):
    """API key rejected, missing permissions or IP not whitelisted."""
    pass


class OrderNotFoundError(APIError):
    pass


class OrderRejectedError(APIError):
    """New order or cancel rejected by the matching engine."""
    pass


API_ERROR_CODE_MAPPING: Dict[int, Type[APIError]] = {
    -1021: TimestampError,
    -1022: InvalidSignatureError,
    -2010: OrderRejectedError,
    -2011: OrderRejectedError,
    -2013: OrderNotFoundError,
    -2014: InvalidApiKeyError,
    -2015: InvalidApiKeyError,
}


class MalformedResponseError(BinanceError):
    """Response body could not be decoded into the expected shape."""

    def __init__(self, status_code: int, message: str, body: bytes = b"") -> None:
        self.status_code = status_code
        self.message = message
        self.body = body[:200]
        super().__init__(f"HTTP {status_code}: {message}")


class MalformedErrorBody(MalformedResponseError):
    """Non-200 response whose body is not a {"code", "msg"} object."""
    pass


# Stream errors

class StreamError(BinanceError):
    pass


class IncorrectEventTypeError(StreamError):
    """Event discriminator could not be extracted from a frame."""

    def __init__(self, message: str = "cant unmarshal event type") -> None:
        super().__init__(message)


IncorrectAccountEventTypeError = IncorrectEventTypeError


class StreamAlreadyActiveError(StreamError):
    """A connection supports only one active reader."""
    pass


class StreamClosedError(StreamError):
    pass


class StreamOverflowError(StreamError):
    """Subscriber fell too far behind the shared reader and was detached."""
    pass


class ConfigurationError(BinanceError):
    """Configuration-specific exception for setup errors."""

    def __init__(self, message: str, setting_name: Optional[str] = None):
        self.setting_name = setting_name
        super().__init__(message)


def create_api_error(status_code: int, message: str, code: int, retry_after: Optional[int] = None) -> APIError:
    """Pick the APIError subclass for an error response."""
    if status_code in (418, 429):
        return RateLimitError(status_code, message, code, retry_after)
    error_class = API_ERROR_CODE_MAPPING.get(code, APIError)
    return error_class(status_code, message, code)
