"""
Async client for the Binance spot REST and WebSocket APIs.

Usage:
    from binance_api import Client, WsClient, load_config
    from binance_api.structs import DepthRequest

    config = load_config()
    async with Client(config.rest) as client:
        depth = await client.depth(DepthRequest(symbol="BTCUSDT", limit=5))
"""

from .client import Client
from .config import ClientConfig, RestClientConfig, WebSocketConfig, LoggingConfig, load_config
from .exceptions import (
    BinanceError, RequestValidationError, NetworkError, APIError, RateLimitError,
    MalformedResponseError, MalformedErrorBody, StreamError, StreamOverflowError, ConfigurationError
)
from .transport import RestClient, AiohttpRestClient, create_rest_client
from .ws import WsClient

__version__ = "1.0.0"

__all__ = [
    "Client",
    "WsClient",
    "RestClient",
    "AiohttpRestClient",
    "create_rest_client",
    "ClientConfig",
    "RestClientConfig",
    "WebSocketConfig",
    "LoggingConfig",
    "load_config",
    "BinanceError",
    "RequestValidationError",
    "NetworkError",
    "APIError",
    "RateLimitError",
    "MalformedResponseError",
    "MalformedErrorBody",
    "StreamError",
    "StreamOverflowError",
    "ConfigurationError",
]
