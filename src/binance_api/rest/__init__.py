from .base import BaseRestApi
from .market import MarketDataApi
from .trading import TradingApi, validate_new_order
from .account import AccountApi

__all__ = ["BaseRestApi", "MarketDataApi", "TradingApi", "AccountApi", "validate_new_order"]
