from typing import List

import msgspec

from binance_api import endpoints
from binance_api.structs.enums import DEFAULT_ACCOUNT_TRADES_LIMIT, MAX_ACCOUNT_TRADES_LIMIT
from binance_api.structs.requests import AccountTradesRequest, DataStreamRequest, PreventedMatchesRequest
from binance_api.structs.responses import AccountInfo, AccountTrade, DataStream, PreventedMatch, RateLimit
from binance_api.transport.structs import HTTPMethod
from .base import BaseRestApi, clamp_limit, require_symbol


def mask_listen_key(listen_key: str) -> str:
    """Shorten a listen key for log output."""
    return f"{listen_key[:6]}..." if len(listen_key) > 6 else "***"


class AccountApi(BaseRestApi):
    """Account information (signed) and user data stream management (API key only)."""

    async def account(self) -> AccountInfo:
        """Balances, commissions and permissions."""
        return await self._request(HTTPMethod.GET, endpoints.ACCOUNT, None, AccountInfo, sign=True)

    async def account_trades(self, request: AccountTradesRequest) -> List[AccountTrade]:
        """Trades of the account on one symbol."""
        require_symbol(request)
        request = msgspec.structs.replace(
            request, limit=clamp_limit(request.limit, DEFAULT_ACCOUNT_TRADES_LIMIT, MAX_ACCOUNT_TRADES_LIMIT)
        )
        return await self._request(HTTPMethod.GET, endpoints.MY_TRADES, request, List[AccountTrade], sign=True)

    async def order_rate_limit(self) -> List[RateLimit]:
        """Current order count usage for all intervals."""
        return await self._request(HTTPMethod.GET, endpoints.RATE_LIMIT_ORDER, None, List[RateLimit], sign=True)

    async def my_prevented_matches(self, request: PreventedMatchesRequest) -> List[PreventedMatch]:
        """Orders expired because of self-trade prevention."""
        require_symbol(request)
        request = msgspec.structs.replace(
            request, limit=clamp_limit(request.limit, DEFAULT_ACCOUNT_TRADES_LIMIT, MAX_ACCOUNT_TRADES_LIMIT)
        )
        return await self._request(
            HTTPMethod.GET, endpoints.MY_PREVENTED_MATCHES, request, List[PreventedMatch], sign=True
        )

    # User data stream

    async def data_stream(self) -> str:
        """Start a user data stream, returns its listen key."""
        response = await self._request(HTTPMethod.POST, endpoints.USER_DATA_STREAM, None, DataStream, stream=True)
        self.logger.info("User data stream started: %s", mask_listen_key(response.listen_key))
        return response.listen_key

    async def data_stream_keep_alive(self, listen_key: str) -> None:
        """Extend the validity of a listen key by 60 minutes."""
        await self._request(
            HTTPMethod.PUT, endpoints.USER_DATA_STREAM, DataStreamRequest(listen_key=listen_key), stream=True
        )

    async def data_stream_close(self, listen_key: str) -> None:
        await self._request(
            HTTPMethod.DELETE, endpoints.USER_DATA_STREAM, DataStreamRequest(listen_key=listen_key), stream=True
        )
        self.logger.info("User data stream closed: %s", mask_listen_key(listen_key))
