"""
Order endpoints (signed).

New orders are validated locally before anything is sent. The checks follow the
exchange's mandatory parameters per order type:

    LIMIT / LIMIT_MAKER                   price, quantity
    MARKET                                quantity or quoteOrderQty
    STOP_LOSS / TAKE_PROFIT               quantity, stopPrice or trailingDelta
    STOP_LOSS_LIMIT / TAKE_PROFIT_LIMIT   quantity, price, stopPrice or trailingDelta

timeInForce defaults to GTC for LIMIT and the *_LIMIT types.
"""

from typing import Any, List, Optional

import msgspec

from binance_api import endpoints
from binance_api.exceptions import (
    EmptyOrderIdError,
    EmptyPriceError,
    EmptyQuantityError,
    EmptySideError,
    EmptyStopPriceError,
    InvalidOrderTypeError,
    MinStrategyTypeError,
)
from binance_api.structs.enums import (
    CancelReplaceMode,
    OrderRespType,
    OrderType,
    TimeInForce,
    DEFAULT_ORDER_LIMIT,
    MAX_ORDER_LIMIT,
    MIN_STRATEGY_TYPE,
)
from binance_api.structs.requests import (
    AllOCORequest,
    AllOrdersRequest,
    CancelOCORequest,
    CancelOpenOrdersRequest,
    CancelOrderRequest,
    CancelReplaceOrderRequest,
    OCORequest,
    OpenOrdersRequest,
    OrderRequest,
    QueryOCORequest,
    QueryOrderRequest,
)
from binance_api.structs.responses import (
    CancelOrder,
    CancelReplaceOrder,
    OCOOrder,
    OrderRespAck,
    OrderRespFull,
    OrderRespResult,
    QueryOrder,
)
from binance_api.transport.structs import HTTPMethod
from .base import BaseRestApi, clamp_limit, require_request, require_symbol

_TIME_IN_FORCE_TYPES = frozenset({OrderType.LIMIT, OrderType.STOP_LOSS_LIMIT, OrderType.TAKE_PROFIT_LIMIT})


def _blank(value: Any) -> bool:
    return value is None or value == ""


def validate_new_order(request: OrderRequest) -> OrderRequest:
    """
    Check a new order request and fill in defaults.

    Returns:
        Copy of the request with the order type normalised and timeInForce defaulted

    Raises:
        RequestValidationError: First failing check
    """
    require_symbol(request)
    if not request.side:
        raise EmptySideError()
    if request.strategy_type and 0 < request.strategy_type < MIN_STRATEGY_TYPE:
        raise MinStrategyTypeError()

    try:
        order_type = OrderType(request.order_type)
    except ValueError:
        raise InvalidOrderTypeError(f"invalid order type: {request.order_type!r}") from None

    has_stop = not _blank(request.stop_price) or bool(request.trailing_delta)

    if order_type in (OrderType.LIMIT, OrderType.LIMIT_MAKER):
        if _blank(request.price):
            raise EmptyPriceError()
        if _blank(request.quantity):
            raise EmptyQuantityError()
    elif order_type is OrderType.MARKET:
        if _blank(request.quantity) and _blank(request.quote_order_qty):
            raise EmptyQuantityError()
    elif order_type in (OrderType.STOP_LOSS, OrderType.TAKE_PROFIT):
        if _blank(request.quantity):
            raise EmptyQuantityError()
        if not has_stop:
            raise EmptyStopPriceError()
    else:
        if _blank(request.quantity):
            raise EmptyQuantityError()
        if _blank(request.price):
            raise EmptyPriceError()
        if not has_stop:
            raise EmptyStopPriceError()

    time_in_force = request.time_in_force
    if order_type in _TIME_IN_FORCE_TYPES and not time_in_force:
        time_in_force = TimeInForce.GTC

    return msgspec.structs.replace(request, order_type=order_type, time_in_force=time_in_force)


class TradingApi(BaseRestApi):
    """Order placement, cancellation and queries, including OCO order lists."""

    async def new_order(self, request: OrderRequest) -> OrderRespAck:
        """Place an order, acknowledgment only."""
        return await self._new_order(request, OrderRespType.ACK, OrderRespAck)

    async def new_order_result(self, request: OrderRequest) -> OrderRespResult:
        """Place an order, returns the order as created."""
        return await self._new_order(request, OrderRespType.RESULT, OrderRespResult)

    async def new_order_full(self, request: OrderRequest) -> OrderRespFull:
        """Place an order, returns the order with its fills."""
        return await self._new_order(request, OrderRespType.FULL, OrderRespFull)

    async def _new_order(self, request: OrderRequest, resp_type: OrderRespType, response_type: Any) -> Any:
        request = validate_new_order(request)
        request = msgspec.structs.replace(request, new_order_resp_type=resp_type)
        return await self._request(HTTPMethod.POST, endpoints.ORDER, request, response_type, sign=True)

    async def new_order_test(self, request: OrderRequest) -> None:
        """Validate an order on the exchange without sending it to the matching engine."""
        request = validate_new_order(request)
        await self._request(HTTPMethod.POST, endpoints.ORDER_TEST, request, sign=True)

    async def query_order(self, request: QueryOrderRequest) -> QueryOrder:
        """Order status."""
        require_symbol(request)
        if not request.order_id and not request.orig_client_order_id:
            raise EmptyOrderIdError()
        return await self._request(HTTPMethod.GET, endpoints.ORDER, request, QueryOrder, sign=True)

    async def cancel_order(self, request: CancelOrderRequest) -> CancelOrder:
        """Cancel an active order."""
        require_symbol(request)
        if not request.order_id and not request.orig_client_order_id:
            raise EmptyOrderIdError()
        return await self._request(HTTPMethod.DELETE, endpoints.ORDER, request, CancelOrder, sign=True)

    async def cancel_open_orders(self, request: CancelOpenOrdersRequest) -> List[CancelOrder]:
        """Cancel all active orders on a symbol, including OCO legs."""
        require_symbol(request)
        return await self._request(
            HTTPMethod.DELETE, endpoints.OPEN_ORDERS, request, List[CancelOrder], sign=True
        )

    async def cancel_replace_order(self, request: CancelReplaceOrderRequest) -> CancelReplaceOrder:
        """Cancel an existing order and place a new one on the same symbol."""
        require_request(request)
        if not request.cancel_order_id and not request.cancel_orig_client_order_id:
            raise EmptyOrderIdError()
        request = validate_new_order(request)
        request = msgspec.structs.replace(
            request,
            cancel_replace_mode=request.cancel_replace_mode or CancelReplaceMode.STOP_ON_FAILURE,
            new_order_resp_type=request.new_order_resp_type or OrderRespType.ACK,
        )
        return await self._request(
            HTTPMethod.POST, endpoints.ORDER_CANCEL_REPLACE, request, CancelReplaceOrder, sign=True
        )

    async def open_orders(self, request: Optional[OpenOrdersRequest] = None) -> List[QueryOrder]:
        """Open orders on one symbol, or on all symbols when no symbol is given."""
        return await self._request(HTTPMethod.GET, endpoints.OPEN_ORDERS, request, List[QueryOrder], sign=True)

    async def all_orders(self, request: AllOrdersRequest) -> List[QueryOrder]:
        """All orders of a symbol: active, canceled or filled."""
        require_symbol(request)
        request = msgspec.structs.replace(
            request, limit=clamp_limit(request.limit, DEFAULT_ORDER_LIMIT, MAX_ORDER_LIMIT)
        )
        return await self._request(HTTPMethod.GET, endpoints.ALL_ORDERS, request, List[QueryOrder], sign=True)

    # OCO

    async def new_oco(self, request: OCORequest) -> OCOOrder:
        """Place a one-cancels-the-other order pair."""
        require_symbol(request)
        if not request.side:
            raise EmptySideError()
        if _blank(request.quantity):
            raise EmptyQuantityError()
        if _blank(request.price):
            raise EmptyPriceError()
        if _blank(request.stop_price):
            raise EmptyStopPriceError()
        return await self._request(HTTPMethod.POST, endpoints.ORDER_OCO, request, OCOOrder, sign=True)

    async def cancel_oco(self, request: CancelOCORequest) -> OCOOrder:
        """Cancel an entire order list."""
        require_symbol(request)
        if not request.order_list_id and not request.list_client_order_id:
            raise EmptyOrderIdError()
        return await self._request(HTTPMethod.DELETE, endpoints.ORDER_LIST, request, OCOOrder, sign=True)

    async def query_oco(self, request: QueryOCORequest) -> OCOOrder:
        require_request(request)
        if not request.order_list_id and not request.orig_client_order_id:
            raise EmptyOrderIdError()
        return await self._request(HTTPMethod.GET, endpoints.ORDER_LIST, request, OCOOrder, sign=True)

    async def all_oco(self, request: Optional[AllOCORequest] = None) -> List[OCOOrder]:
        if request is not None:
            request = msgspec.structs.replace(
                request, limit=clamp_limit(request.limit, DEFAULT_ORDER_LIMIT, MAX_ORDER_LIMIT)
            )
        return await self._request(HTTPMethod.GET, endpoints.ALL_ORDER_LIST, request, List[OCOOrder], sign=True)

    async def open_oco(self) -> List[OCOOrder]:
        return await self._request(HTTPMethod.GET, endpoints.OPEN_ORDER_LIST, None, List[OCOOrder], sign=True)
