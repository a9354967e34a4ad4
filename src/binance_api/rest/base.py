import logging
from typing import Any, Dict, Optional, Type, TypeVar

import msgspec

from binance_api.exceptions import MalformedResponseError, NilRequestError, EmptySymbolError
from binance_api.structs.requests import Request
from binance_api.transport.rest_client import RestClient
from binance_api.transport.structs import HTTPMethod

T = TypeVar("T")


class BaseRestApi:
    """
    Base for the endpoint groups.

    Each endpoint method validates its request, calls the transport and decodes the
    200 body into a typed response. Decoders are created once per response type.
    """

    def __init__(self, rest_client: RestClient):
        self._rest_client = rest_client
        self._decoders: Dict[Any, msgspec.json.Decoder] = {}
        self.logger = logging.getLogger(__name__)

    @property
    def rest_client(self) -> RestClient:
        return self._rest_client

    def _decoder(self, response_type: Any) -> msgspec.json.Decoder:
        decoder = self._decoders.get(response_type)
        if decoder is None:
            # strict=False accepts the exchange's quoted numbers for float fields
            decoder = msgspec.json.Decoder(response_type, strict=False)
            self._decoders[response_type] = decoder
        return decoder

    def _decode(self, content: bytes, response_type: Type[T]) -> T:
        try:
            return self._decoder(response_type).decode(content)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise MalformedResponseError(200, f"cannot decode response: {e}", content) from e

    async def _request(
        self,
        method: HTTPMethod,
        path: str,
        request: Optional[Request] = None,
        response_type: Any = None,
        sign: bool = False,
        stream: bool = False,
    ) -> Any:
        content = await self._rest_client.execute(method, path, request, sign=sign, stream=stream)
        if response_type is None:
            return None
        return self._decode(content, response_type)


def require_request(request: Any) -> None:
    if request is None:
        raise NilRequestError()


def require_symbol(request: Any) -> None:
    """Raise unless the request is present and carries a symbol."""
    require_request(request)
    if not request.symbol:
        raise EmptySymbolError()


def clamp_limit(limit: Optional[int], default: int, maximum: int) -> int:
    """Replace a missing, zero or out-of-range limit with the endpoint default."""
    if not limit or limit < 0 or limit > maximum:
        return default
    return limit
