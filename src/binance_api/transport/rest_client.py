"""
Signed-request REST transport.

Single execution path for every REST call:
encode -> sign (optional) -> place parameters -> send -> record usage -> classify status.

The transport returns raw response bytes on HTTP 200. Typed decoding belongs to the
endpoint methods. Non-200 responses become APIError subclasses.

No retries are performed here. Retry policy, if any, is left to the caller.
"""

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Tuple

import aiohttp
import msgspec
from yarl import URL

from binance_api.config.structs import RestClientConfig
from binance_api.exceptions import MalformedErrorBody, NetworkError, create_api_error
from binance_api.structs.requests import Request
from binance_api.structs.responses import ErrorResponse
from .encoder import encode_request
from .signer import DEFAULT_RECV_WINDOW, Signer, get_timestamp_ms
from .structs import HTTPMethod, QUERY_METHODS, RateLimitUsage

USED_WEIGHT_HEADER_PREFIX = "x-mbx-used-weight-"
ORDER_COUNT_HEADER_PREFIX = "x-mbx-order-count-"
RETRY_AFTER_HEADER = "retry-after"
API_KEY_HEADER = "X-MBX-APIKEY"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

SendResult = Tuple[int, Mapping[str, str], bytes]


class RestClient(ABC):
    """
    Transport core shared by every REST implementation.

    Subclasses only provide ``_send``. Everything that affects the signed bytes,
    the headers, usage accounting and error classification lives here so that
    all implementations behave identically.

    Safe for concurrent use: usage counters are guarded by a lock and the signer
    creates a fresh HMAC per call.
    """

    def __init__(self, api_key: str = "", api_secret: str = "", recv_window: int = DEFAULT_RECV_WINDOW):
        self._api_key = api_key
        self._signer = Signer(api_secret)
        self._recv_window = recv_window

        self._usage_lock = threading.Lock()
        self._used_weight: Dict[str, int] = {}
        self._order_count: Dict[str, int] = {}
        self._retry_after: Optional[int] = None

        self._error_decoder = msgspec.json.Decoder(ErrorResponse)
        self.logger = logging.getLogger(__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @abstractmethod
    async def _send(
        self,
        method: HTTPMethod,
        path: str,
        query: str,
        body: str,
        headers: Dict[str, str],
    ) -> SendResult:
        """
        Dispatch one HTTP request.

        Args:
            method: HTTP method
            path: Endpoint path, e.g. /api/v3/order
            query: Already encoded query string, sent byte for byte
            body: Already encoded form body
            headers: Request headers

        Returns:
            (status, response headers, response body)

        Raises:
            NetworkError: Connection, DNS or timeout failure
        """

    async def close(self) -> None:
        """Release transport resources."""

    async def execute(
        self,
        method: HTTPMethod,
        path: str,
        request: Optional[Request] = None,
        sign: bool = False,
        stream: bool = False,
    ) -> bytes:
        """
        Execute one REST call.

        Args:
            method: HTTP method
            path: Endpoint path
            request: Request struct, None for parameterless endpoints
            sign: Add timestamp, recvWindow and signature
            stream: User data stream call, needs the API key header without signing

        Returns:
            Raw body of the 200 response

        Raises:
            EncodingError: Request could not be encoded
            NetworkError: Transport failure
            APIError: Exchange returned a well-formed error
            MalformedErrorBody: Exchange returned an error body that is not {"code", "msg"}
        """
        payload = encode_request(request)
        if sign:
            payload = self._signer.sign(payload, get_timestamp_ms(), self._recv_window)

        headers = {"Accept": "application/json"}
        if sign or stream:
            headers[API_KEY_HEADER] = self._api_key

        if method in QUERY_METHODS:
            query, body = payload, ""
        else:
            query, body = "", payload
            headers["Content-Type"] = FORM_CONTENT_TYPE

        status, response_headers, content = await self._send(method, path, query, body, headers)

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("%s %s signed=%s status=%s", method.value, path, sign, status)

        retry_after = self._update_usage(response_headers)

        if status != 200:
            raise self._parse_error(status, content, retry_after)
        return content

    def _update_usage(self, headers: Mapping[str, str]) -> Optional[int]:
        """Store usage counters from response headers, return Retry-After if present."""
        used_weight: Dict[str, int] = {}
        order_count: Dict[str, int] = {}
        retry_after: Optional[int] = None

        for name, value in headers.items():
            lower_name = name.lower()
            if lower_name.startswith(USED_WEIGHT_HEADER_PREFIX):
                _parse_counter(used_weight, lower_name[len(USED_WEIGHT_HEADER_PREFIX):], value)
            elif lower_name.startswith(ORDER_COUNT_HEADER_PREFIX):
                _parse_counter(order_count, lower_name[len(ORDER_COUNT_HEADER_PREFIX):], value)
            elif lower_name == RETRY_AFTER_HEADER:
                retry_after = _parse_int(value)

        with self._usage_lock:
            self._used_weight.update(used_weight)
            self._order_count.update(order_count)
            if retry_after is not None:
                self._retry_after = retry_after
        return retry_after

    def _parse_error(self, status: int, content: bytes, retry_after: Optional[int]) -> Exception:
        try:
            error = self._error_decoder.decode(content)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            self.logger.warning("HTTP %s with undecodable error body", status)
            return MalformedErrorBody(status, f"cannot decode error response: {e}", content)

        self.logger.warning("API error: status=%s code=%s msg=%s", status, error.code, error.msg)
        return create_api_error(status, error.msg, error.code, retry_after)

    def set_window(self, recv_window: int) -> None:
        """Set recvWindow in milliseconds for subsequent signed calls."""
        self._recv_window = recv_window

    @property
    def recv_window(self) -> int:
        return self._recv_window

    def used_weight(self) -> Dict[str, int]:
        with self._usage_lock:
            return dict(self._used_weight)

    def order_count(self) -> Dict[str, int]:
        with self._usage_lock:
            return dict(self._order_count)

    def retry_after(self) -> Optional[int]:
        with self._usage_lock:
            return self._retry_after

    def usage_snapshot(self) -> RateLimitUsage:
        """Consistent copy of all usage counters."""
        with self._usage_lock:
            return RateLimitUsage(
                used_weight=dict(self._used_weight),
                order_count=dict(self._order_count),
                retry_after=self._retry_after,
            )


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_counter(counters: Dict[str, int], interval: str, value: str) -> None:
    if not interval:
        return
    count = _parse_int(value)
    if count is not None:
        counters[interval] = count


class AiohttpRestClient(RestClient):
    """
    Default transport over a pooled aiohttp session.

    A caller-supplied session is used as is and left open by ``close()``.
    """

    def __init__(self, config: Optional[RestClientConfig] = None, session: Optional[aiohttp.ClientSession] = None):
        config = config or RestClientConfig()
        config.validate()
        super().__init__(config.api_key, config.api_secret, config.recv_window)

        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            if not self._owns_session:
                raise NetworkError("Session supplied by the caller is closed")

            connector = aiohttp.TCPConnector(
                limit=self.config.max_connections,
                ttl_dns_cache=300,
                use_dns_cache=True,
                keepalive_timeout=60,
            )
            timeout = aiohttp.ClientTimeout(
                total=self.config.request_timeout,
                connect=self.config.connect_timeout,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers={"User-Agent": self.config.user_agent},
            )
        return self._session

    async def _send(
        self,
        method: HTTPMethod,
        path: str,
        query: str,
        body: str,
        headers: Dict[str, str],
    ) -> SendResult:
        session = await self._ensure_session()

        url = f"{self.base_url}{path}"
        if query:
            url = f"{url}?{query}"

        try:
            async with session.request(
                method.value,
                URL(url, encoded=True),
                data=body.encode() if body else None,
                headers=headers,
            ) as response:
                content = await response.read()
                return response.status, response.headers, content
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("%s %s failed: %s", method.value, path, e)
            raise NetworkError(f"{method.value} {path} failed: {e}") from e

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self.logger.info("REST session closed")
        self._session = None if self._owns_session else self._session


def create_rest_client(
    config: Optional[RestClientConfig] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> RestClient:
    """Create the REST transport for a configuration."""
    return AiohttpRestClient(config, session)
