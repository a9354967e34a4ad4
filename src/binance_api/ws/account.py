"""
User data stream.

Every frame on the account stream carries its event type in the ``e`` key, which the
exchange emits as the first key of the object:

    {"e":"executionReport","E":1499405658658,"s":"ETHBTC",...}

``sniff_event_type`` reads that value straight from the bytes between the first ``:``
and the first ``,``, tolerating whitespace around both. ``classify_event`` falls back
to a full decode of ``{"e": str}`` whenever the sniff fails or yields an unknown type, so
a change of key order on the exchange side costs speed, not correctness.

A single reader task consumes the socket and fans each frame out to every subscriber
whose filter matches, without ever waiting on a subscriber. Frames nobody subscribed to
are dropped without being decoded.
"""

import asyncio
import operator
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

import msgspec

from binance_api.config.structs import WebSocketConfig
from binance_api.exceptions import IncorrectAccountEventTypeError, StreamClosedError, StreamOverflowError
from .connection import STREAM_END, EventStream, Payload, WebSocketConnection
from .events import (
    ACCOUNT_EVENT_TYPES,
    AccountUpdate,
    BalanceUpdate,
    EventType,
    OCOUpdate,
    OrderUpdate,
    UpdateType,
)

_EVENT_TYPE_DECODER = msgspec.json.Decoder(EventType)

_EVENT_DECODERS: Dict[str, msgspec.json.Decoder] = {
    UpdateType.ORDER_REPORT: msgspec.json.Decoder(OrderUpdate),
    UpdateType.BALANCE_UPDATE: msgspec.json.Decoder(BalanceUpdate),
    UpdateType.OUTBOUND_ACCOUNT_POSITION: msgspec.json.Decoder(AccountUpdate),
    UpdateType.OCO_REPORT: msgspec.json.Decoder(OCOUpdate),
}

AccountEvent = Tuple[str, Any]

_pick_event = operator.itemgetter(1)


def _as_bytes(payload: Payload) -> bytes:
    return payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)


def sniff_event_type(payload: Payload) -> str:
    """
    Extract the event type from a frame without parsing it.

    Raises:
        IncorrectAccountEventTypeError: The frame does not start with a string ``"e"`` key
    """
    data = _as_bytes(payload)
    start = data.find(b":")
    end = data.find(b",")
    if start < 0 or end < start:
        raise IncorrectAccountEventTypeError()
    key = data[:start].strip().lstrip(b"{").strip()
    value = data[start + 1:end].strip()
    if key != b'"e"' or len(value) < 2 or value[:1] != b'"' or value[-1:] != b'"':
        raise IncorrectAccountEventTypeError()
    return value[1:-1].decode("utf-8", errors="replace")


def decode_event_type(payload: Payload) -> str:
    """
    Extract the event type with a full JSON decode.

    Raises:
        IncorrectAccountEventTypeError: Not a JSON object with a string ``e`` key
    """
    try:
        return _EVENT_TYPE_DECODER.decode(payload).event_type
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise IncorrectAccountEventTypeError() from e


def classify_event(payload: Payload, fast_path: bool = True) -> str:
    """Event type of an account stream frame."""
    if fast_path:
        try:
            event_type = sniff_event_type(payload)
        except IncorrectAccountEventTypeError:
            event_type = None
        if event_type in ACCOUNT_EVENT_TYPES:
            return event_type
    return decode_event_type(payload)


def decode_account_event(event_type: str, payload: Payload) -> Any:
    """Typed event for known types, the raw frame bytes otherwise."""
    decoder = _EVENT_DECODERS.get(event_type)
    if decoder is None:
        return _as_bytes(payload)
    return decoder.decode(payload)


class _Subscription:
    """
    Delivery path of one subscriber.

    Events are queued without waiting, so the shared reader never blocks on a consumer.
    The queue holds one slot above ``backlog`` so the end marker always fits.
    """
    __slots__ = ("event_types", "queue", "stream", "backlog")

    def __init__(self, event_types: Optional[FrozenSet[str]], stream: EventStream, queue: asyncio.Queue, backlog: int):
        self.event_types = event_types
        self.stream = stream
        self.queue = queue
        self.backlog = backlog

    def accepts(self, event_type: str) -> bool:
        return self.event_types is None or event_type in self.event_types

    def deliver(self, item: AccountEvent) -> bool:
        """Queue an event, False when the subscriber is ``backlog`` events behind."""
        if self.queue.qsize() >= self.backlog:
            return False
        self.queue.put_nowait(item)
        return True

    def end(self) -> None:
        self.queue.put_nowait(STREAM_END)


class AccountStream(WebSocketConnection):
    """
    User data stream addressed by a listen key.

    Every sub-stream gets its own buffer, so sub-streams may be consumed at different
    speeds or not at all. A sub-stream more than ``subscriber_queue_size`` events behind
    is ended with ``StreamOverflowError`` while the others keep receiving. Call
    ``aclose()`` on a sub-stream that is no longer read.

    Usage:
        listen_key = await client.data_stream()
        account = await ws_client.account_info(listen_key)

        async def print_orders():
            async for order in account.orders_stream():
                ...

        async def print_balances():
            async for balance in account.balances_stream():
                ...

        await asyncio.gather(print_orders(), print_balances())
    """

    def __init__(self, ws: Any, config: Optional[WebSocketConfig] = None, name: str = "", fast_path: bool = True):
        config = config or WebSocketConfig()
        super().__init__(ws, config, name)
        self._fast_path = fast_path
        self._backlog = config.subscriber_queue_size
        self._subscribers: List[_Subscription] = []
        self._ended = False

    async def read(self) -> AccountEvent:
        """
        Wait for the next frame and decode it.

        Returns:
            (event type, typed event) or (event type, raw bytes) for unknown types

        Raises:
            StreamAlreadyActiveError: Subscriptions own the socket
            IncorrectAccountEventTypeError: Frame has no readable event type
        """
        payload = await self._recv()
        event_type = classify_event(payload, self._fast_path)
        return event_type, decode_account_event(event_type, payload)

    def subscribe(self, *event_types: str) -> EventStream[AccountEvent]:
        """Iterator of (event type, event) for the given types, all types when none given."""
        return self._subscribe(frozenset(event_types) if event_types else None)

    def orders_stream(self) -> EventStream[OrderUpdate]:
        return self._subscribe(frozenset({UpdateType.ORDER_REPORT}), _pick_event)

    def balances_stream(self) -> EventStream[BalanceUpdate]:
        return self._subscribe(frozenset({UpdateType.BALANCE_UPDATE}), _pick_event)

    def account_stream(self) -> EventStream[AccountUpdate]:
        return self._subscribe(frozenset({UpdateType.OUTBOUND_ACCOUNT_POSITION}), _pick_event)

    def oco_stream(self) -> EventStream[OCOUpdate]:
        return self._subscribe(frozenset({UpdateType.OCO_REPORT}), _pick_event)

    def _subscribe(self, event_types: Optional[FrozenSet[str]], pick: Any = None) -> EventStream:
        if self._closed:
            raise StreamClosedError(f"Stream {self.name} is closed")

        queue: asyncio.Queue = asyncio.Queue(maxsize=self._backlog + 1)
        stream = EventStream(queue, self, pick)
        subscriber = _Subscription(event_types, stream, queue, self._backlog)
        if self._ended:
            # Reader already terminated, nothing more will arrive
            subscriber.end()
            return stream

        self._subscribers.append(subscriber)
        if self._pump_task is None:
            self._start_pump(self._pump())
        return stream

    def _release(self, queue: asyncio.Queue) -> None:
        for subscriber in self._subscribers:
            if subscriber.queue is queue:
                self._subscribers.remove(subscriber)
                subscriber.end()
                return

    def _dispatch(self, payload: Payload) -> None:
        event_type = classify_event(payload, self._fast_path)
        targets = [subscriber for subscriber in self._subscribers if subscriber.accepts(event_type)]
        if not targets:
            return

        event = decode_account_event(event_type, payload)
        for subscriber in targets:
            if not subscriber.deliver((event_type, event)):
                self._detach_lagging(subscriber)

    def _detach_lagging(self, subscriber: _Subscription) -> None:
        self.logger.warning("Stream %s subscriber dropped after %d undelivered events", self.name, self._backlog)
        self._subscribers.remove(subscriber)
        subscriber.stream._fail(StreamOverflowError(
            f"Stream {self.name} subscriber fell {self._backlog} events behind"
        ))
        subscriber.end()

    def _end_subscribers(self) -> None:
        self._ended = True
        for subscriber in self._subscribers:
            subscriber.end()
        self._subscribers = []

    async def _pump(self) -> None:
        try:
            while True:
                payload = await self._ws.recv()
                self._dispatch(payload)
        except asyncio.CancelledError:
            self._pump_cancelled()
            self._end_subscribers()
            raise
        except Exception as e:
            self._record_error(e)
            self._end_subscribers()
