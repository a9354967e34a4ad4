"""
WebSocket stream connections.

One connection wraps one upgraded socket carrying one logical stream. Frames are
consumed either one at a time with ``read()`` or by a background pump task feeding
an ``EventStream`` async iterator through a bounded queue.

The socket supports exactly one reader, so ``read()`` and ``stream()`` exclude each
other and ``stream()`` can be started once per connection.

Closing the connection ends the pump: the pending ``recv()`` fails, the error is
recorded in ``err`` and the iterator stops.
"""

import asyncio
import logging
from typing import Any, Callable, Generic, Optional, Type, TypeVar, Union

import msgspec

from binance_api.config.structs import WebSocketConfig
from binance_api.exceptions import StreamAlreadyActiveError, StreamClosedError

T = TypeVar("T")

Payload = Union[str, bytes]

# Marks the end of an event queue
STREAM_END = object()


def force_end(queue: asyncio.Queue) -> None:
    """Put the end marker without waiting, dropping the oldest item if the queue is full."""
    while True:
        try:
            queue.put_nowait(STREAM_END)
            return
        except asyncio.QueueFull:
            queue.get_nowait()


class EventStream(Generic[T]):
    """
    Async iterator over the events of one stream.

    Iteration stops when the connection reports its first error or is closed.
    The terminal error, if any, is available in ``err`` afterwards.

    ``aclose()`` stops iteration early and releases the stream's subscription, if the
    connection shares its reader between several streams.
    """

    def __init__(self, queue: asyncio.Queue, owner: "WebSocketConnection", pick: Optional[Callable[[Any], T]] = None):
        self._queue = queue
        self._owner = owner
        self._pick = pick
        self._done = False
        self._err: Optional[BaseException] = None

    @property
    def err(self) -> Optional[BaseException]:
        return self._err if self._err is not None else self._owner.err

    def _fail(self, error: BaseException) -> None:
        """Terminal error of this stream alone, the connection keeps running."""
        self._err = error

    async def aclose(self) -> None:
        self._done = True
        self._owner._release(self._queue)

    def __aiter__(self) -> "EventStream[T]":
        return self

    async def __anext__(self) -> T:
        if self._done:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is STREAM_END:
            self._done = True
            raise StopAsyncIteration
        return self._pick(item) if self._pick is not None else item


class WebSocketConnection:
    """
    Base for stream connections: socket ownership, close handling, pump lifecycle.

    Args:
        ws: Connected websocket exposing ``recv()`` and ``close()``
        config: Queue bound and close timeout
        name: Stream name used in log output
    """

    def __init__(self, ws: Any, config: Optional[WebSocketConfig] = None, name: str = ""):
        config = config or WebSocketConfig()
        self._ws = ws
        self._queue_size = config.max_queue_size
        self._close_timeout = config.close_timeout
        self.name = name

        self._closed = False
        self._pump_task: Optional[asyncio.Task] = None
        self.err: Optional[BaseException] = None
        self.logger = logging.getLogger(__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pump_active(self) -> bool:
        return self._pump_task is not None and not self._pump_task.done()

    def _new_queue(self) -> asyncio.Queue:
        return asyncio.Queue(maxsize=self._queue_size)

    def _release(self, queue: asyncio.Queue) -> None:
        """Called by ``EventStream.aclose()``; single-stream connections keep reading."""
        pass

    async def _recv(self) -> Payload:
        """Receive one frame for a direct read."""
        if self._closed:
            raise StreamClosedError(f"Stream {self.name} is closed")
        if self.pump_active:
            raise StreamAlreadyActiveError(f"Stream {self.name} is consumed by a background reader")
        return await self._ws.recv()

    def _start_pump(self, pump: Any) -> None:
        if self._closed:
            pump.close()
            raise StreamClosedError(f"Stream {self.name} is closed")
        if self._pump_task is not None:
            pump.close()
            raise StreamAlreadyActiveError(f"Stream {self.name} already has a reader")
        self._pump_task = asyncio.create_task(pump)

    def _record_error(self, error: BaseException) -> None:
        self.err = error
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("Stream %s terminated: %r", self.name, error)

    def _pump_cancelled(self) -> None:
        if self.err is None:
            self._record_error(StreamClosedError(f"Stream {self.name} is closed"))

    async def close(self) -> None:
        """Close the socket and stop the background reader. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        try:
            await asyncio.wait_for(self._ws.close(), timeout=self._close_timeout)
        except asyncio.TimeoutError:
            self.logger.warning("Stream %s close timeout", self.name)

        task = self._pump_task
        if task is not None and not task.done():
            # Let the reader observe the closed socket first
            await asyncio.sleep(0)
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task})

        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info("Stream %s closed", self.name)


class StreamConnection(WebSocketConnection, Generic[T]):
    """
    Market data stream decoding every frame into one event type.

    Usage:
        async with await ws_client.trades("BTCUSDT") as conn:
            async for trade in conn.stream():
                ...
    """

    def __init__(
        self,
        ws: Any,
        event_type: Type[T],
        config: Optional[WebSocketConfig] = None,
        name: str = "",
    ):
        super().__init__(ws, config, name)
        self.event_type = event_type
        # Depth levels arrive as quoted numbers
        self._decoder = msgspec.json.Decoder(event_type, strict=False)

    def decode(self, payload: Payload) -> T:
        return self._decoder.decode(payload)

    async def read(self) -> T:
        """
        Wait for the next frame and decode it.

        Raises:
            StreamClosedError: Connection was closed
            StreamAlreadyActiveError: A background stream owns the socket
            msgspec.DecodeError, msgspec.ValidationError: Frame does not match the event type
            websockets.ConnectionClosed: Socket closed by the server
        """
        return self.decode(await self._recv())

    def stream(self) -> EventStream[T]:
        """Start the background reader and return its event iterator."""
        queue = self._new_queue()
        self._start_pump(self._pump(queue))
        return EventStream(queue, self)

    async def _pump(self, queue: asyncio.Queue) -> None:
        try:
            try:
                while True:
                    payload = await self._ws.recv()
                    await queue.put(self._decoder.decode(payload))
            except Exception as e:
                self._record_error(e)
            await queue.put(STREAM_END)
        except asyncio.CancelledError:
            self._pump_cancelled()
            force_end(queue)
            raise
