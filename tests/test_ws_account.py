"""Tests for the user data stream: event classification and single-reader fan-out."""

import asyncio
import json
import random

import pytest
from websockets.exceptions import ConnectionClosedOK

from binance_api.config.structs import WebSocketConfig
from binance_api.exceptions import (
    IncorrectAccountEventTypeError,
    StreamAlreadyActiveError,
    StreamClosedError,
    StreamOverflowError,
)
from binance_api.ws.account import (
    AccountStream,
    classify_event,
    decode_account_event,
    decode_event_type,
    sniff_event_type,
)
from binance_api.ws.events import AccountUpdate, BalanceUpdate, OCOUpdate, OrderUpdate, UpdateType
from fakes import FakeWebSocket

ORDER_EVENT = {
    "e": "executionReport", "E": 1499405658658, "s": "ETHBTC", "c": "mUvoqJxFIILMdfAW5iGSOW", "S": "BUY",
    "o": "LIMIT", "f": "GTC", "q": "1.00000000", "p": "0.10264410", "P": "0.00000000", "F": "0.00000000",
    "g": -1, "C": "", "x": "NEW", "X": "NEW", "r": "NONE", "i": 4293153, "l": "0.00000000",
    "z": "0.00000000", "L": "0.00000000", "n": "0", "N": None, "T": 1499405658657, "t": -1,
    "I": 8641984, "w": True, "m": False, "M": False, "O": 1499405658657, "Z": "0.00000000",
    "Y": "0.00000000", "Q": "0.00000000", "W": 1499405658657, "V": "NONE",
}

BALANCE_EVENT = {"e": "balanceUpdate", "E": 1573200697110, "a": "BTC", "d": "100.00000000", "T": 1573200697068}

ACCOUNT_EVENT = {
    "e": "outboundAccountPosition", "E": 1564034571105, "u": 1564034571073,
    "B": [{"a": "ETH", "f": "10000.000000", "l": "0.000000"}],
}

OCO_EVENT = {
    "e": "listStatus", "E": 1564035303637, "s": "ETHBTC", "g": 2, "c": "OCO", "l": "EXEC_STARTED",
    "L": "EXECUTING", "r": "NONE", "C": "F4QN4G8DlFATFlIUQ0cjdD", "T": 1564035303625,
    "O": [
        {"s": "ETHBTC", "i": 17, "c": "AJYsMjErWJesZvqlJCTUgL"},
        {"s": "ETHBTC", "i": 18, "c": "bfYPSQdLoqAJeNrOr9adzq"},
    ],
}

EVENTS = {
    UpdateType.ORDER_REPORT: ORDER_EVENT,
    UpdateType.BALANCE_UPDATE: BALANCE_EVENT,
    UpdateType.OUTBOUND_ACCOUNT_POSITION: ACCOUNT_EVENT,
    UpdateType.OCO_REPORT: OCO_EVENT,
}


def _frame(event, compact=True):
    separators = (",", ":") if compact else (", ", ": ")
    return json.dumps(event, separators=separators).encode()


def _shuffled(event, rng):
    items = list(event.items())
    rng.shuffle(items)
    return dict(items)


async def _collect(events):
    return [event async for event in events]


class TestClassification:

    @pytest.mark.parametrize("event_type, event", list(EVENTS.items()))
    def test_sniff_known_types(self, event_type, event):
        assert sniff_event_type(_frame(event)) == event_type
        assert sniff_event_type(_frame(event).decode()) == event_type

    def test_sniff_tolerates_whitespace(self):
        assert sniff_event_type(b'{ "e": "balanceUpdate", "E": 1}') == "balanceUpdate"

    @pytest.mark.parametrize("payload", [
        b'{"E":1573200697110,"e":"balanceUpdate"}',
        b'{"e":1,"E":2}',
        b'{"e":"balanceUpdate"}',
        b"[]",
        b"",
        b"ping",
    ])
    def test_sniff_rejects_unexpected_layout(self, payload):
        with pytest.raises(IncorrectAccountEventTypeError):
            sniff_event_type(payload)

    @pytest.mark.parametrize("event_type, event", list(EVENTS.items()))
    def test_fast_path_agrees_with_full_decode(self, event_type, event):
        rng = random.Random(event_type)
        for _ in range(25):
            payload = _frame(_shuffled(event, rng), compact=rng.random() < 0.5)

            assert decode_event_type(payload) == event_type
            assert classify_event(payload) == event_type
            assert classify_event(payload, fast_path=False) == event_type
            try:
                sniffed = sniff_event_type(payload)
            except IncorrectAccountEventTypeError:
                continue
            assert sniffed == event_type

    def test_unknown_type_uses_full_decode(self):
        assert classify_event(b'{"e":"somethingNew","E":1}') == "somethingNew"

    @pytest.mark.parametrize("payload", [b'{"E":1}', b'{"e":5}', b"not json"])
    def test_missing_type_raises(self, payload):
        with pytest.raises(IncorrectAccountEventTypeError):
            classify_event(payload)

    @pytest.mark.parametrize("event_type, event_class", [
        (UpdateType.ORDER_REPORT, OrderUpdate),
        (UpdateType.BALANCE_UPDATE, BalanceUpdate),
        (UpdateType.OUTBOUND_ACCOUNT_POSITION, AccountUpdate),
        (UpdateType.OCO_REPORT, OCOUpdate),
    ])
    def test_typed_decode(self, event_type, event_class):
        assert isinstance(decode_account_event(event_type, _frame(EVENTS[event_type])), event_class)

    def test_oco_report_fully_decoded(self):
        update = decode_account_event(UpdateType.OCO_REPORT, _frame(OCO_EVENT))

        assert update.order_list_id == 2
        assert update.list_order_status == "EXECUTING"
        assert [order.order_id for order in update.orders] == [17, 18]

    def test_unknown_type_keeps_raw_frame(self):
        assert decode_account_event("somethingNew", '{"e":"somethingNew"}') == b'{"e":"somethingNew"}'


class TestAccountStream:

    @pytest.mark.asyncio
    async def test_read(self):
        stream = AccountStream(FakeWebSocket([_frame(ORDER_EVENT)]), name="test")

        event_type, order = await stream.read()

        assert event_type == UpdateType.ORDER_REPORT
        assert order.order_id == 4293153
        assert order.working is True

    @pytest.mark.asyncio
    async def test_fan_out_to_typed_streams(self):
        ws = FakeWebSocket([
            _frame(ORDER_EVENT),
            _frame(ACCOUNT_EVENT),
            _frame(BALANCE_EVENT),
            _frame(OCO_EVENT),
            _frame(ORDER_EVENT),
        ])
        ws.finish()
        stream = AccountStream(ws)

        orders, balances, oco = await asyncio.wait_for(asyncio.gather(
            _collect(stream.orders_stream()),
            _collect(stream.balances_stream()),
            _collect(stream.oco_stream()),
        ), 1.0)

        assert [type(order) for order in orders] == [OrderUpdate, OrderUpdate]
        assert [balance.asset for balance in balances] == ["BTC"]
        assert oco[0].contingency_type == "OCO"

    @pytest.mark.asyncio
    async def test_same_frame_to_every_matching_subscriber(self):
        ws = FakeWebSocket([_frame(ACCOUNT_EVENT), _frame(BALANCE_EVENT)])
        ws.finish()
        stream = AccountStream(ws)

        first, second, everything = await asyncio.wait_for(asyncio.gather(
            _collect(stream.account_stream()),
            _collect(stream.account_stream()),
            _collect(stream.subscribe()),
        ), 1.0)

        assert first == second
        assert first[0].balances[0].asset == "ETH"
        assert [event_type for event_type, _ in everything] == [
            UpdateType.OUTBOUND_ACCOUNT_POSITION,
            UpdateType.BALANCE_UPDATE,
        ]

    @pytest.mark.asyncio
    async def test_subscribe_filter(self):
        ws = FakeWebSocket([_frame(ORDER_EVENT), _frame(BALANCE_EVENT), b'{"e":"somethingNew"}'])
        ws.finish()
        stream = AccountStream(ws)

        events = await asyncio.wait_for(
            _collect(stream.subscribe(UpdateType.BALANCE_UPDATE, "somethingNew")), 1.0
        )

        assert [event_type for event_type, _ in events] == [UpdateType.BALANCE_UPDATE, "somethingNew"]
        assert events[1][1] == b'{"e":"somethingNew"}'

    @pytest.mark.asyncio
    async def test_bad_frame_ends_every_subscriber(self):
        ws = FakeWebSocket([_frame(ORDER_EVENT), b'{"E":1}', _frame(BALANCE_EVENT)])
        stream = AccountStream(ws)
        orders = stream.orders_stream()
        balances = stream.balances_stream()

        received_orders, received_balances = await asyncio.wait_for(
            asyncio.gather(_collect(orders), _collect(balances)), 1.0
        )

        assert len(received_orders) == 1
        assert received_balances == []
        assert isinstance(orders.err, IncorrectAccountEventTypeError)
        assert balances.err is orders.err

    @pytest.mark.asyncio
    async def test_full_decode_mode(self):
        ws = FakeWebSocket([b'{"E":1573200697110,"e":"balanceUpdate","a":"BTC","d":"1","T":1}'])
        ws.finish()
        stream = AccountStream(ws, fast_path=False)

        balances = await asyncio.wait_for(_collect(stream.balances_stream()), 1.0)

        assert balances[0].balance_delta == "1"

    @pytest.mark.asyncio
    async def test_close_ends_subscribers(self):
        stream = AccountStream(FakeWebSocket(wake_on_close=False))
        orders = stream.orders_stream()
        consumer = asyncio.create_task(_collect(orders))
        await asyncio.sleep(0.01)

        await asyncio.wait_for(stream.close(), 1.0)

        assert await asyncio.wait_for(consumer, 1.0) == []
        assert isinstance(orders.err, StreamClosedError)

    @pytest.mark.asyncio
    async def test_subscriptions_own_the_socket(self):
        stream = AccountStream(FakeWebSocket())
        stream.orders_stream()

        with pytest.raises(StreamAlreadyActiveError):
            await stream.read()

        await stream.close()

    @pytest.mark.asyncio
    async def test_subscribe_after_close(self):
        stream = AccountStream(FakeWebSocket())
        await stream.close()

        with pytest.raises(StreamClosedError):
            stream.balances_stream()

    @pytest.mark.asyncio
    async def test_subscribe_after_reader_finished(self):
        ws = FakeWebSocket()
        ws.finish()
        stream = AccountStream(ws)
        await asyncio.wait_for(_collect(stream.orders_stream()), 1.0)

        late = stream.balances_stream()

        assert await asyncio.wait_for(_collect(late), 1.0) == []
        await stream.close()


class TestSubscriberIsolation:

    @pytest.mark.asyncio
    async def test_unread_subscriber_does_not_block_others(self):
        ws = FakeWebSocket([_frame(BALANCE_EVENT)] * 3 + [_frame(ORDER_EVENT)])
        stream = AccountStream(ws, WebSocketConfig(max_queue_size=1))
        orders = stream.orders_stream()
        balances = stream.balances_stream()

        order = await asyncio.wait_for(orders.__anext__(), 1.0)

        assert order.order_id == 4293153
        for _ in range(3):
            balance = await asyncio.wait_for(balances.__anext__(), 1.0)
            assert balance.asset == "BTC"
        await stream.close()

    @pytest.mark.asyncio
    async def test_consumers_at_different_speeds(self):
        frames = []
        for n in range(1, 4):
            frames.append(_frame(dict(ORDER_EVENT, i=n)))
            frames.append(_frame(dict(BALANCE_EVENT, d=f"{n}.0")))
        ws = FakeWebSocket(frames)
        ws.finish()
        stream = AccountStream(ws)

        async def slow(events):
            received = []
            async for event in events:
                received.append(event)
                await asyncio.sleep(0.01)
            return received

        fast_task = asyncio.create_task(_collect(stream.balances_stream()))
        slow_task = asyncio.create_task(slow(stream.orders_stream()))

        balances = await asyncio.wait_for(fast_task, 1.0)
        assert not slow_task.done()
        orders = await asyncio.wait_for(slow_task, 1.0)

        assert [balance.balance_delta for balance in balances] == ["1.0", "2.0", "3.0"]
        assert [order.order_id for order in orders] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_lagging_subscriber_detached(self):
        ws = FakeWebSocket([_frame(BALANCE_EVENT)] * 3 + [_frame(ORDER_EVENT)])
        ws.finish()
        stream = AccountStream(ws, WebSocketConfig(subscriber_queue_size=2))
        orders = stream.orders_stream()
        balances = stream.balances_stream()

        received_orders = await asyncio.wait_for(_collect(orders), 1.0)
        received_balances = await asyncio.wait_for(_collect(balances), 1.0)

        assert [order.order_id for order in received_orders] == [4293153]
        assert isinstance(orders.err, ConnectionClosedOK)
        assert len(received_balances) == 2
        assert isinstance(balances.err, StreamOverflowError)

    @pytest.mark.asyncio
    async def test_aclose_detaches_subscriber(self):
        ws = FakeWebSocket()
        stream = AccountStream(ws, WebSocketConfig(subscriber_queue_size=1))
        orders = stream.orders_stream()
        balances = stream.balances_stream()

        await balances.aclose()
        for _ in range(3):
            ws.feed(_frame(BALANCE_EVENT))
        ws.feed(_frame(ORDER_EVENT))

        order = await asyncio.wait_for(orders.__anext__(), 1.0)

        assert order.order_id == 4293153
        assert balances.err is None
        assert await _collect(balances) == []
        await stream.close()

    @pytest.mark.asyncio
    async def test_aclose_wakes_waiting_consumer(self):
        stream = AccountStream(FakeWebSocket())
        balances = stream.balances_stream()
        consumer = asyncio.create_task(_collect(balances))
        await asyncio.sleep(0.01)

        await balances.aclose()

        assert await asyncio.wait_for(consumer, 1.0) == []
        assert stream.pump_active
        await stream.close()

    @pytest.mark.asyncio
    async def test_subscriber_joining_after_error_is_ended(self):
        ws = FakeWebSocket([_frame(BALANCE_EVENT)])
        ws.finish()
        stream = AccountStream(ws)
        balances = stream.balances_stream()
        await asyncio.sleep(0.01)

        late = stream.account_stream()

        assert await asyncio.wait_for(_collect(late), 1.0) == []
        assert isinstance(late.err, ConnectionClosedOK)
        assert len(await asyncio.wait_for(_collect(balances), 1.0)) == 1
