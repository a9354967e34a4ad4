"""Tests for the diagnostic command line."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from websockets.exceptions import ConnectionClosedError

from binance_api.cli import build_parser, main
from binance_api.config.structs import ClientConfig
from binance_api.exceptions import ConfigurationError, NetworkError
from binance_api.structs.requests import DepthRequest, Ticker24hRequest
from binance_api.ws.connection import StreamConnection
from binance_api.ws.events import TradeUpdate
from fakes import FakeWebSocket


def _trade_frame(trade_id):
    return f'{{"e":"trade","E":1,"s":"BTCUSDT","t":{trade_id},"p":"0.001","q":"100","T":1,"m":false}}'


@pytest.fixture
def config_loader():
    with patch("binance_api.cli.load_config", return_value=ClientConfig()) as load_config, \
            patch("binance_api.cli.setup_logging") as setup_logging:
        yield load_config, setup_logging


@pytest.fixture
def rest(config_loader):
    client = AsyncMock()
    client.__aenter__.return_value = client
    client.__aexit__.return_value = False
    with patch("binance_api.cli.Client", return_value=client):
        yield client


def _json_lines(capsys):
    return [json.loads(line) for line in capsys.readouterr().out.splitlines()]


class TestParser:

    def test_depth_arguments(self):
        args = build_parser().parse_args(["--log-level", "DEBUG", "depth", "btcusdt", "--limit", "5"])

        assert args.command == "depth"
        assert args.symbol == "btcusdt"
        assert args.limit == 5
        assert args.log_level == "DEBUG"
        assert args.config is None

    def test_defaults(self):
        args = build_parser().parse_args(["trades", "BTCUSDT"])
        assert args.count == 10

        assert build_parser().parse_args(["depth", "BTCUSDT"]).limit == 100

    @pytest.mark.parametrize("argv", [[], ["--log-level", "LOUD", "ping"], ["withdraw"]])
    def test_rejected_arguments(self, argv):
        with pytest.raises(SystemExit):
            build_parser().parse_args(argv)


class TestMain:

    def test_ping(self, config_loader, rest, capsys):
        assert main(["--config", "client.yaml", "--log-level", "WARNING", "ping"]) == 0

        load_config, setup_logging = config_loader
        load_config.assert_called_once_with("client.yaml")
        setup_logging.assert_called_once_with(ClientConfig().logging, "WARNING")
        rest.ping.assert_awaited_once()
        rest.__aexit__.assert_awaited_once()
        assert _json_lines(capsys) == [{"ping": "ok"}]

    def test_time(self, config_loader, rest, capsys):
        rest.server_time.return_value = 1499827319559

        assert main(["time"]) == 0
        assert _json_lines(capsys) == [{"serverTime": 1499827319559}]

    def test_depth(self, config_loader, rest, capsys):
        rest.depth.return_value = {"lastUpdateId": 1027024, "bids": [], "asks": []}

        assert main(["depth", "bnbbtc", "--limit", "5"]) == 0

        rest.depth.assert_awaited_once_with(DepthRequest(symbol="BNBBTC", limit=5))
        assert _json_lines(capsys)[0]["lastUpdateId"] == 1027024

    def test_ticker(self, config_loader, rest):
        rest.ticker_24h.return_value = {"symbol": "BNBBTC"}

        assert main(["ticker", "bnbbtc"]) == 0

        rest.ticker_24h.assert_awaited_once_with(Ticker24hRequest(symbol="BNBBTC"))

    def test_request_failure(self, config_loader, rest, capsys):
        rest.ping.side_effect = NetworkError("connection refused")

        assert main(["ping"]) == 1
        assert "Error: connection refused" in capsys.readouterr().err

    def test_configuration_failure(self, config_loader, capsys):
        load_config, _ = config_loader
        load_config.side_effect = ConfigurationError("recv_window must be in (0, 60000]", "rest.recv_window")

        assert main(["ping"]) == 2
        assert "Error loading configuration" in capsys.readouterr().err

    def test_interrupted(self, config_loader):
        def interrupt(coro):
            coro.close()
            raise KeyboardInterrupt

        with patch("binance_api.cli.asyncio.run", side_effect=interrupt):
            assert main(["ping"]) == 130


class TestTrades:

    @staticmethod
    def _ws_client(*frames, error=None):
        async def open_trades(symbol):
            ws = FakeWebSocket([_trade_frame(trade_id) for trade_id in frames])
            if error is not None:
                ws.fail(error)
            return StreamConnection(ws, TradeUpdate, name=symbol)

        ws_client = MagicMock()
        ws_client.trades = MagicMock(side_effect=open_trades)
        return ws_client

    def test_prints_requested_count(self, config_loader, capsys):
        ws_client = self._ws_client(1, 2, 3)

        with patch("binance_api.cli.WsClient", return_value=ws_client):
            assert main(["trades", "BTCUSDT", "--count", "2"]) == 0

        ws_client.trades.assert_called_once_with("BTCUSDT")
        assert [trade["t"] for trade in _json_lines(capsys)] == [1, 2]

    def test_stream_ends_early(self, config_loader, capsys):
        ws_client = self._ws_client(1, error=ConnectionClosedError(None, None))

        with patch("binance_api.cli.WsClient", return_value=ws_client):
            assert main(["trades", "BTCUSDT", "--count", "2"]) == 1

        captured = capsys.readouterr()
        assert len(captured.out.splitlines()) == 1
        assert "Trade stream ended after 1 events" in captured.err
