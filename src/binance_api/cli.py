"""
Command line diagnostics for the Binance API client.

Examples:
  # Connectivity and clock
  binance-api ping
  binance-api time

  # Order book and 24hr statistics
  binance-api depth BTCUSDT --limit 5
  binance-api ticker ETHBTC

  # Print 10 live trades and exit
  binance-api trades BTCUSDT --count 10

  # Custom configuration and verbose logging
  binance-api --config config.yaml --log-level DEBUG ping
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, List, Optional

import msgspec

from binance_api.client import Client
from binance_api.config import ClientConfig, load_config, setup_logging
from binance_api.exceptions import BinanceError, NetworkError
from binance_api.structs.enums import DEFAULT_DEPTH_LIMIT
from binance_api.structs.requests import DepthRequest, Ticker24hRequest
from binance_api.ws.client import WsClient

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binance-api",
        description="Binance spot REST and WebSocket diagnostics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file (default: $BINANCE_API_CONFIG or ./config.yaml)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=LOG_LEVELS,
        help="Logging level (default: from configuration, INFO)"
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("ping", help="Test connectivity to the REST API")
    commands.add_parser("time", help="Print the server time in milliseconds")

    depth = commands.add_parser("depth", help="Print the order book of a symbol")
    depth.add_argument("symbol", type=str, help="Symbol, e.g. BTCUSDT")
    depth.add_argument("--limit", type=int, default=DEFAULT_DEPTH_LIMIT, help="Number of levels (default: 100)")

    ticker = commands.add_parser("ticker", help="Print 24hr statistics of a symbol")
    ticker.add_argument("symbol", type=str, help="Symbol, e.g. BTCUSDT")

    trades = commands.add_parser("trades", help="Stream live trades of a symbol")
    trades.add_argument("symbol", type=str, help="Symbol, e.g. BTCUSDT")
    trades.add_argument("--count", type=int, default=10, help="Number of trades to print (default: 10)")

    return parser


def _print_json(value: Any) -> None:
    print(msgspec.json.encode(value).decode())


async def _stream_trades(config: ClientConfig, symbol: str, count: int) -> None:
    ws_client = WsClient(config.websocket)
    async with await ws_client.trades(symbol) as conn:
        received = 0
        events = conn.stream()
        async for trade in events:
            _print_json(trade)
            received += 1
            if received >= count:
                break
        if events.err is not None and received < count:
            raise NetworkError(f"Trade stream ended after {received} events: {events.err}") from events.err


async def run(args: argparse.Namespace, config: ClientConfig) -> None:
    """Execute one sub-command."""
    if args.command == "trades":
        await _stream_trades(config, args.symbol, args.count)
        return

    async with Client(config.rest) as client:
        if args.command == "ping":
            await client.ping()
            _print_json({"ping": "ok"})
        elif args.command == "time":
            _print_json({"serverTime": await client.server_time()})
        elif args.command == "depth":
            _print_json(await client.depth(DepthRequest(symbol=args.symbol.upper(), limit=args.limit)))
        elif args.command == "ticker":
            _print_json(await client.ticker_24h(Ticker24hRequest(symbol=args.symbol.upper())))


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for command line execution."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(config.logging, args.log_level)
    except BinanceError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 2

    try:
        asyncio.run(run(args, config))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except BinanceError as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
