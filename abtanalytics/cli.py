"""Command that loads the transactions and serves the analytics API."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence
from wsgiref.simple_server import make_server

from .aggregator import Aggregator
from .api import make_app
from .docs import default_swagger_info
from .loader import LoadError, load_transactions

DEFAULT_DATA_PATH = "data/transactions.csv"
DEFAULT_PORT = 8080

log = logging.getLogger(__name__)


def init_aggregator(path: str | os.PathLike[str] = DEFAULT_DATA_PATH) -> Aggregator:
    """Load the transactions at ``path`` into a fresh aggregator."""
    aggregator = Aggregator()
    load_transactions(path, aggregator.process)
    return aggregator


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the ABT analytics API.")
    parser.add_argument("--data", default=DEFAULT_DATA_PATH, help="transactions CSV")
    parser.add_argument("--host", default="", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the data, then serve the API until interrupted."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    info = default_swagger_info()
    try:
        aggregator = init_aggregator(args.data)
    except LoadError as exc:
        log.error("failed to load transactions: %s", exc)
        return 1

    app = make_app(aggregator, info)
    try:
        server = make_server(args.host, args.port, app)
    except OSError as exc:
        log.error("%s", exc)
        return 1

    log.info("API server at http://localhost:%d", args.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0