"""A client that opens TCP connections as fast as it can and keeps them open."""

from __future__ import annotations

import argparse
import itertools
import logging
import socket
import threading
from collections.abc import Sequence

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1987

logger = logging.getLogger("corelab.flood_client")


class _Counter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def add(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    def swap(self) -> int:
        with self._lock:
            value, self._value = self._value, 0
        return value


_TOTAL_STREAMS = _Counter()


def flood(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    limit: int | None = None,
) -> list[socket.socket]:
    """Try to connect limit times (forever when None); return the open sockets."""
    if limit is not None and limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")
    log = logging.LoggerAdapter(logger, {"host": host, "port": port})
    log.info("Client ready to be mean. >:)")
    attempts = itertools.count() if limit is None else range(limit)
    streams: list[socket.socket] = []
    for _ in attempts:
        try:
            stream = socket.create_connection((host, port))
        except OSError as exc:
            log.error("Connection rejected with error: %r", exc)
            continue
        _TOTAL_STREAMS.add()
        streams.append(stream)
    return streams


def _report(stop: threading.Event, interval: float = 1.0) -> None:
    total_streams = 0
    while not stop.wait(interval):
        streams_per_second = _TOTAL_STREAMS.swap()
        logger.info("Total connections: %d", total_streams)
        logger.info("Connections per second: %d", streams_per_second)
        total_streams += streams_per_second


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"port-no not valid: {text!r}") from None
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port-no not valid: {text!r}")
    return value


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Open TCP connections to a server until it gives out."
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST, help="Sets which hostname to connect to"
    )
    parser.add_argument(
        "--port", type=_port, default=DEFAULT_PORT, help="Sets which port to connect to"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many connection attempts",
    )
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        parser.error("limit must not be negative")
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    stop = threading.Event()
    reporter = threading.Thread(target=_report, args=(stop,), daemon=True)
    reporter.start()
    try:
        streams = flood(args.host, args.port, args.limit)
    except KeyboardInterrupt:
        return 130
    finally:
        stop.set()
    for stream in streams:
        stream.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())