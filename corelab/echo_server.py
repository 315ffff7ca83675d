"""A line echo server that caps, or leaves uncapped, its concurrent connections."""

from __future__ import annotations

import argparse
import logging
import socket
import threading
from collections.abc import MutableMapping, Sequence
from typing import Any, BinaryIO

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1987
DEFAULT_MAX_CONNECTIONS = 256
_POLL_INTERVAL = 0.1

logger = logging.getLogger("corelab.echo_server")


class _ContextAdapter(logging.LoggerAdapter):
    """Appends key=value context to every message."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        context = ", ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"{msg} [{context}]", kwargs


def handle_client(
    reader: BinaryIO,
    writer: BinaryIO,
    log: logging.Logger | logging.LoggerAdapter | None = None,
) -> int:
    """Echo every line read from reader back to writer; return bytes echoed."""
    log = log or logger
    echoed = 0
    while True:
        try:
            line = reader.readline()
        except OSError:
            break
        if not line:
            break
        log.info(
            "Received a %d bytes: %s", len(line), line.decode("utf-8", "replace")
        )
        writer.write(line)
        writer.flush()
        echoed += len(line)
    return echoed


class EchoServer:
    """Accepts TCP connections and echoes lines, one thread per connection.

    With max_connections set, connections beyond that many at once are closed
    as soon as they are accepted; with None, every connection gets a thread.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        max_connections: int | None = DEFAULT_MAX_CONNECTIONS,
    ) -> None:
        if max_connections is not None and max_connections < 1:
            raise ValueError(
                f"max_connections must be positive or None, got {max_connections}"
            )
        self.max_connections = max_connections
        self._listener = socket.create_server((host, port))
        self._listener.settimeout(_POLL_INTERVAL)
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._active = 0
        self._rejected = 0
        self._handlers: list[threading.Thread] = []
        address = self._listener.getsockname()
        self.log = _ContextAdapter(logger, {"host": address[0], "port": address[1]})

    @property
    def address(self) -> tuple[str, int]:
        name = self._listener.getsockname()
        return name[0], name[1]

    @property
    def active_connections(self) -> int:
        with self._lock:
            return self._active

    @property
    def rejected(self) -> int:
        with self._lock:
            return self._rejected

    def __enter__(self) -> EchoServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
        self._listener.close()

    def serve_forever(self) -> None:
        """Accept connections until shutdown, then wait for open ones to finish."""
        self.log.info("Server open for business! :D")
        try:
            while not self._stop.is_set():
                try:
                    conn, peer = self._listener.accept()
                except TimeoutError:
                    continue
                except OSError as exc:
                    if self._stop.is_set() or self._listener.fileno() == -1:
                        break
                    self.log.info("Shutting down! %r", exc)
                    continue
                self._admit(conn, peer)
        finally:
            self._listener.close()
        self.log.info("No more incoming connections. Draining existing connections.")
        for handler in self._handlers:
            handler.join()
        self._handlers.clear()

    def shutdown(self) -> None:
        """Stop accepting new connections."""
        self._stop.set()

    def _admit(self, conn: socket.socket, peer: Any) -> None:
        conn.settimeout(None)
        with self._lock:
            full = (
                self.max_connections is not None
                and self._active >= self.max_connections
            )
            if full:
                self._rejected += 1
            else:
                stream_no = self._active
                self._active += 1
        if full:
            self.log.info("Max connection condition reached, rejecting incoming")
            conn.close()
            return

        self._handlers = [t for t in self._handlers if t.is_alive()]
        log = _ContextAdapter(
            logger, {"stream-no": stream_no, "peer-addr": f"{peer[0]}:{peer[1]}"}
        )
        handler = threading.Thread(
            target=self._serve_client, args=(conn, log), daemon=True
        )
        try:
            handler.start()
        except RuntimeError as exc:
            self.log.error("Could not make client handler. %r", exc)
            self._release()
            conn.close()
            return
        self._handlers.append(handler)

    def _serve_client(self, conn: socket.socket, log: logging.LoggerAdapter) -> None:
        try:
            with conn, conn.makefile("rb") as reader, conn.makefile("wb") as writer:
                handle_client(reader, writer, log)
        except OSError as exc:
            log.info("Connection handler died with error: %r", exc)
        finally:
            self._release()

    def _release(self) -> None:
        with self._lock:
            self._active -= 1


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"port-no not valid: {text!r}") from None
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port-no not valid: {text!r}")
    return value


def _connections(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"max_connections not valid: {text!r}"
        ) from None
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"max_connections not valid: {text!r}")
    return value


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Echo lines back to TCP clients.")
    parser.add_argument(
        "--host", default=DEFAULT_HOST, help="Sets which hostname to listen on"
    )
    parser.add_argument(
        "--port", type=_port, default=DEFAULT_PORT, help="Sets which port to listen on"
    )
    parser.add_argument(
        "--max-connections",
        "--max_connections",
        dest="max_connections",
        type=_connections,
        default=DEFAULT_MAX_CONNECTIONS,
        help="Sets how many connections (thus, threads) to allow simultaneously; "
        "0 for no limit",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    server = EchoServer(args.host, args.port, args.max_connections or None)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        server.shutdown()
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())