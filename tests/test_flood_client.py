import socket

import pytest

from corelab.flood_client import flood, main


def _unused_port():
    with socket.create_server(("127.0.0.1", 0)) as probe:
        return probe.getsockname()[1]


def test_flood_opens_requested_connections():
    with socket.create_server(("127.0.0.1", 0)) as listener:
        port = listener.getsockname()[1]
        streams = flood("127.0.0.1", port, limit=5)
        try:
            assert len(streams) == 5
            assert all(s.getpeername()[1] == port for s in streams)
        finally:
            for stream in streams:
                stream.close()


def test_flood_with_zero_limit_opens_nothing():
    assert flood("127.0.0.1", _unused_port(), limit=0) == []


def test_flood_logs_refused_connections(caplog):
    port = _unused_port()
    with caplog.at_level("ERROR", logger="corelab.flood_client"):
        streams = flood("127.0.0.1", port, limit=3)
    assert streams == []
    rejected = [r for r in caplog.records if "Connection rejected" in r.getMessage()]
    assert len(rejected) == 3


def test_flood_rejects_negative_limit():
    with pytest.raises(ValueError):
        flood("127.0.0.1", 1, limit=-1)


def test_main_runs_to_limit():
    with socket.create_server(("127.0.0.1", 0)) as listener:
        port = listener.getsockname()[1]
        assert main(["--host", "127.0.0.1", "--port", str(port), "--limit", "2"]) == 0


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit) as info:
        main(["--port", "abc"])
    assert info.value.code == 2


def test_main_rejects_negative_limit():
    with pytest.raises(SystemExit) as info:
        main(["--limit", "-3"])
    assert info.value.code == 2