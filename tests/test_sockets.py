import socket

import pytest

from slashlib.sockets import (
    Socket,
    SocketClosedError,
    SocketError,
    TCP6Socket,
    TCPSocket,
)


def _free_port():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    return port


@pytest.fixture
def pair():
    port = _free_port()
    server = TCPSocket()
    server.bind("127.0.0.1", port).listen(5)
    client = TCPSocket()
    client.connect("127.0.0.1", port)
    conn = server.accept()
    yield client, conn
    for sock in (client, conn, server):
        if not sock.closed:
            sock.close()


def test_bind_and_listen_return_self():
    server = TCPSocket()
    try:
        assert server.bind("127.0.0.1", _free_port()) is server
        assert server.listen(1) is server
    finally:
        server.close()


def test_accept_returns_tcp_socket(pair):
    _, conn = pair
    assert isinstance(conn, TCPSocket)
    assert conn.closed is False


def test_write_read_round_trip(pair):
    client, conn = pair
    assert client.write(b"hello") == 5
    assert conn.read(100) == b"hello"


def test_write_accepts_text(pair):
    client, conn = pair
    assert client.write("hi") == 2
    assert conn.read(10) == b"hi"


def test_read_after_peer_close_returns_none(pair):
    client, conn = pair
    client.close()
    assert conn.read(10) is None


def test_read_line_splits_and_buffers(pair):
    client, conn = pair
    client.write(b"one\ntwo\nthree")
    client.close()
    assert conn.read_line() == b"one\n"
    assert conn.read_line() == b"two\n"
    assert conn.read_line() == b"three"
    assert conn.read_line() is None


def test_read_returns_buffer_left_by_read_line(pair):
    client, conn = pair
    client.write(b"a\nrest")
    client.close()
    assert conn.read_line() == b"a\n"
    collected = b""
    while True:
        chunk = conn.read(100)
        if chunk is None:
            break
        collected += chunk
    assert collected == b"rest"


def test_read_invalid_size(pair):
    _, conn = pair
    with pytest.raises(SocketError, match="Invalid byte length"):
        conn.read(0)


@pytest.mark.parametrize("port", [0, 65536, -1])
def test_bind_port_out_of_range(port):
    sock = TCPSocket()
    try:
        with pytest.raises(ValueError, match="Port number out of range"):
            sock.bind("127.0.0.1", port)
    finally:
        sock.close()


@pytest.mark.parametrize("port", [0, 70000])
def test_connect_port_out_of_range(port):
    sock = TCPSocket()
    try:
        with pytest.raises(ValueError, match="Port number out of range"):
            sock.connect("127.0.0.1", port)
    finally:
        sock.close()


def test_tcp6_port_out_of_range():
    sock = TCP6Socket.__new__(TCP6Socket)
    sock._sock = None
    sock._buffer = b""
    with pytest.raises(ValueError, match="Port number out of range"):
        sock.connect("::1", 0)


def test_connect_refused():
    port = _free_port()
    sock = TCPSocket()
    with pytest.raises(SocketError, match="^Could not connect TCPSocket: "):
        sock.connect("127.0.0.1", port)


def test_operations_on_closed_socket():
    sock = TCPSocket()
    sock.close()
    assert sock.closed is True
    with pytest.raises(SocketClosedError):
        sock.write(b"x")
    with pytest.raises(SocketClosedError):
        sock.read(1)
    with pytest.raises(SocketClosedError):
        sock.close()


def test_plain_socket_starts_closed():
    sock = Socket()
    assert sock.closed is True
    with pytest.raises(SocketClosedError, match="closed Socket"):
        sock.listen(1)


def test_context_manager_closes():
    with TCPSocket() as sock:
        assert sock.closed is False
    assert sock.closed is True