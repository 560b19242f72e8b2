"""Stream sockets with buffered line reading over IPv4 and IPv6."""

from __future__ import annotations

import socket
from typing import Optional, Union

MAX_READ = 65535
_LINE_READ = 65536


class SocketError(OSError):
    """Raised when a socket operation fails."""


class SocketClosedError(SocketError):
    """Raised when an operation is attempted on a closed socket."""


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _as_bytes(data: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected str or bytes, got {type(data).__name__}")


def _check_port(port: int) -> int:
    if not isinstance(port, int) or isinstance(port, bool):
        raise TypeError(f"Expected int port, got {type(port).__name__}")
    if port < 1 or port > 65535:
        raise ValueError("Port number out of range")
    return port


class Socket:
    """A stream socket; a plain Socket starts out closed."""

    _family: Optional[int] = None
    _kind = "Socket"

    def __init__(self) -> None:
        self._sock: Optional[socket.socket] = None
        self._buffer = b""
        if self._family is not None:
            try:
                self._sock = socket.socket(self._family, socket.SOCK_STREAM)
            except OSError as exc:
                raise SocketError(
                    f"Could not create {self._kind}: {_reason(exc)}"
                ) from None

    @classmethod
    def _wrap(cls, sock: socket.socket) -> "Socket":
        obj = cls.__new__(cls)
        obj._sock = sock
        obj._buffer = b""
        return obj

    @property
    def closed(self) -> bool:
        return self._sock is None

    def _require_open(self) -> socket.socket:
        if self._sock is None:
            raise SocketClosedError(f"Invalid operation on closed {self._kind}")
        return self._sock

    def __enter__(self) -> "Socket":
        return self

    def __exit__(self, *exc_info) -> None:
        if self._sock is not None:
            self.close()

    def write(self, data: Union[str, bytes, bytearray]) -> int:
        """Send *data* once; return the number of bytes sent."""
        payload = _as_bytes(data)
        sock = self._require_open()
        try:
            return sock.send(payload)
        except OSError as exc:
            raise SocketError(
                f"Could not write to {self._kind}: {_reason(exc)}"
            ) from None

    def read(self, size: int) -> Optional[bytes]:
        """Return buffered data if any, else receive up to *size* bytes.

        Sizes above 65535 are capped. Returns None once the peer has closed.
        """
        sock = self._require_open()
        if self._buffer:
            buffered, self._buffer = self._buffer, b""
            return buffered
        if not isinstance(size, int) or isinstance(size, bool):
            raise TypeError(f"Expected int size, got {type(size).__name__}")
        if size <= 0:
            raise SocketError("Invalid byte length")
        size = min(size, MAX_READ)
        try:
            data = sock.recv(size)
        except OSError as exc:
            raise SocketError(
                f"Could not read from {self._kind}: {_reason(exc)}"
            ) from None
        return data or None

    def read_line(self) -> Optional[bytes]:
        """Read up to and including the next newline.

        Data after the newline is kept for the next read. At end of input the
        remaining partial line is returned, or None if there is none.
        """
        self._require_open()
        collected = b""
        while True:
            chunk = self.read(_LINE_READ)
            if chunk is None:
                return collected or None
            index = chunk.find(b"\n")
            if index >= 0:
                self._buffer = chunk[index + 1 :]
                return collected + chunk[: index + 1]
            collected += chunk

    def close(self) -> None:
        """Shut down and close the socket."""
        sock = self._require_open()
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        sock.close()
        self._sock = None

    def accept(self) -> "TCPSocket":
        """Accept a connection and return it as a TCPSocket."""
        sock = self._require_open()
        try:
            conn, _ = sock.accept()
        except OSError as exc:
            raise SocketError(f"Could not accept on Socket: {_reason(exc)}") from None
        return TCPSocket._wrap(conn)

    def listen(self, backlog: int) -> "Socket":
        """Start listening with the given backlog; return self."""
        if not isinstance(backlog, int) or isinstance(backlog, bool):
            raise TypeError(f"Expected int backlog, got {type(backlog).__name__}")
        sock = self._require_open()
        try:
            sock.listen(backlog)
        except OSError as exc:
            raise SocketError(f"Could not listen Socket: {_reason(exc)}") from None
        return self


class _InetSocket(Socket):
    _only = ""

    def _address(self, host: str, port: int, failure: str):
        if not isinstance(host, str):
            raise TypeError(f"Expected str host, got {type(host).__name__}")
        _check_port(port)
        try:
            infos = socket.getaddrinfo(host, None, self._family)
        except socket.gaierror as exc:
            raise SocketError(f"{failure}{_reason(exc)}") from None
        for family, _, _, _, sockaddr in infos:
            if family == self._family:
                return (sockaddr[0], port) + tuple(sockaddr[2:])
        raise SocketError(f"{failure}{self._only}")

    def _bind(self, host: str, port: int) -> "_InetSocket":
        address = self._address(host, port, f"Could not create {self._kind}: ")
        sock = self._require_open()
        try:
            sock.bind(address)
        except OSError as exc:
            raise SocketError(
                f"Could not bind {self._kind}: {_reason(exc)}"
            ) from None
        return self

    def _connect(self, host: str, port: int) -> None:
        failure = f"Could not connect {self._kind}: "
        address = self._address(host, port, failure)
        if self._sock is not None:
            self._sock.close()
            self._sock = None
        try:
            sock = socket.socket(self._family, socket.SOCK_STREAM)
        except OSError as exc:
            raise SocketError(f"{failure}{_reason(exc)}") from None
        try:
            sock.connect(address)
        except OSError as exc:
            sock.close()
            raise SocketError(f"{failure}{_reason(exc)}") from None
        self._sock = sock
        self._buffer = b""


class TCPSocket(_InetSocket):
    """An IPv4 TCP socket."""

    _family = socket.AF_INET
    _kind = "TCPSocket"
    _only = "only IPv4 addresses supported"

    def bind(self, host: str, port: int) -> "TCPSocket":
        """Bind to *host*:*port*; return self."""
        return self._bind(host, port)

    def connect(self, host: str, port: int) -> None:
        """Connect to *host*:*port* on a fresh socket."""
        self._connect(host, port)


class TCP6Socket(_InetSocket):
    """An IPv6 TCP socket."""

    _family = socket.AF_INET6
    _kind = "TCP6Socket"
    _only = "only IPv6 addresses supported"

    def bind(self, host: str, port: int) -> "TCP6Socket":
        """Bind to *host*:*port*; return self."""
        return self._bind(host, port)

    def connect(self, host: str, port: int) -> None:
        """Connect to *host*:*port* on a fresh socket."""
        self._connect(host, port)