"""Byte-stream access for CGI and FastCGI requests."""

from __future__ import annotations

import enum
from typing import BinaryIO, Iterable, Optional, Union


class ApiType(enum.IntEnum):
    CGI = 0
    FCGI = 1


def _as_bytes(data: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected str or bytes, got {type(data).__name__}")


class StreamApi:
    """Request I/O over binary streams plus the request's environment.

    In CGI mode a write or read either transfers everything and reports the
    full size, or reports nothing. In FastCGI mode partial transfers are
    retried until done, and short reads return what arrived before EOF.
    """

    def __init__(
        self,
        api_type: ApiType,
        out: BinaryIO,
        err: BinaryIO,
        inp: BinaryIO,
        environ: Optional[Iterable[str]] = None,
    ) -> None:
        self.type = ApiType(api_type)
        self.out = out
        self.err = err
        self.inp = inp
        self.environ: tuple[str, ...] = tuple(environ) if environ is not None else ()

    def _write(self, stream: BinaryIO, data: Union[str, bytes, bytearray]) -> int:
        payload = _as_bytes(data)
        if self.type is ApiType.CGI:
            written = stream.write(payload)
            if written is None or written == len(payload):
                return len(payload)
            return 0
        total = 0
        view = memoryview(payload)
        while total < len(payload):
            written = stream.write(view[total:])
            if written is None:
                written = len(payload) - total
            if written <= 0:
                break
            total += written
        return total

    def write_out(self, data: Union[str, bytes, bytearray]) -> int:
        """Write to the output stream; return the number of bytes written."""
        return self._write(self.out, data)

    def write_err(self, data: Union[str, bytes, bytearray]) -> int:
        """Write to the error stream; return the number of bytes written."""
        return self._write(self.err, data)

    def read_in(self, size: int) -> bytes:
        """Read up to *size* bytes of request input."""
        if size <= 0:
            return b""
        chunks = bytearray()
        while len(chunks) < size:
            wanted = size - len(chunks)
            chunk = self.inp.read(wanted)
            if chunk:
                chunks += chunk
            if not chunk or len(chunk) < wanted:
                break
        if self.type is ApiType.CGI and len(chunks) != size:
            return b""
        return bytes(chunks)