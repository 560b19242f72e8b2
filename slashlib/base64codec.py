"""Base64 encoding and a lenient Base64 decoder."""

from __future__ import annotations

import base64
from typing import Union

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_VALUES = {ch: index for index, ch in enumerate(_ALPHABET)}


def _as_bytes(data: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise TypeError(f"Expected str or bytes, got {type(data).__name__}")


def encode(data: Union[str, bytes, bytearray]) -> str:
    """Encode *data* (text is taken as UTF-8) as padded Base64."""
    return base64.b64encode(_as_bytes(data)).decode("ascii")


def _decode_block(values: list[int]) -> bytes:
    a, b, c, d = values
    return bytes(
        (
            ((a << 2) | (b >> 4)) & 0xFF,
            ((b << 4) | (c >> 2)) & 0xFF,
            ((c << 6) & 0xC0) | d,
        )
    )


def decode(text: Union[str, bytes, bytearray]) -> bytes:
    """Decode Base64, skipping any character outside the alphabet.

    A trailing partial group is only kept when the input ends in padding:
    one byte for ``==`` and two bytes for a single ``=``.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    if not isinstance(text, str):
        raise TypeError(f"Expected str or bytes, got {type(text).__name__}")

    out = bytearray()
    group: list[int] = []
    for ch in text:
        value = _VALUES.get(ch)
        if value is None:
            continue
        group.append(value)
        if len(group) == 4:
            out += _decode_block(group)
            group = []

    if text.endswith("="):
        tail = _decode_block(group + [0] * (4 - len(group)))
        keep = 1 if text.endswith("==") else 2
        out += tail[:keep]
    return bytes(out)