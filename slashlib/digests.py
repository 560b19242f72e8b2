"""Named message-digest algorithms producing hexadecimal digests."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Callable, Union

# --- Whirlpool -------------------------------------------------------------

_E = [0x1, 0xB, 0x9, 0xC, 0xD, 0x6, 0xF, 0x3, 0xE, 0x8, 0x7, 0x4, 0xA, 0x2, 0x5, 0x0]
_R = [0x7, 0xC, 0xB, 0xD, 0xE, 0x4, 0x9, 0xF, 0x6, 0x3, 0x8, 0xA, 0x2, 0x5, 0x1, 0x0]
_E_INV = [0] * 16
for _index, _value in enumerate(_E):
    _E_INV[_value] = _index


def _sbox_entry(u: int) -> int:
    a = _E[u >> 4]
    b = _E_INV[u & 0xF]
    r = _R[a ^ b]
    return (_E[a ^ r] << 4) | _E_INV[b ^ r]


_SBOX = [_sbox_entry(u) for u in range(256)]
_CIRCULANT = [1, 1, 4, 1, 8, 5, 2, 9]


def _gf_mul(a: int, b: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        b >>= 1
        a <<= 1
        if a & 0x100:
            a ^= 0x11D
    return result


_MUL = {c: [_gf_mul(x, c) for x in range(256)] for c in set(_CIRCULANT)}
# Mixing coefficient for input column k feeding output column j.
_COEFF = [[_MUL[_CIRCULANT[(j - k) % 8]] for k in range(8)] for j in range(8)]
_ROUND_CONSTANTS = [
    _SBOX[8 * (r - 1) : 8 * r] + [0] * 56 for r in range(1, 11)
]


def _round(state: list[int], key: list[int]) -> list[int]:
    substituted = [_SBOX[x] for x in state]
    permuted = [substituted[((i - j) % 8) * 8 + j] for i in range(8) for j in range(8)]
    mixed = []
    for i in range(8):
        row = permuted[8 * i : 8 * i + 8]
        for coeffs in _COEFF:
            value = 0
            for table, byte in zip(coeffs, row):
                value ^= table[byte]
            mixed.append(value)
    return [m ^ k for m, k in zip(mixed, key)]


def _compress(chain: list[int], block: list[int]) -> list[int]:
    key = chain
    state = [b ^ k for b, k in zip(block, key)]
    for constant in _ROUND_CONSTANTS:
        key = _round(key, constant)
        state = _round(state, key)
    return [s ^ h ^ m for s, h, m in zip(state, chain, block)]


class _Whirlpool:
    """Minimal hashlib-like object computing the Whirlpool digest."""

    digest_size = 64

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)

    def update(self, data: bytes) -> None:
        self._data += data

    def digest(self) -> bytes:
        message = bytes(self._data)
        bit_length = len(message) * 8
        padded = bytearray(message)
        padded.append(0x80)
        while len(padded) % 64 != 32:
            padded.append(0)
        padded += bit_length.to_bytes(32, "big")
        chain = [0] * 64
        for offset in range(0, len(padded), 64):
            chain = _compress(chain, list(padded[offset : offset + 64]))
        return bytes(chain)

    def hexdigest(self) -> str:
        return self.digest().hex()


# --- Public API ------------------------------------------------------------


@dataclass(frozen=True)
class Algorithm:
    """A named digest algorithm."""

    name: str
    _factory: Callable[[], object] = field(repr=False, compare=False)

    def hex_digest(self, data: Union[str, bytes, bytearray]) -> str:
        """Return the lowercase hexadecimal digest of *data* (text as UTF-8)."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        elif not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Expected str or bytes, got {type(data).__name__}")
        hasher = self._factory()
        hasher.update(bytes(data))
        return hasher.hexdigest()

    def __str__(self) -> str:
        return f"#<Algorithm {self.name}>"


MD5 = Algorithm("MD5", hashlib.md5)
SHA1 = Algorithm("SHA1", hashlib.sha1)
SHA224 = Algorithm("SHA224", hashlib.sha224)
SHA256 = Algorithm("SHA256", hashlib.sha256)
SHA384 = Algorithm("SHA384", hashlib.sha384)
SHA512 = Algorithm("SHA512", hashlib.sha512)
WHIRLPOOL = Algorithm("WHIRLPOOL", _Whirlpool)

ALGORITHMS: dict[str, Algorithm] = {
    algo.name: algo for algo in (MD5, SHA1, SHA224, SHA256, SHA384, SHA512, WHIRLPOOL)
}


def algorithm(name: str) -> Algorithm:
    """Look up an algorithm by name (case-insensitive); raise ValueError if unknown."""
    try:
        return ALGORITHMS[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown digest algorithm: {name!r}") from None