"""SHA-1 message digest (FIPS 180-1)."""

from __future__ import annotations

import struct

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)
_CONSTANTS = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)
_MASK = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _process_chunk(state: list[int], chunk: bytes) -> None:
    w = list(struct.unpack(">16I", chunk))
    for i in range(16, 80):
        w.append(_rotl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))

    a, b, c, d, e = state
    for i, word in enumerate(w):
        if i < 20:
            f = (b & c) | (~b & _MASK & d)
            k = _CONSTANTS[0]
        elif i < 40:
            f = b ^ c ^ d
            k = _CONSTANTS[1]
        elif i < 60:
            f = (b & c) | (b & d) | (c & d)
            k = _CONSTANTS[2]
        else:
            f = b ^ c ^ d
            k = _CONSTANTS[3]
        temp = (_rotl(a, 5) + f + e + k + word) & _MASK
        a, b, c, d, e = temp, a, _rotl(b, 30), c, d

    for index, value in enumerate((a, b, c, d, e)):
        state[index] = (state[index] + value) & _MASK


class Sha1:
    """Incremental SHA-1 calculator.

    Padding is applied by the update marked as final; :meth:`digest`
    returns the current state, so it only holds the message digest once a
    final update has been made.
    """

    digest_size = 20
    block_size = 64

    def __init__(self) -> None:
        self._state = list(_INITIAL_STATE)
        self._total_bits = 0
        self._buffer = b""

    def update(self, data: bytes, is_final: bool = False) -> None:
        """Feed ``data``; when ``is_final`` is true, pad and close the message."""
        data = bytes(data)
        self._total_bits = (self._total_bits + len(data) * 8) & _MASK64

        pending = self._buffer + data
        full = len(pending) - len(pending) % 64
        for offset in range(0, full, 64):
            _process_chunk(self._state, pending[offset:offset + 64])
        self._buffer = pending[full:]

        if is_final:
            tail = self._buffer + b"\x80"
            if len(tail) > 56:
                _process_chunk(self._state, tail.ljust(64, b"\x00"))
                tail = b""
            tail = tail.ljust(56, b"\x00") + struct.pack(">Q", self._total_bits)
            _process_chunk(self._state, tail)
            self._buffer = b""

    def digest(self) -> bytes:
        """Return the state as 20 big-endian bytes."""
        return struct.pack(">5I", *self._state)

    def hexdigest(self) -> str:
        return self.digest().hex()


def sha1(data: bytes) -> bytes:
    """Return the SHA-1 digest of ``data``."""
    calc = Sha1()
    calc.update(data, is_final=True)
    return calc.digest()