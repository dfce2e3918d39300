"""MD5 message digest (RFC 1321)."""

from __future__ import annotations

import math
import struct

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)
_MASK = 0xFFFFFFFF

_K = tuple(int(abs(math.sin(i + 1)) * 2**32) & _MASK for i in range(64))

_SHIFTS = (
    (7, 12, 17, 22) * 4
    + (5, 9, 14, 20) * 4
    + (4, 11, 16, 23) * 4
    + (6, 10, 15, 21) * 4
)


def _message_index(i: int) -> int:
    if i < 16:
        return i
    if i < 32:
        return (5 * i + 1) % 16
    if i < 48:
        return (3 * i + 5) % 16
    return (7 * i) % 16


_INDICES = tuple(_message_index(i) for i in range(64))


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _MASK


def _transform(state: list[int], block: bytes) -> None:
    x = struct.unpack("<16I", block)
    a, b, c, d = state
    for i in range(64):
        if i < 16:
            f = d ^ (b & (c ^ d))
        elif i < 32:
            f = c ^ (d & (b ^ c))
        elif i < 48:
            f = b ^ c ^ d
        else:
            f = c ^ (b | (~d & _MASK))
        rotated = _rotl((a + f + x[_INDICES[i]] + _K[i]) & _MASK, _SHIFTS[i])
        a, d, c, b = d, c, b, (b + rotated) & _MASK
    state[0] = (state[0] + a) & _MASK
    state[1] = (state[1] + b) & _MASK
    state[2] = (state[2] + c) & _MASK
    state[3] = (state[3] + d) & _MASK


class Md5:
    """Incremental MD5 calculator.

    Padding happens in :meth:`digest`; the ``is_final`` flag of
    :meth:`update` is accepted for interface symmetry and has no effect.
    """

    digest_size = 16
    block_size = 64

    def __init__(self) -> None:
        self._state = list(_INITIAL_STATE)
        self._total = 0
        self._buffer = b""

    def update(self, data: bytes, is_final: bool = False) -> None:
        """Feed ``data`` into the hash."""
        data = bytes(data)
        self._total += len(data)
        pending = self._buffer + data
        full = len(pending) - len(pending) % 64
        for offset in range(0, full, 64):
            _transform(self._state, pending[offset:offset + 64])
        self._buffer = pending[full:]

    def digest(self) -> bytes:
        """Return the 16-byte digest of everything fed so far."""
        state = list(self._state)
        fill = self._total % 64
        padn = 56 - fill if fill < 56 else 120 - fill
        bit_length = (self._total * 8) & 0xFFFFFFFFFFFFFFFF
        tail = self._buffer + b"\x80" + b"\x00" * (padn - 1) + struct.pack("<Q", bit_length)
        for offset in range(0, len(tail), 64):
            _transform(state, tail[offset:offset + 64])
        return struct.pack("<4I", *state)

    def hexdigest(self) -> str:
        return self.digest().hex()


def md5(data: bytes) -> bytes:
    """Return the MD5 digest of ``data``."""
    calc = Md5()
    calc.update(data, is_final=True)
    return calc.digest()