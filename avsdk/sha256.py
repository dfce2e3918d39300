"""SHA-256 and SHA-224 message digests (FIPS 180-2) and their HMAC."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

_INITIAL_256 = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)
_INITIAL_224 = (
    0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939,
    0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4,
)

_BLOCK_SIZE = 64


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _process(state: list[int], block: bytes) -> None:
    w = list(struct.unpack(">16I", block))
    for i in range(16, 64):
        s0 = _rotr(w[i - 15], 7) ^ _rotr(w[i - 15], 18) ^ (w[i - 15] >> 3)
        s1 = _rotr(w[i - 2], 17) ^ _rotr(w[i - 2], 19) ^ (w[i - 2] >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK)

    a, b, c, d, e, f, g, h = state
    for k, word in zip(_K, w):
        s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = (e & f) ^ (~e & _MASK & g)
        temp1 = (h + s1 + ch + k + word) & _MASK
        s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        temp2 = (s0 + maj) & _MASK
        h, g, f, e, d, c, b, a = g, f, e, (d + temp1) & _MASK, c, b, a, (temp1 + temp2) & _MASK

    for index, value in enumerate((a, b, c, d, e, f, g, h)):
        state[index] = (state[index] + value) & _MASK


class Sha256:
    """Incremental SHA-256 (or SHA-224) calculator.

    Padding happens in :meth:`digest`; the ``is_final`` flag of
    :meth:`update` is accepted for interface symmetry and has no effect.
    """

    block_size = _BLOCK_SIZE

    def __init__(self, is224: bool = False) -> None:
        self.is224 = bool(is224)
        self._state = list(_INITIAL_224 if self.is224 else _INITIAL_256)
        self._total = 0
        self._buffer = b""

    @property
    def digest_size(self) -> int:
        return 28 if self.is224 else 32

    def update(self, data: bytes, is_final: bool = False) -> None:
        """Feed ``data`` into the hash."""
        data = bytes(data)
        self._total += len(data)
        pending = self._buffer + data
        full = len(pending) - len(pending) % _BLOCK_SIZE
        for offset in range(0, full, _BLOCK_SIZE):
            _process(self._state, pending[offset:offset + _BLOCK_SIZE])
        self._buffer = pending[full:]

    def copy(self) -> Sha256:
        """Return an independent calculator with the same state."""
        clone = Sha256(self.is224)
        clone._state = list(self._state)
        clone._total = self._total
        clone._buffer = self._buffer
        return clone

    def digest(self) -> bytes:
        """Return the digest of everything fed so far."""
        state = list(self._state)
        fill = self._total % _BLOCK_SIZE
        padn = 56 - fill if fill < 56 else 120 - fill
        bit_length = (self._total * 8) & _MASK64
        tail = self._buffer + b"\x80" + b"\x00" * (padn - 1) + struct.pack(">Q", bit_length)
        for offset in range(0, len(tail), _BLOCK_SIZE):
            _process(state, tail[offset:offset + _BLOCK_SIZE])
        return struct.pack(">8I", *state)[: self.digest_size]

    def hexdigest(self) -> str:
        return self.digest().hex()


class HmacSha256:
    """HMAC over SHA-256 (or SHA-224)."""

    def __init__(self, key: bytes, is224: bool = False) -> None:
        self.is224 = bool(is224)
        key = bytes(key)
        if len(key) > _BLOCK_SIZE:
            key = sha256(key, self.is224)
        key = key.ljust(_BLOCK_SIZE, b"\x00")
        self._inner = Sha256(self.is224)
        self._inner.update(bytes(b ^ 0x36 for b in key))
        self._outer = Sha256(self.is224)
        self._outer.update(bytes(b ^ 0x5C for b in key))

    @property
    def digest_size(self) -> int:
        return self._inner.digest_size

    def update(self, data: bytes) -> None:
        """Feed message ``data`` into the MAC."""
        self._inner.update(data)

    def digest(self) -> bytes:
        """Return the MAC of everything fed so far."""
        outer = self._outer.copy()
        outer.update(self._inner.digest())
        return outer.digest()

    def hexdigest(self) -> str:
        return self.digest().hex()


def sha256(data: bytes, is224: bool = False) -> bytes:
    """Return the SHA-256 (or SHA-224) digest of ``data``."""
    calc = Sha256(is224)
    calc.update(data, is_final=True)
    return calc.digest()


def hmac_sha256(key: bytes, data: bytes, is224: bool = False) -> bytes:
    """Return HMAC-SHA-256 (or HMAC-SHA-224) of ``data`` under ``key``."""
    mac = HmacSha256(key, is224)
    mac.update(data)
    return mac.digest()