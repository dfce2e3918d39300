"""CRC-32 (IEEE 802.3, reflected polynomial 0xEDB88320) checksum."""

from __future__ import annotations

POLYNOMIAL = 0xEDB88320
INITIAL_CRC = 0xFFFFFFFF
FINAL_XOR = 0xFFFFFFFF


def _build_table() -> tuple[int, ...]:
    table = []
    for value in range(256):
        crc = value
        for _ in range(8):
            crc = (crc >> 1) ^ POLYNOMIAL if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


CRC_TABLE = _build_table()


class Crc32:
    """Incremental CRC-32 calculator.

    The final XOR is applied by the update that is marked as final; the
    digest is the current register value as four big-endian bytes.
    """

    digest_size = 4

    def __init__(self) -> None:
        self._crc = INITIAL_CRC

    def update(self, data: bytes, is_final: bool = False) -> None:
        """Feed ``data``; when ``is_final`` is true, apply the final XOR."""
        crc = self._crc
        table = CRC_TABLE
        for byte in bytes(data):
            crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
        if is_final:
            crc ^= FINAL_XOR
        self._crc = crc

    def digest(self) -> bytes:
        """Return the CRC register as four big-endian bytes."""
        return self._crc.to_bytes(4, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()


def crc32(data: bytes) -> bytes:
    """Return the CRC-32 of ``data`` as four big-endian bytes."""
    calc = Crc32()
    calc.update(data, is_final=True)
    return calc.digest()