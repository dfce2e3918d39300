"""Computing several digests of the same data in one pass."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Callable, Optional, Union

from avsdk.crc32 import Crc32
from avsdk.md5 import Md5
from avsdk.sha1 import Sha1
from avsdk.sha256 import Sha256
from avsdk.sha512 import Sha512

BLOCK_SIZE = 0x1000
"""Largest block accepted by one update; files are read in blocks of this size."""


class HashKind(enum.IntFlag):
    """Selectable digest algorithms, combinable as bit flags."""

    NONE = 0
    CRC32 = 1 << 0
    MD5 = 1 << 1
    SHA1 = 1 << 2
    SHA256 = 1 << 3
    SHA512 = 1 << 4
    ALL = CRC32 | MD5 | SHA1 | SHA256 | SHA512


_SINGLE_KINDS = (HashKind.CRC32, HashKind.MD5, HashKind.SHA1, HashKind.SHA256, HashKind.SHA512)

_FACTORIES: dict[HashKind, Callable[[], object]] = {
    HashKind.CRC32: Crc32,
    HashKind.MD5: Md5,
    HashKind.SHA1: Sha1,
    HashKind.SHA256: Sha256,
    HashKind.SHA512: Sha512,
}


def _normalize(flags: Union[int, HashKind, None]) -> HashKind:
    if flags is None or int(flags) == -1:
        return HashKind.ALL
    return HashKind(int(flags) & HashKind.ALL)


@dataclass(frozen=True)
class HashResult:
    """Digests produced by a :class:`HashContext`; disabled ones are ``None``."""

    flags: HashKind
    crc32: Optional[bytes] = None
    md5: Optional[bytes] = None
    sha1: Optional[bytes] = None
    sha256: Optional[bytes] = None
    sha512: Optional[bytes] = None

    def __getitem__(self, kind: HashKind) -> Optional[bytes]:
        if kind not in _FACTORIES:
            raise KeyError(kind)
        return getattr(self, kind.name.lower())

    def hexdigests(self) -> dict[str, str]:
        """Map the name of each enabled algorithm to its hex digest."""
        return {
            kind.name.lower(): value.hex()
            for kind in _SINGLE_KINDS
            if (value := self[kind]) is not None
        }


class HashContext:
    """Feeds the same data to every enabled digest algorithm."""

    def __init__(self, flags: Union[int, HashKind, None] = HashKind.ALL) -> None:
        self.flags = _normalize(flags)
        self._calculators = {
            kind: _FACTORIES[kind]() for kind in _SINGLE_KINDS if kind in self.flags
        }

    def update(self, data: bytes, is_final: bool = False) -> None:
        """Feed one block of at most :data:`BLOCK_SIZE` bytes.

        Raises :class:`ValueError` if the block is larger than that.
        """
        data = bytes(data)
        if len(data) > BLOCK_SIZE:
            raise ValueError(f"block of {len(data)} bytes exceeds {BLOCK_SIZE}")
        for calculator in self._calculators.values():
            calculator.update(data, is_final)

    def final(self) -> HashResult:
        """Collect the digests of every enabled algorithm."""
        digests = {
            kind.name.lower(): calculator.digest()
            for kind, calculator in self._calculators.items()
        }
        return HashResult(flags=self.flags, **digests)


def hash_data(data: bytes, flags: Union[int, HashKind, None] = HashKind.ALL) -> HashResult:
    """Hash ``data`` as a single final block.

    Only the first :data:`BLOCK_SIZE` bytes of ``data`` are hashed.
    """
    context = HashContext(flags)
    context.update(bytes(data)[:BLOCK_SIZE], is_final=True)
    return context.final()


def hash_file(
    path: Union[str, os.PathLike], flags: Union[int, HashKind, None] = HashKind.ALL
) -> HashResult:
    """Hash the whole content of the file at ``path``, reading it block by block."""
    context = HashContext(flags)
    with open(path, "rb") as stream:
        while block := stream.read(BLOCK_SIZE):
            context.update(block)
    context.update(b"", is_final=True)
    return context.final()