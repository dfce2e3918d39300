"""Parsing of the headers of 32- and 64-bit PE images held in memory."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import NamedTuple

DOS_SIGNATURE = b"MZ"
NT_SIGNATURE = b"PE\x00\x00"
MACHINE_I386 = 0x014C
MACHINE_AMD64 = 0x8664

_DOS_HEADER_SIZE = 64
_E_LFANEW_OFFSET = 0x3C
_FILE_HEADER = struct.Struct("<HHIIIHH")
_SECTION_HEADER = struct.Struct("<8sIIIIIIHHI")
_DATA_DIRECTORY = struct.Struct("<II")
_DIRECTORY_COUNT = 16

# machine -> (optional header size, data directory offset, lookup cell size)
_LAYOUTS = {
    MACHINE_I386: (224, 96, 4),
    MACHINE_AMD64: (240, 112, 8),
}


class PeFormatError(ValueError):
    """Raised when data is not a valid PE image or an address cannot be resolved."""


class _SectionHeader(NamedTuple):
    name: bytes
    virtual_size: int
    virtual_address: int
    size_of_raw_data: int
    pointer_to_raw_data: int
    characteristics: int


@dataclass(frozen=True)
class NtpeContext:
    """Locations and values read from the headers of a PE image."""

    file_size: int
    machine: int
    nt_header_offset: int
    section_table_offset: int
    section_alignment: int
    file_alignment: int
    cell_size: int
    data_directories: tuple[tuple[int, int], ...]
    sections: tuple[_SectionHeader, ...]

    @property
    def is_64bit(self) -> bool:
        return self.machine == MACHINE_AMD64


def align_up(value: int, alignment: int) -> int:
    """Round ``value`` up to a multiple of ``alignment`` (unchanged if zero)."""
    if alignment <= 0:
        return value
    return (value + alignment - 1) // alignment * alignment


def _unpack(layout: struct.Struct, data: bytes, offset: int) -> tuple:
    if offset < 0 or offset + layout.size > len(data):
        raise PeFormatError(f"truncated image at offset {offset:#x}")
    return layout.unpack_from(data, offset)


def get_ntpe_context(data: bytes) -> NtpeContext:
    """Read the DOS, NT and optional headers and the section table of ``data``."""
    data = bytes(data)
    if len(data) < _DOS_HEADER_SIZE or data[:2] != DOS_SIGNATURE:
        raise PeFormatError("missing DOS signature")

    (e_lfanew,) = struct.unpack_from("<i", data, _E_LFANEW_OFFSET)
    if e_lfanew <= 0 or e_lfanew >= len(data):
        raise PeFormatError("NT header offset out of range")
    if data[e_lfanew:e_lfanew + 4] != NT_SIGNATURE:
        raise PeFormatError("missing PE signature")

    file_header_offset = e_lfanew + 4
    machine, number_of_sections, *_ = _unpack(_FILE_HEADER, data, file_header_offset)
    layout = _LAYOUTS.get(machine)
    if layout is None:
        raise PeFormatError(f"unsupported machine {machine:#06x}")
    optional_size, directory_offset, cell_size = layout

    optional_offset = file_header_offset + _FILE_HEADER.size
    if optional_offset + optional_size > len(data):
        raise PeFormatError("truncated optional header")
    section_alignment, file_alignment = struct.unpack_from("<II", data, optional_offset + 32)

    directories_start = optional_offset + directory_offset
    data_directories = tuple(
        _unpack(_DATA_DIRECTORY, data, directories_start + index * _DATA_DIRECTORY.size)
        for index in range(_DIRECTORY_COUNT)
    )

    section_table_offset = optional_offset + optional_size
    sections = []
    for index in range(number_of_sections):
        fields = _unpack(_SECTION_HEADER, data, section_table_offset + index * _SECTION_HEADER.size)
        name, virtual_size, virtual_address, raw_size, raw_pointer, *_, characteristics = fields
        sections.append(
            _SectionHeader(
                name.rstrip(b"\x00"), virtual_size, virtual_address, raw_size, raw_pointer, characteristics
            )
        )

    return NtpeContext(
        file_size=len(data),
        machine=machine,
        nt_header_offset=e_lfanew,
        section_table_offset=section_table_offset,
        section_alignment=section_alignment,
        file_alignment=file_alignment,
        cell_size=cell_size,
        data_directories=data_directories,
        sections=tuple(sections),
    )


def rva_to_offset(data: bytes, rva: int) -> int:
    """Translate a relative virtual address into a file offset within ``data``."""
    context = get_ntpe_context(data)
    for section in context.sections:
        start = section.virtual_address
        end = align_up(start + section.virtual_size, context.section_alignment)
        if start <= rva < end:
            return rva - start + section.pointer_to_raw_data
    raise PeFormatError(f"RVA {rva:#x} is not inside any section")