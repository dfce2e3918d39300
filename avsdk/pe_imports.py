"""Listing of the modules and functions imported by a PE image."""

from __future__ import annotations

import struct

from avsdk.ntpe import PeFormatError, get_ntpe_context, rva_to_offset

IMPORT_DIRECTORY = 1

_DESCRIPTOR = struct.Struct("<IIIII")


def _read(fmt: struct.Struct, data: bytes, offset: int) -> tuple:
    if offset < 0 or offset + fmt.size > len(data):
        raise PeFormatError(f"truncated image at offset {offset:#x}")
    return fmt.unpack_from(data, offset)


def _read_cstring(data: bytes, offset: int) -> str:
    if offset < 0 or offset >= len(data):
        raise PeFormatError(f"string offset {offset:#x} out of range")
    end = data.find(b"\x00", offset)
    if end < 0:
        raise PeFormatError(f"unterminated string at offset {offset:#x}")
    return data[offset:end].decode("latin-1")


def get_imports(data: bytes) -> dict[str, set[str]]:
    """Map each imported module (upper-cased) to the set of names it supplies.

    Functions imported by ordinal appear as ``"#ord: <n>"``. An image with no
    import directory gives an empty mapping; a malformed image raises
    :class:`PeFormatError`.
    """
    data = bytes(data)
    context = get_ntpe_context(data)
    import_rva, _ = context.data_directories[IMPORT_DIRECTORY]
    if import_rva == 0:
        return {}

    cell = struct.Struct("<Q" if context.cell_size == 8 else "<I")
    ordinal_flag = 1 << (context.cell_size * 8 - 1)

    result: dict[str, set[str]] = {}
    descriptor_offset = rva_to_offset(data, import_rva)
    while True:
        original_thunk, _, _, name_rva, first_thunk = _read(_DESCRIPTOR, data, descriptor_offset)
        if name_rva == 0:
            break
        module = _read_cstring(data, rva_to_offset(data, name_rva)).upper()
        functions = result.setdefault(module, set())

        cell_offset = rva_to_offset(data, original_thunk or first_thunk)
        while True:
            (value,) = _read(cell, data, cell_offset)
            if value == 0:
                break
            if value & ordinal_flag:
                functions.add(f"#ord: {value & 0xFFFF}")
            else:
                functions.add(_read_cstring(data, rva_to_offset(data, value) + 2))
            cell_offset += cell.size

        descriptor_offset += _DESCRIPTOR.size
    return result