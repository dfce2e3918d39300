import struct

import pytest

from avsdk.ntpe import (
    MACHINE_AMD64,
    MACHINE_I386,
    NtpeContext,
    PeFormatError,
    align_up,
    get_ntpe_context,
    rva_to_offset,
)

E_LFANEW = 0x40


def build_pe(machine=MACHINE_I386, sections=((b".text", 0x1000, 0x200, 0x400),),
             import_dir=(0, 0), section_alignment=0x1000, file_alignment=0x200,
             e_lfanew=E_LFANEW, dos_magic=b"MZ", nt_magic=b"PE\x00\x00"):
    if machine == MACHINE_AMD64:
        optional_size, dir_offset, opt_magic = 240, 112, 0x20B
    else:
        optional_size, dir_offset, opt_magic = 224, 96, 0x10B

    dos = bytearray(64)
    dos[0:2] = dos_magic
    struct.pack_into("<i", dos, 0x3C, e_lfanew)

    file_header = struct.pack("<HHIIIHH", machine, len(sections), 0, 0, 0, optional_size, 0)

    optional = bytearray(optional_size)
    struct.pack_into("<H", optional, 0, opt_magic)
    struct.pack_into("<II", optional, 32, section_alignment, file_alignment)
    struct.pack_into("<II", optional, dir_offset + 8, *import_dir)

    table = b"".join(
        struct.pack("<8sIIIIIIHHI", name, vsize, va, 0x200, raw, 0, 0, 0, 0, 0)
        for name, va, vsize, raw in sections
    )
    image = bytes(dos) + nt_magic + file_header + bytes(optional) + table
    return image.ljust(0x800, b"\x00")


def test_context_for_32bit_image():
    ctx = get_ntpe_context(build_pe())
    assert isinstance(ctx, NtpeContext)
    assert ctx.machine == MACHINE_I386
    assert ctx.cell_size == 4
    assert not ctx.is_64bit
    assert ctx.nt_header_offset == E_LFANEW
    assert ctx.section_alignment == 0x1000
    assert ctx.file_alignment == 0x200
    assert ctx.file_size == 0x800


def test_context_for_64bit_image():
    ctx = get_ntpe_context(build_pe(machine=MACHINE_AMD64))
    assert ctx.cell_size == 8
    assert ctx.is_64bit
    assert ctx.section_alignment == 0x1000


@pytest.mark.parametrize("machine", [MACHINE_I386, MACHINE_AMD64])
def test_data_directories_and_sections(machine):
    ctx = get_ntpe_context(build_pe(machine=machine, import_dir=(0x1100, 0x28)))
    assert len(ctx.data_directories) == 16
    assert ctx.data_directories[1] == (0x1100, 0x28)
    assert [s.name for s in ctx.sections] == [b".text"]
    assert ctx.sections[0].pointer_to_raw_data == 0x400


def test_missing_dos_signature():
    with pytest.raises(PeFormatError):
        get_ntpe_context(build_pe(dos_magic=b"ZM"))


def test_missing_pe_signature():
    with pytest.raises(PeFormatError):
        get_ntpe_context(build_pe(nt_magic=b"NE\x00\x00"))


def test_unsupported_machine():
    with pytest.raises(PeFormatError):
        get_ntpe_context(build_pe(machine=0x01C0))


@pytest.mark.parametrize("e_lfanew", [0, -4, 0x900])
def test_nt_header_offset_out_of_range(e_lfanew):
    with pytest.raises(PeFormatError):
        get_ntpe_context(build_pe(e_lfanew=e_lfanew))


def test_too_short_data():
    with pytest.raises(PeFormatError):
        get_ntpe_context(b"MZ")


def test_truncated_section_table():
    image = build_pe(sections=((b".a", 0x1000, 0x10, 0x400),) * 3)
    end = E_LFANEW + 4 + 20 + 224 + 40
    with pytest.raises(PeFormatError):
        get_ntpe_context(image[:end])


def test_align_up():
    assert align_up(0x1200, 0x1000) == 0x2000
    assert align_up(0x1000, 0x1000) == 0x1000
    assert align_up(0, 0x200) == 0
    assert align_up(5, 0) == 5


def test_rva_to_offset_inside_section():
    image = build_pe()
    assert rva_to_offset(image, 0x1000) == 0x400
    assert rva_to_offset(image, 0x1010) == 0x410


def test_rva_to_offset_uses_aligned_section_end():
    image = build_pe()
    assert rva_to_offset(image, 0x1FFF) == 0x1FFF - 0x1000 + 0x400


@pytest.mark.parametrize("rva", [0x500, 0x2000, 0x5000])
def test_rva_outside_sections(rva):
    with pytest.raises(PeFormatError):
        rva_to_offset(build_pe(), rva)


def test_rva_to_offset_picks_matching_section():
    image = build_pe(
        machine=MACHINE_AMD64,
        sections=((b".text", 0x1000, 0x100, 0x400), (b".rdata", 0x2000, 0x100, 0x600)),
    )
    assert rva_to_offset(image, 0x2004) == 0x604
    assert rva_to_offset(image, 0x1004) == 0x404


def test_invalid_image_in_rva_to_offset():
    with pytest.raises(PeFormatError):
        rva_to_offset(b"\x00" * 128, 0x1000)