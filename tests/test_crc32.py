import zlib

import pytest

from avsdk.crc32 import Crc32, crc32


def test_check_value():
    assert crc32(b"123456789") == bytes.fromhex("cbf43926")


def test_empty_input():
    assert crc32(b"") == zlib.crc32(b"").to_bytes(4, "big")


@pytest.mark.parametrize(
    "data",
    [b"a", b"abc", b"The quick brown fox jumps over the lazy dog", bytes(range(256)) * 20],
)
def test_matches_zlib(data):
    assert crc32(data) == zlib.crc32(data).to_bytes(4, "big")


def test_chunked_updates_match_one_shot():
    data = bytes(range(256)) * 7
    calc = Crc32()
    calc.update(data[:100])
    calc.update(data[100:1000])
    calc.update(data[1000:], is_final=True)
    assert calc.digest() == crc32(data)


def test_final_flag_on_empty_block():
    data = b"streamed content"
    calc = Crc32()
    calc.update(data)
    calc.update(b"", is_final=True)
    assert calc.digest() == crc32(data)


def test_digest_before_final_is_complemented_register():
    calc = Crc32()
    calc.update(b"abc")
    expected = (zlib.crc32(b"abc") ^ 0xFFFFFFFF).to_bytes(4, "big")
    assert calc.digest() == expected


def test_digest_length_and_hex():
    calc = Crc32()
    calc.update(b"xyz", is_final=True)
    assert len(calc.digest()) == 4
    assert calc.hexdigest() == calc.digest().hex()


def test_accepts_bytearray_and_memoryview():
    data = b"buffer protocol"
    assert crc32(bytearray(data)) == crc32(data)
    assert crc32(memoryview(data)) == crc32(data)