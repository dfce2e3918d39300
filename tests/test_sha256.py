import hashlib
import hmac

import pytest

from avsdk.sha256 import HmacSha256, Sha256, hmac_sha256, sha256

LENGTHS = [0, 1, 3, 55, 56, 57, 63, 64, 65, 127, 128, 1000]


def _message(length):
    return bytes((i * 7 + 3) % 256 for i in range(length))


def test_abc_vector():
    assert sha256(b"abc").hex() == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


@pytest.mark.parametrize("length", LENGTHS)
def test_sha256_matches_reference(length):
    data = _message(length)
    assert sha256(data) == hashlib.sha256(data).digest()


@pytest.mark.parametrize("length", LENGTHS)
def test_sha224_matches_reference(length):
    data = _message(length)
    result = sha256(data, is224=True)
    assert result == hashlib.sha224(data).digest()
    assert len(result) == 28


@pytest.mark.parametrize("chunk", [1, 7, 63, 64, 100])
def test_incremental_equals_one_shot(chunk):
    data = _message(777)
    calc = Sha256()
    for offset in range(0, len(data), chunk):
        calc.update(data[offset:offset + chunk])
    assert calc.digest() == sha256(data)


def test_digest_does_not_consume_state():
    calc = Sha256()
    calc.update(b"hello ")
    first = calc.digest()
    assert calc.digest() == first
    calc.update(b"world")
    assert calc.digest() == hashlib.sha256(b"hello world").digest()


def test_is_final_flag_has_no_effect():
    a = Sha256()
    a.update(b"payload", is_final=True)
    b = Sha256()
    b.update(b"payload")
    assert a.digest() == b.digest()


def test_copy_is_independent():
    calc = Sha256()
    calc.update(b"abc")
    clone = calc.copy()
    clone.update(b"def")
    assert calc.digest() == hashlib.sha256(b"abc").digest()
    assert clone.digest() == hashlib.sha256(b"abcdef").digest()


@pytest.mark.parametrize("key_length", [0, 16, 64, 65, 200])
@pytest.mark.parametrize("is224", [False, True])
def test_hmac_matches_reference(key_length, is224):
    key = _message(key_length)
    data = _message(150)
    name = "sha224" if is224 else "sha256"
    assert hmac_sha256(key, data, is224) == hmac.new(key, data, name).digest()


def test_hmac_incremental_and_repeatable():
    key = b"k" * 20
    mac = HmacSha256(key)
    mac.update(b"part one, ")
    mac.update(b"part two")
    expected = hmac.new(key, b"part one, part two", "sha256").digest()
    assert mac.digest() == expected
    assert mac.digest() == expected