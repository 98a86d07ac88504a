import pytest

from pycmac import constant_time_equal

TAG = bytes.fromhex("070a16b46b4d4144f79bdd9dd04a287c")


def test_reflexive():
    assert constant_time_equal(TAG, TAG)
    assert constant_time_equal(b"", b"")


def test_symmetric():
    other = bytes.fromhex("bb1d6929e95937287fa37d129b756746")
    assert constant_time_equal(TAG, other) == constant_time_equal(other, TAG)
    assert constant_time_equal(TAG, bytes(TAG)) == constant_time_equal(bytes(TAG), TAG)


@pytest.mark.parametrize("pos", range(len(TAG)))
@pytest.mark.parametrize("flip", [0x01, 0x80, 0xFF])
def test_detects_single_byte_difference(pos, flip):
    tampered = bytearray(TAG)
    tampered[pos] ^= flip
    assert not constant_time_equal(TAG, tampered)
    assert not constant_time_equal(tampered, TAG)


def test_detects_length_difference():
    assert not constant_time_equal(TAG, TAG[:-1])
    assert not constant_time_equal(TAG[:5], TAG)
    assert not constant_time_equal(TAG, TAG + b"\x00")
    assert not constant_time_equal(b"", b"\x00")


def test_mixed_buffer_types():
    assert constant_time_equal(TAG, bytearray(TAG))
    assert constant_time_equal(memoryview(TAG), TAG)
