"""Byte-buffer helpers for pycmac.

All helpers work on fixed-size ``bytearray`` blocks owned by the caller;
nothing here allocates more than a single block.
"""

from __future__ import annotations

__all__ = ["Buffer", "xor_into", "shift_left_one_bit", "dbl"]

Buffer = bytes | bytearray | memoryview

# Rb for 128-bit blocks (NIST SP 800-38B, section 5.3)
RB_128 = 0x87


def xor_into(dst: bytearray, src: Buffer) -> None:
    """XOR ``src`` into the first ``len(src)`` bytes of ``dst`` in place."""
    n = len(src)
    x = int.from_bytes(dst[:n], "big") ^ int.from_bytes(src, "big")
    dst[:n] = x.to_bytes(n, "big")


def shift_left_one_bit(dst: bytearray, src: Buffer) -> int:
    """Shift ``src`` left by one bit as a big-endian integer, writing into ``dst``.

    Returns the bit shifted out of the most significant byte.
    """
    overflow = 0
    for i in range(len(src) - 1, -1, -1):
        b = src[i]
        dst[i] = ((b << 1) & 0xFF) | overflow
        overflow = b >> 7
    return overflow


def dbl(dst: bytearray, src: Buffer) -> None:
    """Doubling in GF(2^128): ``dst = src << 1``, folded with Rb on carry."""
    msb = shift_left_one_bit(dst, src)
    # constant-time select of Rb
    dst[-1] ^= RB_128 & -msb
