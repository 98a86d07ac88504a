"""AES block cipher capability backed by OpenSSL libcrypto."""

import secrets

from ._loader import ffi, libcrypto
from .cipher import CipherKeyError
from .util import Buffer

KEY_SIZES = (16, 24, 32)
BLOCK_SIZE = 16


def random_key(size: int = 16) -> bytes:
    """Generate a random AES key using cryptographically secure random bytes."""
    if size not in KEY_SIZES:
        raise ValueError(f"key size must be one of {KEY_SIZES}")
    return secrets.token_bytes(size)


class AES:
    """AES encryption of single blocks with an installed key schedule.

    Only the forward direction is exposed; CMAC never decrypts.
    """

    __slots__ = ("_ks", "_lib")

    block_size = BLOCK_SIZE

    def __init__(self, key: Buffer) -> None:
        f"""Expand the key.

        Args:
            key: AES key ({KEY_SIZES=}).

        Raises:
            CipherKeyError: If the key length is invalid or libcrypto rejects it.
            OSError: If libcrypto cannot be loaded.
        """
        if len(key) not in KEY_SIZES:
            raise CipherKeyError(f"AES key length must be one of {KEY_SIZES}, got {len(key)}")
        lib = libcrypto()
        ks = ffi.new("AES_KEY *")
        rc = lib.AES_set_encrypt_key(ffi.from_buffer("unsigned char[]", key), len(key) * 8, ks)
        if rc != 0:
            raise CipherKeyError(f"AES_set_encrypt_key failed: {rc}")
        self._ks = ks
        self._lib = lib

    def encrypt_block(self, block: bytearray) -> bytearray:
        """Encrypt one 16-byte block in place.

        Raises:
            TypeError: If block is not exactly 16 bytes.
        """
        if len(block) != BLOCK_SIZE:
            raise TypeError(f"block length must be {BLOCK_SIZE}")
        buf = ffi.from_buffer("unsigned char[]", block, require_writable=True)
        self._lib.AES_encrypt(buf, buf, self._ks)
        return block


new_cipher = AES

__all__ = ["KEY_SIZES", "BLOCK_SIZE", "AES", "new_cipher", "random_key"]
