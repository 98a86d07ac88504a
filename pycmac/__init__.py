"""CMAC message authentication (RFC 4493, NIST SP 800-38B).

The engine works with any keyed 128-bit block cipher exposing
``block_size`` and an in-place ``encrypt_block``. An AES implementation
backed by OpenSSL libcrypto lives in ``pycmac.aes`` and is loaded on demand.
"""

from .cipher import BlockCipher, CipherFactory, CipherKeyError
from .cmac import SUPPORTED_BLOCK_SIZES, Cmac, constant_time_equal, mac

__all__ = [
    "BlockCipher",
    "CipherFactory",
    "CipherKeyError",
    "Cmac",
    "SUPPORTED_BLOCK_SIZES",
    "constant_time_equal",
    "mac",
]
