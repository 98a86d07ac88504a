import json
import random
from pathlib import Path

from Crypto.Cipher import AES

from pycmac import CipherKeyError

VECTORS_PATH = Path(__file__).parent / "test-vectors" / "cmac-aes-test-vectors.json"


def load_test_vectors():
    """Load CMAC-AES test vectors from JSON file."""
    with open(VECTORS_PATH, "r") as f:
        return json.load(f)


def get_test_id(vector):
    """Short test ID, e.g. "AES-128 RFC4493 Example 3 (40 bytes)" -> "AES-128-3"."""
    name = vector["name"]
    return f"{name.split(' ')[0]}-{name.split('Example ')[1].split(' ')[0]}"


def random_split_bytes(data, seed=None):
    """Split data into a random sequence of chunks, some of them empty."""
    rng = random.Random(seed)
    chunks = []
    pos = 0
    while pos < len(data):
        size = rng.choice((0, 1, 3, 15, 16, 17, 33))
        chunks.append(data[pos : pos + size])
        pos += size
    return chunks


class CryptodomeAES:
    """Reference block cipher capability on top of PyCryptodome AES-ECB."""

    block_size = 16

    def __init__(self, key):
        try:
            self._ecb = AES.new(bytes(key), AES.MODE_ECB)
        except ValueError as e:
            raise CipherKeyError(str(e)) from e

    def encrypt_block(self, block):
        block[:] = self._ecb.encrypt(bytes(block))
        return block


class FakeCipher:
    """Deterministic non-cryptographic cipher with a configurable block size."""

    def __init__(self, key, block_size=16):
        self.block_size = block_size
        self._key = bytes(key)

    def encrypt_block(self, block):
        for i in range(self.block_size):
            block[i] = (block[i] ^ self._key[i % len(self._key)]) * 5 % 256
        return block
