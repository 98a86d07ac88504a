"""CMAC (RFC 4493 / NIST SP 800-38B) over any 128-bit block cipher.

Usage:
    from pycmac import Cmac, aes

    m = Cmac(aes.new_cipher, key)
    m.update(b"hello ")
    m.update(b"world")
    tag = m.finalize()

The engine keeps one potential final block buffered so that the last block
of the message can be folded with K1 (complete block) or K2 (padded block)
before it is encrypted. ``finalize()`` works on a scratch copy, so the
state stays resumable: more data may be fed after reading a tag.
"""

from __future__ import annotations

import logging

from .cipher import BlockCipher, CipherFactory, CipherKeyError
from .util import Buffer, dbl, xor_into

__all__ = ["Cmac", "mac", "constant_time_equal", "SUPPORTED_BLOCK_SIZES"]

logger = logging.getLogger(__name__)

# Only 128-bit blocks have their doubling constant (0x87) implemented
SUPPORTED_BLOCK_SIZES = (16,)


def constant_time_equal(a: Buffer, b: Buffer) -> bool:
    """Compare two tags without leaking the position of the first mismatch.

    Lengths are not secret, so a length mismatch returns False right away.
    """
    if len(a) != len(b):
        return False
    acc = 0
    for x, y in zip(memoryview(a).cast("B"), memoryview(b).cast("B")):
        acc |= x ^ y
    return ((acc - 1) >> 8) & 1 == 1


def mac(
    new_cipher: CipherFactory,
    key: Buffer,
    data: Buffer,
    into: Buffer | None = None,
) -> bytearray | memoryview:
    """Compute a CMAC tag for the given data in one shot.

    Args:
        new_cipher: Factory returning a keyed block cipher for ``key``.
        key: Secret key, passed to ``new_cipher`` untouched.
        data: Data to authenticate.
        into: Buffer to write the tag into (default: bytearray created).

    Returns:
        Tag as bytearray if into not provided, memoryview of into otherwise.

    Raises:
        CipherKeyError: If the factory rejects the key.
    """
    engine = Cmac(new_cipher, key)
    engine.update(data)
    return engine.finalize(into)


class Cmac:
    """Streaming CMAC state bound to one keyed block cipher.

    Usage:
        m = Cmac(new_cipher, key)
        m.update(data)
        tag = m.finalize()
        # or verify:
        m.verify(tag)

    Instances are not thread-safe; use one engine per message stream.
    """

    __slots__ = ("_cipher", "_bs", "_k1", "_k2", "_state", "_pending", "_pending_len")

    def __init__(
        self,
        new_cipher: CipherFactory | None,
        key: Buffer | None = None,
        _other: Cmac | None = None,
    ) -> None:
        """Install the key through ``new_cipher`` and derive the subkeys.

        Args:
            new_cipher: Factory mapping key bytes to a keyed ``BlockCipher``.
            key: Secret key for the factory.

        Raises:
            CipherKeyError: If the factory rejects the key.
            ValueError: If the cipher block size is not supported.
        """
        if _other is not None:  # clone path
            self._cipher = _other._cipher
            self._bs = _other._bs
            self._k1 = _other._k1
            self._k2 = _other._k2
            self._state = bytearray(_other._state)
            self._pending = bytearray(_other._pending)
            self._pending_len = _other._pending_len
            return

        try:
            cipher: BlockCipher = new_cipher(key)
        except CipherKeyError:
            raise
        except (KeyError, ValueError, TypeError) as e:
            raise CipherKeyError(f"cipher rejected key: {e}") from e

        bs = cipher.block_size
        if bs not in SUPPORTED_BLOCK_SIZES:
            raise ValueError(
                f"block size {bs} not supported, expected one of {SUPPORTED_BLOCK_SIZES}"
            )
        self._cipher = cipher
        self._bs = bs

        # L = E_K(0^b); K1 = dbl(L); K2 = dbl(K1)
        block = bytearray(bs)
        cipher.encrypt_block(block)
        k1 = bytearray(bs)
        dbl(k1, block)
        k2 = bytearray(bs)
        dbl(k2, k1)
        self._k1 = bytes(k1)
        self._k2 = bytes(k2)

        self._state = bytearray(bs)
        self._pending = bytearray(bs)
        self._pending_len = 0
        logger.debug("CMAC engine ready for %d-byte block cipher", bs)

    def __deepcopy__(self, memo=None) -> Cmac:
        """Return a clone of current CMAC state."""
        return Cmac(None, _other=self)

    clone = __deepcopy__

    @property
    def block_size(self) -> int:
        """Block size of the bound cipher in bytes."""
        return self._bs

    @property
    def tag_size(self) -> int:
        """Size of the tag returned by finalize()."""
        return self._bs

    @property
    def k1(self) -> bytes:
        return self._k1

    @property
    def k2(self) -> bytes:
        return self._k2

    def reset(self) -> None:
        """Forget all message bytes so the engine can authenticate a new message."""
        bs = self._bs
        self._state[:] = bytes(bs)
        self._pending[:] = bytes(bs)
        self._pending_len = 0

    def update(self, data: Buffer) -> int:
        """Absorb data into the CMAC state.

        Args:
            data: Bytes-like object to authenticate.

        Returns:
            Number of bytes consumed, always ``len(data)``.
        """
        m = memoryview(data).cast("B")
        n = len(m)
        bs = self._bs
        state = self._state
        pending = self._pending
        pending_len = self._pending_len
        encrypt = self._cipher.encrypt_block

        pos = 0
        # The buffered block is flushed only once we know more data follows it
        if pending_len + n > bs:
            fill = bs - pending_len
            pending[pending_len:] = m[:fill]
            xor_into(state, pending)
            encrypt(state)
            pending[:] = bytes(bs)
            pending_len = 0
            pos = fill
            while n - pos > bs:
                xor_into(state, m[pos : pos + bs])
                encrypt(state)
                pos += bs

        tail = n - pos
        pending[pending_len : pending_len + tail] = m[pos:]
        self._pending_len = pending_len + tail
        return n

    def finalize(self, into: Buffer | None = None) -> bytearray | memoryview:
        """Return the tag for all data seen since the last reset.

        The engine state is left untouched, so update() may be called again
        to extend the message.

        Args:
            into: Optional buffer to write the tag into (default: bytearray created).

        Returns:
            The tag as bytearray if into not provided, memoryview of into otherwise.

        Raises:
            TypeError: If into is shorter than tag_size.
        """
        bs = self._bs
        if into is not None and len(into) < bs:
            raise TypeError(f"into length must be at least {bs}")

        scratch = bytearray(self._state)
        xor_into(scratch, self._pending)
        if self._pending_len == bs:
            xor_into(scratch, self._k1)
        else:
            xor_into(scratch, self._k2)
            scratch[self._pending_len] ^= 0x80
        self._cipher.encrypt_block(scratch)

        if into is None:
            return scratch
        out = memoryview(into).cast("B")
        out[:bs] = scratch
        return out[:bs]

    def digest(self) -> bytes:
        """Tag as immutable bytes."""
        return bytes(self.finalize())

    def hexdigest(self) -> str:
        return self.finalize().hex()

    def verify(self, tag: Buffer) -> None:
        """Verify a tag for the current CMAC state.

        Args:
            tag: The tag to verify (tag_size bytes).

        Returns:
            Only if verification succeeds.

        Raises:
            TypeError: If tag length is invalid.
            ValueError: If verification fails.
        """
        if len(tag) != self._bs:
            raise TypeError(f"tag length must be {self._bs}")
        if not constant_time_equal(self.finalize(), tag):
            raise ValueError("mac verification failed")
