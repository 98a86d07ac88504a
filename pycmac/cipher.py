"""Block cipher capability consumed by the CMAC engine."""

from __future__ import annotations

from typing import Callable, Protocol

from .util import Buffer

__all__ = ["BlockCipher", "CipherFactory", "CipherKeyError"]


class CipherKeyError(KeyError):
    """The cipher factory rejected the key."""

    def __str__(self) -> str:
        # KeyError quotes its argument; show the message as-is
        return str(self.args[0]) if self.args else ""


class BlockCipher(Protocol):
    """A block cipher with its key already installed.

    Anything with a fixed ``block_size`` and an in-place ``encrypt_block``
    works: the engine never sees the raw key.
    """

    @property
    def block_size(self) -> int: ...

    def encrypt_block(self, block: bytearray) -> bytearray:
        """Encrypt exactly ``block_size`` bytes of ``block`` in place and return it."""
        ...


CipherFactory = Callable[[Buffer], BlockCipher]
