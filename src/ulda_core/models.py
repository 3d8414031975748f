"""Decoded forms of origin windows and signature packages."""
from __future__ import annotations

from dataclasses import dataclass

from .config import ChainConfig, Mode
from .errors import InvalidWindow


@dataclass(frozen=True)
class OriginWindow:
    """N equal-length random blocks at a chain index.

    Never mutated: stepping yields a new window.
    """

    blocks: tuple[bytes, ...]
    index: int
    config: ChainConfig

    def __post_init__(self):
        object.__setattr__(self, "blocks", tuple(bytes(b) for b in self.blocks))
        if self.index < 0:
            raise InvalidWindow(f"index must be unsigned (got {self.index})")
        if len(self.blocks) != self.config.n:
            raise InvalidWindow(f"expected {self.config.n} blocks, got {len(self.blocks)}")
        if len({len(b) for b in self.blocks}) > 1:
            raise InvalidWindow("blocks differ in length")
        if self.blocks and not self.blocks[0]:
            raise InvalidWindow("blocks must not be empty")

    @property
    def n(self) -> int:
        return self.config.n

    @property
    def mode(self) -> Mode:
        return self.config.mode

    @property
    def algorithm(self) -> str:
        return self.config.algorithm

    @property
    def block_len(self) -> int:
        return len(self.blocks[0])


@dataclass(frozen=True)
class SignaturePackage:
    """A decoded signature package with its payload split into N blocks.

    ``origin_len`` is the length of block 0 and ``blk_len`` the length of
    every later block. In mode X both are equal.
    """

    n: int
    mode: Mode
    algorithm: str
    index: int
    origin_len: int
    blk_len: int
    blocks: tuple[bytes, ...]
    config: ChainConfig

    @property
    def sig_bytes(self) -> bytes:
        return b"".join(self.blocks)
