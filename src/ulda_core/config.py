"""Chain configuration, built once per chain and passed to every operation."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from .hashing import HashRegistry, default_registry
from .protocol import (
    DEFAULT_ALGORITHM,
    DEFAULT_FORMAT,
    DEFAULT_MODE,
    DEFAULT_N,
    DEFAULT_ORIGIN_SIZE,
    FORMATS,
    MAX_N,
    MODE_CODES,
)


class Mode(str, Enum):
    S = "S"  # linear iterated hash
    X = "X"  # triangular pairwise hash

    @property
    def code(self) -> int:
        return MODE_CODES[self.value]

    @classmethod
    def from_code(cls, code: int) -> "Mode":
        for mode in cls:
            if mode.code == code:
                return mode
        raise ValueError(f"unknown mode code {code:#04x}")


@dataclass(frozen=True)
class ChainConfig:
    n: int = DEFAULT_N
    mode: Mode = Mode(DEFAULT_MODE)
    algorithm: str = DEFAULT_ALGORITHM
    origin_size: int = DEFAULT_ORIGIN_SIZE  # bits
    fmt: str = DEFAULT_FORMAT
    registry: HashRegistry = field(default_factory=default_registry, compare=False, repr=False)

    def __post_init__(self):
        if not 1 <= self.n <= MAX_N:
            raise ValueError(f"window size must be within 1..{MAX_N} (got {self.n})")
        if self.origin_size <= 0 or self.origin_size % 8:
            raise ValueError(f"origin size must be a positive multiple of 8 bits (got {self.origin_size})")
        if self.fmt not in FORMATS:
            raise ValueError(f"unsupported export format {self.fmt!r}")
        if not isinstance(self.mode, Mode):
            object.__setattr__(self, "mode", Mode(self.mode))

    @property
    def origin_len(self) -> int:
        """Origin block length in bytes."""
        return self.origin_size // 8

    def evolve(self, **changes) -> "ChainConfig":
        return replace(self, **changes)
