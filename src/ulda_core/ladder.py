"""Ladder engine: turns window blocks into signature blocks.

Mode S (linear):      sig[i] = H^i(b[i])
Mode X (triangular):  row[0] = b
                      row[d][i] = H(row[d-1][i] || row[d-1][i+1])
                      sig[d] = row[d][0]

In both modes sig[0] is the raw first block and final = sig[N-1].
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from .config import Mode
from .errors import EmptyWindow
from .hashing import HashRegistry, default_registry


class LadderResult(NamedTuple):
    sig_blocks: list[bytes]
    final: bytes


def ladder_s(blocks: Sequence[bytes], algorithm: str, registry: HashRegistry | None = None) -> LadderResult:
    if not blocks:
        raise EmptyWindow("ladder S")
    registry = registry or default_registry()
    sig = [registry.digest_iter(algorithm, bytes(b), i) for i, b in enumerate(blocks)]
    return LadderResult(sig, sig[-1])


def ladder_x(blocks: Sequence[bytes], algorithm: str, registry: HashRegistry | None = None) -> LadderResult:
    if not blocks:
        raise EmptyWindow("ladder X")
    registry = registry or default_registry()
    row = [bytes(b) for b in blocks]
    sig = [row[0]]
    for _ in range(1, len(blocks)):
        row = [registry.digest(algorithm, row[i] + row[i + 1]) for i in range(len(row) - 1)]
        sig.append(row[0])
    return LadderResult(sig, sig[-1])


def ladder(blocks: Sequence[bytes], mode: Mode, algorithm: str,
           registry: HashRegistry | None = None) -> LadderResult:
    if Mode(mode) is Mode.X:
        return ladder_x(blocks, algorithm, registry)
    return ladder_s(blocks, algorithm, registry)
