"""Window generation and stepping."""
from __future__ import annotations

import secrets
from typing import Union

from .codec import PackageData, decode_origin
from .config import ChainConfig
from .errors import InvalidWindow, MalformedPackage, UnknownAlgorithm
from .models import OriginWindow


def random_block(length: int) -> bytes:
    return secrets.token_bytes(length)


def generate(config: ChainConfig | None = None, index: int = 0) -> OriginWindow:
    """Fresh window of ``config.n`` random blocks."""
    config = config or ChainConfig()
    blocks = tuple(random_block(config.origin_len) for _ in range(config.n))
    return OriginWindow(blocks=blocks, index=index, config=config)


def as_window(window: Union[OriginWindow, PackageData], config: ChainConfig | None = None) -> OriginWindow:
    """Accept a decoded window or an encoded origin package."""
    if isinstance(window, OriginWindow):
        return window
    try:
        return decode_origin(window, config)
    except (MalformedPackage, UnknownAlgorithm) as e:
        raise InvalidWindow(f"not a well-formed origin package ({e})") from e


def step(window: Union[OriginWindow, PackageData], config: ChainConfig | None = None) -> OriginWindow:
    """Drop the oldest block, append a fresh one and advance the index."""
    current = as_window(window, config)
    blocks = current.blocks[1:] + (random_block(current.block_len),)
    return OriginWindow(blocks=blocks, index=current.index + 1, config=current.config)
