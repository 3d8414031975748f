"""Signer: window -> ladder -> standalone signature package."""
from __future__ import annotations

from typing import Union

from ulda_core.codec import PackageData, encode_signature
from ulda_core.config import ChainConfig, Mode
from ulda_core.errors import InvalidWindow
from ulda_core.ladder import ladder
from ulda_core.models import OriginWindow
from ulda_core.window import as_window


def sign(window: Union[OriginWindow, PackageData], config: ChainConfig | None = None) -> bytes:
    """Sign a window snapshot.

    The package carries only the header and the ladder blocks, never the
    origin blocks of the window.
    """
    w = as_window(window, config)
    registry = w.config.registry
    if w.mode is Mode.X and w.block_len != registry.digest_size(w.algorithm):
        # X payloads must split into N equal blocks on decode.
        raise InvalidWindow(
            f"mode X needs {registry.digest_size(w.algorithm)}-byte blocks, window has {w.block_len}"
        )
    result = ladder(w.blocks, w.mode, w.algorithm, registry)
    return encode_signature(result.sig_blocks, w.index, w.n, w.mode, w.algorithm, w.config)
