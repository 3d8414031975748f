"""Binary codec for origin and signature packages.

Layout: [Marker | HeaderLen | N | Mode | Alg | Index(big-endian, minimal) | Sentinel] + payload.
Origin payload is the N window blocks concatenated. Signature payload is
the ladder blocks concatenated; its layout is re-derived from the mode.
"""
from __future__ import annotations

import base64
import binascii
import re
from typing import Union
from warnings import warn

from .config import ChainConfig, Mode
from .errors import MalformedPackage
from .models import OriginWindow, SignaturePackage
from .protocol import (
    FIXED_HEADER_LEN,
    MARKER,
    MAX_HEADER_LEN,
    MIN_HEADER_LEN,
    OFF_ALGORITHM,
    OFF_HEADER_LEN,
    OFF_INDEX,
    OFF_MARKER,
    OFF_MODE,
    OFF_N,
    SENTINEL,
)

PackageData = Union[bytes, bytearray, str]

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


# ── text encodings ───────────────────────────────────────────────

def export_package(data: bytes, fmt: str) -> Union[bytes, str]:
    if fmt == "hex":
        return data.hex()
    if fmt == "base64":
        return base64.b64encode(data).decode("ascii")
    if fmt == "bytes":
        return bytes(data)
    raise ValueError(f"unsupported export format {fmt!r}")


def looks_like_hex(text: str) -> bool:
    return bool(_HEX_RE.fullmatch(text)) and len(text) % 2 == 0


def import_package(data: PackageData, fmt: str) -> bytes:
    """Turn exported package data back into raw bytes.

    Strings are read with ``fmt``; under the ``bytes`` format a string is
    guessed to be hex when it uses the hex alphabet with even length, and
    base64 otherwise.
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    text = data.strip()
    if fmt == "bytes":
        fmt = "hex" if looks_like_hex(text) else "base64"
    try:
        if fmt == "hex":
            return bytes.fromhex(text)
        return base64.b64decode(text, validate=True)
    except (ValueError, binascii.Error) as e:
        raise MalformedPackage(f"cannot read {fmt} package text") from e


# ── header ───────────────────────────────────────────────────────

def index_to_bytes(index: int) -> bytes:
    if index < 0:
        raise ValueError(f"index must be unsigned (got {index})")
    if index == 0:
        return b"\x00"
    return index.to_bytes((index.bit_length() + 7) // 8, "big")


def build_header(n: int, mode: Mode, algorithm_code: int, index: int) -> bytes:
    idx = index_to_bytes(index)
    header_len = FIXED_HEADER_LEN + len(idx) + 1
    if header_len > MAX_HEADER_LEN:
        raise ValueError(f"index {index} does not fit in a one-byte header length")
    return bytes([MARKER, header_len, n, mode.code, algorithm_code]) + idx + bytes([SENTINEL])


def _parse_header(raw: bytes, config: ChainConfig):
    if len(raw) < MIN_HEADER_LEN:
        raise MalformedPackage(f"truncated header ({len(raw)} bytes)")
    header_len = raw[OFF_HEADER_LEN]
    if header_len < MIN_HEADER_LEN or header_len > len(raw):
        raise MalformedPackage(f"header length {header_len} out of range")
    n = raw[OFF_N]
    try:
        mode = Mode.from_code(raw[OFF_MODE])
    except ValueError as e:
        raise MalformedPackage(str(e)) from e
    algorithm = config.registry.algorithm_for(raw[OFF_ALGORITHM])
    index = int.from_bytes(raw[OFF_INDEX:header_len - 1], "big")
    return header_len, n, mode, algorithm, index


# ── origin packages ──────────────────────────────────────────────

def encode_origin(window: OriginWindow) -> bytes:
    code = window.config.registry.code_for(window.algorithm)
    header = build_header(window.n, window.mode, code, window.index)
    return header + b"".join(window.blocks)


def decode_origin(data: PackageData, config: ChainConfig | None = None) -> OriginWindow:
    config = config or ChainConfig()
    raw = import_package(data, config.fmt)
    header_len, n, mode, algorithm, index = _parse_header(raw, config)
    if raw[OFF_MARKER] != MARKER or raw[header_len - 1] != SENTINEL:
        raise MalformedPackage("bad marker or sentinel")
    if n == 0:
        raise MalformedPackage("window size is zero")
    body = raw[header_len:]
    if not body or len(body) % n:
        raise MalformedPackage(f"payload of {len(body)} bytes does not split into {n} blocks")
    block_len = len(body) // n
    blocks = tuple(body[i * block_len:(i + 1) * block_len] for i in range(n))
    window_config = config.evolve(n=n, mode=mode, algorithm=algorithm, origin_size=block_len * 8)
    return OriginWindow(blocks=blocks, index=index, config=window_config)


# ── signature packages ───────────────────────────────────────────

def encode_signature(sig_blocks, index: int, n: int, mode: Mode, algorithm: str,
                     config: ChainConfig | None = None) -> bytes:
    config = config or ChainConfig()
    header = build_header(n, Mode(mode), config.registry.code_for(algorithm), index)
    return header + b"".join(sig_blocks)


def decode_signature(data: PackageData, config: ChainConfig | None = None) -> SignaturePackage:
    config = config or ChainConfig()
    raw = import_package(data, config.fmt)
    header_len, n, mode, algorithm, index = _parse_header(raw, config)
    if raw[OFF_MARKER] != MARKER or raw[header_len - 1] != SENTINEL:
        warn(f"Signature package carries non-zero marker/sentinel at index {index}")
    if n == 0:
        raise MalformedPackage("window size is zero")
    payload = raw[header_len:]

    if mode is Mode.S:
        origin_len = config.origin_len
        rest = len(payload) - origin_len
        if rest < 0:
            raise MalformedPackage(f"payload shorter than origin block ({len(payload)} < {origin_len})")
        if n == 1:
            if rest:
                raise MalformedPackage("single-block signature carries trailing bytes")
            blk_len = 0
        elif rest % (n - 1):
            raise MalformedPackage(f"{rest} tail bytes do not split into {n - 1} blocks")
        else:
            blk_len = rest // (n - 1)
        blocks = [payload[:origin_len]]
        for i in range(n - 1):
            start = origin_len + i * blk_len
            blocks.append(payload[start:start + blk_len])
    else:
        if len(payload) % n:
            raise MalformedPackage(f"payload of {len(payload)} bytes does not split into {n} blocks")
        blk_len = origin_len = len(payload) // n
        blocks = [payload[i * blk_len:(i + 1) * blk_len] for i in range(n)]

    return SignaturePackage(
        n=n,
        mode=mode,
        algorithm=algorithm,
        index=index,
        origin_len=origin_len,
        blk_len=blk_len,
        blocks=tuple(blocks),
        config=config.evolve(n=n, mode=mode, algorithm=algorithm),
    )
