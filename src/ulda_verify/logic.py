"""Cross-verification of two signature packages.

Mode S links any gap 0 < g < N: hashing a newer block g more times must
reproduce the older block g positions further along the ladder.
Mode X links only consecutive indices: each older diagonal block must be
the hash of the previous older block and the matching newer block.
"""
from __future__ import annotations

import hmac
from typing import Union

from ulda_core.codec import PackageData, decode_signature
from ulda_core.config import ChainConfig, Mode
from ulda_core.models import SignaturePackage

from .const import ERRORS

Signature = Union[SignaturePackage, PackageData]


def _as_signature(sig: Signature, config: ChainConfig | None) -> SignaturePackage:
    if isinstance(sig, SignaturePackage):
        return sig
    return decode_signature(sig, config)


def _order(a: SignaturePackage, b: SignaturePackage):
    return (a, b) if a.index < b.index else (b, a)


def _check_s(a: SignaturePackage, b: SignaturePackage) -> str | None:
    if a.n != b.n:
        return "E_CONFIG_MISMATCH"
    older, newer = _order(a, b)
    gap = newer.index - older.index
    if gap <= 0 or gap >= older.n:
        return "E_GAP_UNSUPPORTED"
    if older.origin_len != newer.origin_len or older.blk_len != newer.blk_len:
        return "E_LAYOUT_MISMATCH"
    registry = older.config.registry
    for i in range(older.n - gap):
        hashed = registry.digest_iter(older.algorithm, newer.blocks[i], gap)
        if not hmac.compare_digest(hashed, older.blocks[i + gap]):
            return "E_LADDER_MISMATCH"
    return None


def _check_x(a: SignaturePackage, b: SignaturePackage) -> str | None:
    if a.n != b.n:
        return "E_CONFIG_MISMATCH"
    older, newer = _order(a, b)
    if newer.index - older.index != 1:
        return "E_GAP_UNSUPPORTED"
    n = older.n
    size = len(older.sig_bytes)
    if size != len(newer.sig_bytes) or size % n:
        return "E_LAYOUT_MISMATCH"
    registry = older.config.registry
    A, B = older.blocks, newer.blocks
    for d in range(1, n):
        expect = registry.digest(older.algorithm, A[d - 1] + B[d - 1])
        if not hmac.compare_digest(expect, A[d]):
            return "E_LADDER_MISMATCH"
    return None


def _check(a: SignaturePackage, b: SignaturePackage) -> str | None:
    if a.n != b.n or a.mode != b.mode or a.algorithm != b.algorithm:
        return "E_CONFIG_MISMATCH"
    if a.mode is Mode.X:
        return _check_x(a, b)
    return _check_s(a, b)


def verify_s(a: SignaturePackage, b: SignaturePackage) -> bool:
    return _check_s(a, b) is None


def verify_x(a: SignaturePackage, b: SignaturePackage) -> bool:
    return _check_x(a, b) is None


def verify(a: Signature, b: Signature, config: ChainConfig | None = None) -> bool:
    """Accept ``b`` as a legitimate relative of ``a`` (in either order).

    Raises only when a package cannot be decoded.
    """
    return _check(_as_signature(a, config), _as_signature(b, config)) is None


def check_pair(a: Signature, b: Signature, config: ChainConfig | None = None) -> dict:
    errors = []
    sa, sb = _as_signature(a, config), _as_signature(b, config)
    code = _check(sa, sb)
    if code is not None:
        errors.append({"code": code, "message": ERRORS[code],
                       "mode": sa.mode.value, "indices": sorted([sa.index, sb.index])})
        return {"status": "FAIL", "error_count": len(errors), "errors": errors}
    return {"status": "PASS", "error_count": 0, "errors": []}
