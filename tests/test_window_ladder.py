import hashlib

import pytest

from ulda_core import (
    ChainConfig,
    EmptyWindow,
    InvalidWindow,
    Mode,
    OriginWindow,
    decode_signature,
    encode_origin,
    export_package,
    generate,
    ladder,
    ladder_s,
    ladder_x,
    step,
)
from ulda_sign import sign


def H(b: bytes) -> bytes:
    return hashlib.sha256(b).digest()


def test_generate_window():
    cfg = ChainConfig(n=6, origin_size=128)
    w = generate(cfg)
    assert w.index == 0
    assert len(w.blocks) == 6
    assert w.block_len == 16
    assert len(set(w.blocks)) == 6


@pytest.mark.parametrize("n", [1, 2, 5])
def test_step_shifts_window(n):
    w = generate(ChainConfig(n=n), index=41)
    s = step(w)
    assert s.index == w.index + 1
    assert len(s.blocks) == n
    assert s.blocks[:n - 1] == w.blocks[1:]
    assert s.block_len == w.block_len
    assert s.config == w.config


def test_step_accepts_encoded_package():
    cfg = ChainConfig(n=3, fmt="hex")
    w = generate(cfg)
    s = step(export_package(encode_origin(w), "hex"), cfg)
    assert s.index == 1
    assert s.blocks[:2] == w.blocks[1:]


def test_step_rejects_garbage():
    with pytest.raises(InvalidWindow):
        step(b"\x01\x02\x03")
    with pytest.raises(InvalidWindow):
        step("zz-not-a-package", ChainConfig(fmt="hex"))


def test_window_invariants():
    cfg = ChainConfig(n=3)
    with pytest.raises(InvalidWindow):
        OriginWindow(blocks=(b"a" * 32, b"b" * 32), index=0, config=cfg)
    with pytest.raises(InvalidWindow):
        OriginWindow(blocks=(b"a" * 32, b"b" * 32, b"c" * 31), index=0, config=cfg)


def test_ladder_s():
    blocks = [bytes([i]) * 32 for i in range(4)]
    result = ladder_s(blocks, "SHA-256")
    assert result.sig_blocks[0] == blocks[0]
    assert result.sig_blocks[1] == H(blocks[1])
    assert result.sig_blocks[3] == H(H(H(blocks[3])))
    assert result.final == result.sig_blocks[3]


def test_ladder_x():
    b0, b1, b2 = (bytes([i]) * 32 for i in range(3))
    r1 = [H(b0 + b1), H(b1 + b2)]
    apex = H(r1[0] + r1[1])
    result = ladder_x([b0, b1, b2], "SHA-256")
    assert result.sig_blocks == [b0, r1[0], apex]
    assert result.final == apex


def test_ladder_dispatch_and_single_block():
    blocks = [b"\x09" * 32]
    assert ladder(blocks, Mode.S, "SHA-256").sig_blocks == blocks
    assert ladder(blocks, "X", "SHA-256").sig_blocks == blocks


def test_empty_window():
    with pytest.raises(EmptyWindow):
        ladder_s([], "SHA-256")
    with pytest.raises(EmptyWindow):
        ladder_x([], "SHA-256")


def test_sign_packages_ladder_blocks():
    w = generate(ChainConfig(n=4, mode="X"), index=12)
    sig = decode_signature(sign(w))
    assert sig.index == 12
    assert sig.mode is Mode.X
    assert list(sig.blocks) == ladder_x(w.blocks, "SHA-256").sig_blocks


def test_sign_x_requires_digest_sized_blocks():
    w = generate(ChainConfig(n=3, mode="X", origin_size=128))
    with pytest.raises(InvalidWindow):
        sign(w)
