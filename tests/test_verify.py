import pytest

from ulda_core import ChainConfig, decode_signature, export_package, generate, step
from ulda_sign import sign
from ulda_verify import check_pair, verify, verify_s, verify_x


def chain(cfg, length, index=0):
    """Signatures for ``length`` consecutive windows."""
    w = generate(cfg, index=index)
    sigs = []
    for _ in range(length):
        sigs.append(sign(w))
        w = step(w)
    return sigs


def flip(raw: bytes, block: int, cfg: ChainConfig) -> bytes:
    """Flip the first byte of ladder block ``block``."""
    sig = decode_signature(raw, cfg)
    offset = raw[1] + (0 if block == 0 else sig.origin_len + (block - 1) * sig.blk_len)
    out = bytearray(raw)
    out[offset] ^= 0x01
    return bytes(out)


def test_s_scenario_n5():
    cfg = ChainConfig(n=5, mode="S", algorithm="SHA-256")
    s0, s1, s2 = chain(cfg, 3)
    assert verify(s0, s1)
    assert verify(s1, s2)
    assert verify(s0, s2)


def test_s_scenario_n2():
    cfg = ChainConfig(n=2, mode="S")
    s0, s1, s2 = chain(cfg, 3)
    assert verify(s0, s1, cfg)
    assert not verify(s0, s2, cfg)


@pytest.mark.parametrize("gap", range(0, 8))
def test_s_accepts_exactly_gaps_below_n(gap):
    cfg = ChainConfig(n=5)
    sigs = chain(cfg, 8)
    assert verify(sigs[0], sigs[gap], cfg) == (0 < gap < 5)


def test_s_order_does_not_matter():
    cfg = ChainConfig(n=4)
    s0, s1 = chain(cfg, 2)
    assert verify(s1, s0, cfg)
    a, b = decode_signature(s0, cfg), decode_signature(s1, cfg)
    assert verify_s(b, a)


def test_s_with_wider_digest_and_large_index():
    cfg = ChainConfig(n=4, algorithm="SHA-512", origin_size=256)
    sigs = chain(cfg, 4, index=2**40)
    assert decode_signature(sigs[0], cfg).index == 2**40
    assert verify(sigs[0], sigs[3], cfg)


def test_s_rejects_unrelated_chain():
    cfg = ChainConfig(n=4)
    (a0,) = chain(cfg, 1)
    _, b1 = chain(cfg, 2)
    assert not verify(a0, b1, cfg)


def test_x_adjacency():
    cfg = ChainConfig(n=5, mode="X")
    s0, s1, s2 = chain(cfg, 3)
    assert verify(s0, s1, cfg)
    assert verify(s2, s1, cfg)
    assert not verify(s0, s2, cfg)
    assert verify_x(decode_signature(s0, cfg), decode_signature(s1, cfg))


def test_verify_accepts_exported_text():
    cfg = ChainConfig(n=3, mode="X", fmt="base64")
    s0, s1 = (export_package(s, "base64") for s in chain(cfg, 2))
    assert verify(s0, s1, cfg)


@pytest.mark.parametrize("other", [
    ChainConfig(n=6),
    ChainConfig(n=5, mode="X"),
    ChainConfig(n=5, algorithm="SHA3-256"),
])
def test_foreign_configuration_rejects_without_error(other):
    cfg = ChainConfig(n=5)
    (a0,) = chain(cfg, 1)
    w = step(generate(other))
    b1 = sign(w)
    assert not verify(a0, b1)
    report = check_pair(a0, b1)
    assert report["status"] == "FAIL"
    assert report["errors"][0]["code"] == "E_CONFIG_MISMATCH"


def test_s_tamper_rejects():
    cfg = ChainConfig(n=5)
    s0, _, s2 = chain(cfg, 3)
    assert verify(s0, s2, cfg)
    # newer blocks 0..N-1-gap and older blocks gap..N-1 are checked
    for block in range(0, 3):
        assert not verify(s0, flip(s2, block, cfg), cfg)
    for block in range(2, 5):
        assert not verify(flip(s0, block, cfg), s2, cfg)


def test_x_tamper_rejects():
    cfg = ChainConfig(n=4, mode="X")
    s0, s1 = chain(cfg, 2)
    for block in range(4):
        assert not verify(flip(s0, block, cfg), s1, cfg)
    for block in range(3):
        assert not verify(s0, flip(s1, block, cfg), cfg)


def test_check_pair_reports():
    cfg = ChainConfig(n=3)
    s0, s1, _, s3 = chain(cfg, 4)
    assert check_pair(s0, s1, cfg) == {"status": "PASS", "error_count": 0, "errors": []}

    gap = check_pair(s0, s3, cfg)
    assert gap["errors"][0]["code"] == "E_GAP_UNSUPPORTED"
    assert gap["errors"][0]["indices"] == [0, 3]

    same = check_pair(s1, s1, cfg)
    assert same["errors"][0]["code"] == "E_GAP_UNSUPPORTED"

    bad = check_pair(s0, flip(s1, 0, cfg), cfg)
    assert bad["errors"][0]["code"] == "E_LADDER_MISMATCH"


def test_s_layout_mismatch():
    cfg = ChainConfig(n=3)
    (a0,) = chain(cfg, 1)
    b = decode_signature(sign(step(generate(ChainConfig(n=3, origin_size=128)))), ChainConfig(origin_size=128))
    a = decode_signature(a0, cfg)
    assert check_pair(a, b)["errors"][0]["code"] == "E_LAYOUT_MISMATCH"
