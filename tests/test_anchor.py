import pytest

from ulda_core import ChainConfig, encode_origin, generate
from ulda_sign import generate_keypair, public_key_for, sign, sign_ed25519
from ulda_verify import verify_ed25519


def test_anchor_binds_package_to_publisher():
    seed, pub = generate_keypair()
    assert public_key_for(seed) == pub
    package = sign(generate(ChainConfig(n=3)))
    sig = sign_ed25519(seed, package)
    assert verify_ed25519(pub, package, sig)

    tampered = package[:-1] + bytes([package[-1] ^ 0x01])
    assert not verify_ed25519(pub, tampered, sig)

    _, other_pub = generate_keypair()
    assert not verify_ed25519(other_pub, package, sig)


def test_anchor_rejects_malformed_inputs():
    seed, pub = generate_keypair()
    origin = encode_origin(generate(ChainConfig(n=2)))
    sig = sign_ed25519(seed, origin)
    assert not verify_ed25519(pub[:31], origin, sig)
    assert not verify_ed25519(pub, origin, sig[:63])


def test_seed_must_be_32_bytes():
    with pytest.raises(ValueError):
        sign_ed25519(b"\x00" * 31, b"message")
    with pytest.raises(ValueError):
        public_key_for(b"\x00" * 33)
