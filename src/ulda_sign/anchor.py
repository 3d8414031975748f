"""Ed25519 anchoring of packages to a publisher key."""
from __future__ import annotations

from nacl.signing import SigningKey

ED25519_SEED_SIZE = 32


def _signing_key(seed: bytes) -> SigningKey:
    if len(seed) != ED25519_SEED_SIZE:
        raise ValueError(f"Ed25519 seed must be {ED25519_SEED_SIZE} bytes (got {len(seed)})")
    return SigningKey(seed)


def generate_keypair() -> tuple[bytes, bytes]:
    """Return (seed, public_key)."""
    sk = SigningKey.generate()
    return bytes(sk), bytes(sk.verify_key)


def public_key_for(seed: bytes) -> bytes:
    return bytes(_signing_key(seed).verify_key)


def sign_ed25519(seed: bytes, message: bytes) -> bytes:
    """Detached Ed25519 signature over ``message``."""
    return _signing_key(seed).sign(message).signature
