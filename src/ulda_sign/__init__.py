"""ULDA Sign - ladder signatures and Ed25519 anchoring."""
from .anchor import generate_keypair, public_key_for, sign_ed25519
from .signer import sign

__all__ = ["sign", "generate_keypair", "public_key_for", "sign_ed25519"]
