"""Ed25519 checks for anchored packages."""
from __future__ import annotations

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

ED25519_PK_SIZE = 32
ED25519_SIG_SIZE = 64


def verify_ed25519(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """True when ``signature`` is a valid detached signature by ``public_key``.

    Keys and signatures of the wrong size are rejected rather than raised.
    """
    if len(public_key) != ED25519_PK_SIZE or len(signature) != ED25519_SIG_SIZE:
        return False
    try:
        VerifyKey(public_key).verify(message, signature)
    except BadSignatureError:
        return False
    return True
