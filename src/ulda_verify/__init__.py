"""ULDA Verify - cross-verification of ladder signatures."""
from .crypto import verify_ed25519
from .logic import check_pair, verify, verify_s, verify_x

__all__ = ["verify", "verify_s", "verify_x", "check_pair", "verify_ed25519"]
