"""ULDA error kinds.

Every error carries a stable code so callers and CLIs can report it
without parsing messages.
"""
from __future__ import annotations

ERRORS = {
    "E_MALFORMED_PACKAGE": "Package header or payload is malformed",
    "E_INVALID_WINDOW": "Window has wrong block count or inconsistent block length",
    "E_EMPTY_WINDOW": "Ladder requires at least one block",
    "E_UNKNOWN_ALGORITHM": "Digest algorithm is neither built-in nor registered",
    "E_SIZE_MISMATCH": "Digest output does not match its declared size",
}


class UldaError(Exception):
    code = "E_ULDA"

    def __init__(self, detail: str = ""):
        self.detail = detail
        message = ERRORS.get(self.code, self.code)
        super().__init__(f"{message}: {detail}" if detail else message)


class MalformedPackage(UldaError, ValueError):
    code = "E_MALFORMED_PACKAGE"


class InvalidWindow(UldaError, ValueError):
    code = "E_INVALID_WINDOW"


class EmptyWindow(UldaError, ValueError):
    code = "E_EMPTY_WINDOW"


class UnknownAlgorithm(UldaError, LookupError):
    code = "E_UNKNOWN_ALGORITHM"


class SizeMismatch(UldaError, ValueError):
    code = "E_SIZE_MISMATCH"
