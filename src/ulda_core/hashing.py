"""Digest provider registry.

Built-in identifiers resolve straight to hashlib. Anything else must be
registered with a digest function and its declared output size before
first use. An external provider may carry a loader that runs once, under a
lock, before its first digest.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import importlib
import logging
import threading
from typing import Callable, Optional

from .errors import SizeMismatch, UnknownAlgorithm
from .protocol import ALGORITHM_CODES, BUILTIN_DIGESTS, EXTERNAL_ALGORITHM_CODE

logger = logging.getLogger(__name__)

OUTPUTS = ("bytes", "hex", "base64")


class ExternalHasher:
    """A registered digest function plus its one-time readiness step."""

    def __init__(
        self,
        identifier: str,
        func: Callable,
        size_bits: int,
        output: str = "bytes",
        loader: Optional[Callable[[], object]] = None,
        code: int = EXTERNAL_ALGORITHM_CODE,
    ):
        if output not in OUTPUTS:
            raise ValueError(f"Unsupported output {output!r} for hasher <{identifier}>")
        if size_bits <= 0 or size_bits % 8:
            raise ValueError(f"Hasher <{identifier}> size must be a positive multiple of 8 bits")
        self.identifier = identifier
        self.func = func
        self.size_bits = size_bits
        self.output = output
        self.loader = loader
        self.code = code
        self._ready = loader is None
        self._lock = threading.Lock()

    @property
    def ready(self) -> bool:
        return self._ready

    def ensure_ready(self) -> None:
        if self._ready:
            return
        with self._lock:
            # A concurrent caller may have finished the load while we waited.
            if self._ready:
                return
            logger.debug("Initializing hasher <%s>", self.identifier)
            self.loader()
            self._ready = True

    def __call__(self, data: bytes) -> bytes:
        self.ensure_ready()
        raw = self.func(data)
        try:
            if self.output == "hex":
                raw = bytes.fromhex(raw)
            elif self.output == "base64":
                raw = base64.b64decode(raw, validate=True)
        except (ValueError, binascii.Error) as e:
            raise SizeMismatch(f"<{self.identifier}> returned undecodable {self.output} output") from e
        raw = bytes(raw)
        if len(raw) * 8 != self.size_bits:
            raise SizeMismatch(
                f"<{self.identifier}> returned {len(raw) * 8} bits, declared {self.size_bits}"
            )
        return raw


class HashRegistry:
    """Resolves algorithm identifiers and wire codes to digest functions."""

    def __init__(self):
        self._external: dict[str, ExternalHasher] = {}
        self._lock = threading.Lock()

    def register(
        self,
        identifier: str,
        func: Callable,
        size_bits: int,
        output: str = "bytes",
        loader: Optional[Callable[[], object]] = None,
        code: Optional[int] = None,
    ) -> ExternalHasher:
        if code is None:
            code = ALGORITHM_CODES.get(identifier, EXTERNAL_ALGORITHM_CODE)
        with self._lock:
            if identifier in BUILTIN_DIGESTS or identifier in self._external:
                raise ValueError(f"Hasher <{identifier}> is already registered")
            for other in self._external.values():
                if other.code == code:
                    raise ValueError(
                        f"Wire code {code:#04x} already belongs to <{other.identifier}>"
                    )
            if ALGORITHM_CODES.get(identifier) != code and (
                identifier in ALGORITHM_CODES or code in ALGORITHM_CODES.values()
            ):
                raise ValueError(f"Wire code {code:#04x} is reserved for another algorithm")
            hasher = ExternalHasher(identifier, func, size_bits, output=output, loader=loader, code=code)
            self._external[identifier] = hasher
        logger.debug("Registered hasher <%s> with code %#04x", identifier, code)
        return hasher

    def is_known(self, algorithm: str) -> bool:
        return algorithm in BUILTIN_DIGESTS or algorithm in self._external

    def code_for(self, algorithm: str) -> int:
        if algorithm in self._external:
            return self._external[algorithm].code
        if algorithm in ALGORITHM_CODES:
            return ALGORITHM_CODES[algorithm]
        raise UnknownAlgorithm(algorithm)

    def algorithm_for(self, code: int) -> str:
        for hasher in self._external.values():
            if hasher.code == code:
                return hasher.identifier
        for name, known in ALGORITHM_CODES.items():
            if known == code:
                return name
        raise UnknownAlgorithm(f"wire code {code:#04x}")

    def digest_size(self, algorithm: str) -> int:
        """Digest length in bytes."""
        if algorithm in BUILTIN_DIGESTS:
            return hashlib.new(BUILTIN_DIGESTS[algorithm]).digest_size
        if algorithm in self._external:
            return self._external[algorithm].size_bits // 8
        raise UnknownAlgorithm(algorithm)

    def digest(self, algorithm: str, data: bytes) -> bytes:
        if algorithm in BUILTIN_DIGESTS:
            return hashlib.new(BUILTIN_DIGESTS[algorithm], data).digest()
        hasher = self._external.get(algorithm)
        if hasher is None:
            raise UnknownAlgorithm(algorithm)
        return hasher(data)

    def digest_iter(self, algorithm: str, data: bytes, times: int) -> bytes:
        """Apply the digest ``times`` times; zero returns ``data`` unchanged."""
        h = data
        for _ in range(times):
            h = self.digest(algorithm, h)
        return h


_DEFAULT = HashRegistry()


def default_registry() -> HashRegistry:
    """The process-wide registry used when no other is supplied."""
    return _DEFAULT


def register_blake3(registry: Optional[HashRegistry] = None) -> ExternalHasher:
    """Register BLAKE3 (256 bit) backed by the ``blake3`` package."""
    registry = registry or _DEFAULT
    state = {}

    def load():
        state["module"] = importlib.import_module("blake3")

    def blake3_digest(data: bytes) -> bytes:
        return state["module"].blake3(data).digest()

    return registry.register("BLAKE3", blake3_digest, 256, loader=load)
