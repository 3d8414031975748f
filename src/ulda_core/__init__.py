"""ULDA Core - windows, ladders, digests and the package codec."""
from .codec import (
    decode_origin,
    decode_signature,
    encode_origin,
    encode_signature,
    export_package,
    import_package,
)
from .config import ChainConfig, Mode
from .errors import (
    EmptyWindow,
    InvalidWindow,
    MalformedPackage,
    SizeMismatch,
    UldaError,
    UnknownAlgorithm,
)
from .hashing import HashRegistry, default_registry, register_blake3
from .ladder import LadderResult, ladder, ladder_s, ladder_x
from .models import OriginWindow, SignaturePackage
from .window import generate, step

__all__ = [
    "ChainConfig", "Mode", "OriginWindow", "SignaturePackage",
    "HashRegistry", "default_registry", "register_blake3",
    "encode_origin", "decode_origin", "encode_signature", "decode_signature",
    "export_package", "import_package",
    "LadderResult", "ladder", "ladder_s", "ladder_x",
    "generate", "step",
    "UldaError", "MalformedPackage", "InvalidWindow", "EmptyWindow",
    "UnknownAlgorithm", "SizeMismatch",
]
