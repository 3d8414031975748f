"""ULDA wire protocol constants.

Single source of truth for header layout and wire codes.
Keep this file stable. Signer and Verifier must remain synchronized.
"""

# Header: [Marker(1) | HeaderLen(1) | N(1) | Mode(1) | Alg(1) | Index(var) | Sentinel(1)]
MARKER = 0x00
SENTINEL = 0x00
OFF_MARKER = 0
OFF_HEADER_LEN = 1
OFF_N = 2
OFF_MODE = 3
OFF_ALGORITHM = 4
OFF_INDEX = 5
FIXED_HEADER_LEN = 5  # marker..algorithm
MIN_HEADER_LEN = FIXED_HEADER_LEN + 1  # + sentinel, empty index field

MAX_N = 0xFF
MAX_HEADER_LEN = 0xFF

# Mode codes
MODE_CODES = {"S": 0x01, "X": 0x02}

# Algorithm codes. 0xFF marks an externally supplied digest.
EXTERNAL_ALGORITHM_CODE = 0xFF
ALGORITHM_CODES = {
    "SHA-1": 0x01,
    "SHA-256": 0x02,
    "SHA-384": 0x03,
    "SHA-512": 0x04,
    "SHA3-256": 0x05,
    "SHA3-512": 0x06,
    "BLAKE3": 0x07,
    "WHIRLPOOL": 0x08,
}

# Algorithms resolved directly through hashlib
BUILTIN_DIGESTS = {
    "SHA-1": "sha1",
    "SHA-256": "sha256",
    "SHA-384": "sha384",
    "SHA-512": "sha512",
    "SHA3-256": "sha3_256",
    "SHA3-512": "sha3_512",
}

# Text encodings for exported packages
FORMATS = ("hex", "base64", "bytes")

# Chain defaults
DEFAULT_N = 5
DEFAULT_MODE = "S"
DEFAULT_ALGORITHM = "SHA-256"
DEFAULT_ORIGIN_SIZE = 256  # bits per origin block
DEFAULT_FORMAT = "hex"
