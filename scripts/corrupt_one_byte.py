import sys
from pathlib import Path

def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_byte.py <hex-package>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    raw = bytearray(bytes.fromhex(p.read_text(encoding="ascii").strip()))
    header_len = raw[1] if len(raw) > 1 else 0
    if len(raw) <= header_len:
        print("Package has no payload to corrupt.")
        raise SystemExit(2)

    # Flip the first byte of ladder block 0. A newer signature's block 0
    # is checked in both modes.
    idx = header_len
    raw[idx] ^= 0x01
    p.write_text(raw.hex() + "\n", encoding="ascii")
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
