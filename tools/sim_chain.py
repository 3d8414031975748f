"""Simulate a ULDA chain on disk.

Writes origin-<k>.hex and sig-<k>.hex for k = 0..steps into OUT_DIR.

Usage:
    python tools/sim_chain.py OUT_DIR [--steps 4] [--n 5] [--mode S]
"""
from pathlib import Path

from ulda_core import ChainConfig, encode_origin, export_package, generate, step
from ulda_sign import sign


def simulate_chain(out_dir: Path, steps: int, config: ChainConfig) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    window = generate(config)
    written = []
    for k in range(steps + 1):
        origin = out_dir / f"origin-{k}.hex"
        sig = out_dir / f"sig-{k}.hex"
        origin.write_text(export_package(encode_origin(window), "hex") + "\n", encoding="ascii")
        sig.write_text(export_package(sign(window), "hex") + "\n", encoding="ascii")
        written += [origin, sig]
        window = step(window)
    return written


if __name__ == "__main__":
    import sys

    args = [a for a in sys.argv[1:] if a]

    def pop_option(arg_list: list[str], flag: str, default: str) -> tuple[str, list[str]]:
        """Remove a valued option from an argv-style list."""
        if flag in arg_list:
            i = arg_list.index(flag)
            value = arg_list[i + 1]
            return value, arg_list[:i] + arg_list[i + 2:]
        return default, arg_list

    steps, args = pop_option(args, "--steps", "4")
    n, args = pop_option(args, "--n", "5")
    mode, args = pop_option(args, "--mode", "S")

    if len(args) != 1:
        print("Usage: sim_chain.py OUT_DIR [--steps K] [--n N] [--mode S|X]")
        raise SystemExit(2)

    files = simulate_chain(Path(args[0]), int(steps), ChainConfig(n=int(n), mode=mode))
    print(f"PASS: wrote {len(files)} packages to {args[0]}")
