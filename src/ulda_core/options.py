"""Chain options and package file helpers shared by the ulda CLIs."""
from __future__ import annotations

import functools
from pathlib import Path

import click

from .config import ChainConfig
from .errors import MalformedPackage
from .hashing import default_registry, register_blake3
from .protocol import (
    DEFAULT_ALGORITHM,
    DEFAULT_FORMAT,
    DEFAULT_MODE,
    DEFAULT_N,
    DEFAULT_ORIGIN_SIZE,
    FORMATS,
)


def fatal(e: Exception):
    # Fail closed with a single-line reason.
    click.echo(f"FATAL: {e}", err=True)
    raise SystemExit(1)


def chain_options(fn):
    """Collect --n/--mode/--hash/--origin-size/--fmt into a ``config`` argument."""

    @click.option("--n", "n", type=click.IntRange(1, 255), default=DEFAULT_N, show_default=True,
                  help="Window size")
    @click.option("--mode", type=click.Choice(["S", "X"]), default=DEFAULT_MODE, show_default=True)
    @click.option("--hash", "algorithm", default=DEFAULT_ALGORITHM, show_default=True,
                  help="Digest algorithm identifier")
    @click.option("--origin-size", type=int, default=DEFAULT_ORIGIN_SIZE, show_default=True,
                  help="Origin block size in bits")
    @click.option("--fmt", type=click.Choice(FORMATS), default=DEFAULT_FORMAT, show_default=True,
                  help="Package encoding on disk")
    @functools.wraps(fn)
    def wrapper(n, mode, algorithm, origin_size, fmt, **kwargs):
        try:
            registry = default_registry()
            if algorithm == "BLAKE3" and not registry.is_known("BLAKE3"):
                register_blake3(registry)
            config = ChainConfig(n=n, mode=mode, algorithm=algorithm, origin_size=origin_size, fmt=fmt)
        except (ValueError, ImportError) as e:
            fatal(e)
        return fn(config=config, **kwargs)

    return wrapper


def read_package(path: Path, fmt: str):
    if fmt == "bytes":
        return path.read_bytes()
    try:
        return path.read_text(encoding="ascii").strip()
    except UnicodeDecodeError as e:
        raise MalformedPackage(f"{path} is not {fmt} text") from e


def write_package(data, out: Path | None) -> None:
    if out is None:
        click.echo(data)
    elif isinstance(data, bytes):
        out.write_bytes(data)
    else:
        out.write_text(data + "\n", encoding="ascii")
