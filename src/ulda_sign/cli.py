from __future__ import annotations

from pathlib import Path

import click

from ulda_core.codec import encode_origin, export_package
from ulda_core.errors import UldaError
from ulda_core.options import chain_options, fatal, read_package, write_package
from ulda_core.window import generate, step

from .anchor import generate_keypair, public_key_for, sign_ed25519
from .signer import sign

KEY_FILE = "publisher.key"
PUB_FILE = "publisher.pub"


@click.group()
def main():
    pass


@main.command("new")
@chain_options
@click.option("--index", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("-o", "--out", type=click.Path(dir_okay=False, path_type=Path))
def new_cmd(config, index: int, out: Path | None):
    """Generate a fresh origin package."""
    try:
        window = generate(config, index=index)
        write_package(export_package(encode_origin(window), config.fmt), out)
    except (UldaError, ValueError) as e:
        fatal(e)


@main.command("step")
@chain_options
@click.argument("origin", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--out", type=click.Path(dir_okay=False, path_type=Path))
def step_cmd(config, origin: Path, out: Path | None):
    """Step an origin package forward by one index."""
    try:
        window = step(read_package(origin, config.fmt), config)
        write_package(export_package(encode_origin(window), config.fmt), out)
    except (UldaError, ValueError) as e:
        fatal(e)


@main.command("sign")
@chain_options
@click.argument("origin", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--out", type=click.Path(dir_okay=False, path_type=Path))
def sign_cmd(config, origin: Path, out: Path | None):
    """Sign an origin package."""
    try:
        write_package(export_package(sign(read_package(origin, config.fmt), config), config.fmt), out)
    except (UldaError, ValueError) as e:
        fatal(e)


@main.command("keygen")
@click.argument("out", type=click.Path(file_okay=False, path_type=Path))
def keygen_cmd(out: Path):
    """Write an Ed25519 publisher key pair."""
    out.mkdir(parents=True, exist_ok=True)
    seed, pub = generate_keypair()
    (out / KEY_FILE).write_bytes(seed)
    (out / PUB_FILE).write_bytes(pub)
    click.echo(pub.hex())


@main.command("anchor")
@click.argument("package", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--key", "key_path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--out", type=click.Path(dir_okay=False, path_type=Path))
def anchor_cmd(package: Path, key_path: Path, out: Path | None):
    """Ed25519-sign a package file as stored on disk."""
    try:
        seed = key_path.read_bytes()
        sig = sign_ed25519(seed, package.read_bytes())
    except ValueError as e:
        fatal(e)
    target = out or package.with_name(package.name + ".sig")
    target.write_bytes(sig)
    click.echo(public_key_for(seed).hex())


if __name__ == "__main__":
    main()
