import json
from pathlib import Path

import click

from ulda_core.errors import UldaError
from ulda_core.options import chain_options, read_package

from .const import ERRORS
from .crypto import verify_ed25519
from .logic import check_pair

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _report(result: dict) -> None:
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))


def _fail(code: str, **detail) -> dict:
    return {"status": "FAIL", "error_count": 1, "errors": [{"code": code, "message": ERRORS[code], **detail}]}


@click.group()
def main():
    pass


@main.command("pair")
@chain_options
@click.argument("first", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("second", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def pair_cmd(config, first: Path, second: Path):
    """Cross-verify two signature packages."""
    try:
        result = check_pair(read_package(first, config.fmt), read_package(second, config.fmt), config)
    except UldaError as e:
        result = _fail("E_MALFORMED", reason=e.code, detail=str(e))
    _report(result)


@main.command("anchor")
@click.argument("package", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("pub", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--sig", "sig_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Detached signature (default: PACKAGE.sig)")
def anchor_cmd(package: Path, pub: Path, sig_path: Path | None):
    """Check a package's Ed25519 anchor signature."""
    sig_path = sig_path or package.with_name(package.name + ".sig")
    if not sig_path.exists():
        _report(_fail("E_SIG_INVALID", path=str(sig_path)))
        return
    if verify_ed25519(pub.read_bytes(), package.read_bytes(), sig_path.read_bytes()):
        _report({"status": "PASS", "error_count": 0, "errors": []})
    else:
        _report(_fail("E_SIG_INVALID"))


if __name__ == "__main__":
    main()
