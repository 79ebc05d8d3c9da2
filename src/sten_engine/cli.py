"""STEN - process interface for the embed/extract engine.

    sten encode <host> <payload> <output>
    sten decode <stego> <output>      (output may be "")

Callers parse the "Output file:" / "Extracted file:" lines on stdout.
"""
from __future__ import annotations

import json
from functools import wraps

import click

from sten_core.errors import FormatError, StegoError
from sten_core.capacity import check_accessible
from sten_core.fileio import read_all
from sten_core.protocol import (
    MAGIC,
    VERSION,
    HEADER_LEN,
    MAX_FILENAME_LEN,
    MIN_HOST_SIZE,
    MAX_HIDDEN_RATIO,
)
from sten_core.names import format_bytes
from sten_engine.embed import embed
from sten_engine.extract import extract
from sten_engine.scan import HeaderScanner

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _fail_closed(fn):
    """Turn any failure into one line on stderr and exit status 1."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except StegoError as e:
            click.echo(f"ERROR: {e}", err=True)
            raise SystemExit(1)
        except Exception as e:
            click.echo(f"FATAL ERROR: {e}", err=True)
            raise SystemExit(1)

    return wrapper


@click.group()
def cli():
    """Hide any file at the tail of any other file, and get it back."""


@cli.command("encode")
@click.argument("host")
@click.argument("payload")
@click.argument("output")
@_fail_closed
def encode_cmd(host: str, payload: str, output: str):
    """Hide PAYLOAD inside HOST, writing OUTPUT."""
    embed(payload, host, output)


@cli.command("decode")
@click.argument("stego")
@click.argument("output")
@_fail_closed
def decode_cmd(stego: str, output: str):
    """Recover the payload hidden in STEGO, writing OUTPUT."""
    extract(stego, output)


@cli.command("inspect")
@click.argument("stego")
@_fail_closed
def inspect_cmd(stego: str):
    """Locate the header in STEGO and print it as JSON, without extracting."""
    check_accessible(stego, "Stego file")
    data = read_all(stego)
    if len(data) < HEADER_LEN:
        raise FormatError("File too small to contain hidden data")

    scanner = HeaderScanner(data)
    found = scanner.find()
    if found is None:
        raise FormatError("No hidden data found in file")

    offset, header = found
    result = {
        "header": header.to_dict(),
        "header_offset": offset,
        "payload_offset": offset + HEADER_LEN,
        "file_size": len(data),
        "scan": scanner.get_scan_stats(),
    }
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))


@cli.command("info")
def info_cmd():
    """Show the format and capacity settings."""
    click.echo("Configuration Settings:")
    click.echo(f"  Maximum hidden size ratio: {MAX_HIDDEN_RATIO * 100:g}%")
    click.echo(f"  Minimum host file size: {format_bytes(MIN_HOST_SIZE)}")
    click.echo(f"  Magic signature: 0x{MAGIC:08X}")
    click.echo(f"  Version: {VERSION}")
    click.echo(f"  Header size: {HEADER_LEN} bytes")
    click.echo(f"  Maximum stored filename: {MAX_FILENAME_LEN} bytes")


def main() -> None:
    # Usage errors exit 1 like engine failures, not click's default 2.
    try:
        cli.main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        raise SystemExit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
