"""
addrflip - canonicalize and humanize bech32-style addresses (offline).

What it does
- canonicalize: human text -> canonical bytes (hex and text)
- humanize: canonical bytes (hex) -> human text
- validate: Address -> ok / not normalized
- make: Name -> deterministic address
- instantiate2: checksum + creator + salt -> predictable contract address
- batch: canonicalize many inputs from TXT/CSV/JSON

Examples
  $ addrflip canonicalize foobar123
  hex:  6d7361776d736f63317665686b37636e707767636e7976636c773679396a
  text: msawmsoc1vehk7cnpwgcnyvclw6y9j

  $ addrflip --prefix juno humanize 6f6e756a31...
  shorty
"""

import csv
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

import click

from .api import MockApi, instantiate2_address
from .codec import Variant
from .config import build_transcoder, load_config
from .errors import AddrflipError, AddressNotNormalized

logger = logging.getLogger("addrflip.cli")


def _api(ctx: click.Context) -> MockApi:
    return ctx.obj["api"]


def _parse_hex(value: str, what: str) -> bytes:
    value = value.strip()
    if value.lower().startswith("0x"):
        value = value[2:]
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise click.BadParameter(f"{what} is not valid hex: {value!r}")


# ------------------ Input loading ------------------

def _read_inputs(path: str) -> List[str]:
    """
    Read inputs from:
      - TXT (one per line), or '-' for stdin
      - CSV (column 'address' or first column)
      - JSON (array of strings or objects with 'address')
    """
    if path == "-":
        return [l.strip() for l in sys.stdin if l.strip()]

    items: List[str] = []
    ext = os.path.splitext(path)[1].lower()
    if ext in (".txt", ""):
        with open(path, "r", encoding="utf-8") as f:
            items = [l.strip() for l in f if l.strip()]
    elif ext == ".csv":
        with open(path, newline="", encoding="utf-8") as f:
            rdr = csv.DictReader(f)
            fields = {c.lower(): c for c in (rdr.fieldnames or [])}
            column = fields.get("address")
            for row in rdr:
                if not row:
                    continue
                value = row.get(column) if column else next(iter(row.values()))
                items.append((value or "").strip())
    elif ext == ".json":
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
        if isinstance(obj, list):
            for it in obj:
                if isinstance(it, str):
                    items.append(it.strip())
                elif isinstance(it, dict) and "address" in it:
                    items.append(str(it["address"]).strip())
    else:
        raise click.ClickException("Unsupported file type")
    return items


# ------------------ CLI ------------------

@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--prefix", type=str, default=None, help="Public prefix (default from config).")
@click.option(
    "--variant",
    type=click.Choice([v.value for v in Variant]),
    default=None,
    help="Checksum variant used when encoding (default from config).",
)
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, prefix: Optional[str], variant: Optional[str], config_path: Optional[Path], verbose: bool):
    """addrflip - canonicalize and humanize bech32-style addresses."""
    try:
        config = load_config(config_path)
        if prefix is not None:
            config = replace(config, prefix=prefix)
        if variant is not None:
            config = replace(config, variant=variant)
        logging.basicConfig(
            level=logging.DEBUG if verbose else config.log_level.upper(),
            format="%(levelname)s %(name)s: %(message)s",
        )
        transcoder = build_transcoder(config)
    except AddrflipError as e:
        raise click.ClickException(str(e))
    logger.debug(
        "prefix=%s internal=%s variant=%s",
        transcoder.prefix,
        transcoder.internal_prefix,
        transcoder.variant.value,
    )
    ctx.obj = {"api": MockApi.from_transcoder(transcoder)}


@cli.command("canonicalize")
@click.argument("text", type=str)
@click.pass_context
def canonicalize_cmd(ctx: click.Context, text: str):
    """Convert TEXT into canonical bytes."""
    try:
        canonical = _api(ctx).addr_canonicalize(text)
    except AddrflipError as e:
        raise click.ClickException(str(e))
    click.echo(f"hex:  {canonical.hex()}")
    click.echo(f"text: {canonical.decode('utf-8', errors='replace')}")


@cli.command("humanize")
@click.argument("canonical_hex", type=str)
@click.pass_context
def humanize_cmd(ctx: click.Context, canonical_hex: str):
    """Convert hex-encoded canonical bytes into human text."""
    canonical = _parse_hex(canonical_hex, "CANONICAL_HEX")
    try:
        human = _api(ctx).addr_humanize(canonical)
    except AddrflipError as e:
        raise click.ClickException(str(e))
    click.echo(human)


@cli.command("validate")
@click.argument("address", type=str)
@click.pass_context
def validate_cmd(ctx: click.Context, address: str):
    """Check that ADDRESS survives a canonicalize/humanize round trip."""
    try:
        _api(ctx).addr_validate(address)
    except AddressNotNormalized:
        click.echo("not normalized")
        sys.exit(1)
    except AddrflipError as e:
        raise click.ClickException(str(e))
    click.echo("ok")


@cli.command("make")
@click.argument("name", type=str)
@click.pass_context
def make_cmd(ctx: click.Context, name: str):
    """Make a deterministic address from NAME."""
    try:
        click.echo(_api(ctx).addr_make(name))
    except AddrflipError as e:
        raise click.ClickException(str(e))


@cli.command("instantiate2")
@click.argument("checksum_hex", type=str)
@click.argument("creator", type=str)
@click.argument("salt_hex", type=str)
@click.pass_context
def instantiate2_cmd(ctx: click.Context, checksum_hex: str, creator: str, salt_hex: str):
    """Predict a contract address from code CHECKSUM_HEX, CREATOR address and SALT_HEX."""
    api = _api(ctx)
    checksum = _parse_hex(checksum_hex, "CHECKSUM_HEX")
    salt = _parse_hex(salt_hex, "SALT_HEX")
    try:
        canonical = instantiate2_address(checksum, api.addr_canonicalize(creator), salt)
        click.echo(api.addr_humanize(canonical))
    except AddrflipError as e:
        raise click.ClickException(str(e))


@cli.command("batch")
@click.argument("path", type=str)
@click.option("--csv-out", type=click.Path(writable=True), default="canonical.csv", show_default=True)
@click.pass_context
def batch_cmd(ctx: click.Context, path: str, csv_out: str):
    """Canonicalize every input in PATH and write input, hex and human form to CSV."""
    api = _api(ctx)
    rows: List[Tuple[str, str, str]] = []
    for item in _read_inputs(path):
        try:
            canonical = api.addr_canonicalize(item)
            rows.append((item, canonical.hex(), api.addr_humanize(canonical)))
        except AddrflipError as e:
            logger.debug("batch: %r failed: %s", item, e)
            rows.append((item, f"<error: {e}>", ""))

    with open(csv_out, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["input", "canonical_hex", "human"])
        w.writerows(rows)
    click.echo(f"Wrote CSV: {csv_out}")


def main():
    cli()


if __name__ == "__main__":
    main()
