# file: numerus/cli.py
"""
numerus CLI.

Commands:
  - classify: region, format and toll state of a did
  - format: pretty print a did
  - normalize: convert a did to another format
  - extract / split: decompose a did
  - metadata: enrich a did with country/state reference data
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import click

from numerus import __version__
from numerus.cache import ReferenceCache
from numerus.config import load_settings
from numerus.core import classifier, formatter
from numerus.core.errors import NumerusError
from numerus.core.metadata import MetadataAssembler
from numerus.core.types import Metadata, Region
from numerus.logging_config import configure_logging

logger = logging.getLogger(__name__)

_REGION_CHOICES = [r.value for r in Region if r is not Region.UNKNOWN]
_TARGET_CHOICES = [f.value for f in formatter.TARGET_FORMATS]


def _emit(data: dict[str, Any], *, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(data, indent=2, sort_keys=True))
        return
    for key, value in data.items():
        click.echo(f"{key}: {value}")


def _human_metadata(record: Metadata) -> str:
    lines = [
        f"DID: {record.did}",
        f"Normalized: {record.normalized}",
        f"Formatted: {record.formatted}",
        f"Region: {record.region.value}",
        f"Toll state: {record.tollstate}",
    ]
    if record.country is not None:
        lines.append(f"Country: {record.country.name} ({record.country.iso})")
    if record.state is not None:
        lines.append(f"State: {record.state.name} ({record.state.iso})")
    return "\n".join(lines)


json_option = click.option("--json", "as_json", is_flag=True, help="Print JSON to stdout.")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__)
def main() -> None:
    """Telephone number classification and conversion."""


@main.command("classify")
@click.argument("did", type=str)
@json_option
def classify_cmd(did: str, as_json: bool) -> None:
    """Show the region, format and toll state of DID."""

    _emit({"did": did, **classifier.classify(did).to_dict()}, as_json=as_json)


@main.command("format")
@click.argument("did", type=str)
@click.option("--region", type=click.Choice(_REGION_CHOICES), default=None, help="Override region.")
def format_cmd(did: str, region: str | None) -> None:
    """Pretty print DID."""

    click.echo(formatter.format(did, region))


@main.command("normalize")
@click.argument("did", type=str)
@click.option(
    "--to",
    "target",
    type=click.Choice(_TARGET_CHOICES),
    default=None,
    help="Target format (default: E.164, short numbers unchanged).",
)
def normalize_cmd(did: str, target: str | None) -> None:
    """Convert DID to another format."""

    try:
        click.echo(formatter.normalize(did, target))
    except NumerusError as exc:
        raise click.ClickException(str(exc)) from exc


@main.command("extract")
@click.argument("did", type=str)
@json_option
def extract_cmd(did: str, as_json: bool) -> None:
    """Split DID into country calling code and national number."""

    try:
        extracted = classifier.extract(did)
    except NumerusError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(extracted.to_dict(), as_json=as_json)


@main.command("split")
@click.argument("did", type=str)
@json_option
def split_cmd(did: str, as_json: bool) -> None:
    """Split a NADP DID into area code, exchange and subscriber."""

    try:
        parts = classifier.split(did)
    except NumerusError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(parts.to_dict(), as_json=as_json)


@main.command("metadata")
@click.argument("did", type=str)
@json_option
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config path.",
)
def metadata_cmd(did: str, as_json: bool, config_path: Path | None) -> None:
    """Enrich DID with country and state metadata."""

    settings = load_settings(yaml_path=config_path)
    configure_logging(level=settings.log_level, json_logging=settings.json_logging)

    cache = ReferenceCache.from_settings(settings)
    if not asyncio.run(cache.refresh()):
        logger.warning("Some reference datasets failed to load; metadata may be incomplete")

    try:
        record = MetadataAssembler(cache).metadata(did)
    except NumerusError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(record.to_dict(), indent=2, sort_keys=True))
    else:
        click.echo(_human_metadata(record))
