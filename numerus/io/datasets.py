# file: numerus/io/datasets.py
"""
Reference dataset loading.

Two CSV datasets back the metadata provider:

- country.csv: phonecode, iso, iso3, nicename
- nadp.csv: phonecode (area code), country_iso, country_name,
  state_or_province_iso, state_or_province_name

A source may be a local path, an http(s) URL, or None for the copy packaged in
`numerus/data/`.
"""

from __future__ import annotations

import csv
import io
import logging
from importlib import resources
from pathlib import Path
from typing import Callable, Mapping

from numerus.net.http import HttpClientConfig, fetch_text
from numerus.provider import Namespace

logger = logging.getLogger(__name__)

Row = tuple[str, dict[str, str]]
Source = str | Path | None

PACKAGED_FILES: dict[Namespace, str] = {
    Namespace.COUNTRY: "country.csv",
    Namespace.NADP: "nadp.csv",
}


def _field(row: Mapping[str, str | None], name: str) -> str:
    return str(row.get(name) or "").strip()


def remap_country(row: Mapping[str, str | None]) -> Row:
    return (
        _field(row, "phonecode"),
        {
            "iso": _field(row, "iso"),
            "iso3": _field(row, "iso3"),
            "name": _field(row, "nicename"),
        },
    )


def remap_nadp(row: Mapping[str, str | None]) -> Row:
    return (
        _field(row, "phonecode"),
        {
            "country_iso": _field(row, "country_iso"),
            "country_name": _field(row, "country_name"),
            "state_iso": _field(row, "state_or_province_iso"),
            "state_name": _field(row, "state_or_province_name"),
        },
    )


REMAPPERS: dict[Namespace, Callable[[Mapping[str, str | None]], Row]] = {
    Namespace.COUNTRY: remap_country,
    Namespace.NADP: remap_nadp,
}


def parse_csv(text: str, namespace: Namespace) -> dict[str, dict[str, str]]:
    """
    Parse dataset CSV text into a key -> value mapping.

    Rows with an empty key are skipped. When a key repeats (shared calling
    codes such as 7 for Russia and Kazakhstan) the first row wins.
    """

    remap = REMAPPERS[namespace]
    out: dict[str, dict[str, str]] = {}
    for row in csv.DictReader(io.StringIO(text)):
        key, value = remap(row)
        if not key:
            continue
        if key in out:
            logger.debug("Duplicate %s key %s; keeping first row", namespace.value, key)
            continue
        out[key] = value
    return out


def _is_url(source: Source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def read_source(source: Source, namespace: Namespace) -> str:
    """
    Read dataset text from a local path or the packaged copy.

    Raises:
        FileNotFoundError: a local path that does not exist.
        ValueError: `source` is a URL (use `fetch_source`).
    """

    if source is None:
        name = PACKAGED_FILES[namespace]
        return resources.files("numerus.data").joinpath(name).read_text(encoding="utf-8")
    if _is_url(source):
        raise ValueError(f"URL sources must be fetched asynchronously: {source}")
    return Path(source).read_text(encoding="utf-8")


async def fetch_source(
    source: Source, namespace: Namespace, *, http_config: HttpClientConfig | None = None
) -> str:
    """Read dataset text from any source kind, fetching URLs over HTTP."""

    if _is_url(source):
        return await fetch_text(str(source), config=http_config or HttpClientConfig())
    return read_source(source, namespace)

