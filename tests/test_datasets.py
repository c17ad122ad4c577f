# file: tests/test_datasets.py
from __future__ import annotations

from pathlib import Path

import pytest

from numerus.io import datasets
from numerus.io.datasets import fetch_source, parse_csv, read_source
from numerus.provider import Namespace

COUNTRY_CSV = """phonecode,iso,iso3,nicename
7,RU,RUS,Russia
7,KZ,KAZ,Kazakhstan
968,OM,OMN,Oman
,XX,XXX,Nowhere
"""

NADP_CSV = """phonecode,country_iso,country_name,state_or_province_iso,state_or_province_name
201,US,United States,NJ,New Jersey
246,BB,Barbados,,
"""


def test_parse_country_csv_first_row_wins_and_skips_blank_keys() -> None:
    data = parse_csv(COUNTRY_CSV, Namespace.COUNTRY)
    assert data == {
        "7": {"iso": "RU", "iso3": "RUS", "name": "Russia"},
        "968": {"iso": "OM", "iso3": "OMN", "name": "Oman"},
    }


def test_parse_nadp_csv_remaps_state_columns() -> None:
    data = parse_csv(NADP_CSV, Namespace.NADP)
    assert data["201"] == {
        "country_iso": "US",
        "country_name": "United States",
        "state_iso": "NJ",
        "state_name": "New Jersey",
    }
    assert data["246"]["state_iso"] == ""
    assert data["246"]["state_name"] == ""


def test_packaged_datasets() -> None:
    countries = parse_csv(read_source(None, Namespace.COUNTRY), Namespace.COUNTRY)
    assert countries["91"] == {"iso": "IN", "iso3": "IND", "name": "India"}
    assert countries["968"]["name"] == "Oman"
    assert "1" not in countries

    nadp = parse_csv(read_source(None, Namespace.NADP), Namespace.NADP)
    assert nadp["201"]["state_iso"] == "NJ"
    assert nadp["201"]["state_name"] == "New Jersey"
    assert nadp["246"] == {
        "country_iso": "BB",
        "country_name": "Barbados",
        "state_iso": "",
        "state_name": "",
    }
    assert nadp["284"]["country_name"] == "Virgin Islands, British"


def test_read_source_from_path(tmp_path: Path) -> None:
    path = tmp_path / "nadp.csv"
    path.write_text(NADP_CSV, encoding="utf-8")
    assert read_source(path, Namespace.NADP) == NADP_CSV
    assert read_source(str(path), Namespace.NADP) == NADP_CSV


def test_read_source_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_source(tmp_path / "missing.csv", Namespace.NADP)
    with pytest.raises(ValueError):
        read_source("https://example.invalid/nadp.csv", Namespace.NADP)


async def test_fetch_source_uses_http_for_urls(monkeypatch) -> None:
    seen: list[str] = []

    async def fake_fetch_text(url: str, *, config) -> str:
        seen.append(url)
        return NADP_CSV

    monkeypatch.setattr(datasets, "fetch_text", fake_fetch_text)
    text = await fetch_source("https://example.invalid/nadp.csv", Namespace.NADP)
    assert text == NADP_CSV
    assert seen == ["https://example.invalid/nadp.csv"]
