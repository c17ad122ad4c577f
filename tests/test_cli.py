# file: tests/test_cli.py
from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from numerus import __version__
from numerus.cli import main


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_classify_json(runner: CliRunner) -> None:
    result = runner.invoke(main, ["classify", "+12065551212", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "did": "+12065551212",
        "region": "nadp",
        "format": "e164",
        "tollstate": "standard",
    }


def test_format(runner: CliRunner) -> None:
    result = runner.invoke(main, ["format", "2063130566"])
    assert result.exit_code == 0
    assert result.output == "+1 (206) 313 0566\n"

    result = runner.invoke(main, ["format", "+12063130566", "--region", "international"])
    assert result.output == "+1 2063130566\n"


def test_normalize(runner: CliRunner) -> None:
    result = runner.invoke(main, ["normalize", "+12065551212", "--to", "npan"])
    assert result.exit_code == 0
    assert result.output == "2065551212\n"

    result = runner.invoke(main, ["normalize", "+96824560742", "--to", "npan"])
    assert result.exit_code == 1
    assert "requires nadp" in result.output


def test_split_and_extract(runner: CliRunner) -> None:
    result = runner.invoke(main, ["split", "+12063130566", "--json"])
    assert json.loads(result.stdout) == {"area_code": "206", "exchange": "313", "subscriber": "0566"}

    result = runner.invoke(main, ["extract", "+96824560742"])
    assert result.exit_code == 0
    assert "country_code: 968" in result.output

    result = runner.invoke(main, ["extract", "randomstr"])
    assert result.exit_code == 1


def test_metadata_uses_packaged_reference_data(runner: CliRunner) -> None:
    result = runner.invoke(
        main,
        ["metadata", "+12065551212", "--json"],
        env={"NUMERUS_LOG_LEVEL": "WARNING", "NUMERUS_CONFIG": ""},
    )
    assert result.exit_code == 0, result.output
    record = json.loads(result.stdout)
    assert record["meta"]["country"] == {"name": "United States", "iso": "US"}
    assert record["meta"]["state"] == {"name": "Washington", "iso": "WA"}
    assert record["formatted"] == "+1 (206) 555 1212"


def test_metadata_human_output(runner: CliRunner) -> None:
    result = runner.invoke(main, ["metadata", "+96824560742"], env={"NUMERUS_LOG_LEVEL": "WARNING"})
    assert result.exit_code == 0, result.output
    assert "Country: Oman (OM)" in result.output
