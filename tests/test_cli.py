"""Tests for the click CLI."""

import json
import logging

import pytest
from click.testing import CliRunner

from log_setup import configure_logging
from main import main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging("WARNING", handler=logging.NullHandler())


@pytest.fixture
def database_file(tmp_path, local_database):
    path = tmp_path / "intelligence.json"
    path.write_text(json.dumps(local_database), encoding="utf-8")
    return path


def test_cli_renders_and_writes_package(tmp_path, database_file):
    """Full option set prints the summary and writes one package file."""
    out_dir = tmp_path / "out"
    result = CliRunner().invoke(main, [
        "--business-type", "Marketing Agency",
        "--challenge", "manual lead qualification",
        "--stack", "HubSpot, Slack",
        "--investment", "Quick Win",
        "--backend", "local",
        "--data", str(database_file),
        "--output", str(out_dir),
        "--show-quality",
    ])

    assert result.exit_code == 0, result.output
    assert "Intelligence Package" in result.output
    assert "Quality score" in result.output

    written = list(out_dir.glob("intelligence_agency_*.json"))
    assert len(written) == 1
    payload = json.loads(written[0].read_text(encoding="utf-8"))
    assert payload["metadata"]["icp"] == "agency"
    assert any(tool["name"] == "Clay" for tool in payload["tools"])


def test_cli_missing_database_still_produces_package(tmp_path):
    """An unreadable database still yields a (curated) package."""
    result = CliRunner().invoke(main, [
        "--backend", "local",
        "--data", str(tmp_path / "missing.json"),
        "--show-quality",
    ])
    assert result.exit_code == 0, result.output
    assert "Intelligence Package" in result.output


def test_cli_rejects_unknown_investment_level():
    """Investment level is restricted to the known tiers."""
    result = CliRunner().invoke(main, ["--investment", "Lavish"])
    assert result.exit_code != 0
