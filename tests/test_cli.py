import json

import pytest

from deepsky import __version__
from deepsky.cli.main import main

CONFIG_TOML = """
[site]
name = "Chicago"
latitude_deg = 41.833
longitude_deg = -87.872
timezone = "America/Chicago"
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML, encoding="utf-8")
    return str(path)


def test_version(capsys):
    assert main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_night_text(capsys, config_path):
    assert main(["night", "--config", config_path, "--date", "2023-06-21"]) == 0
    out = capsys.readouterr().out
    assert "Site: Chicago" in out
    assert "Astronomical" in out
    assert "Moon" in out


def test_report_json(capsys, config_path):
    assert main(["report", "--config", config_path, "--date", "2023-06-21", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is True
    assert payload["command"] == "report"
    assert payload["data"]["date"] == "2023-06-21"
    assert len(payload["data"]["top_five"]) <= 5


def test_targets_search(capsys, config_path):
    args = ["targets", "--config", config_path, "--date", "2023-06-21", "--search", "Andromeda", "--json"]
    assert main(args) == 0
    payload = json.loads(capsys.readouterr().out)
    ids = [t["id"] for t in payload["data"]["targets"]]
    assert "m31" in ids
    first = payload["data"]["targets"][0]
    assert set(first["scores"]) == {"visibility", "meridian", "season"}
    assert first["interval"]["visibility"] in {"never", "always", "sometimes"}
    assert "culmination" in first["interval"]
    assert "tonight" in first


def test_explicit_location_overrides_config(capsys, config_path):
    args = ["night", "--config", config_path, "--date", "2023-12-21", "--lat", "-34.93", "--lon", "138.60", "--tz", "Australia/Adelaide"]
    assert main(args) == 0
    out = capsys.readouterr().out
    assert "Site:" not in out
    assert "Australia/Adelaide" in out


def test_latitude_without_longitude(capsys, config_path):
    assert main(["night", "--config", config_path, "--lat", "41.8"]) == 2
    assert "latitude and longitude" in capsys.readouterr().err


def test_bad_date_json_error(capsys, config_path):
    assert main(["report", "--config", config_path, "--date", "21/06/2023", "--json"]) == 2
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "invalid_argument"


def test_limit_must_be_positive(config_path):
    assert main(["targets", "--config", config_path, "--date", "2023-06-21", "--limit", "0"]) == 2


def test_unknown_catalog_key(config_path):
    assert main(["targets", "--config", config_path, "--catalog", "hubble"]) == 2


def test_missing_config_file(tmp_path):
    assert main(["night", "--config", str(tmp_path / "nope.toml")]) == 2


def test_unknown_time_zone_json_error(capsys, config_path):
    args = ["night", "--config", config_path, "--lat", "18.65", "--lon", "-133.8", "--tz", "Mars/Olympus", "--json"]
    assert main(args) == 2
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "invalid_argument"
    assert "Mars/Olympus" in payload["error"]["message"]


def test_targets_text_shows_rise_and_set(capsys, config_path):
    args = ["targets", "--config", config_path, "--date", "2023-06-21", "--search", "m13", "--sort", "season"]
    assert main(args) == 0
    out = capsys.readouterr().out
    assert "sea " in out
    assert "culminates" in out
