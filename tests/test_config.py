from pathlib import Path

import pytest

from deepsky.config import Config, load_config
from deepsky.planner import Planner
from deepsky.planner.enums import DarknessThreshold

CONFIG_TOML = """
[site]
name = "Backyard"
latitude_deg = -34.93
longitude_deg = 138.60
timezone = "Australia/Adelaide"
bortle = 5

[report]
darkness_threshold = "nautical"
min_visibility = 0.5
prefer_broadband = true

[targets]
limiting_altitude_deg = 20.0
hidden = ["m31", "m42"]

[preset]
name = "Redcat + 2600MC"
focal_length_mm = 250
pixel_size_um = 3.76
resolution_length = 6248
resolution_width = 4176

[catalog]
path = "~/catalogs/mine.csv"

[feeds]
source = "feed"
timeout_s = 5
"""


def test_defaults():
    config = Config({})
    assert config.site_latitude_deg is None
    assert config.site_timezone == "UTC"
    assert config.report_darkness_threshold == "astronomical"
    assert config.report_max_allowed_moon == 0.2
    assert config.report_max_fov_coverage == 0.9
    assert config.targets_hidden == []
    assert config.preset is None
    assert config.catalog_path is None
    assert config.feeds_source == "local"


def test_load_config(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML, encoding="utf-8")
    config = load_config(path)
    assert config.site_name == "Backyard"
    assert config.site_bortle == 5
    assert config.report_min_visibility == 0.5
    assert config.targets_hidden == ["m31", "m42"]
    assert config.catalog_path == Path.home() / "catalogs" / "mine.csv"
    assert config.feeds_timeout_s == 5

    location = Planner.default_location(config)
    assert location.name == "Backyard"
    assert location.timezone == "Australia/Adelaide"

    settings = Planner.default_report_settings(config)
    assert settings.darkness_threshold == DarknessThreshold.NAUTICAL
    assert settings.prefer_broadband is True

    targets = Planner.default_target_settings(config)
    assert targets.hidden_targets == frozenset({"m31", "m42"})
    assert targets.limiting_altitude_deg == 20.0

    preset = Planner.default_preset(config)
    assert preset.name == "Redcat + 2600MC"
    assert preset.fov_length == pytest.approx(323.0, abs=0.5)


def test_explicit_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")


def test_location_required():
    with pytest.raises(ValueError):
        Planner.default_location(Config({"site": {"latitude_deg": 10.0}}))


def test_incomplete_preset():
    with pytest.raises(ValueError, match="pixel_size_um"):
        Planner.default_preset(Config({"preset": {"focal_length_mm": 500}}))


def test_unknown_darkness_threshold():
    with pytest.raises(ValueError):
        Planner.default_report_settings(Config({"report": {"darkness_threshold": "dusky"}}))


def test_unknown_site_time_zone():
    config = Config({"site": {"latitude_deg": 10.0, "longitude_deg": 20.0, "timezone": "Mars/Olympus"}})
    with pytest.raises(ValueError, match="Mars/Olympus"):
        Planner.default_location(config)


@pytest.mark.parametrize(
    "field,value",
    [
        ("focal_length_mm", 0),
        ("pixel_size_um", -3.76),
        ("resolution_length", 0),
        ("resolution_width", -1),
    ],
)
def test_preset_values_must_be_positive(field, value):
    preset = {
        "focal_length_mm": 250,
        "pixel_size_um": 3.76,
        "resolution_length": 6248,
        "resolution_width": 4176,
    }
    preset[field] = value
    with pytest.raises(ValueError, match=field):
        Planner.default_preset(Config({"preset": preset}))
