from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "deepsky" / "config.toml"


class Config:
    def __init__(self, data: dict):
        self._data = data

    def _section(self, name: str) -> dict:
        return self._data.get(name, {})

    @property
    def site_name(self):
        return self._section("site").get("name", None)

    @property
    def site_latitude_deg(self):
        return self._section("site").get("latitude_deg", None)

    @property
    def site_longitude_deg(self):
        return self._section("site").get("longitude_deg", None)

    @property
    def site_timezone(self):
        return self._section("site").get("timezone", "UTC")

    @property
    def site_elevation_m(self):
        return self._section("site").get("elevation_m", None)

    @property
    def site_bortle(self):
        return self._section("site").get("bortle", None)

    @property
    def report_darkness_threshold(self):
        return self._section("report").get("darkness_threshold", "astronomical")

    @property
    def report_max_allowed_moon(self):
        return self._section("report").get("max_allowed_moon", 0.2)

    @property
    def report_min_fov_coverage(self):
        return self._section("report").get("min_fov_coverage", 0.1)

    @property
    def report_max_fov_coverage(self):
        return self._section("report").get("max_fov_coverage", 0.9)

    @property
    def report_min_visibility(self):
        return self._section("report").get("min_visibility", 0.6)

    @property
    def report_prefer_broadband(self):
        return self._section("report").get("prefer_broadband", False)

    @property
    def targets_limiting_altitude_deg(self):
        return self._section("targets").get("limiting_altitude_deg", 0.0)

    @property
    def targets_hide_never_rises(self):
        return self._section("targets").get("hide_never_rises", False)

    @property
    def targets_hidden(self):
        return list(self._section("targets").get("hidden", []))

    @property
    def preset(self) -> dict | None:
        """Imaging preset table, or None when no gear is configured."""
        preset = self._data.get("preset", None)
        if not preset:
            return None
        return preset

    @property
    def catalog_path(self):
        path = self._section("catalog").get("path", None)
        if not path:
            return None
        return Path(path).expanduser()

    @property
    def feeds_source(self):
        return self._section("feeds").get("source", "local")

    @property
    def feeds_timeout_s(self):
        return self._section("feeds").get("timeout_s", 15)


def load_config(path: Path | None = None) -> Config:
    explicit_path = path
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Return default config if default file missing
        return Config({})

    with open(path, "rb") as f:
        data = tomllib.load(f)

    return Config(data)
