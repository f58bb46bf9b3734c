import argparse
import sys

from deepsky import __version__
from deepsky.cli.commands import run_night, run_report, run_targets
from deepsky.planner.sorting import SortMethod


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to config.toml")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        help="Enable logging at this level",
    )
    parser.add_argument("--json", action="store_true", help="Output result as JSON")
    parser.add_argument("--date", help="Local date the night starts on (YYYY-MM-DD, default today)")
    parser.add_argument("--lat", dest="latitude_deg", type=float, help="Site latitude in degrees")
    parser.add_argument("--lon", dest="longitude_deg", type=float, help="Site longitude in degrees, east positive")
    parser.add_argument("--tz", dest="timezone", help="IANA timezone of the site, e.g. America/Chicago")
    parser.add_argument(
        "--source",
        choices=["local", "feed"],
        help="Compute sun/moon events locally or fetch them from the online feeds",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deepsky")
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    night_parser = subparsers.add_parser("night", help="Show twilight intervals and the moon for a night")
    _add_common_args(night_parser)

    report_parser = subparsers.add_parser("report", help="Rank tonight's best imaging targets")
    _add_common_args(report_parser)
    report_parser.add_argument(
        "--darkness",
        choices=["astronomical", "nautical", "civil"],
        help="Twilight band counted as night",
    )
    report_parser.add_argument(
        "--prefer-broadband",
        dest="prefer_broadband",
        action="store_true",
        help="Favor broadband targets when the moon is bright",
    )

    targets_parser = subparsers.add_parser("targets", help="Filter and sort the target catalog")
    _add_common_args(targets_parser)
    targets_parser.add_argument("--search", help="Match names and designations")
    targets_parser.add_argument("--catalog", action="append", help="Catalog key, e.g. messier (repeatable)")
    targets_parser.add_argument("--constellation", action="append", help="Constellation key, e.g. ursaMajor (repeatable)")
    targets_parser.add_argument("--type", action="append", help="Type key, e.g. spiralGalaxy (repeatable)")
    targets_parser.add_argument("--brightest", type=float, help="Brightest magnitude to include")
    targets_parser.add_argument("--dimmest", type=float, help="Dimmest magnitude to include")
    targets_parser.add_argument("--min-size", dest="min_size", type=float, help="Minimum size in arcminutes")
    targets_parser.add_argument("--max-size", dest="max_size", type=float, help="Maximum size in arcminutes")
    targets_parser.add_argument("--min-visibility", dest="min_visibility", type=float, help="Minimum visibility score (0-1)")
    targets_parser.add_argument("--min-meridian", dest="min_meridian", type=float, help="Minimum meridian score (0-1)")
    targets_parser.add_argument("--min-season", dest="min_season", type=float, help="Minimum season score (0-1)")
    targets_parser.add_argument("--sort", choices=[m.value for m in SortMethod], help="Sort method")
    targets_parser.add_argument("--ascending", action="store_true", help="Sort ascending instead of descending")
    targets_parser.add_argument("--limit", type=int, help="Show at most this many targets")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"deepsky {__version__}")
        return 0

    if args.command == "night":
        return run_night(args)

    if args.command == "report":
        return run_report(args)

    if args.command == "targets":
        return run_targets(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
