"""Command line entry point for OldNav.

Usage:
    oldnav encode --lat -37.67 --lon 144.84 --precision 24
    oldnav decode 11100110
    oldnav info --navdata navdata --resources resources
    oldnav nearest --lat -37.67 --lon 144.84
"""

import argparse
import sys

from oldnav.core.logging_system import get_logger, initialize_logging
from oldnav.navdata import geohash
from oldnav.navdata.bounds import LATLON_BOUNDS
from oldnav.navdata.coord import SphericalCoordinate
from oldnav.navdata.database import NavDatabase
from oldnav.settings.navdata_settings import NavdataSettings
from oldnav.version import get_version

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="OldNav - navigation data tools")
    parser.add_argument("--version", action="version", version=f"oldnav {get_version()}")
    parser.add_argument(
        "--settings",
        type=str,
        help="Settings file (default: ~/.oldnav/settings.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Encode a position as a geohash")
    encode_parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    encode_parser.add_argument("--lon", type=float, required=True, help="Longitude in degrees")
    encode_parser.add_argument(
        "--precision",
        type=int,
        default=24,
        help=f"Geohash precision ({geohash.PRECISION_MIN}-{geohash.PRECISION_MAX})",
    )

    decode_parser = subparsers.add_parser("decode", help="Decode a geohash into its cell")
    decode_parser.add_argument("geohash", help="Geohash as a bit string or an integer")
    decode_parser.add_argument(
        "--integer",
        action="store_true",
        help="Treat the geohash as an integer rather than a bit string",
    )

    for name, help_text in (
        ("info", "Load the navigation database and print a summary"),
        ("nearest", "Find the fix nearest to a position"),
    ):
        db_parser = subparsers.add_parser(name, help=help_text)
        db_parser.add_argument("--navdata", type=str, help="GNS430 navdata directory")
        db_parser.add_argument("--resources", type=str, help="Directory with icao_countries.txt")
        if name == "nearest":
            db_parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
            db_parser.add_argument("--lon", type=float, required=True, help="Longitude in degrees")

    return parser.parse_args(argv)


def _load_database(args: argparse.Namespace, settings: NavdataSettings) -> NavDatabase:
    db = NavDatabase(
        navdata_dir=args.navdata or settings.navdata_dir,
        resources_dir=args.resources or settings.resources_dir,
        index_precision=settings.index_precision,
        match_tolerance_m=settings.match_tolerance_m,
    )
    db.load()
    return db


def run_encode(args: argparse.Namespace) -> int:
    """Print the geohash of a position."""
    pos = SphericalCoordinate.from_geographic(0.0, args.lat, args.lon)
    gh = pos.encode(args.precision)
    print(f"{gh} {geohash.hash_to_string(gh)}")
    return EXIT_OK


def run_decode(args: argparse.Namespace) -> int:
    """Print the cell a geohash denotes."""
    if args.integer:
        try:
            gh = int(args.geohash)
        except ValueError as e:
            raise geohash.GeohashError(f"Invalid integer geohash {args.geohash!r}") from e
    else:
        gh = geohash.hash_from_string(args.geohash)
    cell = geohash.decode(gh, LATLON_BOUNDS)
    mid = cell.mid()
    print(f"precision: {geohash.hash_precision(gh)}")
    print(f"lon: {cell.x_min} .. {cell.x_max}")
    print(f"lat: {cell.y_min} .. {cell.y_max}")
    print(f"centre: lat {mid.y}, lon {mid.x}")
    return EXIT_OK


def run_info(args: argparse.Namespace, settings: NavdataSettings) -> int:
    """Print a summary of the navigation database."""
    db = _load_database(args, settings)
    print(repr(db))
    if db.airac is not None:
        print(f"AIRAC cycle {db.airac.cycle}: {db.airac.valid_from} to {db.airac.valid_to}")
    return EXIT_OK


def run_nearest(args: argparse.Namespace, settings: NavdataSettings) -> int:
    """Print the fix nearest to a position."""
    db = _load_database(args, settings)
    pos = SphericalCoordinate.from_geographic(0.0, args.lat, args.lon)
    fix = db.nearest(pos)
    if fix is None:
        print("No fixes loaded")
        return EXIT_FAILURE
    print(f"{fix} ({fix.pos.arc_distance(pos):.0f} m)")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)

    settings = NavdataSettings()
    settings.load(args.settings)
    initialize_logging(args.log_level or settings.log_level)

    try:
        if args.command == "encode":
            return run_encode(args)
        if args.command == "decode":
            return run_decode(args)
        if args.command == "info":
            return run_info(args, settings)
        return run_nearest(args, settings)
    except geohash.GeohashError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
