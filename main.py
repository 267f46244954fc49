"""
Main entry point for the HyFlo localization tools.

This script provides the command-line interface for checking exported
pipeline routes and hierarchy snapshots.
"""

import argparse
import json
import sys
from typing import List, Optional

from hyflo_localization.config import LocalizationConfig
from hyflo_localization.data_loader import SnapshotLoader
from hyflo_localization.exceptions import (
    LocalizationError, NotFoundError, ValidationError, get_error_severity
)
from hyflo_localization.formatters import format_coordinates, format_distance_km
from hyflo_localization.labels import LabelResolver
from hyflo_localization.logging_config import setup_logging
from hyflo_localization.models import Country, State, District, Locality, Location, Zone
from hyflo_localization.route import RouteModel
from hyflo_localization.utils.data_utils import group_by

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_LOAD_ERROR = 2

RECORD_TYPES = {
    'country': Country,
    'state': State,
    'district': District,
    'locality': Locality,
    'location': Location,
    'zone': Zone,
}


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HyFlo localization tools - check routes and hierarchy snapshots"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    parser.add_argument(
        "--log-file",
        help="Optional file to append log output to"
    )

    parser.add_argument(
        "--base-language",
        choices=["ar", "en", "fr"],
        default="fr",
        help="Language used when the requested one is unknown (default: fr)"
    )

    parser.add_argument(
        "--precision",
        type=int,
        default=4,
        help="Decimal places of printed coordinates (default: 4)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser(
        "validate-route",
        help="Validate the waypoints of one or more infrastructures"
    )
    validate_parser.add_argument("file", help="JSON or CSV file of coordinates")
    validate_parser.add_argument(
        "--infrastructure",
        type=int,
        help="Only check the route of this infrastructure id"
    )

    length_parser = subparsers.add_parser(
        "route-length",
        help="Print the total length of each route"
    )
    length_parser.add_argument("file", help="JSON or CSV file of coordinates")
    length_parser.add_argument(
        "--infrastructure",
        type=int,
        help="Only measure the route of this infrastructure id"
    )

    ancestry_parser = subparsers.add_parser(
        "ancestry",
        help="Print the state and district of a locality"
    )
    ancestry_parser.add_argument(
        "--snapshot",
        required=True,
        help="Directory holding states, districts and localities (.json or .csv)"
    )
    ancestry_parser.add_argument("--locality", required=True, type=int, help="Locality id")
    ancestry_parser.add_argument("--language", default="fr", help="Display language (default: fr)")

    label_parser = subparsers.add_parser(
        "label",
        help="Print the resolved labels of a list of records"
    )
    label_parser.add_argument("file", help="JSON or CSV file of records")
    label_parser.add_argument(
        "--type",
        choices=sorted(RECORD_TYPES),
        default="state",
        help="Record type of the file (default: state)"
    )
    label_parser.add_argument("--language", default="fr", help="Display language (default: fr)")
    label_parser.add_argument("--search", help="Keep only labels or codes containing this text")

    return parser.parse_args(argv)


def _routes(coordinates, infrastructure_id: Optional[int]):
    """Split coordinates into one route per infrastructure id."""
    if infrastructure_id is not None:
        return {infrastructure_id: coordinates}
    grouped = group_by(coordinates, lambda c: c.infrastructure_id)
    orphans = [c for c in coordinates if c.infrastructure_id is None]
    if orphans:
        grouped[None] = orphans
    return grouped


def run_validate_route(args, config, loader, logger) -> int:
    coordinates = loader.load_coordinates(args.file, args.infrastructure)
    logger.log_file_operation("Loaded coordinates", args.file, len(coordinates))
    routes = _routes(coordinates, args.infrastructure)
    if not routes:
        routes = {args.infrastructure: []}

    exit_code = EXIT_OK
    for infrastructure_id, points in routes.items():
        route = RouteModel(infrastructure_id, points, config)
        result = route.validate()
        logger.log_route_summary(
            infrastructure_id, len(route), route.total_length_km(), len(result.errors)
        )
        if result.valid:
            print(f"Infrastructure {infrastructure_id}: valid ({len(route)} coordinates)")
        else:
            exit_code = EXIT_INVALID
            print(f"Infrastructure {infrastructure_id}: {len(result.errors)} error(s)")
            for error in result.errors:
                print(f"  - {error}")
    return exit_code


def run_route_length(args, config, loader, logger) -> int:
    coordinates = loader.load_coordinates(args.file, args.infrastructure)
    logger.log_file_operation("Loaded coordinates", args.file, len(coordinates))
    for infrastructure_id, points in _routes(coordinates, args.infrastructure).items():
        route = RouteModel(infrastructure_id, points, config)
        print(f"Infrastructure {infrastructure_id}: {format_distance_km(route.total_length_km())}")
        ordered = route.ordered()
        if ordered:
            start, end = ordered[0], ordered[-1]
            precision = config.coordinate_precision
            print(f"  from {format_coordinates(start.latitude, start.longitude, precision)}"
                  f" to {format_coordinates(end.latitude, end.longitude, precision)}")
    return EXIT_OK


def run_ancestry(args, config, loader, logger) -> int:
    index = loader.build_index(args.snapshot)
    logger.log_index_summary(index.stats())
    resolver = LabelResolver(config)

    chain = index.ancestry_of_locality(args.locality)
    print(json.dumps({
        'state': {'id': chain.state.id, 'label': resolver.resolve(chain.state, args.language)},
        'district': {'id': chain.district.id, 'label': resolver.resolve(chain.district, args.language)},
        'locality': {'id': chain.locality.id, 'label': resolver.resolve(chain.locality, args.language)},
    }, ensure_ascii=False, indent=2))
    return EXIT_OK


def run_label(args, config, loader, logger) -> int:
    records = loader.load_records(args.file, RECORD_TYPES[args.type])
    logger.log_file_operation("Loaded records", args.file, len(records))
    resolver = LabelResolver(config)
    records = resolver.filter(records, args.search, args.language)
    for option in resolver.options(records, args.language):
        print(f"{option['value']}\t{option['code']}\t{option['label']}")
    return EXIT_OK


COMMANDS = {
    'validate-route': run_validate_route,
    'route-length': run_route_length,
    'ancestry': run_ancestry,
    'label': run_label,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)

    try:
        config = LocalizationConfig(
            base_language=args.base_language,
            coordinate_precision=args.precision,
            log_level=args.log_level,
            log_file=args.log_file
        )
    except LocalizationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    logger = setup_logging(config)
    logger.debug(f"Configuration: {config.to_dict()}")
    loader = SnapshotLoader(logger.logger, config)

    try:
        return COMMANDS[args.command](args, config, loader, logger)
    except (NotFoundError, ValidationError) as e:
        logger.error(f"{e.__class__.__name__} ({get_error_severity(e)}): {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_INVALID
    except LocalizationError as e:
        logger.error(f"{e.__class__.__name__} ({get_error_severity(e)}): {e.to_dict()}")
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_LOAD_ERROR


if __name__ == "__main__":
    sys.exit(main())
