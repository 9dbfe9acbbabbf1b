"""
neweden Navigation Commands

Route planning, jump bridge reach and range lookups over a locally loaded
universe. Every command loads the universe from the SDE SQLite file or the
JSON cache (--sde / --cache, falling back to NEWEDEN_SDE_PATH and
NEWEDEN_UNIVERSE_CACHE) and returns a JSON-ready dict.
"""

import argparse
from pathlib import Path
from typing import Any, Optional

from ..core.config import get_settings
from ..core.formatters import get_utc_timestamp, meters_to_lightyears
from ..core.logging import get_logger
from ..services.navigation import (
    NavigationError,
    NavigationService,
    Preference,
    RouteNotFoundError,
    SystemNotFoundError,
    compute_security_summary,
    generate_warnings,
    get_threat_level,
    path_to_elements,
)
from ..sources import SqliteSource, load_universe_cache
from ..universe import (
    Bridge,
    BridgeArchetype,
    BridgeType,
    Connection,
    ExtendedUniverseBuilder,
    Lightyears,
    System,
    Universe,
    UniverseBuildError,
    Wormhole,
    WormholeType,
    allows_cynos,
)

logger = get_logger(__name__)

# CLI route flags to routing preferences
PREFERENCE_FLAGS: dict[str, Preference] = {
    "shortest": Preference.SHORTEST,
    "secure": Preference.HIGHSEC,
    "insecure": Preference.LOWSEC_AND_NULLSEC,
}

ROUTE_MODE_NAMES = {
    "shortest": "Shortest",
    "secure": "Secure (high-sec priority)",
    "insecure": "Risky (low-sec/null preferred)",
}

SOURCE_HINT = (
    "Pass --sde <sqlite-latest.sqlite> or --cache <universe_cache.json>, "
    "or set NEWEDEN_SDE_PATH / NEWEDEN_UNIVERSE_CACHE."
)

NAME_HINT = "Check spelling. System names are case-insensitive."


# =============================================================================
# Universe Loading
# =============================================================================


def load_universe(args: argparse.Namespace) -> Universe:
    """
    Load the universe from the source named on the command line or in settings.

    Precedence: --sde, --cache, NEWEDEN_SDE_PATH, NEWEDEN_UNIVERSE_CACHE.

    Raises:
        UniverseBuildError: If no source is configured or loading fails
    """
    sde: Optional[Path] = getattr(args, "sde", None)
    cache: Optional[Path] = getattr(args, "cache", None)
    settings = get_settings()

    if sde is None and cache is None:
        sde = settings.sde_path
        cache = settings.universe_cache

    if sde is not None:
        logger.debug("Loading universe from SDE %s", sde)
        return SqliteSource(sde).load()
    if cache is not None:
        logger.debug("Loading universe from cache %s", cache)
        return load_universe_cache(cache)

    raise UniverseBuildError("No universe data source configured")


def _universe_error(e: UniverseBuildError, query_ts: str) -> dict[str, Any]:
    return {
        "error": "universe_not_available",
        "message": str(e),
        "hint": SOURCE_HINT,
        "query_timestamp": query_ts,
    }


def _system_not_found(e: SystemNotFoundError, query_ts: str) -> dict[str, Any]:
    return {
        "error": "system_not_found",
        "message": f"Could not find system: {', '.join(e.names)}",
        "unresolved": list(e.names),
        "hint": NAME_HINT,
        "query_timestamp": query_ts,
    }


def _system_info(system: System) -> dict[str, Any]:
    return {
        "system_id": system.id,
        "name": system.name,
        "security": round(system.security, 2),
        "security_class": system.security_class.value,
    }


# =============================================================================
# Route Command
# =============================================================================


def cmd_route(args: argparse.Namespace) -> dict[str, Any]:
    """
    Calculate a route through two or more systems.

    Wormholes given with --wormhole and bridges from --bridge-from are
    layered over the universe for this route only.

    Args:
        args: Parsed arguments with systems, route_flag, wormhole,
            wormhole_size, bridge_from, archetype, calibration

    Returns:
        Route data dict with elements, security summary, threat assessment
    """
    route_flag = getattr(args, "route_flag", "shortest")
    preference = PREFERENCE_FLAGS.get(route_flag, Preference.SHORTEST)
    query_ts = get_utc_timestamp()

    try:
        universe = load_universe(args)
    except UniverseBuildError as e:
        return _universe_error(e, query_ts)

    nav_service = NavigationService(universe)

    try:
        wormholes = [
            Connection(
                nav_service.resolve_system(a).id,
                nav_service.resolve_system(b).id,
                Wormhole(WormholeType(args.wormhole_size)),
            )
            for a, b in (getattr(args, "wormhole", None) or [])
        ]

        bridges = []
        bridge_from = getattr(args, "bridge_from", None)
        if bridge_from:
            if not getattr(args, "archetype", None):
                return {
                    "error": "invalid_arguments",
                    "message": "--bridge-from needs --titan or --black-ops",
                    "query_timestamp": query_ts,
                }
            bridges.append(
                (
                    nav_service.resolve_system(bridge_from),
                    BridgeType(BridgeArchetype(args.archetype), calibration=args.calibration),
                )
            )

        path = nav_service.calculate_route(args.systems, preference, wormholes, bridges)
    except SystemNotFoundError as e:
        return _system_not_found(e, query_ts)
    except RouteNotFoundError as e:
        result: dict[str, Any] = {
            "error": "no_route",
            "message": f"No route available through {' -> '.join(e.waypoints)}",
            "query_timestamp": query_ts,
        }
        if e.reason:
            result["hint"] = e.reason.capitalize()
        return result
    except NavigationError as e:
        return {
            "error": "invalid_arguments",
            "message": str(e),
            "query_timestamp": query_ts,
        }

    summary = compute_security_summary(path)
    threat_level = get_threat_level(
        summary.lowsec_systems, summary.nullsec_systems, summary.lowest_security
    )
    origin = path.from_system()
    destination = path.to_system()

    result = {
        "query_timestamp": query_ts,
        "volatility": "stable",
        "origin": _system_info(origin) if origin else None,
        "destination": _system_info(destination) if destination else None,
        "route_mode": route_flag,
        "route_mode_display": ROUTE_MODE_NAMES.get(route_flag, route_flag),
        "total_jumps": path.jumps,
        "elements": path_to_elements(path),
        "security_summary": {
            "high_sec": summary.highsec_systems,
            "low_sec": summary.lowsec_systems,
            "null_sec": summary.nullsec_systems,
            "lowest_security": round(summary.lowest_security, 2),
            "lowest_security_system": summary.lowest_security_system,
            "threat_level": threat_level,
        },
    }

    warnings = generate_warnings(path, preference)
    if warnings:
        result["warnings"] = warnings
    if wormholes:
        result["wormholes"] = len(wormholes)

    return result


# =============================================================================
# Bridge Command
# =============================================================================


def cmd_bridge(args: argparse.Namespace) -> dict[str, Any]:
    """
    List every system a Titan or Black Ops can bridge to from a system.

    Args:
        args: Parsed arguments with origin, archetype, calibration,
            fuel_conservation

    Returns:
        Bridge data dict with effective range and destinations
    """
    query_ts = get_utc_timestamp()

    try:
        universe = load_universe(args)
    except UniverseBuildError as e:
        return _universe_error(e, query_ts)

    try:
        origin = NavigationService(universe).resolve_system(args.origin)
    except SystemNotFoundError as e:
        return _system_not_found(e, query_ts)

    bridge_type = BridgeType(
        BridgeArchetype(args.archetype),
        calibration=args.calibration,
        fuel_conservation=args.fuel_conservation,
    )
    extended = ExtendedUniverseBuilder(universe).bridge(origin.id, bridge_type).build()

    destinations = []
    for connection in extended.adjacency.get(origin.id, ()):
        if not isinstance(connection.type, Bridge):
            continue
        end = universe.get_system(connection.to_id)
        if end is None:
            continue
        info = _system_info(end)
        info["distance_ly"] = round(
            meters_to_lightyears(origin.coordinate.distance(end.coordinate)), 3
        )
        info["allows_cynos"] = allows_cynos(end)
        destinations.append(info)

    return {
        "query_timestamp": query_ts,
        "origin": _system_info(origin),
        "archetype": bridge_type.archetype.value,
        "calibration": bridge_type.calibration,
        "fuel_conservation": bridge_type.fuel_conservation,
        "range_ly": round(bridge_type.range().value, 3),
        "destination_count": len(destinations),
        "cyno_destinations": sum(1 for d in destinations if d["allows_cynos"]),
        "destinations": destinations,
    }


# =============================================================================
# Range Command
# =============================================================================


def cmd_range(args: argparse.Namespace) -> dict[str, Any]:
    """
    List systems within a straight-line distance of a system.

    Args:
        args: Parsed arguments with origin and lightyears

    Returns:
        Range data dict with systems sorted nearest first
    """
    query_ts = get_utc_timestamp()

    if args.lightyears < 0:
        return {
            "error": "invalid_arguments",
            "message": f"Range must not be negative: {args.lightyears}",
            "query_timestamp": query_ts,
        }

    try:
        universe = load_universe(args)
    except UniverseBuildError as e:
        return _universe_error(e, query_ts)

    try:
        origin = NavigationService(universe).resolve_system(args.origin)
    except SystemNotFoundError as e:
        return _system_not_found(e, query_ts)

    in_range = universe.get_systems_in_radius(origin.id, Lightyears(args.lightyears)) or []

    systems = []
    for system in in_range:
        info = _system_info(system)
        info["distance_ly"] = round(
            meters_to_lightyears(origin.coordinate.distance(system.coordinate)), 3
        )
        systems.append(info)
    systems.sort(key=lambda s: (s["distance_ly"], s["system_id"]))

    return {
        "query_timestamp": query_ts,
        "origin": _system_info(origin),
        "range_ly": args.lightyears,
        "system_count": len(systems),
        "systems": systems,
    }


# =============================================================================
# Parser Registration
# =============================================================================


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--sde", type=Path, metavar="PATH", help="Fuzzwork SDE SQLite file")
    parser.add_argument("--cache", type=Path, metavar="PATH", help="JSON universe cache file")


def _add_bridge_arguments(parser: argparse.ArgumentParser, required: bool) -> None:
    archetype = parser.add_mutually_exclusive_group(required=required)
    archetype.add_argument(
        "--titan",
        action="store_const",
        const=BridgeArchetype.TITAN.value,
        dest="archetype",
        help="Titan bridge (3.0 ly base)",
    )
    archetype.add_argument(
        "--black-ops",
        "--blops",
        action="store_const",
        const=BridgeArchetype.BLACK_OPS.value,
        dest="archetype",
        help="Black Ops bridge (4.0 ly base)",
    )
    parser.add_argument(
        "--calibration",
        type=int,
        choices=range(0, 6),
        default=0,
        metavar="LEVEL",
        help="Jump Drive Calibration level (0-5, +20%% range per level)",
    )


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register navigation command parsers."""

    # Route command
    route_parser = subparsers.add_parser("route", help="Calculate route through systems")
    route_parser.add_argument(
        "systems",
        nargs="+",
        metavar="SYSTEM",
        help="Origin, optional waypoints, destination (in travel order)",
    )
    route_parser.add_argument(
        "--safe",
        "--secure",
        action="store_const",
        const="secure",
        dest="route_flag",
        help="Prefer high-sec route",
    )
    route_parser.add_argument(
        "--shortest",
        action="store_const",
        const="shortest",
        dest="route_flag",
        help="Shortest route (default)",
    )
    route_parser.add_argument(
        "--risky",
        "--insecure",
        action="store_const",
        const="insecure",
        dest="route_flag",
        help="Prefer low-sec/null route",
    )
    route_parser.add_argument(
        "--wormhole",
        nargs=2,
        action="append",
        metavar=("FROM", "TO"),
        help="Known wormhole connection, one direction (repeatable)",
    )
    route_parser.add_argument(
        "--wormhole-size",
        choices=[w.value for w in WormholeType],
        default=WormholeType.LARGE.value,
        help="Mass class for --wormhole connections (default: large)",
    )
    route_parser.add_argument(
        "--bridge-from",
        metavar="SYSTEM",
        help="System with a bridging ship (needs --titan or --black-ops)",
    )
    _add_bridge_arguments(route_parser, required=False)
    _add_source_arguments(route_parser)
    route_parser.set_defaults(route_flag="shortest", func=cmd_route)

    # Bridge command
    bridge_parser = subparsers.add_parser("bridge", help="Systems in jump bridge range")
    bridge_parser.add_argument("origin", help="System the bridging ship sits in")
    _add_bridge_arguments(bridge_parser, required=True)
    bridge_parser.add_argument(
        "--fuel-conservation",
        type=int,
        choices=range(0, 6),
        default=0,
        metavar="LEVEL",
        help="Jump Fuel Conservation level (0-5)",
    )
    _add_source_arguments(bridge_parser)
    bridge_parser.set_defaults(func=cmd_bridge)

    # Range command
    range_parser = subparsers.add_parser("range", help="Systems within a distance")
    range_parser.add_argument("origin", help="System to measure from")
    range_parser.add_argument("lightyears", type=float, help="Radius in lightyears")
    _add_source_arguments(range_parser)
    range_parser.set_defaults(func=cmd_range)
