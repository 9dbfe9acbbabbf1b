"""
JSON Cache Source - load a Universe from universe_cache.json.

The cache mirrors the ESI universe endpoints:

    {
        "generated": "2026-01-15T12:00:00Z",
        "systems": {
            "30000142": {
                "name": "Jita",
                "security": 0.9459,
                "constellation_id": 20000020,
                "position": {"x": -1.29e17, "y": 6.07e16, "z": 1.17e17},
                "stargates": [50001248]
            }
        },
        "stargates": {"50001248": {"destination_system_id": 30000144}},
        "constellations": {"20000020": {"name": "Kimotoro", "region_id": 10000002}}
    }

Positions are optional and default to the origin; range queries are only
meaningful when they are present.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..core.logging import get_logger
from ..universe.builder import UniverseBuildError
from ..universe.graph import Universe
from ..universe.types import Connection, Coordinate, Stargate, StargateType, System

logger = get_logger(__name__)

REQUIRED_KEYS = ("systems", "stargates")


def load_universe_cache(cache_path: Path) -> Universe:
    """
    Load a universe from a JSON cache file.

    Args:
        cache_path: Path to universe_cache.json

    Returns:
        Universe ready for queries

    Raises:
        UniverseBuildError: If the file is missing, not JSON, or incomplete
    """
    try:
        with open(cache_path) as f:
            data = json.load(f)
    except FileNotFoundError:
        raise UniverseBuildError(f"Universe cache not found: {cache_path}")
    except json.JSONDecodeError as e:
        raise UniverseBuildError(
            f"Invalid JSON in universe cache: {cache_path}\n"
            f"Parse error: {e}\n"
            "The cache file may be corrupted."
        )

    return universe_from_cache_data(data)


def universe_from_cache_data(data: dict[str, Any]) -> Universe:
    """
    Build a universe from already-parsed cache data.

    Stargates leading to systems absent from the cache are dropped.

    Raises:
        UniverseBuildError: If required keys or system fields are missing
    """
    missing = [k for k in REQUIRED_KEYS if k not in data]
    if missing:
        raise UniverseBuildError(
            f"Universe cache missing required keys: {missing}\n"
            "The cache file may be from an older version. Try rebuilding."
        )

    if not isinstance(data["systems"], dict) or not isinstance(data["stargates"], dict):
        raise UniverseBuildError("Universe cache systems and stargates must be JSON objects")

    systems_data: dict[str, dict[str, Any]] = data["systems"]
    stargates: dict[str, dict[str, Any]] = data["stargates"]
    constellations: dict[str, dict[str, Any]] = data.get("constellations", {})

    try:
        # Stable ordering by system id (ids are string keys in JSON)
        system_list = sorted(
            ((int(sys_id), sys_data) for sys_id, sys_data in systems_data.items()),
            key=lambda x: x[0],
        )
        const_to_region = {
            int(const_id): const_data.get("region_id")
            for const_id, const_data in constellations.items()
        }
    except (AttributeError, TypeError, ValueError) as e:
        raise UniverseBuildError(f"Malformed universe cache ids: {e}") from e

    systems = [_system_from_cache(sys_id, sys_data) for sys_id, sys_data in system_list]
    sys_to_const = {sys_id: sys_data.get("constellation_id") for sys_id, sys_data in system_list}

    connections: list[Connection] = []
    dropped = 0
    for sys_id, sys_data in system_list:
        for gate_id in sys_data.get("stargates") or []:
            gate = stargates.get(str(gate_id))
            if not gate:
                continue
            try:
                dest_id = int(gate["destination_system_id"])
            except (KeyError, TypeError, ValueError) as e:
                raise UniverseBuildError(
                    f"Malformed cache entry for stargate {gate_id} in system {sys_id}: {e!r}"
                ) from e
            if dest_id not in sys_to_const:
                dropped += 1
                continue
            from_const = sys_to_const[sys_id]
            to_const = sys_to_const[dest_id]
            kind = StargateType.classify(
                from_const,
                const_to_region.get(from_const),
                to_const,
                const_to_region.get(to_const),
            )
            connections.append(Connection(sys_id, dest_id, Stargate(kind)))

    if dropped:
        logger.debug("Dropped %d stargates leading outside the cache", dropped)

    logger.info(
        "Loaded %d systems and %d connections from cache (generated %s)",
        len(systems),
        len(connections),
        data.get("generated", "unknown"),
    )
    return Universe.build(systems, connections)


def _system_from_cache(sys_id: int, sys_data: dict[str, Any]) -> System:
    try:
        position = sys_data.get("position") or {}
        return System(
            id=sys_id,
            name=sys_data["name"],
            coordinate=Coordinate(
                float(position.get("x", 0.0)),
                float(position.get("y", 0.0)),
                float(position.get("z", 0.0)),
            ),
            security=float(sys_data["security"]),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise UniverseBuildError(f"Malformed cache entry for system {sys_id}: {e!r}") from e
