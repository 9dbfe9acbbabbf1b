"""
SDE SQLite Source - load a Universe from a Fuzzwork SDE export.

Reads mapSolarSystems and mapSolarSystemJumps. Known space and wormhole
space systems are loaded; only known-space jumps are, since wormhole
space has no static connections.

Usage:
    from neweden.sources.sqlite import SqliteSource

    universe = SqliteSource(Path("cache/sqlite-latest.sqlite")).load()
"""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path

from ..core.logging import get_logger
from ..universe.builder import UniverseBuildError
from ..universe.graph import Universe
from ..universe.types import (
    KSPACE_UPPER_BOUND,
    WSPACE_UPPER_BOUND,
    Connection,
    Coordinate,
    Stargate,
    StargateType,
    System,
)

logger = get_logger(__name__)

SYSTEMS_QUERY = """
    SELECT solarSystemID, solarSystemName, x, y, z, security
    FROM mapSolarSystems
    WHERE solarSystemID < ?
    ORDER BY solarSystemID
"""

JUMPS_QUERY = """
    SELECT fromRegionID, fromConstellationID, fromSolarSystemID,
           toSolarSystemID, toConstellationID, toRegionID
    FROM mapSolarSystemJumps
    WHERE fromSolarSystemID < ? AND toSolarSystemID < ?
    ORDER BY fromSolarSystemID, toSolarSystemID
"""


def read_systems(conn: sqlite3.Connection) -> list[System]:
    """
    Read systems from mapSolarSystems.

    Raises:
        UniverseBuildError: If a row is missing its name, position or security
    """
    systems = []
    for row in conn.execute(SYSTEMS_QUERY, (WSPACE_UPPER_BOUND,)):
        system_id, name, x, y, z, security = row
        if name is None or x is None or y is None or z is None or security is None:
            raise UniverseBuildError(f"Incomplete mapSolarSystems row for system {system_id}")
        systems.append(
            System(
                id=int(system_id),
                name=name,
                coordinate=Coordinate(float(x), float(y), float(z)),
                security=float(security),
            )
        )
    return systems


def read_connections(conn: sqlite3.Connection) -> list[Connection]:
    """Read directed known-space stargate connections from mapSolarSystemJumps."""
    connections = []
    for row in conn.execute(JUMPS_QUERY, (KSPACE_UPPER_BOUND, KSPACE_UPPER_BOUND)):
        from_region, from_constellation, from_id, to_id, to_constellation, to_region = row
        kind = StargateType.classify(from_constellation, from_region, to_constellation, to_region)
        connections.append(Connection(int(from_id), int(to_id), Stargate(kind)))
    return connections


class SqliteSource:
    """Loads a Universe from a Fuzzwork SDE SQLite file, opened read-only."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Universe:
        """
        Load the universe.

        Returns:
            Universe with all systems and known-space stargates

        Raises:
            UniverseBuildError: If the file is missing or is not a usable SDE
        """
        if not self.path.exists():
            raise UniverseBuildError(
                f"SDE database not found: {self.path}\n"
                "Download sqlite-latest.sqlite from Fuzzwork and point NEWEDEN_SDE_PATH at it."
            )

        start = time.perf_counter()
        try:
            conn = sqlite3.connect(f"{self.path.resolve().as_uri()}?mode=ro", uri=True)
        except sqlite3.Error as e:
            raise UniverseBuildError(f"Cannot open SDE database {self.path}: {e}") from e

        try:
            systems = read_systems(conn)
            connections = read_connections(conn)
        except sqlite3.Error as e:
            raise UniverseBuildError(
                f"Failed to read universe from {self.path}: {e}\n"
                "The file may not be a Fuzzwork SDE export."
            ) from e
        finally:
            conn.close()

        logger.info(
            "Loaded %d systems and %d connections from %s in %.0f ms",
            len(systems),
            len(connections),
            self.path.name,
            (time.perf_counter() - start) * 1000,
        )
        return Universe.build(systems, connections)
