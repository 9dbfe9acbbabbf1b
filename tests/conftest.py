"""
neweden Test Suite - Shared Fixtures and Configuration

Provides a small hand-built universe, the same data as an SDE SQLite file
and as a JSON cache, and resets module-level state between tests.
"""

import json
import sqlite3
from pathlib import Path

import pytest

from neweden.universe import (
    Connection,
    Coordinate,
    Stargate,
    StargateType,
    System,
    Universe,
    UniverseBuilder,
)
from neweden.universe.units import METERS_PER_LIGHTYEAR

LY = METERS_PER_LIGHTYEAR

# =============================================================================
# Sample Universe
# =============================================================================
#
#   Jita (0.95) -- Perimeter (0.91) -- Urlen (0.90)
#     |                                   |
#   Niarja (0.40) -------------------- Amarr (1.00)
#     |
#   HED-GP (-0.37)
#
#   J100001 (w-space, no gates)
#
# Every gate is two-way. Jita sits at the origin; Perimeter and Urlen are
# 1 and 2 ly along x, Niarja and Amarr 3 and 5.5 ly along y, HED-GP 10 ly
# along z and J100001 50 ly along x.

JITA = 30000142
PERIMETER = 30000144
URLEN = 30000139
NIARJA = 30003504
AMARR = 30002187
HED_GP = 30001161
J100001 = 31000005

# id: (name, security, (x, y, z) in ly, constellation, region)
SAMPLE_SYSTEMS = {
    JITA: ("Jita", 0.9459, (0, 0, 0), 20000020, 10000002),
    PERIMETER: ("Perimeter", 0.9072, (1, 0, 0), 20000020, 10000002),
    URLEN: ("Urlen", 0.90, (2, 0, 0), 20000019, 10000002),
    NIARJA: ("Niarja", 0.40, (0, 3, 0), 20000438, 10000043),
    AMARR: ("Amarr", 1.0, (0, 5.5, 0), 20000322, 10000043),
    HED_GP: ("HED-GP", -0.37, (0, 0, 10), 20000170, 10000014),
    J100001: ("J100001", -1.0, (50, 0, 0), 21000001, 11000001),
}

SAMPLE_GATES = [
    (JITA, PERIMETER),
    (PERIMETER, URLEN),
    (URLEN, AMARR),
    (JITA, NIARJA),
    (NIARJA, AMARR),
    (NIARJA, HED_GP),
]


def _system(system_id: int) -> System:
    name, security, (x, y, z), _, _ = SAMPLE_SYSTEMS[system_id]
    return System(system_id, name, Coordinate(x * LY, y * LY, z * LY), security)


def _gate_type(a: int, b: int) -> StargateType:
    _, _, _, const_a, region_a = SAMPLE_SYSTEMS[a]
    _, _, _, const_b, region_b = SAMPLE_SYSTEMS[b]
    return StargateType.classify(const_a, region_a, const_b, region_b)


def _gate_connections() -> list[Connection]:
    connections = []
    for a, b in SAMPLE_GATES:
        kind = _gate_type(a, b)
        connections.append(Connection(a, b, Stargate(kind)))
        connections.append(Connection(b, a, Stargate(kind)))
    return connections


@pytest.fixture
def sample_systems() -> dict[str, System]:
    """Sample systems keyed by name."""
    return {SAMPLE_SYSTEMS[sid][0]: _system(sid) for sid in SAMPLE_SYSTEMS}


@pytest.fixture
def sample_universe() -> Universe:
    """The seven-system sample universe described above."""
    return Universe.build([_system(sid) for sid in SAMPLE_SYSTEMS], _gate_connections())


@pytest.fixture
def line_universe() -> Universe:
    """
    Three high-sec systems in a one-way line.

        A (1) -> B (2) -> C (3)
    """
    a = System(1, "A", Coordinate(0.0, 0.0, 0.0), 1.0)
    b = System(2, "B", Coordinate(1.0, 0.0, 0.0), 1.0)
    c = System(3, "C", Coordinate(2.0, 0.0, 0.0), 1.0)
    return (
        UniverseBuilder()
        .systems([a, b, c])
        .connection(Connection(1, 2, Stargate(StargateType.LOCAL)))
        .connection(Connection(2, 3, Stargate(StargateType.LOCAL)))
        .build()
    )


# =============================================================================
# Data Source Fixtures
# =============================================================================


@pytest.fixture
def sample_cache_data() -> dict:
    """The sample universe in universe_cache.json layout."""
    systems = {}
    stargates = {}
    gate_id = 50000001
    gates_by_system: dict[int, list[int]] = {sid: [] for sid in SAMPLE_SYSTEMS}
    for a, b in SAMPLE_GATES:
        for src, dst in ((a, b), (b, a)):
            stargates[str(gate_id)] = {"destination_system_id": dst}
            gates_by_system[src].append(gate_id)
            gate_id += 1

    constellations = {}
    for sid, (name, security, (x, y, z), const_id, region_id) in SAMPLE_SYSTEMS.items():
        systems[str(sid)] = {
            "name": name,
            "security": security,
            "constellation_id": const_id,
            "position": {"x": x * LY, "y": y * LY, "z": z * LY},
            "stargates": gates_by_system[sid],
        }
        constellations[str(const_id)] = {"name": f"C-{const_id}", "region_id": region_id}

    return {
        "generated": "2026-01-17T00:00:00Z",
        "systems": systems,
        "stargates": stargates,
        "constellations": constellations,
    }


@pytest.fixture
def sample_cache(tmp_path: Path, sample_cache_data: dict) -> Path:
    """Write the sample cache to a temporary file."""
    cache_path = tmp_path / "universe_cache.json"
    cache_path.write_text(json.dumps(sample_cache_data))
    return cache_path


def create_sde_tables(conn: sqlite3.Connection) -> None:
    """Create the two Fuzzwork SDE map tables the loader reads."""
    conn.executescript(
        """
        CREATE TABLE mapSolarSystems (
            regionID INTEGER,
            constellationID INTEGER,
            solarSystemID INTEGER PRIMARY KEY,
            solarSystemName TEXT,
            x REAL,
            y REAL,
            z REAL,
            security REAL
        );
        CREATE TABLE mapSolarSystemJumps (
            fromRegionID INTEGER,
            fromConstellationID INTEGER,
            fromSolarSystemID INTEGER,
            toSolarSystemID INTEGER,
            toConstellationID INTEGER,
            toRegionID INTEGER
        );
        """
    )


@pytest.fixture
def sample_sde(tmp_path: Path) -> Path:
    """
    The sample universe as a Fuzzwork SDE SQLite file.

    Also holds an abyssal-range system (id 32000001) and a stray jump into
    wormhole space, both of which the loader must skip.
    """
    db_path = tmp_path / "sqlite-latest.sqlite"
    conn = sqlite3.connect(db_path)
    create_sde_tables(conn)

    for sid, (name, security, (x, y, z), const_id, region_id) in SAMPLE_SYSTEMS.items():
        conn.execute(
            "INSERT INTO mapSolarSystems VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (region_id, const_id, sid, name, x * LY, y * LY, z * LY, security),
        )
    conn.execute(
        "INSERT INTO mapSolarSystems VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
        (12000001, 22000001, 32000001, "AD001", 0.0, 0.0, 0.0, -1.0),
    )

    for a, b in SAMPLE_GATES:
        for src, dst in ((a, b), (b, a)):
            _, _, _, src_const, src_region = SAMPLE_SYSTEMS[src]
            _, _, _, dst_const, dst_region = SAMPLE_SYSTEMS[dst]
            conn.execute(
                "INSERT INTO mapSolarSystemJumps VALUES (?, ?, ?, ?, ?, ?)",
                (src_region, src_const, src, dst, dst_const, dst_region),
            )
    conn.execute(
        "INSERT INTO mapSolarSystemJumps VALUES (?, ?, ?, ?, ?, ?)",
        (10000002, 20000020, JITA, J100001, 21000001, 11000001),
    )

    conn.commit()
    conn.close()
    return db_path


# =============================================================================
# State Reset
# =============================================================================


@pytest.fixture(autouse=True)
def reset_all_singletons():
    """
    Reset module-level state before and after each test.

    Settings are reset first since loggers read their level from them.
    """

    def do_reset():
        from neweden.core.config import reset_settings
        from neweden.core.logging import reset_logging

        reset_settings()
        reset_logging()

    do_reset()
    yield
    do_reset()
