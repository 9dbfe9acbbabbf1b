"""
Universe Builders - fluent construction of universes and overlays.

UniverseBuilder collects systems and connections for a base Universe.
ExtendedUniverseBuilder collects extra connections over an existing
Navigable, including bridges synthesized from a range query.

Example:
    universe = (
        UniverseBuilder()
        .system(System(1, "A", Coordinate(0.0, 0.0, 0.0), 1.0))
        .system(System(2, "B", Coordinate(0.0, 0.0, 0.0), 0.5))
        .connection(Connection(1, 2, Stargate(StargateType.LOCAL)))
        .build()
    )
    extended = (
        ExtendedUniverseBuilder(universe)
        .bridge(1, BridgeType(BridgeArchetype.TITAN, calibration=5))
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Iterable

from neweden.core.logging import get_logger

from .graph import ExtendedUniverse, Navigable, Universe
from .types import Bridge, BridgeType, Connection, System, SystemId

logger = get_logger(__name__)


class UniverseBuildError(Exception):
    """Error building or loading a universe."""

    pass


class UniverseBuilder:
    """Accumulates systems and connections for Universe.build()."""

    def __init__(self) -> None:
        self._systems: list[System] = []
        self._connections: list[Connection] = []

    def system(self, system: System) -> UniverseBuilder:
        self._systems.append(system)
        return self

    def systems(self, systems: Iterable[System]) -> UniverseBuilder:
        self._systems.extend(systems)
        return self

    def connection(self, connection: Connection) -> UniverseBuilder:
        self._connections.append(connection)
        return self

    def connections(self, connections: Iterable[Connection]) -> UniverseBuilder:
        self._connections.extend(connections)
        return self

    def build(self) -> Universe:
        return Universe.build(self._systems, self._connections)


class ExtendedUniverseBuilder:
    """
    Accumulates additional connections for an ExtendedUniverse.

    Connections are only ever added to the overlay being built; the
    wrapped universe is left untouched.
    """

    def __init__(self, universe: Navigable):
        self._universe = universe
        self._connections: list[Connection] = []

    def connection(self, connection: Connection) -> ExtendedUniverseBuilder:
        self._connections.append(connection)
        return self

    def connections(self, connections: Iterable[Connection]) -> ExtendedUniverseBuilder:
        self._connections.extend(connections)
        return self

    def bridge(self, location: SystemId, bridge_type: BridgeType) -> ExtendedUniverseBuilder:
        """
        Add bridge connections from a location to everything in bridge range.

        The range comes from the bridge archetype and calibration skill.
        One directed connection is added per system in range, including the
        location itself. An unknown location adds nothing.

        Args:
            location: System the bridging ship sits in
            bridge_type: Archetype and skill levels

        Returns:
            This builder
        """
        ly = bridge_type.range()
        ends = self._universe.get_systems_in_radius(location, ly.to_meters()) or []
        for end in ends:
            self._connections.append(Connection(location, end.id, Bridge(bridge_type)))

        logger.debug(
            "Bridge from %s (%s, %.1f ly): %d destinations",
            location,
            bridge_type.archetype.value,
            ly.value,
            len(ends),
        )
        return self

    def build(self) -> ExtendedUniverse:
        return ExtendedUniverse(self._universe, self._connections)
