"""
Universe - immutable graph store for New Eden navigation.

Universe owns the systems, the directed adjacency lists and a kd-tree over
system positions. ExtendedUniverse layers extra connections (wormholes,
bridges) over any Navigable without copying or touching it.

Both implement the Navigable protocol, which is all the pathfinder needs.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np
from scipy.spatial import cKDTree

from neweden.core.logging import get_logger

from .types import Connection, System, SystemId
from .units import Distance, to_meters

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger(__name__)

# Kd-tree candidates are gathered slightly past the radius and then
# confirmed against radius squared.
_CANDIDATE_SLACK = 1.0 + 1e-9

AdjacentMap = Mapping[SystemId, tuple[Connection, ...]]
SystemMap = Mapping[SystemId, System]


@runtime_checkable
class Navigable(Protocol):
    """
    Read-only view of a universe that routes can be computed over.

    Implemented by Universe and ExtendedUniverse. Lookups of unknown ids
    return None rather than raising.
    """

    def get_system(self, system_id: SystemId) -> System | None:
        """Return the system with the given id, or None."""
        ...

    def get_connections(self, system_id: SystemId) -> tuple[Connection, ...] | None:
        """Return outgoing connections in insertion order, or None if there are none."""
        ...

    def get_systems_in_radius(
        self, origin_id: SystemId, radius: Distance | float
    ) -> list[System] | None:
        """Return all systems within radius of origin (origin included), or None."""
        ...


def group_connections(connections: Iterable[Connection]) -> dict[SystemId, tuple[Connection, ...]]:
    """
    Group connections by source system, preserving insertion order.

    Parallel connections between the same pair are kept as distinct edges.
    """
    grouped: dict[SystemId, list[Connection]] = {}
    for connection in connections:
        grouped.setdefault(connection.from_id, []).append(connection)
    return {system_id: tuple(edges) for system_id, edges in grouped.items()}


@dataclass(frozen=True, slots=True, eq=False)
class Universe:
    """
    Static graph of solar systems and their connections.

    Built once with Universe.build() and never mutated afterwards, so a
    single instance can be shared freely between concurrent readers.

    Attributes:
        systems_by_id: Maps system IDs to systems (30000142 -> Jita)
        adjacency: Maps system IDs to outgoing connections
        system_ids: System IDs in kd-tree row order (ascending)
        coordinates: (n, 3) array of positions in meters, same row order
        id_to_row: Maps system IDs to kd-tree rows
        tree: Kd-tree over coordinates, None for an empty universe
        name_lookup: Case-insensitive name to ID ("jita" -> 30000142)
    """

    systems_by_id: SystemMap
    adjacency: AdjacentMap
    system_ids: NDArray[np.int64]
    coordinates: NDArray[np.float64]
    id_to_row: Mapping[SystemId, int]
    tree: cKDTree | None
    name_lookup: Mapping[str, SystemId]

    @classmethod
    def build(
        cls,
        systems: Iterable[System],
        connections: Iterable[Connection],
    ) -> Universe:
        """
        Build a universe from flat system and connection collections.

        Args:
            systems: Systems; on duplicate ids the last one wins
            connections: Directed connections. Endpoints are not validated;
                connections to unknown systems are stored but never routed.

        Returns:
            Universe ready for queries
        """
        by_id: dict[SystemId, System] = {}
        for system in systems:
            by_id[system.id] = system

        adjacency = group_connections(connections)

        ids = sorted(by_id)
        system_ids = np.array(ids, dtype=np.int64)
        coordinates = np.array(
            [by_id[system_id].coordinate.as_tuple() for system_id in ids],
            dtype=np.float64,
        ).reshape(len(ids), 3)
        id_to_row = {system_id: row for row, system_id in enumerate(ids)}
        tree = cKDTree(coordinates) if ids else None
        name_lookup = {by_id[system_id].name.lower(): system_id for system_id in ids}

        logger.debug(
            "Built universe: %d systems, %d connections from %d sources",
            len(by_id),
            sum(len(edges) for edges in adjacency.values()),
            len(adjacency),
        )

        return cls(
            systems_by_id=MappingProxyType(by_id),
            adjacency=MappingProxyType(adjacency),
            system_ids=system_ids,
            coordinates=coordinates,
            id_to_row=MappingProxyType(id_to_row),
            tree=tree,
            name_lookup=MappingProxyType(name_lookup),
        )

    @property
    def system_count(self) -> int:
        return len(self.systems_by_id)

    @property
    def connection_count(self) -> int:
        return sum(len(edges) for edges in self.adjacency.values())

    def systems(self) -> Iterator[System]:
        """Iterate over all systems in ascending id order."""
        for system_id in self.system_ids.tolist():
            yield self.systems_by_id[system_id]

    def get_system(self, system_id: SystemId) -> System | None:
        return self.systems_by_id.get(system_id)

    def resolve_name(self, name: str) -> System | None:
        """
        Resolve a system name (case-insensitive).

        Args:
            name: System name ("jita", "Jita")

        Returns:
            System if found, None otherwise
        """
        system_id = self.name_lookup.get(name.lower())
        if system_id is None:
            return None
        return self.systems_by_id[system_id]

    def get_connections(self, system_id: SystemId) -> tuple[Connection, ...] | None:
        return self.adjacency.get(system_id)

    def get_systems_in_radius(
        self, origin_id: SystemId, radius: Distance | float
    ) -> list[System] | None:
        """
        Find all systems within a straight-line radius of a system.

        Args:
            origin_id: System to measure from
            radius: Distance unit, or a bare number of meters

        Returns:
            Systems with distance <= radius, origin included, in ascending
            id order. None if the origin is unknown.
        """
        row = self.id_to_row.get(origin_id)
        if row is None or self.tree is None:
            return None

        limit = to_meters(radius)
        if limit < 0:
            return []

        origin = self.coordinates[row]
        candidates = np.array(
            sorted(self.tree.query_ball_point(origin, limit * _CANDIDATE_SLACK)),
            dtype=np.intp,
        )
        if candidates.size == 0:
            return []

        deltas = self.coordinates[candidates] - origin
        distance_sq = np.einsum("ij,ij->i", deltas, deltas)
        rows = candidates[distance_sq <= limit * limit]

        return [self.systems_by_id[system_id] for system_id in self.system_ids[rows].tolist()]

    def extend(self, connections: Iterable[Connection]) -> ExtendedUniverse:
        """Wrap this universe in an overlay with additional connections."""
        return ExtendedUniverse(self, connections)


class ExtendedUniverse:
    """
    Overlay adding connections on top of another Navigable.

    The overlay holds its base by reference and must not outlive it. It
    never copies or modifies the base; it only keeps its own adjacency map
    for the extra connections. Systems and range queries come from the base.

    Overlays nest: the base may itself be an ExtendedUniverse, in which
    case connections union through every layer.

    Example:
        extended = universe.extend([
            Connection(rancer_id, jark_id, Wormhole(WormholeType.VERY_LARGE)),
        ])
        path = PathBuilder(extended).waypoint(jita).waypoint(camal).build()
    """

    __slots__ = ("_base", "_adjacency")

    def __init__(self, base: Navigable, connections: Iterable[Connection] = ()):
        self._base = base
        self._adjacency: AdjacentMap = MappingProxyType(group_connections(connections))

    @property
    def base(self) -> Navigable:
        return self._base

    @property
    def adjacency(self) -> AdjacentMap:
        """Connections owned by this overlay only."""
        return self._adjacency

    def get_system(self, system_id: SystemId) -> System | None:
        return self._base.get_system(system_id)

    def get_connections(self, system_id: SystemId) -> tuple[Connection, ...] | None:
        """
        Union of base and overlay connections.

        Base connections come first, then this overlay's, which makes the
        order deterministic for route tie-breaking.
        """
        base_edges = self._base.get_connections(system_id)
        own_edges = self._adjacency.get(system_id)
        if base_edges is None:
            return own_edges
        if own_edges is None:
            return base_edges
        return base_edges + own_edges

    def get_systems_in_radius(
        self, origin_id: SystemId, radius: Distance | float
    ) -> list[System] | None:
        return self._base.get_systems_in_radius(origin_id, radius)

    def extend(self, connections: Iterable[Connection]) -> ExtendedUniverse:
        return ExtendedUniverse(self, connections)
