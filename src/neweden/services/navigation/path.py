"""
Multi-waypoint pathfinding.

PathBuilder runs Dijkstra between each consecutive pair of waypoints over
any Navigable universe and stitches the segments into a Path. A Path is
a finite sequence of elements alternating between systems and the
connections used to jump between them:

    [Waypoint Jita, Connection stargate/local, System Perimeter, ...]

Tie-breaking: a neighbor's cost is only replaced by a strictly cheaper
one, and equal costs leave the heap in discovery order. Among parallel
connections of equal cost the first one returned by get_connections()
wins, which for an ExtendedUniverse means base connections before
overlay connections.
"""

from __future__ import annotations

import heapq
import itertools
import math
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...core.logging import get_logger
from .weights import Cost, Preference

if TYPE_CHECKING:
    from ...universe.graph import Navigable
    from ...universe.types import ConnectionType, System, SystemId

logger = get_logger(__name__)


# =============================================================================
# Path elements
# =============================================================================


@dataclass(frozen=True, slots=True)
class WaypointElement:
    """A system the caller asked the route to pass through."""

    system: System


@dataclass(frozen=True, slots=True)
class SystemElement:
    """An intermediate system picked by the pathfinder."""

    system: System


@dataclass(frozen=True, slots=True)
class ConnectionElement:
    """The connection used to jump into the next system."""

    type: ConnectionType


PathElement = WaypointElement | SystemElement | ConnectionElement


# Internal, id-based steps. Resolved to elements lazily on iteration.
@dataclass(frozen=True, slots=True)
class _WaypointStep:
    system_id: SystemId


@dataclass(frozen=True, slots=True)
class _SystemStep:
    system_id: SystemId


@dataclass(frozen=True, slots=True)
class _ConnectionStep:
    type: ConnectionType


_Step = _WaypointStep | _SystemStep | _ConnectionStep


# =============================================================================
# Path
# =============================================================================


class Path:
    """
    A computed route.

    Iterating a Path yields PathElements in travel order. Iteration can be
    repeated any number of times and always produces the same sequence;
    the search is never re-run.
    """

    __slots__ = ("_universe", "_waypoints", "_steps", "_jumps")

    def __init__(
        self,
        universe: Navigable,
        waypoints: tuple[System, ...],
        steps: tuple[_Step, ...],
        jumps: int,
    ):
        self._universe = universe
        self._waypoints = waypoints
        self._steps = steps
        self._jumps = jumps

    @property
    def jumps(self) -> int:
        """Total number of connections traversed across all segments."""
        return self._jumps

    @property
    def waypoints(self) -> tuple[System, ...]:
        return self._waypoints

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[PathElement]:
        for step in self._steps:
            yield self._resolve(step)

    def __repr__(self) -> str:
        return f"Path(jumps={self._jumps}, elements={len(self._steps)})"

    def from_system(self) -> System | None:
        """First system of the path, or None for an empty path."""
        if not self._steps:
            return None
        return self._resolve_system(self._steps[0])

    def to_system(self) -> System | None:
        """Last system of the path, or None for an empty path."""
        if not self._steps:
            return None
        return self._resolve_system(self._steps[-1])

    def systems(self) -> list[System]:
        """All systems along the path in travel order, connections left out."""
        result = []
        for step in self._steps:
            system = self._resolve_system(step)
            if system is not None:
                result.append(system)
        return result

    def _lookup(self, system_id: SystemId) -> System:
        system = self._universe.get_system(system_id)
        if system is not None:
            return system
        # A lone waypoint that the universe does not know about
        for waypoint in self._waypoints:
            if waypoint.id == system_id:
                return waypoint
        raise KeyError(system_id)

    def _resolve_system(self, step: _Step) -> System | None:
        match step:
            case _WaypointStep(system_id=system_id) | _SystemStep(system_id=system_id):
                return self._lookup(system_id)
        return None

    def _resolve(self, step: _Step) -> PathElement:
        match step:
            case _WaypointStep(system_id=system_id):
                return WaypointElement(self._lookup(system_id))
            case _SystemStep(system_id=system_id):
                return SystemElement(self._lookup(system_id))
            case _ConnectionStep(type=connection_type):
                return ConnectionElement(connection_type)
        raise TypeError(f"Unknown path step: {step!r}")


# =============================================================================
# PathBuilder
# =============================================================================


class PathBuilder:
    """
    Fluent builder for routes through ordered waypoints.

    Example:
        path = (
            PathBuilder(universe)
            .waypoint(jita)
            .waypoint(amarr)
            .prefer(Preference.HIGHSEC)
            .build()
        )
        if path is None:
            ...  # no route
    """

    def __init__(self, universe: Navigable):
        self._universe = universe
        self._waypoints: list[System] = []
        self._preference = Preference.SHORTEST

    def waypoint(self, system: System) -> PathBuilder:
        self._waypoints.append(system)
        return self

    def waypoints(self, systems: Iterable[System]) -> PathBuilder:
        self._waypoints.extend(systems)
        return self

    def prefer(self, preference: Preference) -> PathBuilder:
        self._preference = preference
        return self

    def build(self) -> Path | None:
        """
        Compute the route.

        Returns:
            Path through every waypoint in order. With fewer than two
            waypoints the path is empty. None if any consecutive pair of
            waypoints is unreachable; partial routes are never returned.
        """
        start_time = time.perf_counter()
        waypoints = tuple(self._waypoints)
        steps: list[_Step] = []
        jumps = 0

        for a, b in itertools.pairwise(waypoints):
            segment = self._shortest_segment(a.id, b.id)
            if segment is None:
                logger.debug("No route from %s to %s (%s)", a.name, b.name, self._preference.value)
                return None

            for system_id, via in segment:
                if via is not None:
                    steps.append(_ConnectionStep(via))
                    jumps += 1
                if system_id == a.id or system_id == b.id:
                    step: _Step = _WaypointStep(system_id)
                else:
                    step = _SystemStep(system_id)
                # Segments share their boundary waypoint
                if not steps or steps[-1] != step:
                    steps.append(step)

        if get_settings().debug_timing:
            logger.info(
                "Route over %d waypoints (%s): %d jumps in %.2f ms",
                len(waypoints),
                self._preference.value,
                jumps,
                (time.perf_counter() - start_time) * 1000,
            )

        return Path(self._universe, waypoints, tuple(steps), jumps)

    def _shortest_segment(
        self,
        start: SystemId,
        goal: SystemId,
    ) -> list[tuple[SystemId, ConnectionType | None]] | None:
        """
        Dijkstra from start to goal, stopping once goal is settled.

        Returns:
            [(system_id, connection used to get there), ...] from start to
            goal, the start carrying None. None if goal is unreachable.
        """
        universe = self._universe
        preference = self._preference

        best: dict[SystemId, Cost] = {start: 0}
        came_from: dict[SystemId, tuple[SystemId, ConnectionType]] = {}
        settled: set[SystemId] = set()
        counter = itertools.count()
        heap: list[tuple[Cost, int, SystemId]] = [(0, next(counter), start)]

        while heap:
            cost, _, current = heapq.heappop(heap)
            if current in settled:
                continue
            if current == goal:
                return _unwind(came_from, start, goal)
            settled.add(current)

            for connection in universe.get_connections(current) or ():
                neighbor = connection.to_id
                if neighbor in settled:
                    continue
                step_cost = preference.cost(universe, neighbor)
                if step_cost is None:
                    continue
                total = cost + step_cost
                if total < best.get(neighbor, math.inf):
                    best[neighbor] = total
                    came_from[neighbor] = (current, connection.type)
                    heapq.heappush(heap, (total, next(counter), neighbor))

        return None


def _unwind(
    came_from: dict[SystemId, tuple[SystemId, ConnectionType]],
    start: SystemId,
    goal: SystemId,
) -> list[tuple[SystemId, ConnectionType | None]]:
    segment: list[tuple[SystemId, ConnectionType | None]] = []
    current = goal
    while current != start:
        previous, via = came_from[current]
        segment.append((current, via))
        current = previous
    segment.append((start, None))
    segment.reverse()
    return segment
