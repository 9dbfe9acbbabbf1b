"""
Navigation Service Router.

Name-based front end to PathBuilder shared by the CLI commands. Resolves
system names, layers wormholes and bridges over the base universe for
the duration of one request and raises typed errors instead of
returning None.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...universe.builder import ExtendedUniverseBuilder
from ...universe.types import BridgeType, Connection, System, SystemClass
from .errors import NavigationError, RouteNotFoundError, SystemNotFoundError
from .path import Path, PathBuilder
from .weights import Preference

if TYPE_CHECKING:
    from ...universe.graph import Navigable, Universe


@dataclass
class NavigationService:
    """
    Unified navigation service for route calculations.

    Example:
        service = NavigationService(universe)
        path = service.calculate_route(["Jita", "Amarr"], Preference.HIGHSEC)
    """

    universe: Universe

    def resolve_system(self, name: str) -> System:
        """
        Resolve a system name (case-insensitive).

        Raises:
            SystemNotFoundError: If no system has that name
        """
        system = self.universe.resolve_name(name)
        if system is None:
            raise SystemNotFoundError(name)
        return system

    def resolve_systems(self, names: Iterable[str]) -> tuple[list[System], list[str]]:
        """
        Resolve several system names.

        Returns:
            Tuple of (resolved_systems, unresolved_names)
        """
        resolved: list[System] = []
        unresolved: list[str] = []
        for name in names:
            system = self.universe.resolve_name(name)
            if system is not None:
                resolved.append(system)
            else:
                unresolved.append(name)
        return resolved, unresolved

    def extend(
        self,
        connections: Iterable[Connection] = (),
        bridges: Iterable[tuple[System, BridgeType]] = (),
    ) -> Navigable:
        """
        Overlay extra connections and bridges on the base universe.

        Returns the base universe itself when there is nothing to add.
        """
        connections = list(connections)
        bridges = list(bridges)
        if not connections and not bridges:
            return self.universe

        builder = ExtendedUniverseBuilder(self.universe).connections(connections)
        for location, bridge_type in bridges:
            builder.bridge(location.id, bridge_type)
        return builder.build()

    def calculate_route(
        self,
        waypoint_names: Sequence[str],
        preference: Preference = Preference.SHORTEST,
        connections: Iterable[Connection] = (),
        bridges: Iterable[tuple[System, BridgeType]] = (),
    ) -> Path:
        """
        Calculate a route through named waypoints.

        Args:
            waypoint_names: At least two system names, in travel order
            preference: Routing preference
            connections: Extra connections (e.g. wormholes) for this route only
            bridges: (location, bridge type) pairs to synthesize bridges from

        Returns:
            Path through all waypoints

        Raises:
            NavigationError: Fewer than two waypoints
            SystemNotFoundError: Naming every waypoint that does not resolve
            RouteNotFoundError: No route connects the waypoints
        """
        if len(waypoint_names) < 2:
            raise NavigationError("A route needs at least two waypoints")

        waypoints, unresolved = self.resolve_systems(waypoint_names)
        if unresolved:
            raise SystemNotFoundError(*unresolved)
        universe = self.extend(connections, bridges)

        path = PathBuilder(universe).waypoints(waypoints).prefer(preference).build()
        if path is None:
            reason = None
            if any(system.system_class is SystemClass.WSPACE for system in waypoints):
                reason = "wormhole space systems have no permanent stargate connections"
            raise RouteNotFoundError([system.name for system in waypoints], reason)
        return path

