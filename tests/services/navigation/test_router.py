"""
Tests for Navigation Service Router.

Tests the NavigationService name-based front end to PathBuilder.
"""

from __future__ import annotations

import pytest

from neweden.services.navigation.errors import (
    NavigationError,
    RouteNotFoundError,
    SystemNotFoundError,
)
from neweden.services.navigation.path import ConnectionElement
from neweden.services.navigation.router import NavigationService
from neweden.services.navigation.weights import Preference
from neweden.universe import (
    Bridge,
    BridgeArchetype,
    BridgeType,
    Connection,
    ExtendedUniverse,
    Wormhole,
    WormholeType,
)


@pytest.fixture
def service(sample_universe) -> NavigationService:
    return NavigationService(sample_universe)


# =============================================================================
# Name Resolution
# =============================================================================


class TestResolveSystem:
    """Test system name resolution."""

    def test_resolve_case_insensitive(self, service):
        assert service.resolve_system("jItA").name == "Jita"

    def test_resolve_unknown_raises(self, service):
        with pytest.raises(SystemNotFoundError) as exc_info:
            service.resolve_system("Nowhere")

        assert exc_info.value.name == "Nowhere"

    def test_resolve_systems_partitions(self, service):
        resolved, unresolved = service.resolve_systems(["Jita", "Nowhere", "amarr"])

        assert [s.name for s in resolved] == ["Jita", "Amarr"]
        assert unresolved == ["Nowhere"]


# =============================================================================
# Route Calculation
# =============================================================================


class TestCalculateRoute:
    """Test NavigationService.calculate_route()."""

    def test_shortest(self, service):
        path = service.calculate_route(["Jita", "Amarr"])

        assert path.jumps == 2
        assert [s.name for s in path.systems()] == ["Jita", "Niarja", "Amarr"]

    def test_highsec(self, service):
        path = service.calculate_route(["Jita", "Amarr"], Preference.HIGHSEC)

        assert path.jumps == 3

    def test_multiple_waypoints(self, service):
        path = service.calculate_route(["Jita", "Urlen", "HED-GP"])

        assert [s.name for s in path.waypoints] == ["Jita", "Urlen", "HED-GP"]
        assert path.from_system().name == "Jita"
        assert path.to_system().name == "HED-GP"

    def test_too_few_waypoints(self, service):
        with pytest.raises(NavigationError):
            service.calculate_route(["Jita"])

    def test_unknown_waypoint(self, service):
        with pytest.raises(SystemNotFoundError):
            service.calculate_route(["Jita", "Nowhere"])

    def test_every_unknown_waypoint_reported(self, service):
        with pytest.raises(SystemNotFoundError) as exc_info:
            service.calculate_route(["Jitaa", "Urlen", "Amar"])

        assert exc_info.value.names == ("Jitaa", "Amar")

    def test_wormhole_space_unreachable(self, service):
        """J-space has no gates; the error explains why."""
        with pytest.raises(RouteNotFoundError) as exc_info:
            service.calculate_route(["Jita", "J100001"])

        assert exc_info.value.origin == "Jita"
        assert exc_info.value.destination == "J100001"
        assert exc_info.value.waypoints == ("Jita", "J100001")
        assert "wormhole" in exc_info.value.reason

    def test_wormhole_connection(self, service, sample_systems):
        hole = Connection(
            sample_systems["Jita"].id,
            sample_systems["J100001"].id,
            Wormhole(WormholeType.MEDIUM),
        )

        path = service.calculate_route(["Jita", "J100001"], connections=[hole])

        assert path.jumps == 1
        assert list(path)[1] == ConnectionElement(Wormhole(WormholeType.MEDIUM))

    def test_bridge(self, service, sample_systems, sample_universe):
        jita = sample_systems["Jita"]
        bridge_type = BridgeType(BridgeArchetype.TITAN, calibration=5)

        path = service.calculate_route(["Jita", "Amarr"], bridges=[(jita, bridge_type)])

        assert path.jumps == 1
        assert list(path)[1] == ConnectionElement(Bridge(bridge_type))
        assert len(sample_universe.get_connections(jita.id)) == 2


class TestExtend:
    """Test overlay construction for a request."""

    def test_nothing_to_add_returns_base(self, service, sample_universe):
        assert service.extend() is sample_universe

    def test_returns_overlay(self, service, sample_systems):
        jita = sample_systems["Jita"]
        extended = service.extend(bridges=[(jita, BridgeType(BridgeArchetype.BLACK_OPS))])

        assert isinstance(extended, ExtendedUniverse)
        assert jita.id in extended.adjacency
