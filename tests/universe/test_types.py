"""
Tests for universe value types.

Security and system classification, coordinates, identity semantics and
the connection variants.
"""

from __future__ import annotations

import math

import pytest

from neweden.universe import (
    Bridge,
    BridgeArchetype,
    BridgeType,
    Coordinate,
    SecurityClass,
    Stargate,
    StargateType,
    System,
    SystemClass,
    UnknownSystemClassError,
    Wormhole,
    WormholeType,
)
from neweden.universe.types import describe_connection_type

# =============================================================================
# SecurityClass Tests
# =============================================================================


class TestSecurityClass:
    """Test security bucketing after rounding to one decimal."""

    @pytest.mark.parametrize(
        "rating,expected",
        [
            (1.0, SecurityClass.HIGHSEC),
            (0.9459, SecurityClass.HIGHSEC),
            (0.5, SecurityClass.HIGHSEC),
            (0.45, SecurityClass.HIGHSEC),
            (0.44, SecurityClass.LOWSEC),
            (0.4, SecurityClass.LOWSEC),
            (0.05, SecurityClass.LOWSEC),
            (0.0, SecurityClass.LOWSEC),
            (-0.04, SecurityClass.LOWSEC),
            (-0.05, SecurityClass.NULLSEC),
            (-0.37, SecurityClass.NULLSEC),
            (-1.0, SecurityClass.NULLSEC),
        ],
    )
    def test_from_rating(self, rating, expected):
        """Ratings are rounded half away from zero, then bucketed."""
        assert SecurityClass.from_rating(rating) is expected

    def test_deterministic(self):
        """Same rating always gives the same class."""
        results = {SecurityClass.from_rating(0.45) for _ in range(100)}
        assert results == {SecurityClass.HIGHSEC}

    def test_system_property(self):
        """System.security_class derives from its rating."""
        system = System(30003504, "Niarja", Coordinate(0.0, 0.0, 0.0), 0.4)
        assert system.security_class is SecurityClass.LOWSEC


# =============================================================================
# SystemClass Tests
# =============================================================================


class TestSystemClass:
    """Test k-space/w-space classification by id range."""

    def test_kspace(self):
        assert SystemClass.from_id(30000142) is SystemClass.KSPACE
        assert SystemClass.from_id(30999999) is SystemClass.KSPACE

    def test_wspace(self):
        assert SystemClass.from_id(31000000) is SystemClass.WSPACE
        assert SystemClass.from_id(31002604) is SystemClass.WSPACE

    def test_out_of_range_raises(self):
        """Ids outside both ranges are a hard failure."""
        with pytest.raises(UnknownSystemClassError) as exc_info:
            SystemClass.from_id(32000001)

        assert exc_info.value.system_id == 32000001
        assert "32000001" in str(exc_info.value)

    def test_negative_id_raises(self):
        with pytest.raises(UnknownSystemClassError):
            SystemClass.from_id(-1)

    def test_system_property_raises(self):
        """System.system_class propagates the error."""
        system = System(40000000, "Nowhere", Coordinate(0.0, 0.0, 0.0), 0.0)
        with pytest.raises(UnknownSystemClassError):
            _ = system.system_class


# =============================================================================
# Coordinate and System Tests
# =============================================================================


class TestCoordinate:
    """Test coordinate distance helpers."""

    def test_distance(self):
        a = Coordinate(0.0, 0.0, 0.0)
        b = Coordinate(3.0, 4.0, 12.0)

        assert a.distance_squared(b) == 169.0
        assert a.distance(b) == 13.0

    def test_distance_symmetric(self):
        a = Coordinate(1.5, -2.0, 7.0)
        b = Coordinate(-4.0, 3.0, 0.5)

        assert math.isclose(a.distance(b), b.distance(a))

    def test_as_tuple(self):
        assert Coordinate(1.0, 2.0, 3.0).as_tuple() == (1.0, 2.0, 3.0)


class TestSystem:
    """Test system identity."""

    def test_equality_by_id(self):
        """Systems compare equal on id alone."""
        a = System(30000142, "Jita", Coordinate(0.0, 0.0, 0.0), 0.9459)
        b = System(30000142, "Jita (stale)", Coordinate(1.0, 1.0, 1.0), 0.5)

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_ids_not_equal(self):
        a = System(1, "A", Coordinate(0.0, 0.0, 0.0), 1.0)
        b = System(2, "A", Coordinate(0.0, 0.0, 0.0), 1.0)

        assert a != b

    def test_frozen(self):
        system = System(1, "A", Coordinate(0.0, 0.0, 0.0), 1.0)
        with pytest.raises(AttributeError):
            system.name = "B"  # type: ignore[misc]


# =============================================================================
# Connection Type Tests
# =============================================================================


class TestStargateType:
    """Test stargate scope derivation."""

    def test_local(self):
        assert StargateType.classify(1, 10, 1, 10) is StargateType.LOCAL

    def test_constellation(self):
        assert StargateType.classify(1, 10, 2, 10) is StargateType.CONSTELLATION

    def test_regional(self):
        """Region change wins over constellation change."""
        assert StargateType.classify(1, 10, 2, 11) is StargateType.REGIONAL


class TestBridgeType:
    """Test bridge range calculation."""

    def test_titan_base_range(self):
        assert BridgeType(BridgeArchetype.TITAN).range().value == pytest.approx(3.0)

    def test_black_ops_base_range(self):
        assert BridgeType(BridgeArchetype.BLACK_OPS).range().value == pytest.approx(4.0)

    def test_titan_calibration_5(self):
        """Each calibration level adds 20% of base range."""
        bridge = BridgeType(BridgeArchetype.TITAN, calibration=5)
        assert bridge.range().value == pytest.approx(6.0)

    def test_black_ops_calibration_3(self):
        bridge = BridgeType(BridgeArchetype.BLACK_OPS, calibration=3)
        assert bridge.range().value == pytest.approx(6.4)

    def test_fuel_conservation_does_not_affect_range(self):
        plain = BridgeType(BridgeArchetype.TITAN, calibration=4)
        frugal = BridgeType(BridgeArchetype.TITAN, calibration=4, fuel_conservation=5)

        assert plain.range() == frugal.range()


class TestDescribeConnectionType:
    """Test connection type labels."""

    def test_stargate(self):
        assert describe_connection_type(Stargate(StargateType.REGIONAL)) == "stargate/regional"

    def test_bridge(self):
        bridge = Bridge(BridgeType(BridgeArchetype.BLACK_OPS))
        assert describe_connection_type(bridge) == "bridge/black_ops"

    def test_wormhole(self):
        assert describe_connection_type(Wormhole(WormholeType.SMALL)) == "wormhole/small"

    def test_not_a_connection_type(self):
        with pytest.raises(TypeError):
            describe_connection_type("stargate")  # type: ignore[arg-type]
