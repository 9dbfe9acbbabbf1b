"""
Value types for New Eden navigation.

Systems, coordinates, security classification and the connection variants
that make up the edges of the universe graph. Connection types form a
tagged union (Stargate | Bridge | Wormhole); code that needs per-type
behavior matches on the variant rather than relying on inheritance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from .units import Lightyears

SystemId = int

# Solar system id ranges
KSPACE_UPPER_BOUND = 31_000_000
WSPACE_UPPER_BOUND = 32_000_000

# Security boundaries, applied after rounding to one decimal
HIGHSEC_MIN = Decimal("0.5")
LOWSEC_MIN = Decimal("0.0")

_TENTH = Decimal("0.1")


class UnknownSystemClassError(Exception):
    """Raised when a system id falls outside every known id range."""

    def __init__(self, system_id: int):
        self.system_id = system_id
        super().__init__(
            f"System id {system_id} is outside known space (< {KSPACE_UPPER_BOUND}) "
            f"and wormhole space (< {WSPACE_UPPER_BOUND})"
        )


# =============================================================================
# Classification
# =============================================================================


class SecurityClass(str, Enum):
    """Three-bucket security classification."""

    HIGHSEC = "highsec"
    LOWSEC = "lowsec"
    NULLSEC = "nullsec"

    @classmethod
    def from_rating(cls, rating: float) -> SecurityClass:
        """
        Classify a security rating.

        The rating is rounded to the nearest tenth (half away from zero) before
        bucketing, the way the game displays it: 0.45 shows as 0.5 and is
        high-sec, -0.04 shows as -0.0 and is low-sec.

        Args:
            rating: Raw security status, conventionally -1.0 to 1.0

        Returns:
            NULLSEC below 0.0, LOWSEC below 0.5, HIGHSEC otherwise
        """
        rounded = Decimal(repr(float(rating))).quantize(_TENTH, rounding=ROUND_HALF_UP)
        if rounded < LOWSEC_MIN:
            return cls.NULLSEC
        if rounded < HIGHSEC_MIN:
            return cls.LOWSEC
        return cls.HIGHSEC


class SystemClass(str, Enum):
    """Known space versus wormhole space."""

    KSPACE = "kspace"
    WSPACE = "wspace"

    @classmethod
    def from_id(cls, system_id: SystemId) -> SystemClass:
        """
        Classify a system by its id range.

        Raises:
            UnknownSystemClassError: If the id is in neither range
        """
        if 0 <= system_id < KSPACE_UPPER_BOUND:
            return cls.KSPACE
        if KSPACE_UPPER_BOUND <= system_id < WSPACE_UPPER_BOUND:
            return cls.WSPACE
        raise UnknownSystemClassError(system_id)


# =============================================================================
# Systems
# =============================================================================


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Position of a system in meters."""

    x: float
    y: float
    z: float

    def distance_squared(self, other: Coordinate) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def distance(self, other: Coordinate) -> float:
        return math.sqrt(self.distance_squared(other))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True, slots=True)
class System:
    """
    A solar system.

    Identity is the system id alone: two System values with the same id
    compare equal and hash alike whatever their other fields hold.

    Attributes:
        id: EVE solar system ID
        name: System name ("Jita")
        coordinate: Position in meters
        security: Raw security status
    """

    id: SystemId
    name: str = field(compare=False)
    coordinate: Coordinate = field(compare=False)
    security: float = field(compare=False)

    @property
    def security_class(self) -> SecurityClass:
        return SecurityClass.from_rating(self.security)

    @property
    def system_class(self) -> SystemClass:
        return SystemClass.from_id(self.id)


# =============================================================================
# Connection variants
# =============================================================================


class StargateType(str, Enum):
    """Stargate scope, derived from constellation and region membership."""

    LOCAL = "local"
    CONSTELLATION = "constellation"
    REGIONAL = "regional"

    @classmethod
    def classify(
        cls,
        from_constellation: int | None,
        from_region: int | None,
        to_constellation: int | None,
        to_region: int | None,
    ) -> StargateType:
        """
        Derive the stargate type from both endpoints' membership.

        Returns:
            REGIONAL if the regions differ, CONSTELLATION if only the
            constellations differ, LOCAL otherwise
        """
        if from_region != to_region:
            return cls.REGIONAL
        if from_constellation != to_constellation:
            return cls.CONSTELLATION
        return cls.LOCAL


class WormholeType(str, Enum):
    """Wormhole mass class. Informational only; traversal is not restricted."""

    VERY_LARGE = "very_large"
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"


class BridgeArchetype(str, Enum):
    TITAN = "titan"
    BLACK_OPS = "black_ops"


# Base bridge range in lightyears before skills
BRIDGE_BASE_RANGE: dict[BridgeArchetype, float] = {
    BridgeArchetype.TITAN: 3.0,
    BridgeArchetype.BLACK_OPS: 4.0,
}

# Range bonus per level of Jump Drive Calibration
CALIBRATION_BONUS_PER_LEVEL = 0.2


@dataclass(frozen=True, slots=True)
class BridgeType:
    """
    A jump bridge from a ship archetype and the pilot's skill levels.

    Attributes:
        archetype: Titan or Black Ops
        calibration: Jump Drive Calibration level (0-5)
        fuel_conservation: Jump Fuel Conservation level (0-5)
    """

    archetype: BridgeArchetype
    calibration: int = 0
    fuel_conservation: int = 0

    def range(self) -> Lightyears:
        """
        Effective bridge range.

        range = base + base * 0.2 * calibration

        Note:
            fuel_conservation is carried but does not change the range. It
            most likely belongs in a fuel cost calculation that does not
            exist yet.
        """
        base = BRIDGE_BASE_RANGE[self.archetype]
        return Lightyears(base + base * CALIBRATION_BONUS_PER_LEVEL * self.calibration)


@dataclass(frozen=True, slots=True)
class Stargate:
    kind: StargateType


@dataclass(frozen=True, slots=True)
class Bridge:
    kind: BridgeType


@dataclass(frozen=True, slots=True)
class Wormhole:
    kind: WormholeType


ConnectionType = Stargate | Bridge | Wormhole


def describe_connection_type(connection_type: ConnectionType) -> str:
    """Short label for a connection type ("stargate/local", "wormhole/small")."""
    match connection_type:
        case Stargate(kind=kind):
            return f"stargate/{kind.value}"
        case Bridge(kind=kind):
            return f"bridge/{kind.archetype.value}"
        case Wormhole(kind=kind):
            return f"wormhole/{kind.value}"
    raise TypeError(f"Not a connection type: {connection_type!r}")


@dataclass(frozen=True, slots=True)
class Connection:
    """A directed edge between two systems."""

    from_id: SystemId
    to_id: SystemId
    type: ConnectionType
