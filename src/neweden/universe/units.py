"""
Distance units used by range queries.

All conversions scale by exact integer factors into meters, the unit the
SDE uses for solar system positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real

METERS_PER_KILOMETER = 1_000
METERS_PER_AU = 149_597_870_700
# 9,460,730,472,580.8 km
METERS_PER_LIGHTYEAR = 9_460_730_472_580_800


@dataclass(frozen=True, slots=True)
class Meters:
    value: float

    def to_meters(self) -> Meters:
        return self


@dataclass(frozen=True, slots=True)
class Kilometers:
    value: float

    def to_meters(self) -> Meters:
        return Meters(self.value * METERS_PER_KILOMETER)


@dataclass(frozen=True, slots=True)
class AstronomicalUnits:
    value: float

    def to_meters(self) -> Meters:
        return Meters(self.value * METERS_PER_AU)


@dataclass(frozen=True, slots=True)
class Lightyears:
    value: float

    def to_meters(self) -> Meters:
        return Meters(self.value * METERS_PER_LIGHTYEAR)


Distance = Meters | Kilometers | AstronomicalUnits | Lightyears


def to_meters(distance: Distance | float) -> float:
    """
    Normalize a distance to a plain float in meters.

    Bare numbers, numpy scalars included, are taken to already be meters.
    """
    if isinstance(distance, Real):
        return float(distance)
    return float(distance.to_meters().value)
