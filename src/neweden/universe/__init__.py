"""
Universe module for EVE Online navigation and graph queries.

This module provides the core data structures for New Eden's stargate
network: value types, the immutable Universe graph store, overlays that
add wormholes and bridges, and fluent builders for both.
"""

from neweden.universe.builder import (
    ExtendedUniverseBuilder,
    UniverseBuildError,
    UniverseBuilder,
)
from neweden.universe.graph import ExtendedUniverse, Navigable, Universe
from neweden.universe.rules import allows_cynos
from neweden.universe.types import (
    Bridge,
    BridgeArchetype,
    BridgeType,
    Connection,
    ConnectionType,
    Coordinate,
    SecurityClass,
    Stargate,
    StargateType,
    System,
    SystemClass,
    SystemId,
    UnknownSystemClassError,
    Wormhole,
    WormholeType,
)
from neweden.universe.units import (
    AstronomicalUnits,
    Kilometers,
    Lightyears,
    Meters,
)

__all__ = [
    # Graph
    "Universe",
    "ExtendedUniverse",
    "Navigable",
    "UniverseBuilder",
    "ExtendedUniverseBuilder",
    "UniverseBuildError",
    # Types
    "SystemId",
    "Coordinate",
    "System",
    "SecurityClass",
    "SystemClass",
    "UnknownSystemClassError",
    "Connection",
    "ConnectionType",
    "Stargate",
    "StargateType",
    "Bridge",
    "BridgeType",
    "BridgeArchetype",
    "Wormhole",
    "WormholeType",
    # Units
    "Meters",
    "Kilometers",
    "AstronomicalUnits",
    "Lightyears",
    # Rules
    "allows_cynos",
]
