"""
neweden - New Eden routing kernel

Immutable universe graph with a kd-tree spatial index, non-mutating
overlays for wormholes and jump bridges, and preference-weighted
multi-waypoint pathfinding.

Usage as library:
    from neweden import PathBuilder, Preference
    from neweden.sources import SqliteSource

    universe = SqliteSource(Path("sqlite-latest.sqlite")).load()
    jita = universe.resolve_name("Jita")
    amarr = universe.resolve_name("Amarr")
    path = PathBuilder(universe).waypoint(jita).waypoint(amarr).prefer(Preference.HIGHSEC).build()

Usage as CLI:
    python -m neweden route Jita Amarr --safe --sde sqlite-latest.sqlite
    python -m neweden bridge 1DQ1-A --titan --calibration 5
    python -m neweden range Jita 5

Package structure:
    neweden/
    ├── core/           # Configuration, logging, formatters
    ├── universe/       # Types, units, graph store, overlays, builders
    ├── services/       # Pathfinding and route summaries
    ├── sources/        # SDE SQLite and JSON cache loaders
    └── commands/       # CLI command implementations
"""

__version__ = "0.1.0"

# Re-export commonly used classes for convenience
from .services.navigation.path import Path, PathBuilder
from .services.navigation.weights import Preference
from .universe import (
    ExtendedUniverse,
    ExtendedUniverseBuilder,
    Navigable,
    System,
    Universe,
    UniverseBuilder,
    UniverseBuildError,
)

__all__ = [
    "__version__",
    "Universe",
    "ExtendedUniverse",
    "Navigable",
    "UniverseBuilder",
    "ExtendedUniverseBuilder",
    "UniverseBuildError",
    "System",
    "PathBuilder",
    "Path",
    "Preference",
]
