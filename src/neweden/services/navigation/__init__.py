"""
Navigation Service.

Multi-waypoint pathfinding over any Navigable universe, routing
preferences, and result construction utilities.

Usage:
    from neweden.services.navigation import PathBuilder, Preference

    path = PathBuilder(universe).waypoint(jita).waypoint(amarr).build()
"""

from __future__ import annotations

__all__ = [
    # Pathfinding
    "PathBuilder",
    "Path",
    "PathElement",
    "WaypointElement",
    "SystemElement",
    "ConnectionElement",
    # Service
    "NavigationService",
    # Errors
    "NavigationError",
    "RouteNotFoundError",
    "SystemNotFoundError",
    # Weights
    "Preference",
    "WEIGHT_NORMAL",
    "WEIGHT_PENALTY",
    # Result utilities
    "SecuritySummary",
    "compute_security_summary",
    "generate_warnings",
    "get_threat_level",
    "path_to_elements",
]


def __getattr__(name: str):
    """Lazy import to avoid circular dependencies."""
    if name in (
        "PathBuilder",
        "Path",
        "PathElement",
        "WaypointElement",
        "SystemElement",
        "ConnectionElement",
    ):
        from . import path

        return getattr(path, name)

    if name == "NavigationService":
        from . import router

        return getattr(router, name)

    if name in ("NavigationError", "RouteNotFoundError", "SystemNotFoundError"):
        from . import errors

        return getattr(errors, name)

    if name in ("Preference", "WEIGHT_NORMAL", "WEIGHT_PENALTY"):
        from . import weights

        return getattr(weights, name)

    if name in (
        "SecuritySummary",
        "compute_security_summary",
        "generate_warnings",
        "get_threat_level",
        "path_to_elements",
    ):
        from . import result_builder

        return getattr(result_builder, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
