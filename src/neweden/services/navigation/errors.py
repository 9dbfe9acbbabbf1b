"""
Route planning errors.

PathBuilder reports an unreachable waypoint pair as None. The
NavigationService turns that, and unresolvable system names, into these
exceptions so the CLI can map each to a JSON error.
"""

from __future__ import annotations

from collections.abc import Sequence


class NavigationError(Exception):
    pass


class RouteNotFoundError(NavigationError):
    """No path connects the requested waypoints."""

    def __init__(self, waypoints: Sequence[str], reason: str | None = None):
        self.waypoints = tuple(waypoints)
        self.reason = reason
        super().__init__(
            f"No route through {' -> '.join(self.waypoints)}" + (f": {reason}" if reason else "")
        )

    @property
    def origin(self) -> str:
        return self.waypoints[0]

    @property
    def destination(self) -> str:
        return self.waypoints[-1]


class SystemNotFoundError(NavigationError):
    """One or more system names did not resolve."""

    def __init__(self, *names: str):
        self.names = names
        super().__init__(f"Unknown system(s): {', '.join(names)}")

    @property
    def name(self) -> str:
        return self.names[0]
