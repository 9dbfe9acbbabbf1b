"""
neweden Services.

Higher-level operations built on the universe graph: route planning.
"""

from __future__ import annotations

__all__ = [
    "NavigationService",
    "navigation",
]


def __getattr__(name: str):
    """Lazy import to keep the package import light."""
    if name == "NavigationService":
        from .navigation.router import NavigationService

        return NavigationService
    if name == "navigation":
        from . import navigation

        return navigation

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
