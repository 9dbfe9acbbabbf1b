"""
neweden Commands

CLI command implementations. Each module registers its own subparsers.
"""

from . import navigation

__all__ = ["navigation"]
