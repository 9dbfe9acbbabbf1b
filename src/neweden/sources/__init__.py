"""
Universe data sources.

Loaders that turn an external dataset into a Universe:
- sqlite: Fuzzwork SDE SQLite export
- cache: JSON universe cache
"""

from neweden.sources.cache import load_universe_cache, universe_from_cache_data
from neweden.sources.sqlite import SqliteSource, read_connections, read_systems

__all__ = [
    "SqliteSource",
    "read_systems",
    "read_connections",
    "load_universe_cache",
    "universe_from_cache_data",
]
