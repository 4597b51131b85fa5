"""Pool management package.

Provides Pool and PoolRegistry plus the process-wide registry accessors.
"""

from .pool import Pool
from .registry import PoolRegistry, get_registry, initialize

__all__ = [
    "Pool",
    "PoolRegistry",
    "initialize",
    "get_registry",
]
