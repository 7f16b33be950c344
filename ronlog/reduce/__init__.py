"""
Conflict-free reductions.

- ReducerRegistry: type identifier -> reduction
- reduce_lww: last-writer-wins object
- reduce_set: add/remove set
"""

from .registry import ReduceFn, ReducerRegistry, default_registry
from .lww import reduce_lww
from .orset import reduce_set

__all__ = [
    "ReduceFn",
    "ReducerRegistry",
    "default_registry",
    "reduce_lww",
    "reduce_set",
]
