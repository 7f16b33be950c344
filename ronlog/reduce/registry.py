"""
Reducer registry: type identifier -> reduction function.

A reduction folds the history of one object into its seed (the most
recent frame) and returns the converged frame. Reductions must be pure.
"""

from typing import Callable, Dict, List, Optional, Union

from ..core.errors import ReducerError
from ..core.frame import Frame
from ..core.ids import UUID

# Reducer signature: (seed, history) -> merged frame or None
ReduceFn = Callable[[Frame, List[Frame]], Optional[Frame]]


class ReducerRegistry:
    """
    Registry of reductions keyed by replicated data type.

    Usage:
        registry = ReducerRegistry()
        registry.register("lww", reduce_lww)
        fn = registry.get(UUID.parse("lww"))
    """

    def __init__(self) -> None:
        self._reducers: Dict[UUID, ReduceFn] = {}

    def register(self, ty: Union[str, UUID], fn: ReduceFn) -> None:
        """
        Register a reduction.

        Args:
            ty: Type identifier, as UUID or its compact text
            fn: Pure function (seed, history) -> Optional[Frame]

        Raises:
            ReducerError: If fn is not callable
        """
        if not callable(fn):
            raise ReducerError(f"Reducer for {ty} is not callable")
        key = ty if isinstance(ty, UUID) else UUID.parse(ty)
        self._reducers[key] = fn

    def get(self, ty: UUID) -> Optional[ReduceFn]:
        return self._reducers.get(ty)

    def __contains__(self, ty: object) -> bool:
        return ty in self._reducers

    def types(self) -> List[UUID]:
        return sorted(self._reducers)


def default_registry() -> ReducerRegistry:
    """Registry with the built-in lww and set reductions."""
    from .lww import reduce_lww
    from .orset import reduce_set

    registry = ReducerRegistry()
    registry.register("lww", reduce_lww)
    registry.register("set", reduce_set)
    return registry
