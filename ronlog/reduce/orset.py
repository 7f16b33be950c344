"""
Observed-remove set.

An op with atoms adds an element stamped with its event. An op without
atoms whose location is non-zero is a tombstone removing the element
whose event equals that location.
"""

from typing import Dict, List, Optional

from ..core.frame import Frame, Op
from ..core.ids import UUID
from .common import compose_state, state_ops


def reduce_set(seed: Frame, history: List[Frame]) -> Optional[Frame]:
    frames = list(history) + [seed]
    adds: Dict[UUID, Op] = {}
    removes: Dict[UUID, Op] = {}

    for op in state_ops(frames):
        if op.atoms:
            adds.setdefault(op.event, op)
        elif not op.location.is_zero():
            removes.setdefault(op.event, op)

    removed = {op.location for op in removes.values()}
    live = [op for ev, op in adds.items() if ev not in removed]
    if not live:
        return None

    ops = sorted(live + list(removes.values()), key=lambda op: op.event, reverse=True)
    events = [op.event for frm in frames for op in frm]
    return compose_state(seed, ops, events)
