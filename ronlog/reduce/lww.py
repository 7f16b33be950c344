"""
Last-writer-wins object.

Each location (key) holds the value written by the op with the greatest
event. Ties keep the op seen first, history before seed.
"""

from typing import Dict, List, Optional

from ..core.frame import Frame, Op
from ..core.ids import UUID
from .common import compose_state, state_ops


def reduce_lww(seed: Frame, history: List[Frame]) -> Optional[Frame]:
    frames = list(history) + [seed]
    winners: Dict[UUID, Op] = {}

    for op in state_ops(frames):
        cur = winners.get(op.location)
        if cur is None or cur.event < op.event:
            winners[op.location] = op

    if not winners:
        return None

    ops = [winners[loc] for loc in sorted(winners)]
    events = [op.event for frm in frames for op in frm]
    return compose_state(seed, ops, events)
