"""
Helpers shared by the built-in reductions.
"""

from typing import Iterable, List

from ..core.frame import Frame, Op, Term
from ..core.ids import UUID


def state_ops(frames: Iterable[Frame]) -> List[Op]:
    """All state-carrying ops of frames, in frame order."""
    return [op for frm in frames for op in frm if op.is_state()]


def compose_state(seed: Frame, ops: List[Op], events: Iterable[UUID]) -> Frame:
    """
    Build the converged frame for the seed's object.

    The header is stamped with the greatest event seen; ops are re-tagged
    as reduced ops of the same type and object.
    """
    head = seed.peek()
    latest = max(events, default=head.event)
    header = Op(ty=head.ty, object=head.object, event=latest, location=UUID.zero(), term=Term.HEADER)
    body = [
        Op(ty=head.ty, object=head.object, event=op.event, location=op.location, atoms=op.atoms, term=Term.REDUCED)
        for op in ops
    ]
    return Frame.compose([header] + body)
