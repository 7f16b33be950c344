"""
Batch of frames.

A Batch carves encoded log text into frames, indexes the frames by the
object they target and reduces each object's frames to its converged
state.

Pipeline (consume-once per batch):
    text -> scan -> Batch (frames) -> index -> reduce_all -> output sink
"""

import logging
from typing import BinaryIO, Dict, Iterator, List, Optional, Tuple, Union

from .core.errors import IndexingError
from .core.frame import END_OF_STREAM, Frame
from .core.ids import UUID
from .logging_config import get_logger
from .reduce.registry import ReducerRegistry, default_registry
from .scan import Span, scan

# object -> (type, frames in first-seen order)
Index = Dict[UUID, Tuple[UUID, List[Frame]]]

# Diagnostic sink: any logger or logger adapter
Diagnostics = Union[logging.Logger, logging.LoggerAdapter]


class _Buffer:
    """
    Remaining batch text, i.e. text[offset:].

    Positions taken and returned by the methods below are relative to the
    start of the remaining text.
    """

    owned = False

    def __init__(self, text: str) -> None:
        self.text = text
        self.offset = 0

    def __len__(self) -> int:
        return len(self.text) - self.offset

    def at_end(self) -> bool:
        return len(self) <= 0 or self.text.startswith(END_OF_STREAM, self.offset)

    def slice(self, start: int, end: int) -> str:
        return self.text[self.offset + start:self.offset + end]

    def scan(self, start: int) -> Optional[Span]:
        span = scan(self.text, self.offset + start)
        if span is None:
            return None
        return span[0] - self.offset, span[1] - self.offset

    def drop_prefix(self, n: int) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        self.text = ""
        self.offset = 0


class _View(_Buffer):
    """Borrowed caller text. Dropping a prefix only moves the offset."""

    def drop_prefix(self, n: int) -> None:
        self.offset += n


class _Owned(_Buffer):
    """Private copy. Dropping a prefix removes it from the copy."""

    owned = True

    def drop_prefix(self, n: int) -> None:
        self.text = self.text[n:]


class Batch:
    """
    Lazy iterator over the frames of encoded log text.

    Usage:
        batch = Batch.parse("*lww#test@0:0! @1:key'value'")
        for frame in batch:
            print(frame.body)

    A batch is consumed once; parse the text again to iterate again.
    """

    def __init__(self, buffer: _Buffer, logger: Optional[Diagnostics] = None) -> None:
        self._buf = buffer
        self._log = logger
        self._next = self._bootstrap()

    @classmethod
    def parse(
        cls,
        text: Union[str, bytes, bytearray],
        owned: bool = False,
        logger: Optional[Diagnostics] = None,
    ) -> "Batch":
        """
        Create a batch from encoded frames.

        Args:
            text: Log text. str is borrowed unless owned is set; bytes are
                decoded (UTF-8) into an owned buffer.
            owned: Keep a private copy of str input
            logger: Diagnostic sink (defaults to this module's logger)

        Returns:
            Batch positioned before the first frame
        """
        if isinstance(text, (bytes, bytearray)):
            buffer: _Buffer = _Owned(bytes(text).decode("utf-8"))
        elif owned:
            buffer = _Owned(text)
        else:
            buffer = _View(text)
        return cls(buffer, logger=logger)

    @property
    def owned(self) -> bool:
        return self._buf.owned

    def _bootstrap(self) -> Optional[Span]:
        span = self._buf.scan(0)
        if span is not None and span[0] == 0:
            # text opens with a frame: the first frame runs up to the second
            span = self._buf.scan(span[1])
        return span

    def __iter__(self) -> Iterator[Frame]:
        return self

    def __next__(self) -> Frame:
        if self._buf.at_end():
            raise StopIteration

        pending, self._next = self._next, None
        end = pending[0] if pending is not None else len(self._buf)
        frame = Frame.parse(self._buf.slice(0, end))

        if pending is None:
            self._buf.clear()
            return frame

        start, stop = pending
        found = self._buf.scan(stop)
        if found is None:
            self._note_tail(stop)
        else:
            self._next = (found[0] - start, found[1] - start)
        self._buf.drop_prefix(start)
        return frame

    def _note_tail(self, stop: int) -> None:
        tail = self._buf.slice(stop, len(self._buf)).strip()
        if tail and not tail.startswith(END_OF_STREAM):
            (self._log or logging.getLogger(__name__)).debug(
                "no complete frame after offset %d, %d characters fold into the final frame",
                stop,
                len(tail),
            )

    def _diag(self, logger: Optional[Diagnostics], obj: UUID) -> Diagnostics:
        if logger is not None:
            return logger
        if self._log is not None:
            return logging.LoggerAdapter(self._log, {"trace_id": str(obj)})
        return get_logger(__name__, trace_id=str(obj))

    def index(self, logger: Optional[Diagnostics] = None) -> Optional[Index]:
        """
        Index all frames by object.

        Consumes the batch. Frames without a parseable header are skipped.

        Args:
            logger: Diagnostic sink (defaults to the batch logger, tagged
                with the object as trace_id)

        Returns:
            Map object -> (type, frames), or None if two frames for one
            object declare different types
        """
        index: Index = {}

        for frm in self:
            op = frm.peek()
            if op is None:
                continue

            ty, frames = index.setdefault(op.object, (op.ty, []))
            if ty != op.ty:
                diag = self._diag(logger, op.object)
                diag.error("mismatched type/object pair: %s vs. %s for object %s", ty, op.ty, op.object)
                return None
            frames.append(frm)

        return index

    def reduce_all(
        self,
        out: BinaryIO,
        registry: Optional[ReducerRegistry] = None,
        logger: Optional[Diagnostics] = None,
    ) -> None:
        """
        Reduce every object of the batch and write the final state frames.

        Objects with a single frame are written verbatim. Objects of a type
        without a registered reducer are written verbatim, seed first, and
        a warning is logged.

        Args:
            out: Binary sink (anything with write(bytes))
            registry: Reductions by type (defaults to lww and set)
            logger: Diagnostic sink

        Raises:
            IndexingError: If indexing fails
            OSError: If writing to out fails
        """
        index = self.index(logger=logger)
        if index is None:
            raise IndexingError("indexing failed")
        if registry is None:
            registry = default_registry()

        for obj, (ty, frames) in index.items():
            if not frames:
                continue
            if len(frames) == 1:
                out.write(frames[0].body.encode("utf-8"))
                continue

            seed = frames.pop()
            reducer = registry.get(ty)
            if reducer is None:
                diag = self._diag(logger, obj)
                diag.warning("unknown type %s", ty)
                out.write(seed.body.encode("utf-8"))
                for frm in frames:
                    out.write(frm.body.encode("utf-8"))
                continue

            state = reducer(seed, frames)
            if state is not None:
                out.write(state.body.encode("utf-8"))


def parse(
    text: Union[str, bytes, bytearray],
    owned: bool = False,
    logger: Optional[Diagnostics] = None,
) -> Batch:
    """Create a batch from encoded frames (see Batch.parse)."""
    return Batch.parse(text, owned=owned, logger=logger)


def index(batch: Batch, logger: Optional[Diagnostics] = None) -> Optional[Index]:
    """Index a batch by object; None on a type conflict (see Batch.index)."""
    return batch.index(logger=logger)


def reduce_all(
    batch: Batch,
    out: BinaryIO,
    registry: Optional[ReducerRegistry] = None,
    logger: Optional[Diagnostics] = None,
) -> None:
    """Reduce a batch into out (see Batch.reduce_all)."""
    batch.reduce_all(out, registry=registry, logger=logger)
