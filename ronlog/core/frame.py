"""
Frame model: one record of the operation log.

A frame is raw text holding one or more operations. Each operation is a
header (type, object, event, location) followed by atoms and an optional
terminator. Omitted header fields are inherited from the previous
operation; compressed identifiers decompress against it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .atoms import ATOM_SIGILS, WHITESPACE, Atom, format_atom, parse_atom, scan_uuid
from .errors import ParseError
from .ids import UUID

# Header sigil -> (rank, Op field)
HEADER_FIELDS = {
    "*": (1, "ty"),
    "#": (2, "object"),
    "@": (3, "event"),
    ":": (4, "location"),
}

END_OF_STREAM = "."


class Term(Enum):
    """Operation terminator."""
    HEADER = "!"
    RAW = ";"
    QUERY = "?"
    REDUCED = ","


@dataclass(frozen=True)
class Op:
    """
    Immutable operation.

    Fields:
        ty: Replicated data type (e.g. "lww", "set")
        object: Target object
        event: Event stamp of this operation
        location: Key, reference or zero
        atoms: Payload literals
        term: Terminator
    """
    ty: UUID
    object: UUID
    event: UUID
    location: UUID
    atoms: Tuple[Atom, ...] = ()
    term: Term = Term.RAW

    def is_state(self) -> bool:
        """True for ops carrying object state (not headers or queries)."""
        return self.term not in (Term.HEADER, Term.QUERY)

    def format(self, prev: Optional["Op"] = None) -> str:
        """
        Encode the op, omitting type and object when prev already names them.
        """
        parts = []
        if prev is None or prev.ty != self.ty:
            parts.append(f"*{self.ty}")
        if prev is None or prev.object != self.object:
            parts.append(f"#{self.object}")
        parts.append(f"@{self.event}")
        parts.append(f":{self.location}")
        parts.extend(format_atom(a) for a in self.atoms)
        parts.append(self.term.value)
        return "".join(parts)

    def __str__(self) -> str:
        return self.format()


def _skip_ws(text: str, pos: int) -> int:
    n = len(text)
    while pos < n and text[pos] in WHITESPACE:
        pos += 1
    return pos


def _parse_ops(text: str) -> Iterator[Op]:
    pos = 0
    n = len(text)
    prev: Optional[Op] = None

    while True:
        pos = _skip_ws(text, pos)
        if pos >= n or text[pos] == END_OF_STREAM:
            return

        fields: Dict[str, UUID] = {}
        rank = 0
        while pos < n:
            ch = text[pos]
            if ch in WHITESPACE:
                pos += 1
                continue
            entry = HEADER_FIELDS.get(ch)
            if entry is None or entry[0] <= rank:
                break
            rank, name = entry
            length = scan_uuid(text, pos + 1)
            context = getattr(prev, name) if prev is not None else None
            try:
                fields[name] = UUID.parse(text[pos + 1:pos + 1 + length], context)
            except ParseError:
                return
            pos += 1 + length

        if not fields:
            return
        if prev is None and not {"ty", "object", "event"} <= fields.keys():
            # nothing to inherit the missing fields from
            return

        atoms = []
        term: Optional[Term] = None
        while True:
            pos = _skip_ws(text, pos)
            if pos >= n:
                break
            ch = text[pos]
            if ch in ATOM_SIGILS:
                try:
                    value, pos = parse_atom(text, pos)
                except ParseError:
                    return
                atoms.append(value)
            elif ch in "!;?,":
                term = Term(ch)
                pos += 1
                break
            else:
                break

        if term is None:
            if prev is None:
                term = Term.RAW
            elif prev.term is Term.HEADER:
                term = Term.REDUCED
            else:
                term = prev.term

        op = Op(
            ty=fields.get("ty") or prev.ty,
            object=fields.get("object") or prev.object,
            event=fields.get("event") or prev.event,
            location=fields.get("location") or UUID.zero(),
            atoms=tuple(atoms),
            term=term,
        )
        yield op
        prev = op


@dataclass(frozen=True)
class Frame:
    """
    One frame of the log.

    Fields:
        body: Raw frame text, exactly as carved out of the batch
        ops: Operations parsed from body (empty when body is malformed)
    """
    body: str
    ops: Tuple[Op, ...] = ()

    @staticmethod
    def parse(text: str) -> "Frame":
        return Frame(body=text, ops=tuple(_parse_ops(text)))

    @staticmethod
    def compose(ops: Iterable[Op]) -> "Frame":
        """
        Build a frame from ops, one op per line, in compressed form.
        """
        lines = []
        prev = None
        for op in ops:
            lines.append(op.format(prev))
            prev = op
        body = "\n".join(lines) + "\n" if lines else ""
        return Frame(body=body, ops=tuple(_parse_ops(body)))

    def peek(self) -> Optional[Op]:
        """First operation, or None if the frame has no parseable header."""
        return self.ops[0] if self.ops else None

    def __iter__(self) -> Iterator[Op]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)
