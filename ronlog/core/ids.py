"""
Compact identifiers.

Types, objects, events and locations are all named by a UUID: a value and
an origin of up to ten characters each, plus the scheme describing how
the pair was minted. Values are left-aligned, so trailing zeros carry no
meaning ("1" and "10" name the same identifier).
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Optional

from .errors import ParseError

MAX_LEN = 10

# Prefix brackets reuse this many leading characters of the context value.
PREFIX_LEN = {"(": 4, "[": 5, "{": 6, "}": 7, "]": 8, ")": 9}

_UUID_RE = re.compile(r"([(\[{}\])])?([0-9A-Za-z_~]*)(?:([-+%$])([0-9A-Za-z_~]*))?")


class Scheme(Enum):
    """Separator between value and origin."""
    NAME = "$"
    HASH = "%"
    EVENT = "+"
    DERIVED = "-"


def _normalize(part: str) -> str:
    return part.rstrip("0") or "0"


@total_ordering
@dataclass(frozen=True)
class UUID:
    """
    Immutable compact identifier.

    Fields:
        value: Timestamp or name part (normalized, no trailing zeros)
        origin: Replica or namespace part ("0" when absent)
        scheme: How value and origin relate

    Ordering compares value, then origin, as left-aligned strings. The
    alphabet is ASCII-ordered so plain string comparison is enough.
    """
    value: str = "0"
    origin: str = "0"
    scheme: Scheme = Scheme.NAME

    @staticmethod
    def zero() -> "UUID":
        return UUID()

    @staticmethod
    def parse(text: str, context: Optional["UUID"] = None) -> "UUID":
        """
        Parse a compact identifier token.

        Args:
            text: Token text, e.g. "lww", "1+alice", "(5"
            context: Identifier to decompress prefix brackets against

        Returns:
            Parsed UUID

        Raises:
            ParseError: If the token is empty or malformed
        """
        m = _UUID_RE.fullmatch(text)
        if not m or not text:
            raise ParseError(f"Malformed identifier: {text!r}")

        bracket, value, sep, origin = m.groups()
        scheme = Scheme(sep) if sep else Scheme.NAME

        if bracket:
            if context is None:
                raise ParseError(f"Compressed identifier without context: {text!r}")
            value = context.value.ljust(MAX_LEN, "0")[: PREFIX_LEN[bracket]] + value
            if sep is None:
                origin = context.origin
                scheme = context.scheme
        elif not value:
            raise ParseError(f"Identifier without value: {text!r}")

        if sep is not None and not origin:
            raise ParseError(f"Identifier without origin: {text!r}")

        origin = origin or "0"
        if len(value) > MAX_LEN or len(origin) > MAX_LEN:
            raise ParseError(f"Identifier too long: {text!r}")

        return UUID(value=_normalize(value), origin=_normalize(origin), scheme=scheme)

    def is_zero(self) -> bool:
        return self.value == "0" and self.origin == "0"

    def _key(self):
        return (self.value, self.origin, self.scheme.value)

    def __lt__(self, other: "UUID") -> bool:
        if not isinstance(other, UUID):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        if self.scheme is Scheme.NAME and self.origin == "0":
            return self.value
        return f"{self.value}{self.scheme.value}{self.origin}"
