"""
Literal scanners and atom encoding.

Scanners take the whole text plus a start position (no slicing) and
return the number of characters the literal occupies, or None when no
literal starts there.

Atom sigils:
    =  integer
    ^  float
    >  identifier reference
    '  quoted string
"""

import math
import re
from typing import Optional, Tuple, Union

from .errors import ParseError
from .ids import UUID

Atom = Union[int, float, str, UUID]

ATOM_SIGILS = "=^>'"

# Only ASCII whitespace separates tokens
WHITESPACE = " \t\n\r\f\v"

_INT_RE = re.compile(r"[-+]?\d+")
_FLOAT_RE = re.compile(r"[-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?")
_UUID_TOKEN_RE = re.compile(r"[0-9A-Za-z~_\-+%(\[{)}\]]*")

_UNESCAPE = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "'": "'",
    '"': '"',
    "\\": "\\",
    "/": "/",
}
_ESCAPE = {"\n": "\\n", "\t": "\\t", "\r": "\\r", "\0": "\\0", "'": "\\'", "\\": "\\\\"}


def scan_for_integer(text: str, pos: int = 0) -> Optional[int]:
    m = _INT_RE.match(text, pos)
    return m.end() - pos if m else None


def scan_for_float(text: str, pos: int = 0) -> Optional[int]:
    m = _FLOAT_RE.match(text, pos)
    return m.end() - pos if m else None


def scan_for_string(text: str, pos: int = 0) -> Optional[int]:
    """
    Length of a quoted string body starting just after the opening quote.

    The returned length excludes both quotes. Backslash escapes are
    skipped over. Returns None if the closing quote is missing.
    """
    i = pos
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "'":
            return i - pos
        i += 1
    return None


def scan_uuid(text: str, pos: int = 0) -> int:
    """Length of the compact identifier token at pos (0 if none)."""
    return _UUID_TOKEN_RE.match(text, pos).end() - pos


def unescape(body: str) -> str:
    out = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= n:
            raise ParseError("Dangling escape in string literal")
        esc = body[i + 1]
        if esc == "u":
            code = body[i + 2:i + 6]
            if len(code) != 4:
                raise ParseError(f"Bad unicode escape: \\u{code}")
            try:
                point = int(code, 16)
            except ValueError as e:
                raise ParseError(f"Bad unicode escape: \\u{code}") from e
            i += 6
            if 0xD800 <= point <= 0xDBFF and body.startswith("\\u", i):
                try:
                    low = int(body[i + 2:i + 6], 16)
                except ValueError:
                    low = 0
                if 0xDC00 <= low <= 0xDFFF:
                    point = 0x10000 + ((point - 0xD800) << 10) + (low - 0xDC00)
                    i += 6
            out.append(chr(point))
            continue
        if esc not in _UNESCAPE:
            raise ParseError(f"Unknown escape: \\{esc}")
        out.append(_UNESCAPE[esc])
        i += 2
    return "".join(out)


def _escape_char(ch: str) -> str:
    if ch in _ESCAPE:
        return _ESCAPE[ch]
    # lone surrogates have no UTF-8 encoding
    if 0xD800 <= ord(ch) <= 0xDFFF:
        return f"\\u{ord(ch):04x}"
    return ch


def escape(value: str) -> str:
    return "".join(_escape_char(ch) for ch in value)


def parse_atom(text: str, pos: int, context: Optional[UUID] = None) -> Tuple[Atom, int]:
    """
    Parse one atom whose sigil sits at text[pos].

    Returns:
        (value, position just past the atom)

    Raises:
        ParseError: If the sigil is not followed by a valid literal
    """
    sigil = text[pos]
    start = pos + 1

    if sigil == "=":
        n = scan_for_integer(text, start)
        if n is None:
            raise ParseError(f"Expected integer at {start}")
        return int(text[start:start + n]), start + n

    if sigil == "^":
        n = scan_for_float(text, start)
        if n is None:
            raise ParseError(f"Expected float at {start}")
        return float(text[start:start + n]), start + n

    if sigil == ">":
        n = scan_uuid(text, start)
        return UUID.parse(text[start:start + n], context), start + n

    if sigil == "'":
        n = scan_for_string(text, start)
        if n is None:
            raise ParseError(f"Unterminated string at {start}")
        return unescape(text[start:start + n]), start + n + 1

    raise ParseError(f"Not an atom sigil: {sigil!r}")


def format_atom(value: Atom) -> str:
    if isinstance(value, UUID):
        return f">{value}"
    if isinstance(value, bool):
        raise ValueError("Booleans have no atom encoding")
    if isinstance(value, int):
        return f"={value}"
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Float atom must be finite: {value}")
        return f"^{value!r}"
    if isinstance(value, str):
        return f"'{escape(value)}'"
    raise ValueError(f"Unsupported atom type: {type(value).__name__}")
