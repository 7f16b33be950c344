"""
Frame boundary scanner.

Finds the span of the next complete frame in log text without parsing
it. The grammar has no length fields, so the scanner walks header
groups and atoms until it meets a frame terminator.
"""

from enum import IntEnum
from typing import Optional, Tuple

from .core.atoms import WHITESPACE, scan_for_float, scan_for_integer, scan_for_string, scan_uuid

Span = Tuple[int, int]


class _Scan(IntEnum):
    INITIAL = 0
    SAW_TYPE = 1
    SAW_OBJECT = 2
    SAW_EVENT = 3
    SAW_LOCATION = 4


_HEADER_STATE = {
    "*": _Scan.SAW_TYPE,
    "#": _Scan.SAW_OBJECT,
    "@": _Scan.SAW_EVENT,
    ":": _Scan.SAW_LOCATION,
}

FRAME_TERMINATORS = "!;"
GROUP_TERMINATORS = ",?"


def scan(text: str, pos: int = 0) -> Optional[Span]:
    """
    Locate the next complete frame at or after pos.

    The span starts where the header group holding the terminator starts
    (whitespace skipped before its first marker included) and ends just
    past the terminator.

    Args:
        text: Log text
        pos: Offset to start scanning from

    Returns:
        Absolute (start, end) span, or None if no frame completes before
        the text ends or an unexpected character is met
    """
    n = len(text)

    while True:
        start = pos
        state = _Scan.INITIAL

        # header group: markers in strictly increasing rank
        while pos < n:
            ch = text[pos]
            nxt = _HEADER_STATE.get(ch)
            if nxt is not None and nxt > state:
                state = nxt
                pos += scan_uuid(text, pos + 1) + 1
            elif ch in WHITESPACE:
                pos += 1
            else:
                break

        if state is _Scan.INITIAL:
            return None

        # atoms
        while True:
            if pos >= n:
                return None
            ch = text[pos]
            if ch == "=":
                pos += (scan_for_integer(text, pos + 1) or 0) + 1
            elif ch == "^":
                pos += (scan_for_float(text, pos + 1) or 0) + 1
            elif ch == ">":
                pos += scan_uuid(text, pos + 1) + 1
            elif ch == "'":
                pos += (scan_for_string(text, pos + 1) or 0) + 2
            elif ch in GROUP_TERMINATORS:
                pos += 1
                break
            elif ch in FRAME_TERMINATORS:
                return start, pos + 1
            elif ch in _HEADER_STATE:
                break
            elif ch in WHITESPACE:
                pos += 1
            else:
                return None
