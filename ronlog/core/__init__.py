"""
Core log primitives.

This module provides the building blocks the batch pipeline works on:
- UUID: Compact identifiers for types, objects, events and locations
- Atoms: Literal scanners and encoding
- Frame/Op: One log record and its operations
"""

from .ids import UUID, Scheme
from .atoms import Atom, format_atom, parse_atom, scan_for_float, scan_for_integer, scan_for_string, scan_uuid
from .frame import Frame, Op, Term
from .errors import RonError, ParseError, IndexingError, ReducerError

__all__ = [
    "UUID",
    "Scheme",
    "Atom",
    "format_atom",
    "parse_atom",
    "scan_for_float",
    "scan_for_integer",
    "scan_for_string",
    "scan_uuid",
    "Frame",
    "Op",
    "Term",
    "RonError",
    "ParseError",
    "IndexingError",
    "ReducerError",
]
