"""
Exception types for log parsing and reduction.
"""


class RonError(Exception):
    """Base class for all ronlog errors."""
    pass


class ParseError(RonError, ValueError):
    """Raised when an identifier or literal cannot be parsed."""
    pass


class IndexingError(RonError):
    """Raised when frames for one object disagree on the object type."""
    pass


class ReducerError(RonError):
    """Raised when a reducer registration is invalid."""
    pass
