"""
Tests for compact identifiers.
"""

import pytest

from ronlog.core.errors import ParseError
from ronlog.core.ids import UUID, Scheme


def test_parse_name():
    """Plain tokens are names with a zero origin."""
    u = UUID.parse("lww")

    assert u.value == "lww"
    assert u.origin == "0"
    assert u.scheme is Scheme.NAME
    assert str(u) == "lww"


def test_equality_and_hash():
    """Equal tokens give equal, hash-equal identifiers."""
    assert UUID.parse("test") == UUID.parse("test")
    assert hash(UUID.parse("test")) == hash(UUID.parse("test"))
    assert UUID.parse("test") != UUID.parse("text")


def test_trailing_zeros_insignificant():
    """Values are left-aligned."""
    assert UUID.parse("1") == UUID.parse("10")
    assert UUID.parse("0") == UUID.zero()
    assert UUID.zero().is_zero()


def test_parse_event_with_origin():
    """A separator splits value and origin."""
    u = UUID.parse("1+alice")

    assert u.value == "1"
    assert u.origin == "alice"
    assert u.scheme is Scheme.EVENT
    assert str(u) == "1+alice"
    assert UUID.parse("1-alice").scheme is Scheme.DERIVED
    assert UUID.parse("1%alice").scheme is Scheme.HASH


def test_ordering():
    """Value decides first, origin second."""
    assert UUID.parse("1") < UUID.parse("2")
    assert UUID.parse("1") < UUID.parse("101")
    assert UUID.parse("1+a") < UUID.parse("1+b")
    assert UUID.parse("A") < UUID.parse("a")
    assert max(UUID.parse(x) for x in ["3", "10", "2"]) == UUID.parse("3")


def test_prefix_compression():
    """Brackets reuse a prefix of the context value."""
    ctx = UUID.parse("1234567+bob")
    u = UUID.parse("(5", context=ctx)

    assert u.value == "12345"
    assert u.origin == "bob"
    assert UUID.parse("[9", context=ctx).value == "123459"


@pytest.mark.parametrize("text", ["", "(5", "12345678901", "1+", "a b", "+x"])
def test_parse_rejects_malformed(text):
    """Malformed tokens raise ParseError (a ValueError)."""
    with pytest.raises(ParseError):
        UUID.parse(text)

    with pytest.raises(ValueError):
        UUID.parse(text)
