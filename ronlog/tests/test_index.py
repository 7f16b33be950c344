"""
Tests for per-object indexing.
"""

import logging

from ronlog.batch import Batch, index
from ronlog.core.ids import UUID


def test_index_one_obj():
    """Two frames for one object land under one key."""
    b1 = Batch.parse("*lww#test@0:0! @1:key'value' *lww#test@2:0! @3:number=1")
    idx = b1.index()
    obj = UUID.parse("test")
    ty = UUID.parse("lww")

    assert len(idx) == 1
    assert idx[obj][0] == ty
    assert len(idx[obj][1]) == 2


def test_index_multiple_obj():
    """Frames for different objects get separate keys."""
    b1 = Batch.parse(
        "*lww#test@0:0! @1:key'value' @2:number=1 *rga#text@3:0'T'! "
        "*rga#text@6:3, @4'e' @5'x' @6't' *lww#more:a=1;."
    )
    idx = b1.index()
    obj1 = UUID.parse("test")
    obj2 = UUID.parse("text")

    assert len(idx) == 2
    assert idx[obj1][0] == UUID.parse("lww")
    assert len(idx[obj1][1]) == 1
    assert idx[obj2][0] == UUID.parse("rga")
    assert len(idx[obj2][1]) == 1


def test_index_diff_type():
    """Conflicting types for one object fail the whole index."""
    b1 = Batch.parse("*lww#test@0:0! @1:key'value' *rga#test@2:0! @3:number=1")

    assert b1.index() is None


def test_index_diff_type_reported(caplog):
    """The type conflict names both types and the object."""
    caplog.set_level(logging.ERROR, logger="diag")
    b1 = Batch.parse("*lww#test@0:0! *rga#test@2:0!")

    assert b1.index(logger=logging.getLogger("diag")) is None
    assert "lww vs. rga for object test" in caplog.text


def test_index_empty_batch():
    """The empty batch indexes to an empty map."""
    idx = Batch.parse("").index()

    assert idx == {}


def test_index_skips_frames_without_header():
    """Frames whose first op lacks an event stamp are skipped."""
    idx = index(Batch.parse("*lww#more:a=1;"))

    assert idx == {}


def test_index_keeps_first_seen_order():
    """Frames keep input order within one object."""
    idx = Batch.parse("*lww#a@1:0! *set#b@2:0! *lww#a@3:0!").index()

    events = [str(frm.peek().event) for frm in idx[UUID.parse("a")][1]]
    assert events == ["1", "3"]
    assert idx[UUID.parse("b")][0] == UUID.parse("set")


def test_index_reports_to_parse_logger(caplog):
    """Without a logger argument, diagnostics go to the logger given at parse time."""
    batch = Batch.parse("*lww#test@0:0! *rga#test@1:0!", logger=logging.getLogger("batchdiag"))

    with caplog.at_level(logging.ERROR, logger="batchdiag"):
        assert batch.index() is None

    assert [r.name for r in caplog.records] == ["batchdiag"]
    assert "lww vs. rga for object test" in caplog.text
    assert caplog.records[0].trace_id == "test"


def test_index_function_forwards_logger(caplog):
    """The module-level index passes its logger through."""
    with caplog.at_level(logging.ERROR, logger="fwd"):
        assert index(Batch.parse("*lww#test@0:0! *rga#test@1:0!"), logger=logging.getLogger("fwd")) is None

    assert [r.name for r in caplog.records] == ["fwd"]
