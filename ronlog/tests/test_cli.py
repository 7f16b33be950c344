"""
Tests for the ronlog command line.
"""

import json
import logging
import os
import tempfile

import pytest
from typer.testing import CliRunner

from cli.main import app

MULTI = (
    "*lww#test@0:0! @1:key'value' @2:number=1 *rga#text@3:0'T'! "
    "*rga#text@6:3, @4'e' @5'x' @6't' *lww#more:a=1;."
)

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _write(tmpdir, text, name="batch.ron"):
    path = os.path.join(tmpdir, name)
    with open(path, "w") as f:
        f.write(text)
    return path


def test_frames_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(app, ["frames", _write(tmpdir, MULTI), "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["count"] == 3
    assert data["frames"][0]["type"] == "lww"
    assert data["frames"][2]["object"] is None


def test_frames_table():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(app, ["frames", _write(tmpdir, MULTI)])

    assert result.exit_code == 0
    assert "Total frames:" in result.stdout


def test_index_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(app, ["index", _write(tmpdir, MULTI), "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["objects"] == [
        {"object": "test", "type": "lww", "frames": 1},
        {"object": "text", "type": "rga", "frames": 1},
    ]


def test_index_type_conflict():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(tmpdir, "*lww#test@0:0! *rga#test@2:0!")
        result = runner.invoke(app, ["index", path, "--json"])

    assert result.exit_code == 2
    assert "indexing failed" in result.stdout


def test_reduce_stdout():
    text = "*lww#test@0:0! @1:key'value'"
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(app, ["reduce", _write(tmpdir, text)])

    assert result.exit_code == 0
    assert result.stdout == text


def test_reduce_stdin():
    result = runner.invoke(app, ["reduce", "-"], input="*lww#test@0:0! @1:key'value'")

    assert result.exit_code == 0
    assert result.stdout == "*lww#test@0:0! @1:key'value'"


def test_reduce_to_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        src = _write(tmpdir, "*lww#x@5:0! @5:k=1 *lww#x@3:0! @3:k=2")
        dst = os.path.join(tmpdir, "state.ron")
        result = runner.invoke(app, ["reduce", src, "--out", dst])
        with open(dst) as f:
            written = f.read()

    assert result.exit_code == 0
    assert written == "*lww#x@5:0!\n@5:k=1,\n"


def test_missing_file():
    result = runner.invoke(app, ["frames", "/nonexistent/batch.ron", "--json"])

    assert result.exit_code == 2
    assert json.loads(result.stdout)["error"] == "Log file not found"


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "ronlog" in result.stdout
    assert "lww, set" in result.stdout


def test_reduce_failure_keeps_existing_out_file():
    """A batch that fails to index leaves the --out file untouched."""
    with tempfile.TemporaryDirectory() as tmpdir:
        src = _write(tmpdir, "*lww#t@0:0! *rga#t@2:0!")
        dst = os.path.join(tmpdir, "state.ron")
        with open(dst, "w") as f:
            f.write("PREVIOUS STATE")
        result = runner.invoke(app, ["reduce", src, "--out", dst])
        with open(dst) as f:
            kept = f.read()

    assert result.exit_code == 2
    assert kept == "PREVIOUS STATE"
