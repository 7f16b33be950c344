"""
Batch commands: frames, index, reduce
"""

import io
import json
import sys
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ronlog.batch import Batch
from ronlog.core.errors import IndexingError

console = Console()
err_console = Console(stderr=True)


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def _fail(message: str, json_output: bool, **extra: Any) -> None:
    if json_output:
        print(json.dumps({"error": message, **extra}))
    else:
        err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(2)


def frames_command(
    path: str = typer.Argument(..., help="Log file, or - for stdin"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List the frames of a log batch.

    Examples:
        ronlog frames batch.ron
        cat batch.ron | ronlog frames - --json
    """
    try:
        rows: List[Dict[str, Any]] = []
        for seq, frm in enumerate(Batch.parse(_read_input(path))):
            op = frm.peek()
            rows.append(
                {
                    "seq": seq,
                    "type": str(op.ty) if op else None,
                    "object": str(op.object) if op else None,
                    "event": str(op.event) if op else None,
                    "ops": len(frm.ops),
                    "length": len(frm.body),
                }
            )
    except FileNotFoundError:
        _fail("Log file not found", json_output, path=path)
    except (OSError, UnicodeDecodeError) as e:
        _fail(str(e), json_output)

    if json_output:
        print(json.dumps({"frames": rows, "count": len(rows)}, indent=2))
        raise typer.Exit(0)

    if not rows:
        console.print("[yellow]Batch holds no frames[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Frames: {path}")
    table.add_column("Seq", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Object", style="yellow")
    table.add_column("Event")
    table.add_column("Ops", justify="right")
    table.add_column("Length", justify="right", style="dim")
    for row in rows:
        table.add_row(
            str(row["seq"]),
            row["type"] or "-",
            row["object"] or "-",
            row["event"] or "-",
            str(row["ops"]),
            str(row["length"]),
        )
    console.print(table)
    console.print(f"\n[bold]Total frames:[/bold] {len(rows)}")


def index_command(
    path: str = typer.Argument(..., help="Log file, or - for stdin"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Group the frames of a log batch by object.

    Examples:
        ronlog index batch.ron
        ronlog index batch.ron --json
    """
    try:
        idx = Batch.parse(_read_input(path)).index()
    except FileNotFoundError:
        _fail("Log file not found", json_output, path=path)
    except (OSError, UnicodeDecodeError) as e:
        _fail(str(e), json_output)

    if idx is None:
        _fail("indexing failed: frames disagree on an object type", json_output)

    objects = [
        {"object": str(obj), "type": str(ty), "frames": len(frames)}
        for obj, (ty, frames) in sorted(idx.items())
    ]

    if json_output:
        print(json.dumps({"objects": objects, "count": len(objects)}, indent=2))
        raise typer.Exit(0)

    table = Table(title=f"Objects: {path}")
    table.add_column("Object", style="yellow")
    table.add_column("Type", style="green")
    table.add_column("Frames", style="cyan", justify="right")
    for entry in objects:
        table.add_row(entry["object"], entry["type"], str(entry["frames"]))
    console.print(table)
    console.print(f"\n[bold]Total objects:[/bold] {len(objects)}")


def reduce_command(
    path: str = typer.Argument(..., help="Log file, or - for stdin"),
    out_path: Optional[str] = typer.Option(None, "--out", "-o", help="Write output here instead of stdout"),
):
    """
    Reduce every object of a log batch to its converged state.

    Examples:
        ronlog reduce batch.ron
        ronlog reduce batch.ron --out state.ron
    """
    try:
        batch = Batch.parse(_read_input(path))
        # nothing reaches the destination unless the whole batch reduces
        state = io.BytesIO()
        batch.reduce_all(state)
        if out_path is None:
            sys.stdout.buffer.write(state.getvalue())
            sys.stdout.flush()
        else:
            with open(out_path, "wb") as out:
                out.write(state.getvalue())
    except FileNotFoundError:
        _fail("Log file not found", False, path=path)
    except IndexingError as e:
        _fail(str(e), False)
    except (OSError, UnicodeDecodeError) as e:
        _fail(str(e), False)
