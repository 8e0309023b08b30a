# src/undokit/cli.py
"""
undokit Command Line Interface (CLI).

A small developer tool built with `typer` and `rich` that drives a
:class:`TextDocument` through a script of editing and history operations, so
the engine's behaviour can be inspected without writing any code.

Script format
-------------
One operation per line; blank lines and lines starting with ``#`` are ignored::

    type Hello          # insert text at the caret
    erase 2             # delete characters before the caret
    set Fresh start     # replace the whole document
    checkpoint [label]  # record the current state
    undo
    redo
    clear

Usage
-----
    $ undokit run edits.txt --capacity 5
    $ undokit run edits.txt --auto-checkpoint
    $ undokit version
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from undokit import __version__
from undokit.core.commands import FunctionCommand
from undokit.core.events import HistoryEvent, OperationKind
from undokit.core.history import HistoryManager, Transition
from undokit.core.settings import load_settings
from undokit.documents import TextDocument

load_dotenv()

app = typer.Typer(
    help="undokit: replay editing scripts against a bounded undo/redo history.",
    rich_markup_mode="markdown",
)
console = Console()

_EDITS: dict[str, Callable[[TextDocument, str], None]] = {
    "type": lambda doc, arg: doc.type_text(arg),
    "erase": lambda doc, arg: doc.erase(int(arg or "1")),
    "set": lambda doc, arg: doc.set_text(arg),
}

_KIND_STYLE = {
    OperationKind.CHECKPOINT: "green",
    OperationKind.UNDO: "cyan",
    OperationKind.REDO: "magenta",
    OperationKind.CLEAR: "yellow",
}


class ScriptError(ValueError):
    """A script line could not be understood."""

    def __init__(self, lineno: int, line: str, reason: str) -> None:
        super().__init__(f"line {lineno}: {reason}: {line!r}")
        self.lineno = lineno


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _parse_script(text: str) -> list[tuple[int, str, str]]:
    """Split a script into ``(lineno, op, argument)`` triples."""
    ops: list[tuple[int, str, str]] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        op, _, arg = line.partition(" ")
        op = op.lower()
        if op not in _EDITS and op not in {"checkpoint", "undo", "redo", "clear"}:
            raise ScriptError(lineno, raw, "unknown operation")
        if op == "erase" and arg and not arg.strip().isdigit():
            raise ScriptError(lineno, raw, "erase expects a count")
        ops.append((lineno, op, arg))
    return ops


def _print_event(doc: TextDocument) -> Callable[[HistoryEvent], None]:
    """Return an observer that echoes each transition and the document text."""

    def observer(event: HistoryEvent) -> None:
        style = _KIND_STYLE[event.kind]
        label = f" [dim]({event.label})[/dim]" if event.label else ""
        console.print(
            f"[{style}]{event.kind.value:<10}[/{style}]{label} "
            f"→ {doc.text!r}  [dim]undo={event.undo_depth} redo={event.redo_depth}[/dim]"
        )

    return observer


def _run_ops(
    manager: HistoryManager, doc: TextDocument, ops: list[tuple[int, str, str]], auto: bool
) -> int:
    """Apply parsed operations; return how many undo/redo requests were refused."""
    refused = 0
    for _lineno, op, arg in ops:
        transition: Transition | None = None
        if op in _EDITS:
            edit = _EDITS[op]
            if auto:
                command = FunctionCommand(
                    lambda d, e=edit, a=arg: e(d, a), label=f"{op} {arg}".strip()
                )
                transition = manager.execute(command)
            else:
                edit(doc, arg)
        elif op == "checkpoint":
            transition = manager.checkpoint(arg or None)
        elif op == "clear":
            transition = manager.clear()
        else:
            outcome = manager.undo() if op == "undo" else manager.redo()
            if outcome.is_err():
                refused += 1
                console.print(f"[yellow]{outcome.unwrap_err()}[/yellow]")
                continue
            transition = outcome.unwrap()

        if transition is not None and transition.warnings is not None:
            console.print(f"[dim yellow]Warning: {transition.warnings}[/dim yellow]")
    return refused


def _render_history(manager: HistoryManager, doc: TextDocument) -> None:
    """Show both histories as a rich table, oldest entries first."""
    table = Table(title=f"History (capacity {manager.capacity})")
    table.add_column("#", justify="right")
    table.add_column("Stack")
    table.add_column("Snapshot")
    for i, snap in enumerate(manager.history(), start=1):
        table.add_row(str(i), "undo", snap.describe())
    for i, snap in enumerate(manager.redo_entries(), start=1):
        table.add_row(str(i), "redo", snap.describe())
    console.print(table)
    console.print(Panel(doc.text or "[dim]<empty>[/dim]", title="Document", border_style="green"))


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def run(
    script: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to the operation script.",
        ),
    ],
    capacity: Annotated[
        int | None,
        typer.Option(
            "--capacity",
            "-c",
            min=1,
            help="Undo history capacity (defaults to UNDOKIT_DEFAULT_CAPACITY).",
        ),
    ] = None,
    initial: Annotated[
        str,
        typer.Option("--initial", "-i", help="Initial document text."),
    ] = "",
    auto_checkpoint: Annotated[
        bool,
        typer.Option(
            "--auto-checkpoint/--no-auto-checkpoint",
            "-a",
            help="Record every edit as its own undo step.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Replay an editing script against a fresh document and print its history.
    """
    try:
        ops = _parse_script(script.read_text(encoding="utf-8"))
    except ScriptError as e:
        console.print(f"[bold red]❌ Script Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    doc = TextDocument(initial)
    cap = capacity if capacity is not None else load_settings().default_capacity
    manager = HistoryManager(doc, cap)
    manager.notifier.subscribe(_print_event(doc))

    console.print(
        Panel.fit(
            f"[bold cyan]undokit[/bold cyan]\nScript: [u]{script.name}[/u]  capacity={cap}",
            border_style="cyan",
        )
    )

    try:
        refused = _run_ops(manager, doc, ops, auto_checkpoint)
    except Exception as e:
        console.print(f"\n[bold red]❌ Replay Error:[/bold red] {e}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e

    console.print("")
    _render_history(manager, doc)
    if refused:
        console.print(f"[dim]{refused} undo/redo request(s) had nothing to act on.[/dim]")


@app.command()  # type: ignore[misc]
def version() -> None:
    """Print the installed undokit version."""
    console.print(f"undokit {__version__}")


if __name__ == "__main__":
    app()
