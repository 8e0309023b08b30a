"""Tests for command execution through the history manager."""

from __future__ import annotations

from typing import Any

import pytest

from undokit.core.commands import Command, FunctionCommand, MacroCommand
from undokit.core.history import HistoryManager
from undokit.documents import TextDocument


class TypeText(Command):
    def __init__(self, chunk: str) -> None:
        self.chunk = chunk
        self.label = f"type {chunk!r}"

    def execute(self, entity: Any) -> None:
        entity.type_text(self.chunk)


class Explode(Command):
    def execute(self, entity: Any) -> None:
        raise RuntimeError("command failed")


def test_execute_checkpoints_with_command_label() -> None:
    """Executing a command applies it and records one labelled step."""
    doc = TextDocument()
    manager = HistoryManager(doc, 5)

    transition = manager.execute(TypeText("hi"))

    assert doc.text == "hi"
    assert transition.event.label == "type 'hi'"
    assert manager.undo_depth == 1


def test_execute_invalidates_redo() -> None:
    """A new command execution clears the redo history."""
    doc = TextDocument()
    manager = HistoryManager(doc, 5)
    manager.execute(TypeText("a"))
    manager.execute(TypeText("b"))
    manager.undo().unwrap()
    assert doc.text == "a" and manager.can_redo()

    manager.execute(TypeText("c"))

    assert doc.text == "ac"
    assert not manager.can_redo()


def test_failing_command_records_nothing() -> None:
    """Command errors propagate and no checkpoint is taken."""
    manager = HistoryManager(TextDocument(), 5)
    with pytest.raises(RuntimeError, match="command failed"):
        manager.execute(Explode())
    assert manager.undo_depth == 0


def test_function_command_and_label_override() -> None:
    """Plain callables become commands; an explicit label wins."""
    doc = TextDocument("x")

    def shout(d: TextDocument) -> None:
        d.set_text(d.text.upper())

    manager = HistoryManager(doc, 5)
    assert manager.execute(FunctionCommand(shout)).event.label == "shout"
    assert manager.execute(FunctionCommand(shout), label="again").event.label == "again"
    assert doc.text == "X"


def test_macro_command_is_one_undo_step() -> None:
    """A macro runs every sub-command and undoes as a unit."""
    doc = TextDocument()
    manager = HistoryManager(doc, 5)
    manager.checkpoint("empty")

    macro = MacroCommand([TypeText("ab"), TypeText("cd")])
    transition = manager.execute(macro)

    assert doc.text == "abcd"
    assert transition.event.label == "type 'ab' + type 'cd'"
    manager.undo().unwrap()
    assert doc.text == ""


def test_describe_falls_back_to_class_name() -> None:
    """Unlabelled commands are described by their class name."""
    assert Explode().describe() == "Explode"
    assert MacroCommand([]).describe() == "MacroCommand"
    assert MacroCommand([], label="batch").describe() == "batch"
