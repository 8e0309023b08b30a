"""Command objects: named mutations that become one undo step each.

``HistoryManager.execute(command)`` runs a command against the bound entity
and then checkpoints, so the command's effect is recorded and any pending redo
history is discarded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from undokit.core.entity import StatefulEntity


class Command(ABC):
    """Base class for entity mutations run through a history manager."""

    label: str | None = None

    @abstractmethod
    def execute(self, entity: StatefulEntity[Any]) -> None:
        """Apply the mutation to ``entity``."""

    def describe(self) -> str:
        """Return the label used for the resulting checkpoint."""
        return self.label or type(self).__name__


class FunctionCommand(Command):
    """Adapt a plain ``fn(entity)`` callable to the :class:`Command` interface."""

    def __init__(self, fn: Callable[[Any], object], label: str | None = None) -> None:
        self._fn = fn
        self.label = label or getattr(fn, "__name__", None)

    def execute(self, entity: StatefulEntity[Any]) -> None:
        self._fn(entity)


class MacroCommand(Command):
    """Run several commands in order as a single undo step."""

    def __init__(self, commands: Iterable[Command], label: str | None = None) -> None:
        self.commands: tuple[Command, ...] = tuple(commands)
        self.label = label

    def execute(self, entity: StatefulEntity[Any]) -> None:
        for command in self.commands:
            command.execute(entity)

    def describe(self) -> str:
        if self.label:
            return self.label
        return " + ".join(c.describe() for c in self.commands) or "MacroCommand"


__all__ = ["Command", "FunctionCommand", "MacroCommand"]
