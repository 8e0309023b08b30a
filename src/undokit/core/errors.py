"""Error kinds reported by the history engine.

Three of them describe refused operations:

- :class:`IncompatibleSnapshot` is *returned* by ``StatefulEntity.restore`` when
  it is handed a snapshot captured by a different entity type.
- :class:`EmptyHistory` is *returned* by ``HistoryManager.undo``/``redo`` when
  there is nothing to step over.
- :class:`InvalidCapacity` is *raised* when a manager is constructed with a
  capacity below one.

:class:`NotificationErrors` aggregates observer callback failures. It is attached
to the transition that triggered the fan-out and never undoes that transition.
"""

from __future__ import annotations

from typing import Literal

Direction = Literal["undo", "redo"]


class HistoryError(Exception):
    """Base class for every error the engine reports."""


class IncompatibleSnapshot(HistoryError):
    """A snapshot was offered to an entity type that did not capture it."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"snapshot captured by {actual!r} cannot restore {expected!r}")
        self.expected = expected
        self.actual = actual


class EmptyHistory(HistoryError):
    """Undo or redo was requested with nothing recorded in that direction."""

    def __init__(self, direction: Direction) -> None:
        super().__init__(f"nothing to {direction}")
        self.direction: Direction = direction


class InvalidCapacity(HistoryError, ValueError):
    """History capacity must be a positive integer."""

    def __init__(self, capacity: object) -> None:
        super().__init__(f"capacity must be an integer >= 1, got {capacity!r}")
        self.capacity = capacity


class NotificationErrors(ExceptionGroup):  # type: ignore[type-arg]
    """Every exception raised by observer callbacks during one fan-out."""

    def derive(self, excs):  # type: ignore[no-untyped-def]
        return NotificationErrors(self.message, excs)


__all__ = [
    "Direction",
    "EmptyHistory",
    "HistoryError",
    "IncompatibleSnapshot",
    "InvalidCapacity",
    "NotificationErrors",
]
