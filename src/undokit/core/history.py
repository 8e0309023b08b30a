"""
Bounded undo/redo history manager.

A :class:`HistoryManager` is bound to exactly one :class:`StatefulEntity` and
one :class:`ChangeNotifier` for its whole lifetime. It owns two sequences of
snapshots, both ordered most-recent-last:

- ``undo`` history: a ``deque(maxlen=capacity)`` ring buffer. Pushing onto a
  full buffer drops the single oldest entry (strict FIFO eviction).
- ``redo`` history: unbounded. It only ever grows through ``undo()``, so its
  length is limited by how far back the undo history reaches.

Model
-----
``checkpoint()`` records the entity's state *after* a change. The newest undo
entry is therefore the last committed state, and undoing means stepping back
to the entry beneath it::

    A, B, C, D checkpointed with capacity 3  ->  undo=[B, C, D]   entity=D
    undo()                                   ->  undo=[B, C]      redo=[D]  entity=C
    redo()                                   ->  undo=[B, C, D]   redo=[]   entity=D

When only one undo entry remains, ``undo()`` restores that entry itself.

Every push is a fresh ``capture()``, so no snapshot object ever sits in both
sequences. Each operation commits completely (capture, restore, push, evict,
clear) before the notifier runs, and observer failures never roll a
transition back; they are attached to the returned :class:`Transition`.

The manager is not thread-safe. Callers sharing one across threads must guard
all operations with a single lock.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any

from undokit.core.commands import Command
from undokit.core.entity import StatefulEntity
from undokit.core.errors import EmptyHistory, InvalidCapacity, NotificationErrors
from undokit.core.events import HistoryEvent, OperationKind
from undokit.core.notifier import ChangeNotifier
from undokit.core.result import Result, err, ok
from undokit.core.settings import get_logger, load_settings
from undokit.core.snapshot import Snapshot

logger = get_logger("undokit.history")


@dataclass(frozen=True, slots=True)
class Transition:
    """
    Outcome of one committed history operation.

    Attributes
    ----------
    event : HistoryEvent
        The payload that was delivered to observers.
    warnings : NotificationErrors | None
        Aggregated observer failures from the fan-out, if any.
    """

    event: HistoryEvent
    warnings: NotificationErrors | None = None

    @property
    def kind(self) -> OperationKind:
        return self.event.kind

    @property
    def clean(self) -> bool:
        """True when every observer handled the event without raising."""
        return self.warnings is None


class HistoryManager:
    """Checkpoint, undo and redo the state of a single entity."""

    __slots__ = ("_entity", "_capacity", "_notifier", "_undo", "_redo")

    def __init__(
        self,
        entity: StatefulEntity[Any],
        capacity: int,
        *,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidCapacity(capacity)
        self._entity = entity
        self._capacity = capacity
        self._notifier = notifier if notifier is not None else ChangeNotifier()
        self._undo: deque[Snapshot] = deque(maxlen=capacity)
        self._redo: deque[Snapshot] = deque()

    @classmethod
    def from_settings(
        cls,
        entity: StatefulEntity[Any],
        *,
        notifier: ChangeNotifier | None = None,
    ) -> HistoryManager:
        """Build a manager using ``UNDOKIT_DEFAULT_CAPACITY`` as its capacity."""
        return cls(entity, load_settings().default_capacity, notifier=notifier)

    # ------------------------------- Queries --------------------------------

    @property
    def entity(self) -> StatefulEntity[Any]:
        return self._entity

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def peek(self) -> Snapshot | None:
        """Return the newest undo entry without removing it."""
        return self._undo[-1] if self._undo else None

    def history(self) -> tuple[Snapshot, ...]:
        """Return the undo history, oldest first."""
        return tuple(self._undo)

    def redo_entries(self) -> tuple[Snapshot, ...]:
        """Return the redo history, oldest first (the next redo is last)."""
        return tuple(self._redo)

    # ----------------------------- Transitions ------------------------------

    def checkpoint(self, label: str | None = None) -> Transition:
        """Record the entity's current state and invalidate redo history."""
        self._push_undo(self._entity.capture(label))
        self._redo.clear()
        return self._commit(OperationKind.CHECKPOINT, label)

    def execute(self, command: Command, label: str | None = None) -> Transition:
        """Run ``command`` against the entity, then checkpoint the result.

        If the command raises, the exception propagates and nothing is
        recorded; the entity may already hold part of the command's changes.
        """
        command.execute(self._entity)
        return self.checkpoint(label or command.describe())

    def undo(self) -> Result[Transition, EmptyHistory]:
        """Step the entity back one checkpoint.

        Returns
        -------
        Result[Transition, EmptyHistory]
            ``Err(EmptyHistory)`` with no side effects when there is nothing
            to undo; otherwise the committed transition.
        """
        if not self._undo:
            logger.debug("Undo requested with empty undo history")
            return err(EmptyHistory("undo"))

        # sequences change only after the restore succeeded
        newest = self._undo[-1]
        target = self._undo[-2] if len(self._undo) > 1 else newest
        current = self._entity.capture(newest.label)
        self._entity.restore(target).raise_for_error()
        self._undo.pop()
        self._redo.append(current)
        return ok(self._commit(OperationKind.UNDO, newest.label))

    def redo(self) -> Result[Transition, EmptyHistory]:
        """Re-apply the most recently undone state.

        Returns
        -------
        Result[Transition, EmptyHistory]
            ``Err(EmptyHistory)`` with no side effects when there is nothing
            to redo; otherwise the committed transition.
        """
        if not self._redo:
            logger.debug("Redo requested with empty redo history")
            return err(EmptyHistory("redo"))

        target = self._redo[-1]
        self._entity.restore(target).raise_for_error()
        self._redo.pop()
        self._push_undo(self._entity.capture(target.label))
        return ok(self._commit(OperationKind.REDO, target.label))

    def clear(self) -> Transition:
        """Forget both histories. The entity's current state is untouched."""
        self._undo.clear()
        self._redo.clear()
        return self._commit(OperationKind.CLEAR, None)

    # ------------------------------- Helpers --------------------------------

    def _push_undo(self, snapshot: Snapshot) -> None:
        if len(self._undo) == self._capacity:
            logger.debug("Evicting oldest snapshot %s", self._undo[0].describe())
        # maxlen drops the leftmost entry on overflow
        self._undo.append(snapshot)

    def _commit(self, kind: OperationKind, label: str | None) -> Transition:
        event = HistoryEvent(
            kind=kind,
            undo_depth=len(self._undo),
            redo_depth=len(self._redo),
            label=label,
        )
        logger.debug(
            "%s committed (undo=%d, redo=%d)", kind.value, event.undo_depth, event.redo_depth
        )
        delivered = self._notifier.notify_all(event)
        if delivered.is_err():
            return Transition(event=event, warnings=delivered.unwrap_err())
        return Transition(event=event)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(entity={type(self._entity).__name__}, "
            f"capacity={self._capacity}, undo={len(self._undo)}, redo={len(self._redo)})"
        )


__all__ = ["HistoryManager", "Transition"]
