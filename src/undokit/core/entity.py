"""
Stateful entities: the only components that can read a snapshot's payload.

Responsibilities
----------------
- ``capture(label)`` takes a detached deep copy of the live state and wraps it
  in a :class:`Snapshot`. It never mutates the entity.
- ``restore(snapshot)`` checks that the snapshot was captured by this entity
  type, then overwrites the live state with a fresh deep copy of the payload.
  A foreign snapshot is refused with :class:`IncompatibleSnapshot` and the
  entity is left exactly as it was.

Subclasses only describe *what* their state is, via ``_export_state`` and
``_import_state``. Copying and the compatibility check live here so every
entity gets the same no-aliasing and no-partial-restore guarantees.

:class:`ModelEntity` covers the common case where the whole state is one
Pydantic model.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from undokit.core.errors import IncompatibleSnapshot
from undokit.core.result import Result, err, ok
from undokit.core.settings import get_logger
from undokit.core.snapshot import Snapshot

P = TypeVar("P")
M = TypeVar("M", bound=BaseModel)

logger = get_logger("undokit.entity")


class StatefulEntity(ABC, Generic[P]):
    """Base class for anything whose state can be checkpointed and restored."""

    @abstractmethod
    def _export_state(self) -> P:
        """Return the live state. The base class copies it before storing."""

    @abstractmethod
    def _import_state(self, state: P) -> None:
        """Replace the live state with ``state`` (already a private copy)."""

    def _copy_state(self, state: P) -> P:
        """Return a copy of ``state`` that shares no mutable parts with it."""
        return copy.deepcopy(state)

    def capture(self, label: str | None = None) -> Snapshot:
        """Return a snapshot of the current state."""
        return Snapshot(
            _payload=self._copy_state(self._export_state()),
            _origin=type(self),
            label=label,
        )

    def restore(self, snapshot: Snapshot) -> Result[None, IncompatibleSnapshot]:
        """Overwrite the live state with ``snapshot``'s payload.

        Returns
        -------
        Result[None, IncompatibleSnapshot]
            ``Ok(None)`` once the state has been replaced, or
            ``Err(IncompatibleSnapshot)`` if the snapshot belongs to another
            entity type. In the error case nothing is modified.
        """
        expected = type(self).__qualname__
        if not isinstance(snapshot, Snapshot):
            logger.warning("Refused restore of %s: not a snapshot", expected)
            return err(IncompatibleSnapshot(expected, type(snapshot).__qualname__))
        if snapshot._origin is not type(self):
            logger.warning(
                "Refused restore of %s from snapshot captured by %s",
                expected,
                snapshot.origin_name,
            )
            return err(IncompatibleSnapshot(expected, snapshot.origin_name))

        # copy before touching live state
        state = self._copy_state(snapshot._payload)
        self._import_state(state)
        return ok(None)


class ModelEntity(StatefulEntity[M]):
    """Entity whose entire state is a single Pydantic model instance.

    Attributes
    ----------
    state : M
        The live model. Mutate it freely between checkpoints.
    """

    def __init__(self, state: M) -> None:
        self.state: M = state

    def _export_state(self) -> M:
        return self.state

    def _import_state(self, state: M) -> None:
        self.state = state

    def _copy_state(self, state: M) -> M:
        return state.model_copy(deep=True)


__all__ = ["ModelEntity", "StatefulEntity"]
