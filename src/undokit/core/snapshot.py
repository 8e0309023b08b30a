"""
Snapshot definition.

A snapshot is the immutable record of one entity's state at one instant. It
is produced by ``StatefulEntity.capture()`` and consumed by
``StatefulEntity.restore()``; every other component (history manager,
notifier, application code) only ever holds it as an opaque handle.

Design Notes
------------
- **Immutability**: ``frozen=True`` with ``slots=True``; the payload itself is a
  detached deep copy owned by the snapshot.
- **Opacity**: the payload and the capturing entity type are stored in private
  slots and hidden from ``repr``. Only the entity base class reads them.
- **No deduplication**: ``eq=False`` keeps identity semantics, so two captures of
  the same state are still two distinct history entries.
- **Ordering**: ``timestamp`` is an ISO-8601 UTC string frozen at capture time,
  ``sequence`` a process-wide monotonic counter that breaks timestamp ties.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

_sequence = itertools.count(1)


def _now_iso() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.ffffffZ``."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


@dataclass(frozen=True, slots=True, eq=False)
class Snapshot:
    """
    Immutable, opaque capture of an entity's state.

    Attributes
    ----------
    label : str | None
        Optional human-readable description (e.g., 'after paste').
    timestamp : str
        ISO-8601 UTC timestamp taken when the snapshot was created.
    sequence : int
        Monotonic ordering key, unique within the process.
    """

    _payload: Any = field(repr=False)
    _origin: type[Any] = field(repr=False)
    label: str | None = None
    timestamp: str = field(default_factory=_now_iso)
    sequence: int = field(default_factory=lambda: next(_sequence))

    @property
    def origin_name(self) -> str:
        """Qualified name of the entity type that captured this snapshot."""
        return self._origin.__qualname__

    def describe(self) -> str:
        """Return a one-line name suitable for history listings."""
        name = self.label if self.label else f"#{self.sequence}"
        return f"{self.timestamp} / {name}"


__all__ = ["Snapshot"]
