"""undokit: a bounded undo/redo history engine.

Entities capture immutable snapshots of their state, a history manager keeps
them in a capacity-limited undo history plus a redo history, and a change
notifier tells observers about every checkpoint, undo, redo and clear.
"""

from __future__ import annotations

from undokit.core import (
    ChangeNotifier,
    EmptyHistory,
    HistoryEvent,
    HistoryManager,
    IncompatibleSnapshot,
    InvalidCapacity,
    ModelEntity,
    OperationKind,
    Snapshot,
    StatefulEntity,
)

__all__ = [
    "ChangeNotifier",
    "EmptyHistory",
    "HistoryEvent",
    "HistoryManager",
    "IncompatibleSnapshot",
    "InvalidCapacity",
    "ModelEntity",
    "OperationKind",
    "Snapshot",
    "StatefulEntity",
    "__version__",
]
__version__ = "0.1.0"
