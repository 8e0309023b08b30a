"""Core history engine for undokit.

Re-exports the building blocks so downstream code can do:
    from undokit.core import HistoryManager, StatefulEntity, ChangeNotifier
"""

from __future__ import annotations

from undokit.core.commands import Command, FunctionCommand, MacroCommand
from undokit.core.entity import ModelEntity, StatefulEntity
from undokit.core.errors import (
    EmptyHistory,
    HistoryError,
    IncompatibleSnapshot,
    InvalidCapacity,
    NotificationErrors,
)
from undokit.core.events import HistoryEvent, OperationKind
from undokit.core.history import HistoryManager, Transition
from undokit.core.notifier import ChangeNotifier, SubscriptionToken
from undokit.core.snapshot import Snapshot

__all__ = [
    "ChangeNotifier",
    "Command",
    "EmptyHistory",
    "FunctionCommand",
    "HistoryError",
    "HistoryEvent",
    "HistoryManager",
    "IncompatibleSnapshot",
    "InvalidCapacity",
    "MacroCommand",
    "ModelEntity",
    "NotificationErrors",
    "OperationKind",
    "Snapshot",
    "StatefulEntity",
    "SubscriptionToken",
    "Transition",
]
