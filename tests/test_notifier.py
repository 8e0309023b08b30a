"""Unit tests for the change notifier's registry and fan-out rules."""

from __future__ import annotations

import pytest

from undokit.core.errors import NotificationErrors
from undokit.core.events import HistoryEvent, OperationKind
from undokit.core.notifier import ChangeNotifier


def _event(kind: OperationKind = OperationKind.CHECKPOINT) -> HistoryEvent:
    return HistoryEvent(kind=kind, undo_depth=1, redo_depth=0)


def test_callbacks_run_in_registration_order() -> None:
    """Fan-out order equals subscription order."""
    notifier = ChangeNotifier()
    calls: list[str] = []
    notifier.subscribe(lambda e: calls.append("first"))
    notifier.subscribe(lambda e: calls.append("second"))
    notifier.subscribe(lambda e: calls.append("third"))

    result = notifier.notify_all(_event())

    assert result.unwrap() == 3
    assert calls == ["first", "second", "third"]


def test_duplicate_subscription_is_a_noop() -> None:
    """The same callback registered twice fires once and shares one token."""
    notifier = ChangeNotifier()
    seen: list[HistoryEvent] = []
    t1 = notifier.subscribe(seen.append)
    t2 = notifier.subscribe(seen.append)

    notifier.notify_all(_event())

    assert t1 == t2
    assert len(notifier) == 1
    assert seen.append in notifier
    assert len(seen) == 1


def test_unsubscribe_is_idempotent() -> None:
    """Removing twice is harmless; removed callbacks are not called again."""
    notifier = ChangeNotifier()
    seen: list[HistoryEvent] = []
    token = notifier.subscribe(seen.append)

    assert notifier.unsubscribe(token) is True
    assert notifier.unsubscribe(token) is False
    notifier.notify_all(_event())
    assert seen == []


def test_changes_during_fanout_apply_next_round() -> None:
    """Subscribing/unsubscribing inside a callback waits for the next round."""
    notifier = ChangeNotifier()
    calls: list[str] = []

    def late(_: HistoryEvent) -> None:
        calls.append("late")

    def first(_: HistoryEvent) -> None:
        calls.append("first")
        notifier.subscribe(late)
        notifier.unsubscribe(second_token)

    def second(_: HistoryEvent) -> None:
        calls.append("second")

    notifier.subscribe(first)
    second_token = notifier.subscribe(second)

    notifier.notify_all(_event())
    assert calls == ["first", "second"]

    calls.clear()
    notifier.notify_all(_event())
    assert calls == ["first", "late"]


def test_failures_are_isolated_and_aggregated() -> None:
    """Every failing callback is reported, and the others still run."""
    notifier = ChangeNotifier()
    calls: list[str] = []

    def boom(_: HistoryEvent) -> None:
        raise ValueError("boom")

    def bust(_: HistoryEvent) -> None:
        raise KeyError("bust")

    notifier.subscribe(boom)
    notifier.subscribe(lambda e: calls.append("survivor"))
    notifier.subscribe(bust)

    result = notifier.notify_all(_event(OperationKind.UNDO))

    assert calls == ["survivor"]
    group = result.unwrap_err()
    assert isinstance(group, NotificationErrors)
    assert isinstance(group, ExceptionGroup)
    assert [type(e) for e in group.exceptions] == [ValueError, KeyError]
    assert "2 of 3" in str(group)


def test_failure_group_can_be_raised_and_split() -> None:
    """The aggregate behaves like any ExceptionGroup when re-raised."""
    notifier = ChangeNotifier()

    def boom(_: HistoryEvent) -> None:
        raise ValueError("boom")

    notifier.subscribe(boom)
    group = notifier.notify_all(_event()).unwrap_err()

    matched, rest = group.split(ValueError)
    assert isinstance(matched, NotificationErrors) and rest is None
    with pytest.raises(NotificationErrors):
        raise group


def test_empty_notifier_delivers_zero() -> None:
    """Notifying nobody succeeds trivially; `clear` drops every callback."""
    notifier = ChangeNotifier()
    assert notifier.notify_all(_event()).unwrap() == 0
    notifier.subscribe(lambda e: None)
    notifier.clear()
    assert len(notifier) == 0


def test_event_flags_follow_depths() -> None:
    """`can_undo`/`can_redo` are derived from the reported depths."""
    event = HistoryEvent(kind=OperationKind.REDO, undo_depth=0, redo_depth=2)
    assert not event.can_undo and event.can_redo
    assert event.model_dump()["can_redo"] is True
    assert OperationKind("clear") is OperationKind.CLEAR
