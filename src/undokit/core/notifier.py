"""
Change notifier: ordered observer registry for history transitions.

Responsibilities
----------------
- **Subscribe**: register a callback and hand back a token for later removal.
  Registering the same callback twice is a no-op that returns the original
  token, so each callback fires at most once per transition.
- **Unsubscribe**: remove by token; unknown or already-removed tokens are ignored.
- **Fan-out**: ``notify_all`` calls every callback in registration order.

Fan-out semantics
-----------------
The callbacks for one round are taken from a tuple copy of the registry, so
subscribing or unsubscribing from inside a callback only affects the *next*
round. A failing callback never stops the others. All failures of a round
are collected into one :class:`NotificationErrors` group and returned as an
``Err``; nothing is raised from ``notify_all``.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field

from undokit.core.errors import NotificationErrors
from undokit.core.events import HistoryEvent
from undokit.core.result import Result, err, ok
from undokit.core.settings import get_logger

Callback = Callable[[HistoryEvent], object]

logger = get_logger("undokit.notifier")

_token_ids = itertools.count(1)


@dataclass(frozen=True, slots=True)
class SubscriptionToken:
    """Handle returned by :meth:`ChangeNotifier.subscribe`."""

    id: int = field(default_factory=lambda: next(_token_ids))


class ChangeNotifier:
    """Ordered set of callbacks invoked after every history transition."""

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        # dicts keep insertion order, which is the notification order
        self._subscribers: dict[SubscriptionToken, Callback] = {}

    def subscribe(self, callback: Callback) -> SubscriptionToken:
        """Register ``callback`` and return its token.

        Parameters
        ----------
        callback : Callable[[HistoryEvent], object]
            Called with the :class:`HistoryEvent` of each transition. Its
            return value is ignored.

        Returns
        -------
        SubscriptionToken
            A fresh token, or the existing one if ``callback`` is already
            registered.
        """
        for token, existing in self._subscribers.items():
            if existing == callback:
                return token
        token = SubscriptionToken()
        self._subscribers[token] = callback
        logger.debug("Subscribed callback %r as token %d", callback, token.id)
        return token

    def unsubscribe(self, token: SubscriptionToken) -> bool:
        """Remove the callback behind ``token``; return whether anything was removed."""
        removed = self._subscribers.pop(token, None) is not None
        if removed:
            logger.debug("Unsubscribed token %d", token.id)
        return removed

    def notify_all(self, event: HistoryEvent) -> Result[int, NotificationErrors]:
        """Deliver ``event`` to every callback registered when the round starts.

        Returns
        -------
        Result[int, NotificationErrors]
            ``Ok(n)`` with the number of callbacks that completed, or
            ``Err(group)`` holding every exception raised during the round.
        """
        round_ = tuple(self._subscribers.values())
        failures: list[Exception] = []
        for callback in round_:
            try:
                callback(event)
            except Exception as exc:  # noqa: BLE001 - isolate each observer
                logger.warning(
                    "Observer %r failed on %s: %s", callback, event.kind.value, exc
                )
                failures.append(exc)
        if failures:
            return err(
                NotificationErrors(
                    f"{len(failures)} of {len(round_)} observers failed on {event.kind.value}",
                    failures,
                )
            )
        return ok(len(round_))

    def clear(self) -> None:
        """Drop every subscription."""
        self._subscribers.clear()

    def __len__(self) -> int:
        return len(self._subscribers)

    def __contains__(self, callback: object) -> bool:
        return any(existing == callback for existing in self._subscribers.values())


__all__ = ["Callback", "ChangeNotifier", "SubscriptionToken"]
