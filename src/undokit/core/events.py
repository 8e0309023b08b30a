"""Event contracts delivered to history observers.

`OperationKind` is a closed set of transition kinds, so observers can match on
it exhaustively instead of comparing free-form strings. `HistoryEvent` carries
just enough for a UI to enable or disable its undo/redo affordances without
reaching into the history manager.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class OperationKind(StrEnum):
    """The four transitions a history manager can perform."""

    CHECKPOINT = "checkpoint"
    UNDO = "undo"
    REDO = "redo"
    CLEAR = "clear"


class HistoryEvent(BaseModel):
    """Immutable description of one committed history transition."""

    model_config = ConfigDict(frozen=True)

    kind: OperationKind = Field(description="Which transition just committed.")
    undo_depth: int = Field(ge=0, description="Length of the undo history afterwards.")
    redo_depth: int = Field(ge=0, description="Length of the redo history afterwards.")
    label: str | None = Field(
        default=None, description="Label of the snapshot involved, if any."
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def can_undo(self) -> bool:
        """Whether another undo would succeed."""
        return self.undo_depth > 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def can_redo(self) -> bool:
        """Whether another redo would succeed."""
        return self.redo_depth > 0


__all__ = ["HistoryEvent", "OperationKind"]
