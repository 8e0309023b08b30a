"""
Plain-text document entity.

A small but complete :class:`ModelEntity` used by the CLI and the tests: the
state is the text plus a caret position, and the editing methods keep the
caret inside the text.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from undokit.core.entity import ModelEntity


class DocumentState(BaseModel):
    """Text content and caret offset of a :class:`TextDocument`."""

    text: str = ""
    cursor: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _clamp_cursor(self) -> DocumentState:
        if self.cursor > len(self.text):
            self.cursor = len(self.text)
        return self


class TextDocument(ModelEntity[DocumentState]):
    """Editable text buffer whose state can be checkpointed."""

    def __init__(self, text: str = "") -> None:
        super().__init__(DocumentState(text=text, cursor=len(text)))

    @property
    def text(self) -> str:
        return self.state.text

    @property
    def cursor(self) -> int:
        return self.state.cursor

    def type_text(self, chunk: str) -> None:
        """Insert ``chunk`` at the caret and move the caret past it."""
        s = self.state
        s.text = s.text[: s.cursor] + chunk + s.text[s.cursor :]
        s.cursor += len(chunk)

    def erase(self, count: int = 1) -> None:
        """Delete up to ``count`` characters before the caret."""
        if count < 0:
            raise ValueError(f"erase count must be >= 0, got {count}")
        s = self.state
        start = max(0, s.cursor - count)
        s.text = s.text[:start] + s.text[s.cursor :]
        s.cursor = start

    def set_text(self, text: str) -> None:
        """Replace the whole content and put the caret at the end."""
        self.state.text = text
        self.state.cursor = len(text)

    def move_to(self, position: int) -> None:
        """Move the caret, clamped to the text bounds."""
        self.state.cursor = max(0, min(position, len(self.state.text)))


__all__ = ["DocumentState", "TextDocument"]
