# src/rendering/models.py — v1
"""Rendering models: RenderWindow, NumberedLine, TextView, TableView."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_INITIAL_SIZE = 20
DEFAULT_CHUNK_SIZE = 50


class RenderWindow(BaseModel):
    """Visible slice of a long list of lines or rows.

    ``show_more`` grows by ``chunk_size`` up to ``total_count``; ``show_less``
    goes back to ``initial_size``. Both return a new window and are no-ops
    at their bounds.
    """

    model_config = ConfigDict(frozen=True)

    visible_count: int = DEFAULT_INITIAL_SIZE
    total_count: int = 0
    initial_size: int = DEFAULT_INITIAL_SIZE
    chunk_size: int = DEFAULT_CHUNK_SIZE

    @model_validator(mode="after")
    def check_bounds(self) -> RenderWindow:
        if self.initial_size <= 0 or self.chunk_size <= 0:
            raise ValueError("initial_size and chunk_size must be > 0")
        if self.total_count < 0:
            raise ValueError("total_count must be >= 0")
        if not 0 < self.visible_count <= max(self.total_count, self.initial_size):
            raise ValueError(
                f"visible_count {self.visible_count} outside "
                f"(0, {max(self.total_count, self.initial_size)}]"
            )
        return self

    @classmethod
    def initial(
        cls,
        total_count: int,
        initial_size: int = DEFAULT_INITIAL_SIZE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> RenderWindow:
        return cls(
            visible_count=initial_size,
            total_count=total_count,
            initial_size=initial_size,
            chunk_size=chunk_size,
        )

    @property
    def shown(self) -> int:
        """Number of items actually on screen."""
        return min(self.visible_count, self.total_count)

    @property
    def hidden(self) -> int:
        return self.total_count - self.shown

    @property
    def can_show_more(self) -> bool:
        return self.visible_count < self.total_count

    @property
    def can_show_less(self) -> bool:
        return self.visible_count > self.initial_size

    @property
    def next_chunk(self) -> int:
        """How many items the next ``show_more`` reveals."""
        if not self.can_show_more:
            return 0
        return min(self.chunk_size, self.total_count - self.visible_count)

    def show_more(self) -> RenderWindow:
        if not self.can_show_more:
            return self
        return self.model_copy(
            update={"visible_count": min(self.visible_count + self.chunk_size, self.total_count)}
        )

    def show_less(self) -> RenderWindow:
        if self.visible_count == self.initial_size:
            return self
        return self.model_copy(update={"visible_count": self.initial_size})

    def with_total(self, total_count: int) -> RenderWindow:
        """Same position over a differently sized payload, clamped to the invariant."""
        visible = min(self.visible_count, max(total_count, self.initial_size))
        return self.model_copy(update={"total_count": total_count, "visible_count": visible})


class NumberedLine(BaseModel):
    """One rendered source line; ``markup`` is highlighted HTML."""

    model_config = ConfigDict(frozen=True)

    number: int
    text: str
    markup: str


class TextView(BaseModel):
    """Line-windowed view of textual content."""

    model_config = ConfigDict(frozen=True)

    language: str
    lines: list[NumberedLine] = Field(default_factory=list)
    window: RenderWindow

    @property
    def total_lines(self) -> int:
        return self.window.total_count

    @property
    def hidden_lines(self) -> int:
        return self.window.hidden

    @property
    def show_more_count(self) -> int:
        return self.window.next_chunk

    @property
    def can_show_more(self) -> bool:
        return self.window.can_show_more

    @property
    def can_show_less(self) -> bool:
        return self.window.can_show_less


class TableView(BaseModel):
    """Row-windowed view of CSV content."""

    model_config = ConfigDict(frozen=True)

    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    window: RenderWindow

    @property
    def total_rows(self) -> int:
        return self.window.total_count

    @property
    def hidden_rows(self) -> int:
        return self.window.hidden

    @property
    def can_show_more(self) -> bool:
        return self.window.can_show_more

    @property
    def can_show_less(self) -> bool:
        return self.window.can_show_less
