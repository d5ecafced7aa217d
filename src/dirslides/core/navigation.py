"""Slide index navigation."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, model_validator

from dirslides.core.catalog import SlideSet
from dirslides.core.errors import InvalidModeError


class LayoutMode(str, Enum):
    """How many slides are shown at once and how they are arranged."""

    SINGLE = "single"
    CHUNK_TWO = "chunk-two"
    SLIDING_WINDOW = "sliding-window"


def step_size(layout_mode: LayoutMode) -> int:
    """Return how many indices one advance/retreat moves in a layout."""
    match layout_mode:
        case LayoutMode.CHUNK_TWO:
            return 2
        case LayoutMode.SINGLE | LayoutMode.SLIDING_WINDOW:
            return 1
        case _:
            raise InvalidModeError(layout_mode)


class NavigationState(BaseModel):
    """Current position within a slide set."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    slides: SlideSet
    current_index: int = 0
    wrap_around: bool = False
    layout_mode: LayoutMode = LayoutMode.SINGLE

    @model_validator(mode="after")
    def check_index(self) -> NavigationState:
        count = len(self.slides)
        if count and not 0 <= self.current_index < count:
            raise ValueError(
                f"current_index must be between 0 and {count - 1}, got {self.current_index}."
            )
        return self

    @property
    def slide_count(self) -> int:
        return len(self.slides)

    @property
    def current_slide(self) -> Path:
        return self.slides[self.current_index]

    @property
    def step(self) -> int:
        return step_size(self.layout_mode)

    def next_index(self) -> int | None:
        """Index the next advance lands on, or None at a non-wrapping end."""
        return self._offset_index(self.step)

    def prev_index(self) -> int | None:
        """Index the next retreat lands on, or None at a non-wrapping start."""
        return self._offset_index(-self.step)

    def peek_index(self, offset: int) -> int | None:
        """Look ahead by a raw slide count, ignoring the layout step size."""
        if offset < 1:
            raise ValueError(f"Peek offset must be at least 1, got {offset}.")
        return self._offset_index(offset)

    def slide_at(self, index: int | None) -> Path | None:
        if index is None:
            return None
        return self.slides[index]

    def advance(self) -> bool:
        """Move forward one step; a no-op at the end of a non-wrapping show."""
        return self._move_to(self.next_index())

    def retreat(self) -> bool:
        """Move back one step; a no-op at the start of a non-wrapping show."""
        return self._move_to(self.prev_index())

    def goto(self, index: int) -> bool:
        if not 0 <= index < self.slide_count:
            raise IndexError(f"Slide index {index} is out of range (0-{self.slide_count - 1}).")
        return self._move_to(index)

    def first(self) -> bool:
        return self._move_to(0)

    def last(self) -> bool:
        return self._move_to(self.slide_count - 1)

    def _offset_index(self, delta: int) -> int | None:
        count = self.slide_count
        if not count:
            return None
        if self.wrap_around:
            return (self.current_index + delta) % count
        target = self.current_index + delta
        if 0 <= target < count:
            return target
        return None

    def _move_to(self, index: int | None) -> bool:
        if index is None or index == self.current_index:
            return False
        self.current_index = index
        return True
