"""Preview look-ahead and partner slide selection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from dirslides.core.errors import InvalidModeError
from dirslides.core.navigation import LayoutMode, NavigationState

LandscapeCheck = Callable[[Path], bool]


@dataclass(frozen=True)
class Preview:
    """Slides the preview window should display next.

    ``slides`` holds one entry for single-slide layouts and two for
    ``LayoutMode.CHUNK_TWO``; an entry is None when there is nothing to show
    in that position. ``end_of_show`` is set when no upcoming slide exists.
    """

    slides: tuple[Path | None, ...]
    end_of_show: bool = False


def compute_preview(state: NavigationState) -> Preview:
    """Return the upcoming slide(s) for the preview window."""
    step = state.step
    match state.layout_mode:
        case LayoutMode.SINGLE | LayoutMode.SLIDING_WINDOW:
            upcoming = state.slide_at(state.peek_index(step))
            if upcoming is None:
                return Preview(slides=(None,), end_of_show=True)
            return Preview(slides=(upcoming,))
        case LayoutMode.CHUNK_TWO:
            first = state.slide_at(state.peek_index(step))
            second = state.slide_at(state.peek_index(step + 1))
            if first is None and second is None:
                return Preview(slides=(None, None), end_of_show=True)
            return Preview(slides=(first, second))
        case _:
            raise InvalidModeError(state.layout_mode)


def partner_slide(
    state: NavigationState,
    *,
    atomic_landscape: bool = False,
    is_landscape: LandscapeCheck | None = None,
) -> Path | None:
    """Return the slide displayed beside the current one, if any."""
    match state.layout_mode:
        case LayoutMode.SINGLE:
            return None
        case LayoutMode.CHUNK_TWO:
            return _partner_at(state, 1)
        case LayoutMode.SLIDING_WINDOW:
            if atomic_landscape and is_landscape is not None and is_landscape(state.current_slide):
                return None
            return _partner_at(state, 1)
        case _:
            raise InvalidModeError(state.layout_mode)


def _partner_at(state: NavigationState, offset: int) -> Path | None:
    index = state.peek_index(offset)
    # a wrapped peek that lands back on the current slide shows nothing
    if index is None or index == state.current_index:
        return None
    return state.slides[index]
