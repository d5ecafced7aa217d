"""Abstract interfaces for presentation renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel

from dirslides.core.navigation import LayoutMode
from dirslides.core.orientation import is_landscape_image
from dirslides.core.preview import Preview
from dirslides.core.settings import PresentationSettings


class ControlPanelSnapshot(BaseModel):
    """State reflected by the control panel after every change."""

    settings: PresentationSettings
    current_index: int
    slide_count: int
    current_slide: Path
    autoplay_active: bool


class SlideRenderer(ABC):
    """Display surface driven by a presentation session."""

    @abstractmethod
    def show_slide(self, slide: Path, layout_mode: LayoutMode, partner: Path | None) -> None:
        """Display the current slide, with its partner for two-slide layouts."""

    @abstractmethod
    def show_notes(self, slide: Path, notes: str | None) -> None:
        """Display speaker notes for the current slide."""

    @abstractmethod
    def show_preview(self, preview: Preview) -> None:
        """Display the upcoming slide(s)."""

    @abstractmethod
    def show_control_panel(self, snapshot: ControlPanelSnapshot) -> None:
        """Redraw the control panel."""

    @abstractmethod
    def close(self) -> None:
        """Release windows/frames owned by the presentation."""

    def is_landscape(self, slide: Path) -> bool:
        """Classify a slide as landscape-oriented."""
        return is_landscape_image(slide)
