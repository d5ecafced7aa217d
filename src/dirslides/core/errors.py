"""Exceptions raised by the presentation core."""

from __future__ import annotations


class DirslidesError(Exception):
    """Base class for dirslides errors."""


class EmptyCatalogError(DirslidesError):
    """Raised when no slides remain after filtering a source."""

    def __init__(self, source: object) -> None:
        super().__init__(f"No slides found in {source}.")
        self.source = source


class InvalidModeError(DirslidesError):
    """Raised when an unknown layout mode reaches a dispatch point."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"Unsupported layout mode: {mode!r}")
        self.mode = mode


class AutoplayActiveError(DirslidesError):
    """Raised when autoplay is started while it is already running."""


class SessionClosedError(DirslidesError):
    """Raised when an operation targets a presentation that was closed."""
