"""Presentation settings surface."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator

from dirslides.core.catalog import DEFAULT_IGNORE_PATTERN, DEFAULT_NOTES_SUFFIX, CatalogOptions
from dirslides.core.navigation import LayoutMode

DEFAULT_AUTOPLAY_INTERVAL = 5.0

# Settings a running presentation exposes through its control panel.
LIVE_SETTINGS = (
    "preview_enabled",
    "wrap_around",
    "layout_mode",
    "autoplay_interval",
    "autoplay_reverse",
    "atomic_landscape_images",
)


class PresentationSettings(BaseModel):
    """User-tunable presentation behavior."""

    preview_enabled: bool = False
    wrap_around: bool = False
    layout_mode: LayoutMode = LayoutMode.SINGLE
    autoplay_interval: float = Field(default=DEFAULT_AUTOPLAY_INTERVAL, gt=0)
    autoplay_reverse: bool = False
    atomic_landscape_images: bool = True
    notes_suffix: str = DEFAULT_NOTES_SUFFIX
    ignore_pattern: str | None = DEFAULT_IGNORE_PATTERN
    include_directories: bool = False

    @field_validator("ignore_pattern", mode="before")
    @classmethod
    def normalize_ignore_pattern(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value)
        if not text:
            return None
        try:
            re.compile(text)
        except re.error as exc:
            raise ValueError(f"Invalid ignore pattern {text!r}: {exc}") from exc
        return text

    def catalog_options(self) -> CatalogOptions:
        """Build catalog options from these settings."""
        return CatalogOptions(
            ignore_pattern=re.compile(self.ignore_pattern) if self.ignore_pattern else None,
            include_directories=self.include_directories,
            notes_suffix=self.notes_suffix,
        )

    def with_updates(self, **updates: Any) -> PresentationSettings:
        """Return a validated copy with the given fields replaced."""
        unknown = set(updates) - set(type(self).model_fields)
        if unknown:
            raise KeyError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        return type(self).model_validate({**self.model_dump(), **updates})
