"""Core presentation state machine for dirslides."""

from dirslides.core.autoplay import AutoplayScheduler, AutoplayState
from dirslides.core.catalog import (
    DEFAULT_NOTES_SUFFIX,
    CatalogOptions,
    SlideSet,
    build_catalog,
    notes_path,
    read_notes,
)
from dirslides.core.config import GLOBAL_CONFIG_PATH, GlobalConfig, load_global_config
from dirslides.core.errors import (
    AutoplayActiveError,
    DirslidesError,
    EmptyCatalogError,
    InvalidModeError,
    SessionClosedError,
)
from dirslides.core.navigation import LayoutMode, NavigationState, step_size
from dirslides.core.preview import Preview, compute_preview, partner_slide
from dirslides.core.session import PresentationSession
from dirslides.core.settings import PresentationSettings

__all__ = [
    "DEFAULT_NOTES_SUFFIX",
    "GLOBAL_CONFIG_PATH",
    "AutoplayActiveError",
    "AutoplayScheduler",
    "AutoplayState",
    "CatalogOptions",
    "DirslidesError",
    "EmptyCatalogError",
    "GlobalConfig",
    "InvalidModeError",
    "LayoutMode",
    "NavigationState",
    "PresentationSession",
    "PresentationSettings",
    "Preview",
    "SessionClosedError",
    "SlideSet",
    "build_catalog",
    "compute_preview",
    "load_global_config",
    "notes_path",
    "partner_slide",
    "read_notes",
    "step_size",
]
