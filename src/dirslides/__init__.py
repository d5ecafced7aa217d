"""dirslides: turn a directory of files into a navigable slideshow."""

__version__ = "0.1.0"

from dirslides.core.catalog import CatalogOptions, SlideSet, build_catalog, read_notes
from dirslides.core.errors import EmptyCatalogError, InvalidModeError
from dirslides.core.interfaces import ControlPanelSnapshot, SlideRenderer
from dirslides.core.navigation import LayoutMode, NavigationState
from dirslides.core.session import PresentationSession
from dirslides.core.settings import PresentationSettings

__all__ = [
    "CatalogOptions",
    "ControlPanelSnapshot",
    "EmptyCatalogError",
    "InvalidModeError",
    "LayoutMode",
    "NavigationState",
    "PresentationSession",
    "PresentationSettings",
    "SlideRenderer",
    "SlideSet",
    "build_catalog",
    "read_notes",
]
