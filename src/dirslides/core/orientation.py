"""Image orientation inspection."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


def load_image_dimensions(image_path: Path) -> tuple[int, int] | None:
    """Return (width, height) for an image file, or None for other content."""
    try:
        with Image.open(image_path) as image:
            return image.size
    except (UnidentifiedImageError, OSError):
        logger.debug("Not an image, skipping orientation check: %s", image_path)
        return None


def is_landscape_image(image_path: Path) -> bool:
    """Return True when the file is an image wider than it is tall."""
    dimensions = load_image_dimensions(image_path)
    if dimensions is None:
        return False
    width, height = dimensions
    return width > height
