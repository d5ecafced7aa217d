"""Slide catalog construction and speaker notes lookup."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
import logging
import os
from pathlib import Path
import re
from typing import Callable, Iterator, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from dirslides.core.errors import EmptyCatalogError

logger = logging.getLogger(__name__)

DEFAULT_NOTES_SUFFIX = ".notes"
DEFAULT_IGNORE_PATTERN = r"^\."

SlideCompare = Callable[[str, str], bool]
CatalogSource = Union[str, os.PathLike, Sequence[Union[str, os.PathLike]]]


@dataclass(frozen=True)
class SlideSet:
    """Ordered, immutable sequence of slide paths."""

    paths: tuple[Path, ...]

    def __len__(self) -> int:
        return len(self.paths)

    def __getitem__(self, index: int) -> Path:
        return self.paths[index]

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def index_of(self, path: str | os.PathLike) -> int | None:
        """Return the position of a slide, matching by resolved path."""
        target = Path(path).expanduser().resolve()
        return next(
            (index for index, slide in enumerate(self.paths) if slide.resolve() == target),
            None,
        )


class CatalogOptions(BaseModel):
    """Include/exclude rules and ordering used to build a slide set."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ignore_pattern: re.Pattern[str] | None = Field(
        default_factory=lambda: re.compile(DEFAULT_IGNORE_PATTERN)
    )
    include_directories: bool = False
    notes_suffix: str = DEFAULT_NOTES_SUFFIX
    compare: SlideCompare | None = None


def build_catalog(source: CatalogSource, options: CatalogOptions | None = None) -> SlideSet:
    """Collect, filter and sort slides from a directory or a list of paths."""
    options = options or CatalogOptions()
    if isinstance(source, (str, os.PathLike)):
        candidates = _scan_directory(Path(source))
        from_listing = False
    else:
        candidates = [Path(entry) for entry in source]
        from_listing = True

    slides = [
        path
        for path in candidates
        if _keep_entry(path, options, directory_known=not from_listing or path.exists())
    ]
    if not slides:
        raise EmptyCatalogError(source if not from_listing else "the supplied file list")

    ordered = _sort_slides(slides, options.compare)
    logger.debug("Catalog built with %d slides (from %d candidates)", len(ordered), len(candidates))
    return SlideSet(paths=tuple(ordered))


def notes_path(slide: Path, suffix: str = DEFAULT_NOTES_SUFFIX) -> Path:
    """Return the speaker notes path for a slide."""
    return slide.with_name(slide.name + suffix)


def read_notes(slide: Path, suffix: str = DEFAULT_NOTES_SUFFIX) -> str | None:
    """Read speaker notes for a slide, returning None when there are none."""
    path = notes_path(slide, suffix)
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8", errors="replace")


def _scan_directory(directory: Path) -> list[Path]:
    if not directory.exists():
        raise FileNotFoundError(f"Slides directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Slides path is not a directory: {directory}")
    return list(directory.iterdir())


def _keep_entry(path: Path, options: CatalogOptions, *, directory_known: bool) -> bool:
    if directory_known and not options.include_directories and path.is_dir():
        return False
    if options.notes_suffix and path.name.endswith(options.notes_suffix):
        return False
    if options.ignore_pattern is not None and options.ignore_pattern.search(path.name):
        return False
    return True


def _sort_slides(slides: list[Path], compare: SlideCompare | None) -> list[Path]:
    if compare is None:
        return sorted(slides, key=lambda path: os.fsencode(str(path)))

    def _cmp(left: Path, right: Path) -> int:
        if compare(str(left), str(right)):
            return -1
        if compare(str(right), str(left)):
            return 1
        return 0

    return sorted(slides, key=cmp_to_key(_cmp))
