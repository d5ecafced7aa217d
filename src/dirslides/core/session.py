"""Presentation session: one slide set, its navigation, autoplay and renderer."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from pathlib import Path
import threading
from typing import Any, Callable, Iterator

from dirslides.core.autoplay import AutoplayScheduler, TimerFactory, start_thread_timer
from dirslides.core.catalog import CatalogSource, SlideSet, build_catalog, read_notes
from dirslides.core.errors import SessionClosedError
from dirslides.core.interfaces import ControlPanelSnapshot, SlideRenderer
from dirslides.core.navigation import LayoutMode, NavigationState
from dirslides.core.preview import Preview, compute_preview, partner_slide
from dirslides.core.settings import LIVE_SETTINGS, PresentationSettings

logger = logging.getLogger(__name__)

AfterRenderHook = Callable[[], None]

# Settings whose change alters what is on screen, not just the control panel.
_DISPLAY_SETTINGS = {"preview_enabled", "wrap_around", "layout_mode", "atomic_landscape_images"}
_LAYOUT_CYCLE = (LayoutMode.SINGLE, LayoutMode.CHUNK_TWO, LayoutMode.SLIDING_WINDOW)


class PresentationSession:
    """State and collaborators of a single running presentation.

    Every mutation takes the session lock, which autoplay firings share, so
    keyboard actions and timer steps never interleave. ``close`` cancels
    autoplay before releasing the renderer and may be called any number of
    times.
    """

    def __init__(
        self,
        slides: SlideSet,
        renderer: SlideRenderer,
        *,
        settings: PresentationSettings | None = None,
        start_index: int = 0,
        source: CatalogSource | None = None,
        timer_factory: TimerFactory = start_thread_timer,
    ) -> None:
        self.settings = settings or PresentationSettings()
        self.navigation = NavigationState(
            slides=slides,
            current_index=start_index,
            wrap_around=self.settings.wrap_around,
            layout_mode=self.settings.layout_mode,
        )
        self._renderer = renderer
        self._source = source
        self._lock = threading.RLock()
        self._pending_prompts = 0
        self._closed = False
        self._after_render_hooks: list[AfterRenderHook] = []
        self.autoplay = AutoplayScheduler(
            self._autoplay_step,
            interval_seconds=self.settings.autoplay_interval,
            reverse=self.settings.autoplay_reverse,
            lock=self._lock,
            is_blocked=lambda: self._pending_prompts > 0,
            timer_factory=timer_factory,
        )

    @classmethod
    def open(
        cls,
        source: CatalogSource,
        renderer: SlideRenderer,
        *,
        settings: PresentationSettings | None = None,
        start_at: Path | None = None,
        timer_factory: TimerFactory = start_thread_timer,
    ) -> PresentationSession:
        """Build the catalog for ``source`` and show its first slide."""
        settings = settings or PresentationSettings()
        slides = build_catalog(source, settings.catalog_options())
        start_index = 0
        if start_at is not None:
            located = slides.index_of(start_at)
            if located is None:
                logger.warning("%s is not part of the slideshow; starting at the first slide", start_at)
            else:
                start_index = located
        session = cls(
            slides,
            renderer,
            settings=settings,
            start_index=start_index,
            source=source,
            timer_factory=timer_factory,
        )
        try:
            session.render()
        except BaseException:
            session.close()
            raise
        return session

    def __enter__(self) -> PresentationSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def slides(self) -> SlideSet:
        return self.navigation.slides

    @property
    def current_slide(self) -> Path:
        return self.navigation.current_slide

    @property
    def notes(self) -> str | None:
        return read_notes(self.current_slide, self.settings.notes_suffix)

    @property
    def preview(self) -> Preview:
        return compute_preview(self.navigation)

    def add_after_render_hook(self, hook: AfterRenderHook) -> None:
        self._after_render_hooks.append(hook)

    def remove_after_render_hook(self, hook: AfterRenderHook) -> None:
        self._after_render_hooks.remove(hook)

    # Navigation

    def next_slide(self) -> bool:
        return self._navigate(self.navigation.advance)

    def previous_slide(self) -> bool:
        return self._navigate(self.navigation.retreat)

    def first_slide(self) -> bool:
        return self._navigate(self.navigation.first)

    def last_slide(self) -> bool:
        return self._navigate(self.navigation.last)

    def goto_slide(self, index: int) -> bool:
        return self._navigate(lambda: self.navigation.goto(index))

    def restart(self) -> None:
        """Rescan the source and start again from the first slide."""
        with self._lock:
            self._ensure_open()
            if self._source is None:
                slides = self.navigation.slides
            else:
                slides = build_catalog(self._source, self.settings.catalog_options())
            self.navigation = NavigationState(
                slides=slides,
                wrap_around=self.settings.wrap_around,
                layout_mode=self.settings.layout_mode,
            )
            self.render()

    # Rendering

    def render(self) -> None:
        """Show the current slide, its notes and the preview, then redraw the panel."""
        with self._lock:
            self._ensure_open()
            navigation = self.navigation
            slide = navigation.current_slide
            partner = partner_slide(
                navigation,
                atomic_landscape=self.settings.atomic_landscape_images,
                is_landscape=self._renderer.is_landscape,
            )
            self._renderer.show_slide(slide, navigation.layout_mode, partner)
            self._renderer.show_notes(slide, read_notes(slide, self.settings.notes_suffix))
            if self.settings.preview_enabled:
                self._renderer.show_preview(compute_preview(navigation))
            for hook in list(self._after_render_hooks):
                hook()
            self._redraw_control_panel()

    def control_panel_snapshot(self) -> ControlPanelSnapshot:
        return ControlPanelSnapshot(
            settings=self.settings,
            current_index=self.navigation.current_index,
            slide_count=self.navigation.slide_count,
            current_slide=self.navigation.current_slide,
            autoplay_active=self.autoplay.active,
        )

    # Settings

    def get_setting(self, name: str) -> Any:
        if name not in LIVE_SETTINGS:
            raise KeyError(f"Unknown setting: {name}")
        return getattr(self.settings, name)

    def set_setting(self, name: str, value: Any) -> None:
        """Change one live setting and refresh whatever it affects."""
        if name not in LIVE_SETTINGS:
            raise KeyError(f"Unknown setting: {name}")
        with self._lock:
            self._ensure_open()
            self.settings = self.settings.with_updates(**{name: value})
            self.navigation.wrap_around = self.settings.wrap_around
            self.navigation.layout_mode = self.settings.layout_mode
            self.autoplay.state.reverse = self.settings.autoplay_reverse
            if self.settings.autoplay_interval != self.autoplay.interval_seconds:
                self.autoplay.set_interval(self.settings.autoplay_interval)
            logger.debug("Setting %s changed to %r", name, getattr(self.settings, name))
            if name in _DISPLAY_SETTINGS:
                self.render()
            else:
                self._redraw_control_panel()

    def toggle_preview(self) -> bool:
        self.set_setting("preview_enabled", not self.settings.preview_enabled)
        return self.settings.preview_enabled

    def toggle_wrap_around(self) -> bool:
        self.set_setting("wrap_around", not self.settings.wrap_around)
        return self.settings.wrap_around

    def toggle_atomic_landscape(self) -> bool:
        self.set_setting("atomic_landscape_images", not self.settings.atomic_landscape_images)
        return self.settings.atomic_landscape_images

    def cycle_layout_mode(self) -> LayoutMode:
        position = _LAYOUT_CYCLE.index(self.settings.layout_mode)
        self.set_setting("layout_mode", _LAYOUT_CYCLE[(position + 1) % len(_LAYOUT_CYCLE)])
        return self.settings.layout_mode

    # Autoplay

    def toggle_autoplay(self) -> bool:
        with self._lock:
            self._ensure_open()
            running = self.autoplay.toggle()
            self._redraw_control_panel()
            return running

    def toggle_autoplay_direction(self) -> bool:
        self.set_setting("autoplay_reverse", not self.settings.autoplay_reverse)
        return self.settings.autoplay_reverse

    def set_autoplay_interval(self, seconds: float) -> None:
        self.set_setting("autoplay_interval", seconds)

    @contextmanager
    def prompting(self) -> Iterator[None]:
        """Suppress autoplay firings while a synchronous prompt is open."""
        with self._lock:
            self._pending_prompts += 1
        try:
            yield
        finally:
            with self._lock:
                self._pending_prompts -= 1

    # Teardown

    def close(self) -> None:
        """Stop autoplay, then release the renderer; safe to call repeatedly."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self.autoplay.stop()
            self._renderer.close()
            logger.debug("Presentation closed")

    def _navigate(self, move: Callable[[], bool]) -> bool:
        with self._lock:
            self._ensure_open()
            moved = move()
            if moved:
                self.render()
            return moved

    def _autoplay_step(self, reverse: bool) -> None:
        if self._closed:
            return
        try:
            if reverse:
                self.previous_slide()
            else:
                self.next_slide()
        except Exception:
            # the scheduler logs the failure; the panel must show autoplay off
            self.autoplay.stop()
            self._redraw_control_panel()
            raise

    def _redraw_control_panel(self) -> None:
        self._renderer.show_control_panel(self.control_panel_snapshot())

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("The presentation has been closed.")
