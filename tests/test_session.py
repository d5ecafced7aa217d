from __future__ import annotations

from pathlib import Path
from typing import Callable

from PIL import Image
from pydantic import ValidationError
import pytest

from dirslides.core.errors import EmptyCatalogError, SessionClosedError
from dirslides.core.interfaces import ControlPanelSnapshot, SlideRenderer
from dirslides.core.navigation import LayoutMode
from dirslides.core.preview import Preview
from dirslides.core.session import PresentationSession
from dirslides.core.settings import PresentationSettings


class _RecordingRenderer(SlideRenderer):
    def __init__(self) -> None:
        self.slides: list[tuple[str, LayoutMode, str | None]] = []
        self.notes: list[str | None] = []
        self.previews: list[Preview] = []
        self.panels: list[ControlPanelSnapshot] = []
        self.close_calls = 0
        self.autoplay_active_at_close: bool | None = None
        self.session: PresentationSession | None = None

    def show_slide(self, slide: Path, layout_mode: LayoutMode, partner: Path | None) -> None:
        self.slides.append((slide.name, layout_mode, partner.name if partner else None))

    def show_notes(self, slide: Path, notes: str | None) -> None:
        self.notes.append(notes)

    def show_preview(self, preview: Preview) -> None:
        self.previews.append(preview)

    def show_control_panel(self, snapshot: ControlPanelSnapshot) -> None:
        self.panels.append(snapshot)

    def close(self) -> None:
        self.close_calls += 1
        if self.session is not None:
            self.autoplay_active_at_close = self.session.autoplay.active


class _FakeTimer:
    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class _ManualTimers:
    def __init__(self) -> None:
        self.created: list[_FakeTimer] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> _FakeTimer:
        timer = _FakeTimer(interval, callback)
        self.created.append(timer)
        return timer

    def fire(self) -> None:
        self.created[-1].callback()


def _seed_directory(directory: Path, *names: str) -> Path:
    for name in names:
        (directory / name).write_text(name, encoding="utf-8")
    return directory


def _open(
    directory: Path,
    *,
    timers: _ManualTimers | None = None,
    **settings: object,
) -> tuple[PresentationSession, _RecordingRenderer]:
    renderer = _RecordingRenderer()
    session = PresentationSession.open(
        directory,
        renderer,
        settings=PresentationSettings(**settings),
        timer_factory=timers or _ManualTimers(),
    )
    renderer.session = session
    return session, renderer


def test_open_renders_first_slide_with_notes(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "01.md", "02.md", "03.md")
    (tmp_path / "01.md.notes").write_text("Say hello.", encoding="utf-8")

    session, renderer = _open(tmp_path)

    assert renderer.slides == [("01.md", LayoutMode.SINGLE, None)]
    assert renderer.notes == ["Say hello."]
    assert renderer.previews == []
    assert renderer.panels[-1].current_index == 0
    assert renderer.panels[-1].slide_count == 3
    assert session.notes == "Say hello."


def test_navigation_renders_only_when_moving(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt")
    session, renderer = _open(tmp_path, preview_enabled=True)

    assert session.next_slide() is True
    assert session.next_slide() is False
    assert session.previous_slide() is True

    assert [name for name, _, _ in renderer.slides] == ["a.txt", "b.txt", "a.txt"]
    assert renderer.notes == [None, None, None]
    assert renderer.previews[1].end_of_show is True
    assert renderer.previews[2] == Preview(slides=(tmp_path / "b.txt",))


def test_after_render_hooks_fire_once_per_render(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt", "c.txt")
    session, _ = _open(tmp_path)
    calls: list[int] = []

    def _hook() -> None:
        calls.append(session.navigation.current_index)

    session.add_after_render_hook(_hook)
    session.next_slide()
    session.next_slide()
    session.next_slide()
    session.remove_after_render_hook(_hook)
    session.first_slide()

    assert calls == [1, 2]


def test_open_at_start_slide(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt", "c.txt")
    renderer = _RecordingRenderer()

    session = PresentationSession.open(tmp_path, renderer, start_at=tmp_path / "c.txt")

    assert session.current_slide == tmp_path / "c.txt"
    session.close()


def test_open_empty_directory_fails(tmp_path: Path) -> None:
    _seed_directory(tmp_path, ".hidden")

    with pytest.raises(EmptyCatalogError):
        PresentationSession.open(tmp_path, _RecordingRenderer())


def test_settings_changes_redraw_control_panel(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt", "c.txt")
    timers = _ManualTimers()
    session, renderer = _open(tmp_path, timers=timers)

    session.set_setting("layout_mode", LayoutMode.CHUNK_TWO)
    assert renderer.slides[-1] == ("a.txt", LayoutMode.CHUNK_TWO, "b.txt")
    assert session.navigation.step == 2

    panels_before = len(renderer.panels)
    session.set_autoplay_interval(3.0)
    assert len(renderer.panels) == panels_before + 1
    assert renderer.panels[-1].settings.autoplay_interval == 3.0
    assert session.autoplay.interval_seconds == 3.0
    assert session.get_setting("autoplay_interval") == 3.0

    assert session.toggle_wrap_around() is True
    assert session.navigation.wrap_around is True
    assert session.toggle_preview() is True
    assert isinstance(renderer.previews[-1], Preview)
    assert session.cycle_layout_mode() == LayoutMode.SLIDING_WINDOW
    assert session.toggle_autoplay_direction() is True
    assert session.autoplay.reverse is True


def test_invalid_settings_are_rejected(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt")
    session, _ = _open(tmp_path)

    with pytest.raises(KeyError):
        session.set_setting("notes_suffix", ".txt")
    with pytest.raises(KeyError):
        session.get_setting("volume")
    with pytest.raises(ValidationError):
        session.set_autoplay_interval(0)
    assert session.settings.autoplay_interval == 5.0


def test_autoplay_advances_through_session(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt", "c.txt")
    timers = _ManualTimers()
    session, renderer = _open(tmp_path, timers=timers, wrap_around=True)

    assert session.toggle_autoplay() is True
    assert renderer.panels[-1].autoplay_active is True
    timers.fire()
    timers.fire()
    timers.fire()

    assert session.navigation.current_index == 0
    assert [name for name, _, _ in renderer.slides] == ["a.txt", "b.txt", "c.txt", "a.txt"]

    session.toggle_autoplay_direction()
    timers.fire()
    assert session.current_slide.name == "c.txt"


def test_autoplay_stop_before_firing_keeps_index(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt")
    timers = _ManualTimers()
    session, _ = _open(tmp_path, timers=timers)

    session.toggle_autoplay()
    session.toggle_autoplay()

    assert session.navigation.current_index == 0
    assert timers.created[0].cancelled


def test_prompting_suppresses_autoplay(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt", "c.txt")
    timers = _ManualTimers()
    session, _ = _open(tmp_path, timers=timers)
    session.toggle_autoplay()

    with session.prompting():
        timers.fire()
        timers.fire()
    assert session.navigation.current_index == 0

    timers.fire()
    assert session.navigation.current_index == 1


def test_close_is_idempotent_and_cancels_autoplay_first(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt")
    timers = _ManualTimers()
    session, renderer = _open(tmp_path, timers=timers)
    session.toggle_autoplay()
    pending = timers.created[-1]

    session.close()
    session.close()

    assert renderer.close_calls == 1
    assert renderer.autoplay_active_at_close is False
    assert pending.cancelled
    pending.callback()
    assert session.navigation.current_index == 0
    with pytest.raises(SessionClosedError):
        session.next_slide()


def test_context_manager_closes_on_error(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt")
    renderer = _RecordingRenderer()

    with pytest.raises(RuntimeError):
        with PresentationSession.open(tmp_path, renderer):
            raise RuntimeError("boom")

    assert renderer.close_calls == 1


def test_restart_rescans_source(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "b.txt", "c.txt")
    session, renderer = _open(tmp_path)
    session.next_slide()

    _seed_directory(tmp_path, "a.txt")
    session.restart()

    assert len(session.slides) == 3
    assert session.navigation.current_index == 0
    assert renderer.slides[-1][0] == "a.txt"


def test_atomic_landscape_in_sliding_window(tmp_path: Path) -> None:
    Image.new("RGB", (60, 30)).save(tmp_path / "01-wide.png")
    Image.new("RGB", (30, 60)).save(tmp_path / "02-tall.png")
    Image.new("RGB", (30, 60)).save(tmp_path / "03-tall.png")
    session, renderer = _open(tmp_path, layout_mode=LayoutMode.SLIDING_WINDOW)

    assert renderer.slides[-1] == ("01-wide.png", LayoutMode.SLIDING_WINDOW, None)
    session.next_slide()
    assert renderer.slides[-1] == ("02-tall.png", LayoutMode.SLIDING_WINDOW, "03-tall.png")

    session.first_slide()
    session.toggle_atomic_landscape()
    assert renderer.slides[-1] == ("01-wide.png", LayoutMode.SLIDING_WINDOW, "02-tall.png")


class _FailingRenderer(_RecordingRenderer):
    def __init__(self, *, fail_on_slide: int) -> None:
        super().__init__()
        self._fail_on_slide = fail_on_slide

    def show_slide(self, slide: Path, layout_mode: LayoutMode, partner: Path | None) -> None:
        super().show_slide(slide, layout_mode, partner)
        if len(self.slides) == self._fail_on_slide:
            raise RuntimeError("display lost")


def test_open_releases_renderer_when_first_render_fails(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt")
    renderer = _FailingRenderer(fail_on_slide=1)

    with pytest.raises(RuntimeError, match="display lost"):
        PresentationSession.open(tmp_path, renderer, timer_factory=_ManualTimers())

    assert renderer.close_calls == 1


def test_failed_autoplay_step_stops_autoplay_and_redraws_panel(tmp_path: Path) -> None:
    _seed_directory(tmp_path, "a.txt", "b.txt", "c.txt")
    timers = _ManualTimers()
    renderer = _FailingRenderer(fail_on_slide=2)
    session = PresentationSession.open(tmp_path, renderer, timer_factory=timers)

    session.toggle_autoplay()
    assert renderer.panels[-1].autoplay_active is True
    timers.fire()

    assert session.autoplay.active is False
    assert renderer.panels[-1].autoplay_active is False
    assert len(timers.created) == 1
    session.close()
    assert renderer.close_calls == 1
