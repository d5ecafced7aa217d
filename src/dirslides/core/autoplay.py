"""Cancellable periodic autoplay trigger."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Callable, ContextManager, Protocol

from dirslides.core.errors import AutoplayActiveError

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Cancel the pending firing."""


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def start_thread_timer(interval: float, callback: Callable[[], None]) -> threading.Timer:
    """Schedule a one-shot daemon timer."""
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass
class AutoplayState:
    """Autoplay settings plus the pending timer, if any."""

    interval_seconds: float
    reverse: bool = False
    handle: TimerHandle | None = None

    @property
    def active(self) -> bool:
        return self.handle is not None


class AutoplayScheduler:
    """Fire advance/retreat steps every ``interval_seconds``.

    Each firing runs under ``lock``, the same lock guarding every other
    navigation operation of the session, and the next firing is only
    scheduled once the current step (renderer callbacks included) returns,
    so firings never overlap. When ``is_blocked`` reports a pending user
    prompt the step is skipped, not queued.
    """

    def __init__(
        self,
        on_step: Callable[[bool], None],
        *,
        interval_seconds: float,
        reverse: bool = False,
        lock: ContextManager[object] | None = None,
        is_blocked: Callable[[], bool] | None = None,
        timer_factory: TimerFactory = start_thread_timer,
    ) -> None:
        _validate_interval(interval_seconds)
        self.state = AutoplayState(interval_seconds=interval_seconds, reverse=reverse)
        self._on_step = on_step
        self._lock = lock or threading.RLock()
        self._is_blocked = is_blocked or (lambda: False)
        self._timer_factory = timer_factory
        self._token: object | None = None

    @property
    def active(self) -> bool:
        return self.state.active

    @property
    def interval_seconds(self) -> float:
        return self.state.interval_seconds

    @property
    def reverse(self) -> bool:
        return self.state.reverse

    def start(self, *, reverse: bool | None = None) -> None:
        """Begin firing; raises AutoplayActiveError when already running."""
        with self._lock:
            if self.active:
                raise AutoplayActiveError("Autoplay is already running.")
            if reverse is not None:
                self.state.reverse = reverse
            self._schedule()
            logger.debug(
                "Autoplay started every %.2fs (%s)",
                self.state.interval_seconds,
                "reverse" if self.state.reverse else "forward",
            )

    def stop(self) -> None:
        """Cancel the pending firing; a no-op when not running."""
        with self._lock:
            handle = self.state.handle
            self.state.handle = None
            self._token = None
            if handle is not None:
                handle.cancel()
                logger.debug("Autoplay stopped")

    def toggle(self) -> bool:
        """Start or stop autoplay, returning whether it is now running."""
        with self._lock:
            if self.active:
                self.stop()
            else:
                self.start()
            return self.active

    def set_interval(self, interval_seconds: float) -> None:
        """Change the interval, rescheduling a running timer."""
        _validate_interval(interval_seconds)
        with self._lock:
            self.state.interval_seconds = interval_seconds
            if self.active:
                self.stop()
                self.start()

    def toggle_direction(self) -> bool:
        """Flip forward/reverse for the next firing, returning ``reverse``."""
        with self._lock:
            self.state.reverse = not self.state.reverse
            return self.state.reverse

    def _schedule(self) -> None:
        token = object()
        self._token = token
        self.state.handle = self._timer_factory(
            self.state.interval_seconds, lambda: self._fire(token)
        )

    def _fire(self, token: object) -> None:
        with self._lock:
            if token is not self._token:
                return
            if self._is_blocked():
                logger.debug("Autoplay step skipped while a prompt is pending")
            else:
                try:
                    self._on_step(self.state.reverse)
                except Exception:
                    logger.exception("Autoplay step failed; stopping autoplay")
                    self.stop()
                    return
            # the step may have stopped or restarted autoplay
            if token is self._token:
                self._schedule()


def _validate_interval(interval_seconds: float) -> None:
    if interval_seconds <= 0:
        raise ValueError(f"Autoplay interval must be positive, got {interval_seconds}.")
