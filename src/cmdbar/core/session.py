"""Progress session state and lifecycle.

A ``ProgressBar`` owns one progress session at a time::

    bar = ProgressBar()
    bar.start("Copy files", len(files))
    for path in files:
        copy(path)
        bar.advance()

The session stops by itself when it reaches 100% and prints the elapsed
time. The object is not thread safe; one caller should drive it.
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional, TypeVar

from .errors import NotStartedError, ZeroTotalError
from ..ui.renderer import BarRenderer, truncate_label
from ..ui.terminal import create_terminal
from ..utils.config import BarConfig
from ..utils.duration import elapsed_between, format_duration

# Configure logging
logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgressBar:
    """Single progress session driven by start/advance/stop."""

    def __init__(
        self,
        config: Optional[BarConfig] = None,
        renderer: Optional[BarRenderer] = None,
        clock: Callable[[], int] = time.perf_counter_ns
    ):
        """Initialize progress bar.

        Args:
            config: Display configuration (defaults to ``BarConfig()``)
            renderer: Renderer to draw with (built from config when omitted)
            clock: Monotonic clock returning nanoseconds
        """
        self.config = config or BarConfig()
        if renderer is None:
            renderer = BarRenderer(
                create_terminal(accent_color=self.config.accent_color),
                bar_width=self.config.bar_width,
                label_width=self.config.label_width
            )
        self.renderer = renderer
        self._clock = clock

        self._idle = self.config.idle
        self._stopped = False
        self._label = ""
        self._total = 0
        self._step_counter = 0
        self._current_percent = 0
        self._start_time = 0

    @property
    def label(self) -> str:
        return self._label

    @property
    def total(self) -> int:
        return self._total

    @property
    def step_counter(self) -> int:
        return self._step_counter

    @property
    def current_percent(self) -> int:
        return self._current_percent

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def idle(self) -> bool:
        return self._idle

    @property
    def running(self) -> bool:
        """Whether a session has been started and not yet stopped."""
        return self._total > 0 and not self._stopped

    def is_idle(self) -> bool:
        return self._idle

    def set_idle(self, enabled: bool = True) -> None:
        """Enable or disable idle mode.

        While idle, nothing is drawn and the cursor is left alone. The cursor
        is made visible before idle mode takes over.
        """
        if enabled:
            self._show_cursor()
        self._idle = enabled
        logger.debug(f"Idle mode {'enabled' if enabled else 'disabled'}")

    def clear(self) -> None:
        """Reset the session without printing anything."""
        logger.debug("Progress state cleared")
        self._stopped = False
        self._label = ""
        self._total = 0
        self._step_counter = 0
        self._current_percent = 0

    def start(self, label: str, total: int) -> None:
        """Start a new session and draw the bar at 0%.

        Args:
            label: Text shown to the left of the bar
            total: Number of steps in the session

        Raises:
            ZeroTotalError: If total is zero
            ValueError: If total is negative
        """
        if total < 0:
            raise ValueError(f"total must not be negative, got {total}")
        if total == 0:
            raise ZeroTotalError()

        self.clear()
        self._hide_cursor()

        self._label = truncate_label(label, self.renderer.label_width)
        self._total = total
        self._start_time = self._clock()

        logger.debug(f"Started progress '{self._label}' with {total} steps")
        self._render(0)

    def advance(self) -> None:
        """Advance the session by one step."""
        if self._idle or self._stopped:
            return
        if self._total == 0:
            raise NotStartedError()
        self._step_counter += 1
        self.advance_to(self._step_counter)

    def advance_to(self, step: int) -> None:
        """Move the session to an absolute step.

        Steps past the total are ignored. Reaching the total stops the
        session. The bar is redrawn only when the percentage changes.

        Args:
            step: Number of completed steps

        Raises:
            NotStartedError: If no session has been started
            ValueError: If step is negative
        """
        if self._idle or self._stopped:
            return

        if self._total == 0:
            raise NotStartedError()
        if step < 0:
            raise ValueError(f"step must not be negative, got {step}")

        if step > self._total:
            return

        if step == self._total:
            self.stop()
            return

        percent = (step * 100 + self._total // 2) // self._total
        if percent == self._current_percent:
            return

        self._current_percent = percent
        if percent == 100:
            self.stop()
        else:
            self._render(percent)

    def stop(self) -> None:
        """Finish the session, printing the bar at 100% and the elapsed time."""
        if self._idle or self._stopped:
            return
        if self._total == 0:
            logger.debug("stop() called without a running session")
            return

        elapsed = elapsed_between(self._start_time, self._clock())
        duration_text = format_duration(elapsed)
        self.renderer.finish(self._label, duration_text)
        logger.info(f"Progress '{self._label}' finished in {duration_text}")

        self.clear()
        self._show_cursor()
        self._stopped = True

    @contextmanager
    def session(self, label: str, total: int) -> Iterator["ProgressBar"]:
        """Run a session for the duration of a ``with`` block.

        The session is stopped on a clean exit. If the block raises, the
        partial line is ended without a summary and the cursor restored.
        """
        self.start(label, total)
        try:
            yield self
        except BaseException:
            self._abandon()
            raise
        else:
            self.stop()

    def track(
        self,
        items: Iterable[T],
        label: str,
        total: Optional[int] = None
    ) -> Iterator[T]:
        """Yield items while advancing one step per item.

        Args:
            items: Items to iterate
            label: Text shown to the left of the bar
            total: Number of items (taken from ``len(items)`` when omitted)
        """
        if total is None:
            total = len(items)
        with self.session(label, total):
            for item in items:
                yield item
                self.advance()

    def _abandon(self) -> None:
        if not self.running:
            return
        logger.debug(f"Progress '{self._label}' abandoned at {self._current_percent}%")
        if not self._idle:
            self.renderer.abandon()
        self.clear()
        self._show_cursor()

    def _render(self, percent: int) -> None:
        if self._idle or self._stopped:
            return
        self.renderer.render(self._label, percent)

    def _hide_cursor(self) -> None:
        if self._idle:
            return
        self.renderer.hide_cursor()

    def _show_cursor(self) -> None:
        if self._idle:
            return
        self.renderer.show_cursor()
