"""Once-per-second redraw scheduling aligned to wall-clock seconds."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

# Interactive update rate
UPDATE_RATE_MS = 1000


def wall_clock_ms() -> int:
    """Current epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


class Timer(ABC):
    """One-shot cancellable wake-ups, delivered on the caller's thread."""

    @abstractmethod
    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        """
        Request a single callback after a delay.

        Returns:
            Handle that can be passed to cancel()
        """

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a wake-up. Unknown or already-fired handles are ignored."""


class SchedulerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class RunState:
    """Host-reported visibility and display mode."""

    visible: bool = False
    ambient: bool = False

    @property
    def should_run(self) -> bool:
        return self.visible and not self.ambient


class RedrawScheduler:
    """
    Drives the per-second redraw while the face is visible and interactive.

    Each wake-up lands on the next wall-clock second boundary and schedules
    the following one, so the cadence does not drift. At most one wake-up
    is pending at any time.
    """

    def __init__(
        self,
        timer: Timer,
        on_tick: Callable[[], None],
        clock_ms: Callable[[], int] = wall_clock_ms,
    ):
        """
        Initialize scheduler.

        Args:
            timer: Source of one-shot wake-ups
            on_tick: Called on every wake-up to request a redraw
            clock_ms: Epoch milliseconds source
        """
        self.timer = timer
        self.on_tick = on_tick
        self.clock_ms = clock_ms
        self.run_state = RunState()
        self._pending: Optional[Any] = None
        self._shut_down = False

    @property
    def state(self) -> SchedulerState:
        if self.run_state.should_run and not self._shut_down:
            return SchedulerState.RUNNING
        return SchedulerState.STOPPED

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    def next_delay_ms(self, now_ms: Optional[int] = None) -> int:
        """Milliseconds until the next whole second, in (0, 1000]."""
        if now_ms is None:
            now_ms = self.clock_ms()
        return UPDATE_RATE_MS - (now_ms % UPDATE_RATE_MS)

    def update(self, visible: bool, ambient: bool) -> None:
        """
        Apply new visibility and ambient flags.

        Any pending wake-up is dropped; a fresh one is scheduled if the
        face should keep ticking.
        """
        if self._shut_down:
            logger.debug("Ignoring update after shutdown")
            return

        self.run_state = RunState(visible=visible, ambient=ambient)
        self.cancel()
        if self.run_state.should_run:
            self._schedule()
        logger.debug(
            f"Scheduler {self.state.value} (visible={visible}, ambient={ambient})"
        )

    def cancel(self) -> None:
        """Drop the pending wake-up, if any."""
        if self._pending is not None:
            self.timer.cancel(self._pending)
            self._pending = None

    def shutdown(self) -> None:
        """Stop for good; later updates are ignored."""
        self.cancel()
        self._shut_down = True

    def _schedule(self) -> None:
        self.cancel()
        self._pending = self.timer.schedule_once(self.next_delay_ms(), self._wake)

    def _wake(self) -> None:
        self._pending = None
        if self._shut_down:
            return
        self.on_tick()
        if self.run_state.should_run and not self._shut_down:
            self._schedule()
