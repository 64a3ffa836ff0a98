"""Single-threaded host loop that drives the watch face engine."""

import itertools
import logging
import queue
import time
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from PIL import Image

from .engine import WatchFaceEngine
from .face import PaintStyle, rasterize
from .scheduler import Timer, wall_clock_ms
from .settings import SettingsStore

if TYPE_CHECKING:
    from .config import Config
    from .display import FramebufferDisplay

logger = logging.getLogger(__name__)


class HostEvent(Enum):
    """Inbound events the host forwards to the engine."""

    VISIBILITY = "visibility"  # value: bool, or None to toggle
    AMBIENT = "ambient"  # value: bool, or None to toggle
    PROPERTIES = "properties"  # value: (low_bit_ambient, burn_in_protection)
    TIME_TICK = "time_tick"
    TIMEZONE_CHANGED = "timezone_changed"
    SETTINGS_CHANGED = "settings_changed"
    STOP = "stop"


class LoopTimer(Timer):
    """
    Single-slot timer serviced by the host loop.

    Callbacks fire from fire_due(), on the loop's own thread. Scheduling
    replaces whatever was pending.
    """

    def __init__(self, monotonic: Callable[[], float] = time.monotonic):
        self._monotonic = monotonic
        self._handles = itertools.count(1)
        self._slot: Optional[tuple[int, float, Callable[[], None]]] = None

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._handles)
        self._slot = (handle, self._monotonic() + delay_ms / 1000, callback)
        return handle

    def cancel(self, handle: Any) -> None:
        if self._slot is not None and self._slot[0] == handle:
            self._slot = None

    @property
    def deadline(self) -> Optional[float]:
        """Monotonic time of the pending wake-up, if any."""
        return self._slot[1] if self._slot is not None else None

    def fire_due(self) -> bool:
        """Run the pending callback if its time has come."""
        if self._slot is None or self._monotonic() < self._slot[1]:
            return False
        _, _, callback = self._slot
        self._slot = None
        callback()
        return True


class HostLoop:
    """
    Event loop standing in for the watch's window system.

    Events are posted to a queue (safe from signal handlers), timer
    wake-ups and periodic time ticks are serviced in between, and every
    invalidate() results in one rendered frame.
    """

    def __init__(
        self,
        config: "Config",
        display: "FramebufferDisplay",
        settings: SettingsStore,
        clock_ms: Callable[[], int] = wall_clock_ms,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize host loop.

        Args:
            config: Application configuration
            display: Where frames are written
            settings: User color settings
            clock_ms: Epoch milliseconds source
            monotonic: Monotonic seconds source for timer deadlines
        """
        self.config = config
        self.display = display
        self.settings = settings
        self.clock_ms = clock_ms
        self.monotonic = monotonic
        self.bounds = (config.display.width, config.display.height)

        self.timer = LoopTimer(monotonic)
        self.events: "queue.SimpleQueue[tuple[HostEvent, Any]]" = queue.SimpleQueue()
        self.running = False
        self.last_frame: Optional[Image.Image] = None
        self._invalid = False
        self._next_time_tick_ms = 0

        self.engine = WatchFaceEngine(
            config.face,
            PaintStyle.from_settings(settings),
            self.timer,
            self.invalidate,
            clock_ms,
        )

    def post(self, event: HostEvent, value: Any = None) -> None:
        """Queue an event for the loop. Safe to call from a signal handler."""
        self.events.put((event, value))

    def stop(self) -> None:
        self.post(HostEvent.STOP)

    def invalidate(self) -> None:
        """Request a redraw on the next loop iteration."""
        self._invalid = True

    def render_frame(self) -> Image.Image:
        """Render the current frame and send it to the display."""
        ops = self.engine.draw(self.bounds)
        supersample = self.config.face.supersample if self.engine.antialias else 1
        frame = rasterize(ops, self.bounds, supersample)
        self.last_frame = frame
        if self.display.is_open and not self.display.write_frame(frame):
            logger.warning("Frame was not written to the display")
        return frame

    def dispatch(self, event: HostEvent, value: Any = None) -> None:
        """Forward one event to the engine."""
        logger.debug(f"Event {event.value} ({value!r})")
        if event is HostEvent.VISIBILITY:
            visible = (not self.engine.visible) if value is None else bool(value)
            self.engine.on_visibility_changed(visible)
        elif event is HostEvent.AMBIENT:
            ambient = (not self.engine.ambient) if value is None else bool(value)
            self.engine.on_ambient_mode_changed(ambient)
        elif event is HostEvent.PROPERTIES:
            low_bit_ambient, burn_in_protection = value
            self.engine.on_properties_changed(low_bit_ambient, burn_in_protection)
        elif event is HostEvent.TIME_TICK:
            self.engine.on_time_tick()
        elif event is HostEvent.TIMEZONE_CHANGED:
            self.engine.on_timezone_changed()
        elif event is HostEvent.SETTINGS_CHANGED:
            self.reload_settings()
        elif event is HostEvent.STOP:
            self.running = False

    def reload_settings(self) -> None:
        """Re-read the settings file and restyle the face."""
        self.settings = SettingsStore(self.settings.path)
        self.engine.on_settings_changed(PaintStyle.from_settings(self.settings))
        logger.info("Settings reloaded")

    def run(self) -> None:
        """Run until a STOP event arrives."""
        self.running = True
        self.engine.on_ambient_mode_changed(self.config.host.start_ambient)
        self.engine.on_visibility_changed(True)
        self._schedule_time_tick()

        try:
            while self.running:
                if self._invalid:
                    self._invalid = False
                    self.render_frame()

                try:
                    event, value = self.events.get(timeout=self._next_timeout())
                except queue.Empty:
                    pass
                else:
                    self.dispatch(event, value)

                self.timer.fire_due()
                if self.clock_ms() >= self._next_time_tick_ms:
                    self._schedule_time_tick()
                    self.engine.on_time_tick()
        finally:
            self.engine.on_visibility_changed(False)
            self.engine.on_destroy()

    def _schedule_time_tick(self) -> None:
        period_ms = self.config.host.time_tick_seconds * 1000
        now_ms = self.clock_ms()
        self._next_time_tick_ms = now_ms - (now_ms % period_ms) + period_ms

    def _next_timeout(self) -> float:
        """Seconds the loop may block waiting for events."""
        if self._invalid:
            return 0.0
        timeout = (self._next_time_tick_ms - self.clock_ms()) / 1000
        deadline = self.timer.deadline
        if deadline is not None:
            timeout = min(timeout, deadline - self.monotonic())
        return max(timeout, 0.0)
