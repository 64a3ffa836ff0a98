"""Watch face engine: reacts to host events and produces frames."""

import datetime
import logging
import time
from typing import TYPE_CHECKING, Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .face import Bounds, DisplayMode, DrawOp, PaintStyle, render
from .scheduler import RedrawScheduler, Timer, wall_clock_ms

if TYPE_CHECKING:
    from .config import FaceConfig

logger = logging.getLogger(__name__)


def resolve_timezone(name: str) -> datetime.tzinfo:
    """
    Look up the zone the face shows.

    Args:
        name: IANA zone name, or empty for the system zone

    Returns:
        tzinfo; UTC if the name is unknown
    """
    if not name:
        # Pick up TZ changes made since the process started
        if hasattr(time, "tzset"):
            time.tzset()
        tz = datetime.datetime.now().astimezone().tzinfo
        return tz if tz is not None else datetime.timezone.utc

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Invalid timezone '{name}', using UTC: {e}")
        return datetime.timezone.utc


class WatchFaceEngine:
    """
    Host-facing side of the watch face.

    The host reports visibility, ambient mode, display properties, time
    ticks and time zone changes. The engine keeps the redraw scheduler in
    step and asks the host to redraw through the invalidate callback.
    """

    def __init__(
        self,
        config: "FaceConfig",
        style: PaintStyle,
        timer: Timer,
        invalidate: Callable[[], None],
        clock_ms: Callable[[], int] = wall_clock_ms,
    ):
        """
        Initialize engine.

        Args:
            config: Face configuration
            style: Initial paint style
            timer: Wake-up source for the redraw scheduler
            invalidate: Asks the host to call draw() soon
            clock_ms: Epoch milliseconds source
        """
        self.config = config
        self.style = style
        self.invalidate = invalidate
        self.clock_ms = clock_ms
        self.scheduler = RedrawScheduler(timer, invalidate, clock_ms)

        self.visible = False
        self.ambient = False
        self.low_bit_ambient = False
        self.burn_in_protection = False
        self.destroyed = False
        self.tz = resolve_timezone(config.timezone)

    @property
    def mode(self) -> DisplayMode:
        return DisplayMode.AMBIENT if self.ambient else DisplayMode.NORMAL

    @property
    def antialias(self) -> bool:
        """Low-bit ambient screens cannot show intermediate shades."""
        return not (self.ambient and self.low_bit_ambient)

    def on_visibility_changed(self, visible: bool) -> None:
        self.visible = visible
        if visible:
            # The zone may have changed while hidden
            self._rebind_timezone()
        self._update_timer()

    def on_ambient_mode_changed(self, ambient: bool) -> None:
        self.ambient = ambient
        logger.info(f"Entering {self.mode.value} mode")
        self.invalidate()
        self._update_timer()

    def on_properties_changed(
        self, low_bit_ambient: bool, burn_in_protection: bool
    ) -> None:
        self.low_bit_ambient = low_bit_ambient
        self.burn_in_protection = burn_in_protection
        logger.debug(
            f"Display properties: low_bit_ambient={low_bit_ambient}, "
            f"burn_in_protection={burn_in_protection}"
        )

    def on_time_tick(self) -> None:
        self.invalidate()

    def on_timezone_changed(self) -> None:
        self._rebind_timezone()
        self.invalidate()

    def on_settings_changed(self, style: PaintStyle) -> None:
        self.style = style
        self.invalidate()

    def on_destroy(self) -> None:
        if self.destroyed:
            return
        self.destroyed = True
        self.scheduler.shutdown()
        logger.debug("Engine destroyed")

    def now(self) -> datetime.datetime:
        """Current time in the face's zone."""
        return datetime.datetime.fromtimestamp(self.clock_ms() / 1000, tz=self.tz)

    def draw(
        self, bounds: Bounds, now: Optional[datetime.datetime] = None
    ) -> list[DrawOp]:
        """Draw operations for the current frame."""
        if now is None:
            now = self.now()
        return render(now, self.mode, self.style, bounds)

    def _rebind_timezone(self) -> None:
        self.tz = resolve_timezone(self.config.timezone)
        logger.debug(f"Time zone is {self.tz}")

    def _update_timer(self) -> None:
        self.scheduler.update(self.visible, self.ambient)
