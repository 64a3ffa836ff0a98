"""Time-of-day to clock-hand geometry."""

import datetime
import math
from dataclasses import dataclass

TWO_PI = math.pi * 2

SECONDS_PERIOD = 60.0
MINUTES_PERIOD = 60.0
HOURS_PERIOD = 12.0

# Number of tick marks around the face (one per quarter)
TICK_COUNT = 4


@dataclass(frozen=True)
class ClockTime:
    """Fractional position of each hand within its period."""

    hours: float  # 0 <= hours < 12
    minutes: float  # 0 <= minutes < 60
    seconds: float  # 0 <= seconds < 60

    @classmethod
    def from_datetime(cls, now: datetime.datetime) -> "ClockTime":
        """
        Decompose a datetime into continuously sweeping hand positions.

        The minute value carries the seconds fraction and the hour value
        carries the minutes fraction, so neither hand jumps.

        Args:
            now: Local time to decompose

        Returns:
            ClockTime for the given instant
        """
        seconds = now.second + now.microsecond / 1_000_000
        minutes = now.minute + seconds / 60
        hours = (now.hour % 12) + minutes / 60
        return cls(hours=hours, minutes=minutes, seconds=seconds)

    @property
    def second_angle(self) -> float:
        return to_angle(self.seconds, SECONDS_PERIOD)

    @property
    def minute_angle(self) -> float:
        return to_angle(self.minutes, MINUTES_PERIOD)

    @property
    def hour_angle(self) -> float:
        return to_angle(self.hours, HOURS_PERIOD)


def to_angle(value: float, period: float) -> float:
    """
    Convert a position within a period to a clockwise angle from 12 o'clock.

    Returns:
        Angle in radians, always in [0, 2*pi)
    """
    angle = value / period * TWO_PI
    # Float rounding can land exactly on 2*pi just before a wrap
    angle %= TWO_PI
    return angle if angle < TWO_PI else 0.0


def unit_vector(angle: float) -> tuple[float, float]:
    """Screen-space direction of an angle (y grows downwards)."""
    return math.sin(angle), -math.cos(angle)


def tick_angles(count: int = TICK_COUNT) -> list[float]:
    """Evenly spaced tick angles starting at 12 o'clock."""
    return [index * TWO_PI / count for index in range(count)]


def radial_segment(
    center: tuple[float, float], angle: float, inner: float, outer: float
) -> tuple[float, float, float, float]:
    """
    Segment along a ray from the center, between two signed radii.

    A negative inner radius starts the segment on the opposite side of the
    center, which is how hands get their counterweight tail.

    Returns:
        (x0, y0, x1, y1)
    """
    cx, cy = center
    ux, uy = unit_vector(angle)
    return cx + ux * inner, cy + uy * inner, cx + ux * outer, cy + uy * outer
