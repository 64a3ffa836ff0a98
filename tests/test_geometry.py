"""Tests for clock-hand geometry."""

import datetime
import math

import pytest

from iowatch.face.geometry import (
    TWO_PI,
    ClockTime,
    radial_segment,
    tick_angles,
    to_angle,
    unit_vector,
)


def at(hour, minute, second, microsecond=0):
    return datetime.datetime(
        2024, 1, 15, hour, minute, second, microsecond, tzinfo=datetime.timezone.utc
    )


class TestClockTime:
    """Tests for time decomposition."""

    def test_midnight_all_zero(self, utc_midnight):
        """Test all hands point up at 00:00:00."""
        clock = ClockTime.from_datetime(utc_midnight)
        assert clock.second_angle == 0.0
        assert clock.minute_angle == 0.0
        assert clock.hour_angle == 0.0

    def test_half_past_midnight(self):
        """Test minute hand points down and hour hand has swept at 00:30."""
        clock = ClockTime.from_datetime(at(0, 30, 0))
        assert clock.minute_angle == pytest.approx(math.pi)
        assert clock.hour_angle == pytest.approx(math.pi / 12)
        assert clock.second_angle == 0.0

    def test_noon_wraps_to_zero(self):
        """Test hour hand uses a 12 hour dial."""
        clock = ClockTime.from_datetime(at(12, 0, 0))
        assert clock.hours == 0.0
        assert clock.hour_angle == 0.0

    def test_afternoon_matches_morning(self):
        """Test 15:00 and 03:00 produce the same hour angle."""
        pm = ClockTime.from_datetime(at(15, 0, 0))
        am = ClockTime.from_datetime(at(3, 0, 0))
        assert pm.hour_angle == pytest.approx(am.hour_angle)
        assert pm.hour_angle == pytest.approx(math.pi / 2)

    def test_sub_second_fraction(self):
        """Test seconds include the sub-second fraction."""
        clock = ClockTime.from_datetime(at(0, 0, 15, 500_000))
        assert clock.seconds == pytest.approx(15.5)
        assert clock.minutes == pytest.approx(15.5 / 60)

    def test_minute_sweeps_with_seconds(self):
        """Test minute hand moves between whole minutes."""
        start = ClockTime.from_datetime(at(0, 10, 0))
        later = ClockTime.from_datetime(at(0, 10, 30))
        assert later.minute_angle > start.minute_angle

    def test_last_instant_stays_below_two_pi(self):
        """Test angles never reach 2*pi just before the wrap."""
        clock = ClockTime.from_datetime(at(11, 59, 59, 999_999))
        for angle in (clock.second_angle, clock.minute_angle, clock.hour_angle):
            assert 0.0 <= angle < TWO_PI

    def test_angles_monotonic_within_minute(self):
        """Test second angle increases through a minute, then wraps."""
        angles = [ClockTime.from_datetime(at(1, 2, s)).second_angle for s in range(60)]
        assert angles == sorted(angles)
        assert len(set(angles)) == 60
        assert ClockTime.from_datetime(at(1, 3, 0)).second_angle == 0.0

    def test_angles_in_range_over_day(self):
        """Test all angles stay in [0, 2*pi) across a day."""
        for hour in range(24):
            for minute in (0, 17, 59):
                clock = ClockTime.from_datetime(at(hour, minute, 59, 999_000))
                for angle in (
                    clock.second_angle,
                    clock.minute_angle,
                    clock.hour_angle,
                ):
                    assert 0.0 <= angle < TWO_PI


class TestAngleHelpers:
    """Tests for angle and vector helpers."""

    def test_to_angle_period_boundary(self):
        """Test a full period wraps to zero."""
        assert to_angle(60, 60) == 0.0
        assert to_angle(12, 12) == 0.0

    def test_to_angle_quarter(self):
        assert to_angle(15, 60) == pytest.approx(math.pi / 2)

    def test_unit_vector_up(self):
        """Test angle zero points to 12 o'clock (negative y)."""
        x, y = unit_vector(0.0)
        assert x == pytest.approx(0.0)
        assert y == pytest.approx(-1.0)

    def test_unit_vector_clockwise(self):
        """Test a quarter turn points to 3 o'clock."""
        x, y = unit_vector(math.pi / 2)
        assert x == pytest.approx(1.0)
        assert y == pytest.approx(0.0, abs=1e-12)

    def test_tick_angles(self):
        """Test four ticks at the cardinal positions."""
        assert tick_angles() == pytest.approx(
            [0.0, math.pi / 2, math.pi, 3 * math.pi / 2]
        )

    def test_radial_segment_with_tail(self):
        """Test a negative inner radius starts behind the center."""
        x0, y0, x1, y1 = radial_segment((100, 100), 0.0, -10, 50)
        assert (x0, y0) == pytest.approx((100, 110))
        assert (x1, y1) == pytest.approx((100, 50))
