"""Pytest fixtures for IO Watch tests."""

import datetime
import json
import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from iowatch.scheduler import Timer  # noqa: E402


class FakeTimer(Timer):
    """Records scheduled wake-ups and fires them on demand."""

    def __init__(self):
        self.pending = {}
        self.scheduled = []  # delays in order
        self.cancelled = []
        self._next = 0

    def schedule_once(self, delay_ms, callback):
        self._next += 1
        self.pending[self._next] = callback
        self.scheduled.append(delay_ms)
        return self._next

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def fire(self):
        """Fire every pending wake-up once."""
        for handle in list(self.pending):
            callback = self.pending.pop(handle, None)
            if callback is not None:
                callback()


class FakeClock:
    """Settable epoch-milliseconds clock."""

    def __init__(self, ms=1_700_000_000_250):
        self.ms = ms

    def __call__(self):
        return self.ms


@pytest.fixture
def fake_timer():
    return FakeTimer()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def utc_midnight():
    """00:00:00 UTC."""
    return datetime.datetime(2024, 1, 15, 0, 0, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary."""
    return {
        "display": {
            "width": 320,
            "height": 320,
            "framebuffer": "/dev/fb1",
            "bits_per_pixel": 16,
        },
        "face": {"timezone": "UTC", "settings_path": "", "supersample": 2},
        "host": {"start_ambient": False, "time_tick_seconds": 60},
    }


@pytest.fixture
def temp_config_file(tmp_path, sample_config_dict):
    """Create a temporary config file."""
    config_path = tmp_path / "config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config_dict, f)
    return config_path


@pytest.fixture
def sample_config(sample_config_dict):
    """Create a Config object from sample data."""
    from iowatch.config import _dict_to_config

    return _dict_to_config(sample_config_dict)


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings.json"
