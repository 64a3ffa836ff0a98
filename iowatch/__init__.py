"""IO Watch - analog watch face with ambient mode and redraw scheduling."""

__version__ = "1.0.0"
