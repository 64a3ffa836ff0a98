"""Analog watch face rendering."""

from .drawops import Arc, Circle, DrawOp, Element, Fill, Line
from .geometry import ClockTime, to_angle, unit_vector, tick_angles
from .render import Bounds, DisplayMode, render
from .style import PaintStyle
from .canvas import rasterize

__all__ = [
    "Arc",
    "Circle",
    "DrawOp",
    "Element",
    "Fill",
    "Line",
    "ClockTime",
    "to_angle",
    "unit_vector",
    "tick_angles",
    "Bounds",
    "DisplayMode",
    "render",
    "PaintStyle",
    "rasterize",
]
