"""Draw operations emitted by the face renderer."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

Color = tuple[int, int, int, int]  # RGBA


class Element(Enum):
    """Which part of the face an operation draws."""

    CLEAR = "clear"
    SQUARE_BG = "square_bg"
    OUTER_BG = "outer_bg"
    INNER_BG = "inner_bg"
    SECOND_HAND = "second_hand"
    MINUTE_HAND = "minute_hand"
    HOUR_HAND = "hour_hand"
    TICK = "tick"
    BORDER = "border"


@dataclass(frozen=True)
class Fill:
    """Paint the whole canvas."""

    color: Color
    element: Element


@dataclass(frozen=True)
class Circle:
    """Filled circle."""

    cx: float
    cy: float
    radius: float
    color: Color
    element: Element


@dataclass(frozen=True)
class Line:
    """Stroked line segment."""

    x0: float
    y0: float
    x1: float
    y1: float
    color: Color
    width: float
    element: Element


@dataclass(frozen=True)
class Arc:
    """Unfilled arc inside a bounding box; angles in degrees."""

    left: float
    top: float
    right: float
    bottom: float
    start: float
    sweep: float
    color: Color
    width: float
    element: Element


DrawOp = Union[Fill, Circle, Line, Arc]
