"""Watch face renderer: current time to an ordered list of draw operations."""

import datetime
from enum import Enum

from .drawops import Arc, Circle, DrawOp, Element, Fill, Line
from .geometry import ClockTime, radial_segment, tick_angles
from .style import BLACK, PaintStyle

Bounds = tuple[int, int]  # (width, height)


class DisplayMode(Enum):
    """Interactive display or low-power always-on display."""

    NORMAL = "normal"
    AMBIENT = "ambient"


def render(
    now: datetime.datetime,
    mode: DisplayMode,
    style: PaintStyle,
    bounds: Bounds,
) -> list[DrawOp]:
    """
    Compute the draw operations for one frame of the face.

    In ambient mode the second hand and every colored background layer are
    left out, and the remaining strokes get thinner.

    Args:
        now: Local time to show
        mode: Display mode
        style: Colors and metrics
        bounds: Canvas (width, height)

    Returns:
        Operations in painting order
    """
    width, height = bounds

    # Centered on the full bounds, ignoring any inset/chin.
    # All radii are measured from the horizontal half-width.
    center_x = width / 2
    center_y = height / 2
    center = (center_x, center_y)

    clock = ClockTime.from_datetime(now)
    ambient = mode is DisplayMode.AMBIENT
    stroke = style.thin_stroke if ambient else style.thick_stroke

    ops: list[DrawOp] = [Fill(BLACK, Element.CLEAR)]

    if not ambient:
        ops.append(Fill(style.square_bg, Element.SQUARE_BG))
        ops.append(
            Circle(center_x, center_y, width / 2, style.outer_bg, Element.OUTER_BG)
        )
        ops.append(
            Circle(
                center_x,
                center_y,
                max(width / 2 - style.circle_offset - 20, 0.0),
                style.inner_bg,
                Element.INNER_BG,
            )
        )
        ops.append(
            _hand(
                center,
                clock.second_angle,
                style.second_overflow,
                center_x - style.second_inset,
                style.second_hand,
                style.thin_stroke,
                Element.SECOND_HAND,
            )
        )

    ops.append(
        _hand(
            center,
            clock.minute_angle,
            style.hand_overflow,
            center_x - style.minute_inset,
            style.lines,
            stroke,
            Element.MINUTE_HAND,
        )
    )
    ops.append(
        _hand(
            center,
            clock.hour_angle,
            style.hand_overflow,
            center_x - style.hour_inset,
            style.lines,
            stroke,
            Element.HOUR_HAND,
        )
    )

    if style.enable_ticks:
        inner_radius = center_x - style.circle_offset - 14
        outer_radius = center_x - style.circle_offset - 2
        for angle in tick_angles():
            x0, y0, x1, y1 = radial_segment(center, angle, inner_radius, outer_radius)
            ops.append(Line(x0, y0, x1, y1, style.lines, stroke, Element.TICK))

    offset = style.circle_offset
    ops.append(
        Arc(
            offset,
            offset,
            width - offset,
            height - offset,
            0.0,
            360.0,
            style.lines,
            stroke,
            Element.BORDER,
        )
    )
    return ops


def _hand(
    center: tuple[float, float],
    angle: float,
    overflow: float,
    length: float,
    color,
    width: float,
    element: Element,
) -> Line:
    # Tiny canvases would otherwise flip the hand through the center
    x0, y0, x1, y1 = radial_segment(center, angle, -overflow, max(length, 0.0))
    return Line(x0, y0, x1, y1, color, width, element)
