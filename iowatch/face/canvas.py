"""Rasterize draw operations onto a PIL image."""

import logging
from typing import Iterable

from PIL import Image, ImageDraw

from .drawops import Arc, Circle, DrawOp, Fill, Line
from .render import Bounds

logger = logging.getLogger(__name__)


def rasterize(
    ops: Iterable[DrawOp], bounds: Bounds, supersample: int = 1
) -> Image.Image:
    """
    Paint draw operations in order onto a new RGB image.

    Args:
        ops: Operations in painting order
        bounds: Output (width, height)
        supersample: Draw at this multiple of the output size and scale
            down, which smooths edges. 1 draws directly without antialiasing.

    Returns:
        PIL Image of the given size
    """
    width, height = bounds
    scale = max(int(supersample), 1)

    image = Image.new("RGB", (width * scale, height * scale), (0, 0, 0))
    # RGBA draw mode blends translucent colors onto the RGB image
    draw = ImageDraw.Draw(image, "RGBA")

    for op in ops:
        _paint(draw, image, op, scale)

    if scale > 1:
        image = image.resize((width, height), Image.Resampling.LANCZOS)
    return image


def _paint(
    draw: ImageDraw.ImageDraw, image: Image.Image, op: DrawOp, scale: int
) -> None:
    if isinstance(op, Fill):
        draw.rectangle([(0, 0), image.size], fill=op.color)

    elif isinstance(op, Circle):
        r = op.radius * scale
        cx = op.cx * scale
        cy = op.cy * scale
        if r <= 0:
            return
        draw.ellipse([(cx - r, cy - r), (cx + r, cy + r)], fill=op.color)

    elif isinstance(op, Line):
        draw.line(
            [(op.x0 * scale, op.y0 * scale), (op.x1 * scale, op.y1 * scale)],
            fill=op.color,
            width=max(round(op.width * scale), 1),
        )

    elif isinstance(op, Arc):
        if op.right <= op.left or op.bottom <= op.top:
            logger.debug(f"Skipping degenerate arc {op.element.value}")
            return
        draw.arc(
            [(op.left * scale, op.top * scale), (op.right * scale, op.bottom * scale)],
            start=op.start,
            end=op.start + op.sweep,
            fill=op.color,
            width=max(round(op.width * scale), 1),
        )

    else:
        raise TypeError(f"Unsupported draw operation: {op!r}")
