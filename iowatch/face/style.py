"""Paint style for the watch face."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..settings import DEFAULTS, argb_to_rgba
from .drawops import Color

if TYPE_CHECKING:
    from ..settings import SettingsStore

BLACK: Color = (0, 0, 0, 255)


@dataclass(frozen=True)
class PaintStyle:
    """
    Colors and stroke metrics used when rendering the face.

    Instances are immutable; build a new one when settings change.
    """

    lines: Color = argb_to_rgba(DEFAULTS["Lines"])
    second_hand: Color = argb_to_rgba(DEFAULTS["SecondHand"])
    inner_bg: Color = argb_to_rgba(DEFAULTS["InnerBG"])
    outer_bg: Color = argb_to_rgba(DEFAULTS["OuterBG"])
    square_bg: Color = argb_to_rgba(DEFAULTS["SquareBG"])
    enable_ticks: bool = True

    # Stroke widths (pixels)
    thick_stroke: float = 8.0
    thin_stroke: float = 4.0

    # Inset of the border ring from the canvas edge
    circle_offset: float = 24.0

    # How far hands extend behind the center
    hand_overflow: float = 10.0
    second_overflow: float = 16.0

    # Distance from the face edge to each hand tip
    second_inset: float = 60.0
    minute_inset: float = 65.0
    hour_inset: float = 95.0

    @classmethod
    def from_settings(cls, store: "SettingsStore") -> "PaintStyle":
        """Build a style with the user's colors applied over the defaults."""
        return cls(
            lines=argb_to_rgba(store.get_color("Lines")),
            second_hand=argb_to_rgba(store.get_color("SecondHand")),
            inner_bg=argb_to_rgba(store.get_color("InnerBG")),
            outer_bg=argb_to_rgba(store.get_color("OuterBG")),
            square_bg=argb_to_rgba(store.get_color("SquareBG")),
            enable_ticks=store.get_boolean("EnableTicks"),
        )
