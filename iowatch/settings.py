"""User color settings for the watch face, persisted as JSON."""

import json
import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

from PIL import ImageColor

logger = logging.getLogger(__name__)


class SettingsError(ValueError):
    """Raised for unknown settings keys or values of the wrong type."""


# Elements in the order the settings screen lists them
ELEMENTS = (
    "Lines",
    "SecondHand",
    "InnerBG",
    "OuterBG",
    "SquareBG",
    "EnableTicks",
    "ResetSettings",
)

COLOR_ELEMENTS = ("Lines", "SecondHand", "InnerBG", "OuterBG", "SquareBG")
BOOLEAN_ELEMENTS = ("EnableTicks",)
RESET_ELEMENT = "ResetSettings"


def argb(a: int, r: int, g: int, b: int) -> int:
    """Pack channels into a 32-bit ARGB integer."""
    return ((a & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def argb_to_rgba(color: int) -> tuple[int, int, int, int]:
    """Unpack a 32-bit ARGB integer into an RGBA tuple for drawing."""
    return (
        (color >> 16) & 0xFF,
        (color >> 8) & 0xFF,
        color & 0xFF,
        (color >> 24) & 0xFF,
    )


def parse_color(value: Union[int, str]) -> int:
    """
    Normalize a stored color to an ARGB integer.

    Accepts ARGB integers as well as "#RRGGBB" and "#AARRGGBB" strings,
    which is what people tend to type when editing the file by hand.

    Raises:
        SettingsError: If the value is not a recognizable color
    """
    if isinstance(value, bool):
        raise SettingsError(f"Expected a color, got boolean {value}")
    if isinstance(value, int):
        return value & 0xFFFFFFFF
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("#") and len(text) == 9:
            # Android ordering: alpha first
            if not re.fullmatch(r"[0-9a-fA-F]{8}", text[1:]):
                raise SettingsError(f"Invalid color '{value}'")
            return int(text[1:], 16)
        try:
            r, g, b, a = ImageColor.getcolor(text, "RGBA")
        except ValueError:
            raise SettingsError(f"Invalid color '{value}'")
        return argb(a, r, g, b)
    raise SettingsError(f"Expected a color, got {type(value).__name__}")


DEFAULTS: dict[str, Union[int, bool]] = {
    "Lines": argb(255, 152, 164, 163),
    "SecondHand": argb(255, 170, 91, 52),
    "InnerBG": argb(255, 30, 35, 39),
    "OuterBG": argb(255, 32, 39, 42),
    "SquareBG": argb(255, 40, 49, 56),
    "EnableTicks": True,
}


class SettingsStore:
    """
    Key-value store for the named visual elements of the face.

    Values are ARGB integers for colors and booleans for toggles. Every
    write is saved immediately; the file is only read on first access.
    """

    def __init__(self, path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            path: JSON file backing the store. None keeps values in memory.
        """
        self.path = path
        self._values: Optional[dict[str, Union[int, bool]]] = None

    def _load(self) -> dict[str, Union[int, bool]]:
        if self._values is not None:
            return self._values

        values = dict(DEFAULTS)
        if self.path is not None and self.path.exists():
            try:
                with open(self.path, "r") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Could not read settings from {self.path}: {e}")
                data = {}

            if not isinstance(data, dict):
                logger.error(f"Ignoring settings file {self.path}: not an object")
                data = {}

            for name, value in data.items():
                try:
                    if name in COLOR_ELEMENTS:
                        values[name] = parse_color(value)
                    elif name in BOOLEAN_ELEMENTS and isinstance(value, bool):
                        values[name] = value
                    else:
                        logger.warning(f"Ignoring setting {name}={value!r}")
                except SettingsError as e:
                    logger.warning(f"Ignoring setting {name}: {e}")

        self._values = values
        return values

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # A failed write leaves the previous file intact
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w") as f:
                json.dump(self._load(), f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Saved settings to {self.path}")

    def get_color(self, name: str) -> int:
        if name not in COLOR_ELEMENTS:
            raise SettingsError(f"'{name}' is not a color setting")
        return int(self._load()[name])

    def set_color(self, name: str, color: Union[int, str]) -> None:
        if name not in COLOR_ELEMENTS:
            raise SettingsError(f"'{name}' is not a color setting")
        self._load()[name] = parse_color(color)
        self._save()

    def get_boolean(self, name: str) -> bool:
        if name not in BOOLEAN_ELEMENTS:
            raise SettingsError(f"'{name}' is not a boolean setting")
        return bool(self._load()[name])

    def set_boolean(self, name: str, value: bool) -> None:
        if name not in BOOLEAN_ELEMENTS:
            raise SettingsError(f"'{name}' is not a boolean setting")
        if not isinstance(value, bool):
            raise SettingsError(f"Expected a boolean for '{name}', got {value!r}")
        self._load()[name] = value
        self._save()

    def toggle(self, name: str) -> bool:
        """Flip a boolean setting and return the new value."""
        value = not self.get_boolean(name)
        self.set_boolean(name, value)
        return value

    def reset_values(self) -> None:
        """Restore every element to its default."""
        self._values = dict(DEFAULTS)
        self._save()
        logger.info("Settings reset to defaults")

    def apply(self, element: str, color: Union[int, str, None] = None) -> None:
        """
        Act on a settings element the way selecting it on the settings
        screen does: toggles flip, reset restores defaults, colors are set.

        Args:
            element: One of ELEMENTS
            color: New color, required for color elements

        Raises:
            SettingsError: For unknown elements or a missing color
        """
        if element in BOOLEAN_ELEMENTS:
            self.toggle(element)
        elif element == RESET_ELEMENT:
            self.reset_values()
        elif element in COLOR_ELEMENTS:
            if color is None:
                raise SettingsError(f"A color is required for '{element}'")
            self.set_color(element, color)
        else:
            raise SettingsError(f"Unknown settings element '{element}'")

    def as_dict(self) -> dict[str, Union[int, bool]]:
        """Snapshot of all current values."""
        return dict(self._load())
