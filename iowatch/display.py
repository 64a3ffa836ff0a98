"""Framebuffer output for the watch face."""

import logging
from typing import TYPE_CHECKING, BinaryIO, Optional

import numpy as np
from PIL import Image

if TYPE_CHECKING:
    from .config import DisplayConfig

logger = logging.getLogger(__name__)


class FramebufferDisplay:
    """Writes rendered frames to a Linux framebuffer device."""

    def __init__(self, config: "DisplayConfig"):
        self.config = config
        self.width = config.width
        self.height = config.height
        self.framebuffer = config.framebuffer
        self.bits_per_pixel = config.bits_per_pixel
        self._fb_handle: Optional[BinaryIO] = None

    @property
    def is_open(self) -> bool:
        return self._fb_handle is not None

    def open(self) -> bool:
        """
        Open the framebuffer device.

        Returns:
            True if successful, False otherwise
        """
        try:
            self._fb_handle = open(self.framebuffer, "wb")
            logger.info(
                f"Opened framebuffer {self.framebuffer} "
                f"({self.width}x{self.height}, {self.bits_per_pixel}bpp)"
            )
            return True
        except PermissionError:
            logger.error(
                f"Permission denied opening {self.framebuffer}. "
                "Run as root or add user to 'video' group."
            )
            return False
        except FileNotFoundError:
            logger.error(f"Framebuffer not found: {self.framebuffer}")
            return False
        except OSError as e:
            logger.error(f"Failed to open framebuffer: {e}")
            return False

    def close(self) -> None:
        """Close the framebuffer device."""
        if self._fb_handle:
            try:
                self._fb_handle.close()
            except OSError as e:
                logger.warning(f"Error closing framebuffer: {e}")
            finally:
                self._fb_handle = None

    def write_frame(self, image: Image.Image) -> bool:
        """
        Write a frame to the framebuffer in its native pixel format.

        Args:
            image: Frame to show; resized if it does not match the display

        Returns:
            True if successful, False otherwise
        """
        if self._fb_handle is None:
            logger.error("Framebuffer not open")
            return False

        if image.size != (self.width, self.height):
            image = image.resize((self.width, self.height), Image.Resampling.LANCZOS)
        if image.mode != "RGB":
            image = image.convert("RGB")

        data = self.encode(image)
        try:
            self._fb_handle.seek(0)
            self._fb_handle.write(data)
            self._fb_handle.flush()
            return True
        except OSError as e:
            logger.error(f"Failed to write to framebuffer: {e}")
            return False

    def encode(self, image: Image.Image) -> bytes:
        """Convert an RGB image to raw framebuffer bytes."""
        if self.bits_per_pixel == 32:
            return to_bgra32(image)
        return to_rgb565(image)

    def clear(self, color: tuple[int, int, int] = (0, 0, 0)) -> bool:
        """Fill the display with a solid color."""
        return self.write_frame(Image.new("RGB", (self.width, self.height), color))

    def __enter__(self) -> "FramebufferDisplay":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def to_rgb565(image: Image.Image) -> bytes:
    """
    Pack an RGB image as little-endian RGB565.

    Red takes bits 11-15, green bits 5-10 and blue bits 0-4.
    """
    arr = np.asarray(image, dtype=np.uint16)
    r = arr[:, :, 0]
    g = arr[:, :, 1]
    b = arr[:, :, 2]
    rgb565 = ((r >> 3) << 11) | ((g >> 2) << 5) | (b >> 3)
    return rgb565.astype("<u2").tobytes()


def to_bgra32(image: Image.Image) -> bytes:
    """Pack an RGB image as 32-bit BGRA with opaque alpha."""
    arr = np.asarray(image, dtype=np.uint8)
    height, width = arr.shape[:2]
    out = np.empty((height, width, 4), dtype=np.uint8)
    out[:, :, 0] = arr[:, :, 2]
    out[:, :, 1] = arr[:, :, 1]
    out[:, :, 2] = arr[:, :, 0]
    out[:, :, 3] = 0xFF
    return out.tobytes()
