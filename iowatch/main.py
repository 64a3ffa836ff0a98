"""Main entry point for IO Watch."""

import argparse
import logging
import signal
import sys
from pathlib import Path

from .config import Config, get_settings_path, load_config
from .display import FramebufferDisplay
from .host import HostEvent, HostLoop
from .settings import SettingsStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)

logger = logging.getLogger(__name__)


class IOWatch:
    """Standalone watch face application."""

    def __init__(self, config: Config):
        """
        Initialize the application.

        Args:
            config: Application configuration
        """
        self.config = config
        self.settings = SettingsStore(get_settings_path(config))
        self.display = FramebufferDisplay(config.display)
        self.loop = HostLoop(config, self.display, self.settings)

    def screenshot(self, path: Path) -> None:
        """Render the current time once and save it as an image."""
        self.loop.engine.on_ambient_mode_changed(self.config.host.start_ambient)
        frame = self.loop.render_frame()
        frame.save(path)
        logger.info(f"Saved screenshot to {path}")

    def run(self) -> None:
        """Run the watch face until stopped."""
        logger.info("Starting IO Watch...")

        if not self.display.open():
            logger.error("Failed to open display")
            return

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGUSR1, self._signal_handler)
        signal.signal(signal.SIGUSR2, self._signal_handler)
        signal.signal(signal.SIGHUP, self._signal_handler)

        logger.info(
            "IO Watch running. SIGUSR1 toggles ambient, SIGUSR2 toggles "
            "visibility, SIGHUP reloads time zone and settings."
        )

        try:
            self.loop.run()
        except Exception as e:
            logger.error(f"Error in main loop: {e}", exc_info=True)
        finally:
            self._cleanup()

    def _signal_handler(self, signum, frame) -> None:
        """Translate signals into host events."""
        if signum == signal.SIGUSR1:
            self.loop.post(HostEvent.AMBIENT)
        elif signum == signal.SIGUSR2:
            self.loop.post(HostEvent.VISIBILITY)
        elif signum == signal.SIGHUP:
            self.loop.post(HostEvent.TIMEZONE_CHANGED)
            self.loop.post(HostEvent.SETTINGS_CHANGED)
        else:
            self.loop.stop()

    def _cleanup(self) -> None:
        """Clean up resources on shutdown."""
        logger.info("Cleaning up...")
        self.display.clear()
        self.display.close()
        logger.info("Cleanup complete")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="IO Watch - analog watch face for framebuffer displays"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.json file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--ambient",
        action="store_true",
        help="Start in ambient (low-power) mode",
    )
    parser.add_argument(
        "--screenshot",
        type=Path,
        metavar="PATH",
        help="Render a single frame to an image file and exit",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.error(f"Config file not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.ambient:
        config.host.start_ambient = True

    watch = IOWatch(config)
    if args.screenshot:
        watch.screenshot(args.screenshot)
        return 0

    watch.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
