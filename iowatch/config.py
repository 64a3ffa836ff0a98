"""Configuration loading and validation for IO Watch."""

import dataclasses
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Default paths to search for config
CONFIG_PATHS = [
    Path("config.json"),
    Path.home() / ".config" / "iowatch" / "config.json",
    Path("/etc/iowatch/config.json"),
]

DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "iowatch" / "settings.json"


@dataclass
class DisplayConfig:
    """Framebuffer output settings."""

    width: int = 320
    height: int = 320
    framebuffer: str = "/dev/fb1"
    bits_per_pixel: int = 16

    def validate(self) -> list[str]:
        errors = []
        if self.width <= 0 or self.height <= 0:
            errors.append(f"Invalid display dimensions: {self.width}x{self.height}")
        if self.bits_per_pixel not in (16, 32):
            errors.append(
                f"Invalid bits_per_pixel {self.bits_per_pixel}: must be 16 or 32"
            )
        return errors


@dataclass
class FaceConfig:
    """Watch face rendering settings."""

    timezone: str = ""  # IANA name; empty uses the system zone
    settings_path: str = ""  # Empty uses DEFAULT_SETTINGS_PATH
    supersample: int = 2

    def validate(self) -> list[str]:
        errors = []
        if not 1 <= self.supersample <= 8:
            errors.append(f"Invalid supersample {self.supersample}: must be 1-8")
        return errors


@dataclass
class HostConfig:
    """Standalone host loop settings."""

    start_ambient: bool = False
    time_tick_seconds: int = 60

    def validate(self) -> list[str]:
        errors = []
        if self.time_tick_seconds <= 0:
            errors.append("Time tick interval must be positive")
        return errors


@dataclass
class Config:
    """Main configuration container."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    face: FaceConfig = field(default_factory=FaceConfig)
    host: HostConfig = field(default_factory=HostConfig)

    def validate(self) -> list[str]:
        """Validate all configuration sections. Returns list of errors."""
        errors = []
        errors.extend(self.display.validate())
        errors.extend(self.face.validate())
        errors.extend(self.host.validate())
        return errors


def _check_type(cls, name: str, value, default) -> None:
    """Raise ValueError unless value has the same JSON type as the default."""
    expected = type(default)
    if expected is bool or isinstance(value, bool):
        ok = type(value) is expected
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ValueError(
            f"Invalid {cls.__name__}.{name} {value!r}: expected {expected.__name__}"
        )


def _dataclass_from_dict(cls, data: dict):
    """Create a dataclass instance from a dict, using field defaults for missing keys."""
    if not isinstance(data, dict):
        raise ValueError(f"{cls.__name__} section must be a JSON object")
    kwargs = {}
    for f in dataclasses.fields(cls):
        if f.name in data:
            if f.default is not dataclasses.MISSING:
                _check_type(cls, f.name, data[f.name], f.default)
            kwargs[f.name] = data[f.name]
        elif f.default is not dataclasses.MISSING:
            kwargs[f.name] = f.default
        elif f.default_factory is not dataclasses.MISSING:
            kwargs[f.name] = f.default_factory()
    unknown = set(data) - {f.name for f in dataclasses.fields(cls)}
    if unknown:
        logger.warning(f"Ignoring unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**kwargs)


# Mapping from config JSON keys to their dataclass types
_CONFIG_SECTIONS = {
    "display": ("display", DisplayConfig),
    "face": ("face", FaceConfig),
    "host": ("host", HostConfig),
}


def _dict_to_config(data: dict) -> Config:
    """Convert a dictionary to a Config object."""
    config = Config()
    for key, (attr, cls) in _CONFIG_SECTIONS.items():
        if key in data:
            setattr(config, attr, _dataclass_from_dict(cls, data[key]))
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from JSON file.

    Args:
        config_path: Explicit path to config file. If None, searches default paths.

    Returns:
        Config object with loaded settings.

    Raises:
        FileNotFoundError: If no config file found and config_path was explicit.
        ValueError: If config file has validation errors.
    """
    if config_path is not None:
        paths_to_try = [config_path]
    else:
        paths_to_try = CONFIG_PATHS

    found_path = None
    for path in paths_to_try:
        if path.exists():
            found_path = path
            break

    if found_path is None:
        if config_path is not None:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        logger.warning("No config file found, using defaults")
        return Config()

    logger.info(f"Loading config from {found_path}")
    try:
        with open(found_path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {found_path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Config file {found_path} must contain a JSON object")

    config = _dict_to_config(data)

    errors = config.validate()
    if errors:
        error_msg = "Config validation errors:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        raise ValueError(error_msg)

    return config


def get_settings_path(config: Config) -> Path:
    """
    Resolve where user color settings live.

    The IOWATCH_SETTINGS environment variable wins over the config file.
    """
    override = os.environ.get("IOWATCH_SETTINGS")
    if override:
        return Path(override)
    if config.face.settings_path:
        return Path(config.face.settings_path).expanduser()
    return DEFAULT_SETTINGS_PATH
