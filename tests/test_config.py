"""Tests for configuration loading and validation."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from iowatch.config import (
    DEFAULT_SETTINGS_PATH,
    Config,
    DisplayConfig,
    FaceConfig,
    HostConfig,
    _dict_to_config,
    get_settings_path,
    load_config,
)


class TestDisplayConfig:
    """Tests for DisplayConfig validation."""

    def test_valid_display(self):
        assert DisplayConfig(width=320, height=320).validate() == []

    def test_invalid_width(self):
        errors = DisplayConfig(width=0, height=320).validate()
        assert any("dimensions" in e.lower() for e in errors)

    def test_invalid_bits_per_pixel(self):
        errors = DisplayConfig(bits_per_pixel=24).validate()
        assert any("bits_per_pixel" in e for e in errors)


class TestFaceConfig:
    """Tests for FaceConfig validation."""

    def test_defaults_valid(self):
        assert FaceConfig().validate() == []

    @pytest.mark.parametrize("supersample", [0, 9])
    def test_invalid_supersample(self, supersample):
        errors = FaceConfig(supersample=supersample).validate()
        assert any("supersample" in e.lower() for e in errors)


class TestHostConfig:
    """Tests for HostConfig validation."""

    def test_defaults_valid(self):
        assert HostConfig().validate() == []

    def test_invalid_time_tick(self):
        errors = HostConfig(time_tick_seconds=0).validate()
        assert any("tick" in e.lower() for e in errors)


class TestConfigLoading:
    """Tests for config file loading."""

    def test_load_from_file(self, temp_config_file):
        config = load_config(temp_config_file)
        assert config.display.width == 320
        assert config.face.timezone == "UTC"
        assert config.host.time_tick_seconds == 60

    def test_load_missing_file_explicit(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.json")

    def test_load_invalid_json(self, tmp_path):
        bad_file = tmp_path / "bad.json"
        bad_file.write_text("not valid json {{{")
        with pytest.raises(ValueError) as exc_info:
            load_config(bad_file)
        assert "Invalid JSON" in str(exc_info.value)

    def test_load_non_object(self, tmp_path):
        bad_file = tmp_path / "list.json"
        bad_file.write_text("[1, 2, 3]")
        with pytest.raises(ValueError):
            load_config(bad_file)

    def test_load_validation_error(self, tmp_path):
        bad_config = tmp_path / "bad_config.json"
        with open(bad_config, "w") as f:
            json.dump({"display": {"width": -1}}, f)
        with pytest.raises(ValueError) as exc_info:
            load_config(bad_config)
        assert "validation" in str(exc_info.value).lower()

    def test_load_defaults_when_no_file(self):
        with patch("iowatch.config.CONFIG_PATHS", [Path("/nonexistent/config.json")]):
            config = load_config(None)
        assert isinstance(config, Config)
        assert config.display.width == 320

    def test_dict_to_config_partial(self):
        """Test converting partial dict uses defaults."""
        config = _dict_to_config({"face": {"timezone": "Europe/Helsinki"}})
        assert config.face.timezone == "Europe/Helsinki"
        assert config.face.supersample == 2
        assert config.display.height == 320

    @pytest.mark.parametrize(
        "data",
        [
            {"display": {"width": "320"}},
            {"display": None},
            {"host": {"time_tick_seconds": "60"}},
            {"host": {"start_ambient": 1}},
            {"face": {"supersample": True}},
            {"face": {"timezone": 3}},
        ],
    )
    def test_wrong_types_rejected(self, data):
        """Test wrong JSON types are reported as config errors."""
        with pytest.raises(ValueError):
            _dict_to_config(data)

    def test_load_wrong_type_raises_value_error(self, tmp_path):
        bad_config = tmp_path / "typed.json"
        bad_config.write_text(json.dumps({"display": {"width": "320"}}))
        with pytest.raises(ValueError) as exc_info:
            load_config(bad_config)
        assert "width" in str(exc_info.value)

    def test_unknown_keys_ignored(self):
        config = _dict_to_config({"host": {"start_ambient": True, "bogus": 1}})
        assert config.host.start_ambient is True


class TestSettingsPath:
    """Tests for settings file resolution."""

    def test_env_override(self):
        with patch.dict(os.environ, {"IOWATCH_SETTINGS": "/tmp/s.json"}):
            assert get_settings_path(Config()) == Path("/tmp/s.json")

    def test_from_config(self):
        config = _dict_to_config({"face": {"settings_path": "/srv/watch.json"}})
        with patch.dict(os.environ, {}, clear=True):
            assert get_settings_path(config) == Path("/srv/watch.json")

    def test_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_settings_path(Config()) == DEFAULT_SETTINGS_PATH
