"""Tests for Config loading, defaults and persistence."""

import os
from pathlib import Path

import pytest
import tomli
from pydantic import ValidationError

from amdfand import (
    Config,
    ConfigFormatError,
    ConfigIoError,
    CurvePoint,
    FanSpeedTooHighError,
    LogLevel,
    TempInput,
    UnsortedFanTempError,
    default_config,
    load_config,
    save_config,
)

VALID_CONFIG = """\
log_level = "Info"
temp_input = "temp2_input"

[[speed_matrix]]
temp = 10
speed = 20

[[speed_matrix]]
temp = 60.5
speed = 80.0
"""


class TestDefaultConfig:
    """Test the configuration used on first start."""

    def test_default_values(self) -> None:
        config = default_config()

        assert config.cards is None
        assert config.log_level == LogLevel.ERROR
        assert config.temp_input == TempInput(index=1)
        assert [(p.temperature, p.speed) for p in config.speed_matrix] == [
            (4.0, 4.0),
            (30.0, 33.0),
            (45.0, 50.0),
            (60.0, 66.0),
            (65.0, 69.0),
            (70.0, 75.0),
            (75.0, 89.0),
            (80.0, 100.0),
        ]

    def test_speed_for_temp(self) -> None:
        config = default_config()

        assert config.speed_for_temp(1.0) == 4.0
        assert config.speed_for_temp(60.0) == 66.0
        assert config.speed_for_temp(160.0) == 100.0

    def test_config_is_frozen(self) -> None:
        config = default_config()

        with pytest.raises(ValidationError):
            config.log_level = LogLevel.DEBUG


class TestTomlFormat:
    """Test Config.to_toml and Config.from_toml."""

    def test_to_toml_layout(self) -> None:
        data = tomli.loads(default_config().to_toml())

        assert data["log_level"] == "Error"
        assert data["temp_input"] == "temp1_input"
        assert data["speed_matrix"][0] == {"temp": 4.0, "speed": 4.0}
        assert "cards" not in data

    def test_from_toml(self) -> None:
        config = Config.from_toml(VALID_CONFIG)

        assert config.log_level == LogLevel.INFO
        assert config.temp_input == TempInput(index=2)
        assert config.speed_matrix == (
            CurvePoint(temperature=10.0, speed=20.0),
            CurvePoint(temperature=60.5, speed=80.0),
        )

    def test_round_trip_keeps_deprecated_cards(self) -> None:
        config = Config.from_toml('cards = ["card0"]\n' + VALID_CONFIG)

        assert Config.from_toml(config.to_toml()) == config
        assert config.cards == ["card0"]

    def test_temp_input_is_optional(self) -> None:
        text = VALID_CONFIG.replace('temp_input = "temp2_input"\n', "")

        assert Config.from_toml(text).temp_input is None


class TestLoadConfig:
    """Test load_config against files on disk."""

    def test_missing_file_writes_default(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"

        config = load_config(path)

        assert config == default_config()
        assert path.exists()
        assert Config.from_toml(path.read_text()) == default_config()

    def test_second_load_reads_written_default(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        load_config(path)

        assert load_config(path) == default_config()

    def test_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(VALID_CONFIG)

        config = load_config(str(path))

        assert config.log_level == LogLevel.INFO
        assert config.speed_for_temp(10.0) == 20.0

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("log_level = \n[[")

        with pytest.raises(ConfigFormatError) as exc_info:
            load_config(path)

        assert exc_info.value.path == path

    def test_truncated_document(self, tmp_path: Path) -> None:
        """Test a cut-off file is rejected instead of giving an empty curve."""
        path = tmp_path / "config.toml"
        path.write_text('log_level = "Error"\nspeed_matrix = [')

        with pytest.raises(ConfigFormatError):
            load_config(path)

    def test_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_bytes(VALID_CONFIG.encode() + b"# \xff\xfe\n")

        with pytest.raises(ConfigFormatError) as exc_info:
            load_config(path)

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_invalid_temp_input(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(VALID_CONFIG.replace("temp2_input", "temp_2_input"))

        with pytest.raises(ConfigFormatError):
            load_config(path)

    def test_unknown_log_level(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(VALID_CONFIG.replace('"Info"', '"Loud"'))

        with pytest.raises(ConfigFormatError):
            load_config(path)

    def test_missing_speed_matrix(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('log_level = "Error"\n')

        with pytest.raises(ConfigFormatError):
            load_config(path)

    def test_speed_too_high(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(VALID_CONFIG.replace("speed = 80.0", "speed = 180.0"))

        with pytest.raises(FanSpeedTooHighError) as exc_info:
            load_config(path)

        assert exc_info.value.index == 1
        assert exc_info.value.value == 180.0

    def test_unsorted_temperature(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(VALID_CONFIG.replace("temp = 60.5", "temp = 5"))

        with pytest.raises(UnsortedFanTempError) as exc_info:
            load_config(path)

        assert exc_info.value.current == 5.0
        assert exc_info.value.last == 10.0

    def test_unreadable_path(self, tmp_path: Path) -> None:
        """Test a read failure other than not-found is not recovered."""
        path = tmp_path / "config.toml"
        path.mkdir()

        with pytest.raises(ConfigIoError) as exc_info:
            load_config(path)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert path.is_dir()

    def test_default_cannot_be_written(self, tmp_path: Path) -> None:
        path = tmp_path / "missing_dir" / "config.toml"

        with pytest.raises(ConfigIoError):
            load_config(path)


class TestSaveConfig:
    """Test save_config."""

    def test_overwrites(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("old")

        save_config(default_config(), path)

        assert load_config(path) == default_config()

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignores file permissions",
    )
    def test_read_only_directory(self, tmp_path: Path) -> None:
        directory = tmp_path / "ro"
        directory.mkdir()
        directory.chmod(0o500)
        try:
            with pytest.raises(ConfigIoError):
                save_config(default_config(), directory / "config.toml")
        finally:
            directory.chmod(0o700)
