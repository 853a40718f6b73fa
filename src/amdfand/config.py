"""Daemon configuration: model, defaults, loading and persistence.

The configuration lives in a TOML file. On first start the file does
not exist yet; the default configuration is then written to that path
and used, so the user has something to edit afterwards.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

import tomli
import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .curve import CurvePoint, speed_for_temperature, validate_curve
from .errors import ConfigFormatError, ConfigIoError
from .identifiers import TempInput

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("/etc/amdfand/config.toml")

DEFAULT_SPEED_MATRIX: Tuple[Tuple[float, float], ...] = (
    (4.0, 4.0),
    (30.0, 33.0),
    (45.0, 50.0),
    (60.0, 66.0),
    (65.0, 69.0),
    (70.0, 75.0),
    (75.0, 89.0),
    (80.0, 100.0),
)


class LogLevel(str, Enum):
    """Verbosity of the daemon, as written in the configuration file."""

    OFF = "Off"
    ERROR = "Error"
    WARN = "Warn"
    INFO = "Info"
    DEBUG = "Debug"
    TRACE = "Trace"


class Config(BaseModel):
    """Validated daemon configuration.

    Built once at startup by load_config() and read-only afterwards.
    The speed matrix is only guaranteed to be a valid curve when the
    Config came from load_config() or default_config().
    """

    model_config = ConfigDict(frozen=True)

    # Multi-card use is halted; kept so existing files still round-trip.
    cards: Optional[List[str]] = Field(
        default=None,
        description="Deprecated card allow-list, never consulted",
    )
    log_level: LogLevel = Field(description="Daemon log verbosity")
    speed_matrix: Tuple[CurvePoint, ...] = Field(
        description="Temperature to fan speed breakpoints"
    )
    # One of /sys/class/drm/card{X}/device/hwmon/hwmon{Y}/temp{Z}_input.
    # Without it the highest reading is taken (this is not good!)
    temp_input: Optional[TempInput] = Field(
        default=None,
        description="Temperature sensor file to read",
    )

    def speed_for_temp(self, temp: float) -> float:
        """Return the fan speed in percent for a temperature reading."""
        return speed_for_temperature(self.speed_matrix, temp)

    def to_toml(self) -> str:
        """Serialize to the configuration file format."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return tomli_w.dumps(data)

    @classmethod
    def from_toml(cls, text: str) -> "Config":
        """Parse the configuration file format.

        Raises:
            tomli.TOMLDecodeError: text is not valid TOML
            pydantic.ValidationError: document does not describe a Config
        """
        return cls.model_validate(tomli.loads(text))


def default_config() -> Config:
    """Return the configuration used when no file exists yet."""
    return Config(
        log_level=LogLevel.ERROR,
        speed_matrix=tuple(
            CurvePoint(temperature=temp, speed=speed)
            for temp, speed in DEFAULT_SPEED_MATRIX
        ),
        temp_input=TempInput(index=1),
    )


def save_config(config: Config, path: Union[str, Path]) -> None:
    """Write a configuration to path, replacing any existing file."""
    path = Path(path)
    try:
        path.write_text(config.to_toml(), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write config %s: %s", path, e)
        raise ConfigIoError(
            f"Failed to write config {path}: {e}", path
        ) from e


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Config:
    """Load and validate the configuration, creating it on first run.

    Args:
        path: Location of the TOML configuration file

    Returns:
        A Config whose speed matrix passed validate_curve()

    Raises:
        ConfigIoError: The file exists but cannot be read, or the
            default configuration cannot be written
        ConfigFormatError: The file is not a valid configuration
        CurveValidationError: The speed matrix is malformed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("Config %s not found, writing defaults", path)
        config = default_config()
        save_config(config, path)
    except UnicodeDecodeError as e:
        logger.error("Config %s is not UTF-8: %s", path, e)
        raise ConfigFormatError(
            f"Config {path} is not valid UTF-8: {e}", path
        ) from e
    except OSError as e:
        logger.error("Failed to read config %s: %s", path, e)
        raise ConfigIoError(
            f"Failed to read config {path}: {e}", path
        ) from e
    else:
        try:
            config = Config.from_toml(text)
        except (tomli.TOMLDecodeError, ValidationError) as e:
            logger.error("Config %s is malformed: %s", path, e)
            raise ConfigFormatError(
                f"Config {path} is malformed: {e}", path
            ) from e

    validate_curve(config.speed_matrix)
    return config
