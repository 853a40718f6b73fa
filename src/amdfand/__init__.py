"""Fan curve and device discovery core of an AMD GPU fan control daemon."""

# Fan curve
from .curve import (
    Curve,
    CurvePoint,
    linear_map,
    speed_for_temperature,
    validate_curve,
)

# Configuration
from .config import (
    DEFAULT_CONFIG_PATH,
    Config,
    LogLevel,
    default_config,
    load_config,
    save_config,
)

# Hardware discovery
from .discovery import hw_mons, read_cards
from .hw_mon import ROOT_DIR, HwMon, open_hw_mon
from .identifiers import Card, TempInput
from .logs import configure_logging

# Errors
from .errors import (
    AmdFanError,
    ConfigError,
    ConfigFormatError,
    ConfigIoError,
    CurveValidationError,
    FanSpeedTooHighError,
    FanSpeedTooLowError,
    HwMonError,
    HwMonOpenError,
    HwMonReadError,
    InvalidCardError,
    InvalidTempInputError,
    ParseError,
    UnsortedFanSpeedError,
    UnsortedFanTempError,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ROOT_DIR",
    "AmdFanError",
    "Card",
    "Config",
    "ConfigError",
    "ConfigFormatError",
    "ConfigIoError",
    "Curve",
    "CurvePoint",
    "CurveValidationError",
    "FanSpeedTooHighError",
    "FanSpeedTooLowError",
    "HwMon",
    "HwMonError",
    "HwMonOpenError",
    "HwMonReadError",
    "InvalidCardError",
    "InvalidTempInputError",
    "LogLevel",
    "ParseError",
    "TempInput",
    "UnsortedFanSpeedError",
    "UnsortedFanTempError",
    "configure_logging",
    "default_config",
    "hw_mons",
    "linear_map",
    "load_config",
    "open_hw_mon",
    "read_cards",
    "save_config",
    "speed_for_temperature",
    "validate_curve",
]
