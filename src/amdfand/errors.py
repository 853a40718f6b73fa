"""Exception hierarchy shared by the fan curve and hardware discovery code.

None of these errors is fatal on its own. The caller (usually the
polling daemon) decides whether a failure aborts startup or is skipped:
- CurveValidationError: a malformed speed matrix in the configuration
- ParseError: a raw string that is not a card or temperature input name
- ConfigError: the configuration file could not be read or decoded
- HwMonError: a single card's hwmon directory could not be used
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .identifiers import Card


class AmdFanError(Exception):
    """Base class for every error raised by amdfand."""


class CurveValidationError(AmdFanError):
    """A speed matrix entry breaks the curve invariants.

    Attributes:
        value: The offending value (speed or temperature)
        index: Position of the offending entry in the speed matrix
    """

    def __init__(self, message: str, value: float, index: int) -> None:
        super().__init__(message)
        self.value = value
        self.index = index

    def __eq__(self, other: object) -> bool:
        """Compare by type and identifying fields."""
        if type(self) is not type(other):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = Exception.__hash__


class FanSpeedTooLowError(CurveValidationError):
    """A curve point requests a speed below 0.0."""

    def __init__(self, value: float, index: int) -> None:
        super().__init__(
            f"Fan speed {value!r} for config entry {index} is too low "
            "(minimal value is 0.0)",
            value,
            index,
        )


class FanSpeedTooHighError(CurveValidationError):
    """A curve point requests a speed above 100.0."""

    def __init__(self, value: float, index: int) -> None:
        super().__init__(
            f"Fan speed {value!r} for config entry {index} is too high "
            "(maximal value is 100.0)",
            value,
            index,
        )


class UnsortedFanSpeedError(CurveValidationError):
    """A curve point has a lower speed than the point before it."""

    def __init__(self, current: float, last: float, index: int) -> None:
        super().__init__(
            f"Fan speed {current!r} for config entry {index} is lower than "
            f"previous value {last!r}. Entries must be sorted",
            current,
            index,
        )
        self.current = current
        self.last = last


class UnsortedFanTempError(CurveValidationError):
    """A curve point has a lower temperature than the point before it."""

    def __init__(self, current: float, last: float, index: int) -> None:
        super().__init__(
            f"Fan temperature {current!r} for config entry {index} is lower "
            f"than previous value {last!r}. Entries must be sorted",
            current,
            index,
        )
        self.current = current
        self.last = last


class ParseError(AmdFanError, ValueError):
    """A raw string could not be converted into a typed identifier.

    Also a ValueError so pydantic reports it as an ordinary field
    validation failure when it happens while loading a Config.
    """

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw

    def __eq__(self, other: object) -> bool:
        """Compare by type and the offending raw string."""
        if type(self) is not type(other):
            return NotImplemented
        return self.raw == other.raw  # type: ignore[attr-defined]

    __hash__ = Exception.__hash__


class InvalidCardError(ParseError):
    """String is not of the form ``card<N>``."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid card name {raw!r}", raw)


class InvalidTempInputError(ParseError):
    """String is not of the form ``temp<N>_input``."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid temperature input {raw!r}", raw)


class ConfigError(AmdFanError):
    """The configuration file could not be turned into a Config."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ConfigIoError(ConfigError):
    """Reading or writing the configuration file failed."""


class ConfigFormatError(ConfigError):
    """The configuration file is not valid TOML or not a valid Config."""


class HwMonError(AmdFanError):
    """A card's hardware monitor could not be used."""

    def __init__(self, message: str, card: "Card") -> None:
        super().__init__(message)
        self.card = card


class HwMonOpenError(HwMonError):
    """The card has no usable hwmon directory."""


class HwMonReadError(HwMonError):
    """A sensor file under the hwmon directory could not be read."""
