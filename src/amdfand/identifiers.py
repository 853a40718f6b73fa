"""Typed names for DRM cards and hwmon temperature inputs."""

import re
from functools import total_ordering
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from .errors import InvalidCardError, InvalidTempInputError

CARD_PATTERN = re.compile(r"card([0-9]+)")
TEMP_INPUT_PATTERN = re.compile(r"temp([0-9]+)_input")


@total_ordering
class Card(BaseModel):
    """A graphics card as listed under /sys/class/drm.

    Cards compare and sort by their numeric index. They are written
    and read as ``card<N>`` wherever they are serialized.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Number N of the cardN entry")

    @classmethod
    def parse(cls, raw: str) -> "Card":
        """Parse ``card<N>``, raising InvalidCardError otherwise."""
        match = CARD_PATTERN.fullmatch(raw)
        if match is None:
            raise InvalidCardError(raw)
        return cls(index=int(match.group(1)))

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"index": cls.parse(data).index}
        return data

    @model_serializer
    def _to_string(self) -> str:
        return str(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.index < other.index

    def __str__(self) -> str:
        return f"card{self.index}"


class TempInput(BaseModel):
    """Selects one ``temp<N>_input`` file of a hwmon directory.

    A Config without a TempInput makes the daemon read every input and
    take the highest value, which is imprecise but safe.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Number N of the tempN_input file")

    @classmethod
    def parse(cls, raw: str) -> "TempInput":
        """Parse ``temp<N>_input``, raising InvalidTempInputError otherwise."""
        match = TEMP_INPUT_PATTERN.fullmatch(raw)
        if match is None:
            raise InvalidTempInputError(raw)
        return cls(index=int(match.group(1)))

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"index": cls.parse(data).index}
        return data

    @model_serializer
    def _to_string(self) -> str:
        return str(self)

    def file_name(self) -> str:
        """Return the sensor file name inside the hwmon directory."""
        return str(self)

    def __str__(self) -> str:
        return f"temp{self.index}_input"
