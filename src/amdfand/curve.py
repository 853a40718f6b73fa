"""Fan curve points, curve validation and temperature to speed mapping.

A curve (speed matrix) is an ordered sequence of CurvePoint values. A
valid curve is sorted by temperature and by speed at the same time and
keeps every speed within 0.0 to 100.0. Validation happens once, when
the configuration is loaded; evaluation afterwards never fails.
"""

import logging
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .errors import (
    FanSpeedTooHighError,
    FanSpeedTooLowError,
    UnsortedFanSpeedError,
    UnsortedFanTempError,
)

logger = logging.getLogger(__name__)

MIN_SPEED = 0.0
MAX_SPEED = 100.0


class CurvePoint(BaseModel):
    """A single temperature to fan speed breakpoint.

    Stored in configuration files as ``temp`` and ``speed``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float = Field(
        alias="temp", description="Temperature in degrees Celsius"
    )
    speed: float = Field(description="Fan speed in percent (0.0 to 100.0)")


Curve = Sequence[CurvePoint]


def validate_curve(points: Curve) -> None:
    """Check a curve, raising on the first malformed entry.

    Args:
        points: Curve points in stored order

    Raises:
        FanSpeedTooLowError: A speed is below 0.0
        FanSpeedTooHighError: A speed is above 100.0
        UnsortedFanSpeedError: A speed is lower than the previous one
        UnsortedFanTempError: A temperature is lower than the previous one
    """
    last_point: Optional[CurvePoint] = None

    for index, point in enumerate(points):
        if point.speed < MIN_SPEED:
            logger.error(
                "Fan speed can't be below 0.0 found %s", point.speed
            )
            raise FanSpeedTooLowError(value=point.speed, index=index)
        if point.speed > MAX_SPEED:
            logger.error(
                "Fan speed can't be above 100.0 found %s", point.speed
            )
            raise FanSpeedTooHighError(value=point.speed, index=index)

        if last_point is not None:
            if point.speed < last_point.speed:
                logger.error(
                    "Curve fan speeds should be monotonically increasing, "
                    "found %s then %s",
                    last_point.speed,
                    point.speed,
                )
                raise UnsortedFanSpeedError(
                    current=point.speed, last=last_point.speed, index=index
                )
            if point.temperature < last_point.temperature:
                logger.error(
                    "Curve fan temps should be monotonically increasing, "
                    "found %s then %s",
                    last_point.temperature,
                    point.temperature,
                )
                raise UnsortedFanTempError(
                    current=point.temperature,
                    last=last_point.temperature,
                    index=index,
                )

        last_point = point


def linear_map(x: float, x1: float, x2: float, y1: float, y2: float) -> float:
    """Map x from the range [x1, x2] onto the range [y1, y2].

    A zero-width range (x1 == x2) maps everything onto y2.
    """
    if x1 == x2:
        return y2
    m = (y2 - y1) / (x2 - x1)
    return m * (x - x1) + y1


def min_speed(points: Curve) -> float:
    """Speed of the first point, or 0.0 for an empty curve."""
    return points[0].speed if points else MIN_SPEED


def max_speed(points: Curve) -> float:
    """Speed of the last point, or 100.0 for an empty curve."""
    return points[-1].speed if points else MAX_SPEED


def speed_for_temperature(points: Curve, temp: float) -> float:
    """Return the fan speed commanded by a validated curve at temp.

    Below the first breakpoint the first speed is used, at or above the
    last breakpoint the last speed is used, and in between the two
    surrounding breakpoints are linearly interpolated.

    Args:
        points: A curve that already passed validate_curve()
        temp: Temperature reading in degrees Celsius

    Returns:
        Fan speed in percent
    """
    # Rightmost point at or below temp
    idx = next(
        (
            i
            for i in range(len(points) - 1, -1, -1)
            if points[i].temperature <= temp
        ),
        None,
    )
    if idx is None:
        return min_speed(points)

    if idx == len(points) - 1:
        return max_speed(points)

    low, high = points[idx], points[idx + 1]
    return linear_map(
        temp, low.temperature, high.temperature, low.speed, high.speed
    )
