"""Hardware monitor (hwmon) handles for DRM cards.

For a card ``cardN`` the kernel exposes:
- <root>/cardN/device/vendor: PCI vendor id, "0x1002" for AMD
- <root>/cardN/device/hwmon/hwmonY/: the card's hardware monitor
- <root>/cardN/device/hwmon/hwmonY/name: driver name, "amdgpu"
- <root>/cardN/device/hwmon/hwmonY/tempZ_input: millidegrees Celsius
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import HwMonOpenError, HwMonReadError, InvalidTempInputError
from .identifiers import Card, TempInput

logger = logging.getLogger(__name__)

ROOT_DIR = Path("/sys/class/drm")

AMD_VENDOR_ID = "0x1002"
AMD_HWMON_NAME = "amdgpu"


class HwMon(BaseModel):
    """An opened hardware monitor of one card.

    Vendor and driver name are read once by open_hw_mon() and kept as
    is_amd and name_is_amd; a later change on disk is not noticed.
    Sensor values are read from disk on every call.
    """

    model_config = ConfigDict(frozen=True)

    card: Card = Field(description="Card this monitor belongs to")
    name: str = Field(min_length=1, description="hwmon directory name")
    root: Path = Field(default=ROOT_DIR, description="DRM class directory")
    is_amd: bool = Field(
        default=False, description="Card vendor is AMD"
    )
    name_is_amd: bool = Field(
        default=False, description="hwmon reports the amdgpu driver"
    )

    @property
    def device_dir(self) -> Path:
        """PCI device directory of the card."""
        return card_device_dir(self.card, self.root)

    @property
    def path(self) -> Path:
        """Directory holding the sensor and pwm files."""
        return self.device_dir / "hwmon" / self.name

    def temp_inputs(self) -> List[TempInput]:
        """Return the temperature inputs present, sorted by index."""
        inputs = []
        for entry in self.path.glob("temp*_input"):
            try:
                inputs.append(TempInput.parse(entry.name))
            except InvalidTempInputError:
                continue
        return sorted(inputs, key=lambda temp_input: temp_input.index)

    def read_temp(self, temp_input: TempInput) -> float:
        """Read one temperature input in degrees Celsius."""
        file = self.path / temp_input.file_name()
        try:
            millidegrees = int(file.read_text().strip())
        except (OSError, ValueError) as e:
            raise HwMonReadError(
                f"Failed to read {file}: {e}", self.card
            ) from e
        return millidegrees / 1000.0

    def max_temp(self) -> float:
        """Return the highest readable temperature of all inputs."""
        temps = []
        for temp_input in self.temp_inputs():
            try:
                temps.append(self.read_temp(temp_input))
            except HwMonReadError as e:
                logger.debug("Skipping unreadable input: %s", e)
        if not temps:
            raise HwMonReadError(
                f"No readable temperature input in {self.path}", self.card
            )
        return max(temps)

    def temperature(self, temp_input: Optional[TempInput] = None) -> float:
        """Read the configured input, or the maximum of all inputs.

        Args:
            temp_input: Input selected in the configuration, if any

        Returns:
            Temperature in degrees Celsius
        """
        if temp_input is None:
            return self.max_temp()
        return self.read_temp(temp_input)


def card_device_dir(card: Card, root: Union[str, Path] = ROOT_DIR) -> Path:
    """Return the PCI device directory of a card."""
    return Path(root) / str(card) / "device"


def _read_attr(file: Path) -> Optional[str]:
    try:
        return file.read_text().strip()
    except OSError as e:
        logger.debug("Failed to read %s: %s", file, e)
        return None


def open_hw_mon(card: Card, root: Union[str, Path] = ROOT_DIR) -> HwMon:
    """Open the hardware monitor of a card.

    Args:
        card: Card to open
        root: DRM class directory, /sys/class/drm outside of tests

    Returns:
        HwMon with vendor and driver name checks already evaluated

    Raises:
        HwMonOpenError: The card has no hwmon directory
    """
    device_dir = card_device_dir(card, root)
    hwmon_dir = device_dir / "hwmon"
    try:
        names = sorted(
            entry.name
            for entry in hwmon_dir.iterdir()
            if entry.name.startswith("hwmon")
        )
    except OSError as e:
        raise HwMonOpenError(
            f"Failed to list {hwmon_dir}: {e}", card
        ) from e
    if not names:
        raise HwMonOpenError(f"No hwmon found in {hwmon_dir}", card)

    name = names[0]
    return HwMon(
        card=card,
        name=name,
        root=Path(root),
        is_amd=_read_attr(device_dir / "vendor") == AMD_VENDOR_ID,
        name_is_amd=_read_attr(hwmon_dir / name / "name") == AMD_HWMON_NAME,
    )
