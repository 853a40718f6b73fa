from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from amdfand import CurvePoint


@pytest.fixture
def drm_root(tmp_path: Path) -> Path:
    """Provides an empty stand-in for /sys/class/drm."""
    root = tmp_path / "drm"
    root.mkdir()
    return root


@pytest.fixture
def make_card(drm_root: Path) -> Callable[..., Path]:
    """Provides a factory creating fake card directories under drm_root.

    The factory returns the hwmon directory, or the device directory
    when hwmon is None.
    """

    def _make_card(
        index: int,
        vendor: Optional[str] = "0x1002",
        hwmon: Optional[str] = "hwmon0",
        hwmon_name: Optional[str] = "amdgpu",
        temps: Optional[Dict[int, str]] = None,
    ) -> Path:
        device_dir = drm_root / f"card{index}" / "device"
        device_dir.mkdir(parents=True)
        if vendor is not None:
            (device_dir / "vendor").write_text(f"{vendor}\n")
        if hwmon is None:
            return device_dir

        hwmon_dir = device_dir / "hwmon" / hwmon
        hwmon_dir.mkdir(parents=True)
        if hwmon_name is not None:
            (hwmon_dir / "name").write_text(f"{hwmon_name}\n")
        for temp_index, value in (temps or {}).items():
            (hwmon_dir / f"temp{temp_index}_input").write_text(f"{value}\n")
        return hwmon_dir

    return _make_card


@pytest.fixture
def sample_curve() -> List[CurvePoint]:
    """Provides a short valid curve for testing."""
    return [
        CurvePoint(temperature=20.0, speed=10.0),
        CurvePoint(temperature=40.0, speed=30.0),
        CurvePoint(temperature=70.0, speed=90.0),
    ]


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
