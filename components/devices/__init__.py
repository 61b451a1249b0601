# components/devices/__init__.py
"""Device implementations for the air conditioner simulation."""

from components.devices.aircon.air_conditioner import AirConditioner
from components.devices.aircon.fake_air_conditioner import FakeAirConditioner
from components.devices.aircon.temperature_change_process import (
    CancellationToken,
    TemperatureChangeProcess,
)
from components.devices.core.base_device import BaseDevice

__all__ = [
    "BaseDevice",
    "AirConditioner",
    "FakeAirConditioner",
    "CancellationToken",
    "TemperatureChangeProcess",
    "DEVICE_REGISTRY",
]

# ================================================================
# Device Registry - Maps device type (from config) to class
# ================================================================
DEVICE_REGISTRY = {
    "fake_air_conditioner": FakeAirConditioner,
}
