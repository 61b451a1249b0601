# tests/unit/devices/test_base_device.py
"""Tests for BaseDevice abstract base class.

This is Level 1 in our dependency tree - BaseDevice depends on:
- Logging system (Level 0) - uses REAL DeviceLogger

Test Coverage:
- Initialization and validation
- Abstract contract enforcement
- Status reporting
- Diagnostic metadata

BaseDevice is abstract, so we create a concrete test implementation.
"""

import pytest

from components.devices.core.base_device import BaseDevice


# ================================================================
# TEST DEVICE IMPLEMENTATION
# ================================================================
class ConcreteTestDevice(BaseDevice):
    """Concrete implementation of BaseDevice for testing.

    WHY: BaseDevice is abstract - need concrete class to test.
    Note: Named ConcreteTestDevice (not TestDevice) to avoid pytest collection.
    """

    def __init__(self, device_name: str, description: str = ""):
        self._on = False
        super().__init__(device_name, description)

    def _device_type(self) -> str:
        return "test_device"

    @property
    def is_on(self) -> bool:
        return self._on

    def power_on(self) -> bool:
        if not self._on:
            self._on = True
            self.metadata["power_cycles"] += 1
        return True

    async def power_off(self) -> bool:
        self._on = False
        return True


@pytest.fixture
def test_device():
    """Create a powered off test device.

    WHY: Most tests need a device instance.
    """
    return ConcreteTestDevice("test_device_1", description="Device for unit testing")


# ================================================================
# INITIALIZATION TESTS
# ================================================================
class TestBaseDeviceInitialization:
    """Test device construction."""

    def test_init_sets_identity(self, test_device):
        assert test_device.device_name == "test_device_1"
        assert test_device.description == "Device for unit testing"
        assert test_device.metadata["description"] == "Device for unit testing"

    def test_init_counters_start_at_zero(self, test_device):
        for key in (
            "power_cycles",
            "processes_started",
            "processes_cancelled",
            "processes_completed",
        ):
            assert test_device.metadata[key] == 0

    @pytest.mark.parametrize("name", ["", None, 42])
    def test_init_rejects_invalid_name(self, name):
        with pytest.raises(ValueError, match="device_name"):
            ConcreteTestDevice(name)

    def test_cannot_instantiate_abstract_class(self):
        """WHY: The power contract must be implemented by every device."""
        with pytest.raises(TypeError):
            BaseDevice("abstract")

    def test_logger_bound_to_device(self, test_device):
        assert test_device.logger.device == "test_device_1"
        assert test_device.logger.name == "ConcreteTestDevice"


# ================================================================
# STATUS TESTS
# ================================================================
class TestBaseDeviceStatus:
    """Test status reporting."""

    def test_status_when_off(self, test_device):
        status = test_device.get_status()

        assert status["device_name"] == "test_device_1"
        assert status["device_type"] == "test_device"
        assert status["is_on"] is False
        assert status["power_cycles"] == 0

    async def test_status_tracks_power(self, test_device):
        test_device.power_on()
        assert test_device.get_status()["is_on"] is True

        await test_device.power_off()
        status = test_device.get_status()
        assert status["is_on"] is False
        assert status["power_cycles"] == 1

    def test_repr(self, test_device):
        assert repr(test_device) == "<ConcreteTestDevice 'test_device_1' (on: False)>"
        test_device.power_on()
        assert "(on: True)" in repr(test_device)
