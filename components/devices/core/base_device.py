# components/devices/core/base_device.py
"""
Abstract base class for ALL simulated appliances.

Provides common infrastructure for:
- Device identity and description
- Power state contract
- Logging and diagnostics metadata
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from components.monitoring.logging_system import get_logger


class BaseDevice(ABC):
    """
    Abstract base for all simulated appliances.

    Subclasses must implement:
    - _device_type(): Return device type string
    - is_on: Report power state
    - power_on(): Power the device on
    - power_off(): Power the device off, stopping any background work
    """

    def __init__(
        self,
        device_name: str,
        description: str = "",
        log_dir: Path | None = None,
    ):
        """
        Initialise base device.

        Args:
            device_name: Unique identifier for this device
            description: Human-readable description
            log_dir: Directory for log files (None = global default)
        """
        if not device_name or not isinstance(device_name, str):
            raise ValueError("device_name must be a non-empty string")

        self.device_name = device_name
        self.description = description

        logger_kwargs = {"log_dir": log_dir} if log_dir else {}
        self.logger = get_logger(
            self.__class__.__name__,
            device=device_name,
            **logger_kwargs,
        )

        # Diagnostics for status reports
        self.metadata: dict[str, Any] = {
            "description": description,
            "power_cycles": 0,
            "processes_started": 0,
            "processes_cancelled": 0,
            "processes_completed": 0,
        }

        self.logger.info(f"Initialised {self._device_type()} '{device_name}'")

    # ----------------------------------------------------------------
    # Abstract methods - must be implemented by subclasses
    # ----------------------------------------------------------------

    @abstractmethod
    def _device_type(self) -> str:
        """Return device type identifier (e.g., 'fake_air_conditioner')."""
        pass

    @property
    @abstractmethod
    def is_on(self) -> bool:
        """Whether the device is currently powered on."""
        pass

    @abstractmethod
    def power_on(self) -> bool:
        """Power on the device. Returns True when successful."""
        pass

    @abstractmethod
    async def power_off(self) -> bool:
        """Power off the device. Returns True when successful."""
        pass

    # ----------------------------------------------------------------
    # Status and diagnostics
    # ----------------------------------------------------------------

    def get_status(self) -> dict[str, Any]:
        """
        Get device status.

        Returns:
            Dictionary containing device identity and diagnostics
        """
        return {
            "device_name": self.device_name,
            "device_type": self._device_type(),
            "description": self.description,
            "is_on": self.is_on,
            "power_cycles": self.metadata["power_cycles"],
            "processes_started": self.metadata["processes_started"],
            "processes_cancelled": self.metadata["processes_cancelled"],
            "processes_completed": self.metadata["processes_completed"],
        }

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} "
            f"'{self.device_name}' "
            f"(on: {self.is_on})>"
        )
