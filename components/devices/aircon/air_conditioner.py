# components/devices/aircon/air_conditioner.py
"""
Air conditioner device contract.

Every action supported by a controllable air conditioner. The voice
controller only talks to this interface.
"""

from abc import abstractmethod

from components.devices.core.base_device import BaseDevice
from components.state.aircon_state import AirConditionerMode


class AirConditioner(BaseDevice):
    """Interface for an air conditioning unit. Temperatures are in degC."""

    @property
    @abstractmethod
    def current_mode(self) -> AirConditionerMode:
        """The current operating mode."""
        pass

    @property
    @abstractmethod
    def room_temperature(self) -> float:
        """The temperature detected by the air conditioner."""
        pass

    @property
    @abstractmethod
    def min_temperature(self) -> float:
        """The lowest temperature the unit can cool a room to."""
        pass

    @property
    @abstractmethod
    def max_temperature(self) -> float:
        """The highest temperature the unit can heat a room to."""
        pass

    @abstractmethod
    async def start_cooling_mode(self, target_temperature: float) -> bool:
        """
        Start cooling the room down to the target temperature.

        Returns:
            True if a cooling process was started
        """
        pass

    @abstractmethod
    async def start_heating_mode(self, target_temperature: float) -> bool:
        """
        Start heating the room up to the target temperature.

        Returns:
            True if a heating process was started
        """
        pass
