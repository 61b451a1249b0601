# components/state/aircon_state.py
"""
State containers for the simulated air conditioner.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class AirConditionerMode(Enum):
    """Operating modes of the air conditioner."""

    COOLING = "cooling"  # Lowering the room temperature
    HEATING = "heating"  # Raising the room temperature
    STAND_BY = "stand_by"  # Waiting for a command


@dataclass
class AirConditionerState:
    """State of a single air conditioner.

    Attributes:
        room_temperature: Temperature detected by the unit in degC
        min_temperature: Lowest temperature the unit can reach
        max_temperature: Highest temperature the unit can reach
        is_on: Whether the unit is powered
        mode: Current operating mode
        target_temperature: Target of the active change process, if any
        last_update: Timestamp of the last state change
    """

    room_temperature: float
    min_temperature: float
    max_temperature: float
    is_on: bool = False
    mode: AirConditionerMode = AirConditionerMode.STAND_BY
    target_temperature: float | None = None
    last_update: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        """Record that the state changed."""
        self.last_update = datetime.now()

    def snapshot(self) -> dict[str, Any]:
        """Return a plain dictionary copy of the state."""
        return {
            "room_temperature": self.room_temperature,
            "min_temperature": self.min_temperature,
            "max_temperature": self.max_temperature,
            "is_on": self.is_on,
            "mode": self.mode.value,
            "target_temperature": self.target_temperature,
            "last_update": self.last_update.isoformat(),
        }
