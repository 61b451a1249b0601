# components/voice/commands.py
"""
Voice command events.

Recognised phrases become one of these immutable commands and are placed on
a queue consumed by the voice controller.
"""

from dataclasses import dataclass
from enum import Enum


class CommandType(Enum):
    """Supported air conditioner voice commands."""

    POWER_ON = "PowerOn"
    POWER_OFF = "PowerOff"
    CURRENT_TEMPERATURE = "CurrentTemperature"
    HEAT_ROOM = "HeatRoom"
    COOL_ROOM = "CoolRoom"
    CHANGE_ROOM_TEMP = "ChangeRoomTemp"


@dataclass(frozen=True)
class RecognitionResult:
    """Text produced by a speech recognizer.

    Attributes:
        text: The recognised phrase
        confidence: Recognizer confidence between 0.0 and 1.0
    """

    text: str
    confidence: float = 1.0


@dataclass(frozen=True)
class VoiceCommand:
    """Base class for all commands."""

    command_type = None  # Set by each subclass


@dataclass(frozen=True)
class PowerOn(VoiceCommand):
    command_type = CommandType.POWER_ON


@dataclass(frozen=True)
class PowerOff(VoiceCommand):
    command_type = CommandType.POWER_OFF


@dataclass(frozen=True)
class CurrentTemperature(VoiceCommand):
    command_type = CommandType.CURRENT_TEMPERATURE


@dataclass(frozen=True)
class TargetTemperatureCommand(VoiceCommand):
    """Command carrying a spoken target temperature in degC."""

    target_temperature: float


@dataclass(frozen=True)
class HeatRoom(TargetTemperatureCommand):
    command_type = CommandType.HEAT_ROOM


@dataclass(frozen=True)
class CoolRoom(TargetTemperatureCommand):
    command_type = CommandType.COOL_ROOM


@dataclass(frozen=True)
class ChangeRoomTemp(TargetTemperatureCommand):
    """Heat or cool, whichever moves the room towards the target."""

    command_type = CommandType.CHANGE_ROOM_TEMP


COMMANDS_BY_TYPE: dict[CommandType, type[VoiceCommand]] = {
    CommandType.POWER_ON: PowerOn,
    CommandType.POWER_OFF: PowerOff,
    CommandType.CURRENT_TEMPERATURE: CurrentTemperature,
    CommandType.HEAT_ROOM: HeatRoom,
    CommandType.COOL_ROOM: CoolRoom,
    CommandType.CHANGE_ROOM_TEMP: ChangeRoomTemp,
}
