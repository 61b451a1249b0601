# components/voice/__init__.py
"""
Voice interface for the air conditioner.

- Command events produced by recognition
- Command grammar and recognition boundary
- Speech synthesis boundary and response templates
- Voice controller routing commands to the device
"""

from components.voice.commands import (
    ChangeRoomTemp,
    CommandType,
    CoolRoom,
    CurrentTemperature,
    HeatRoom,
    PowerOff,
    PowerOn,
    RecognitionResult,
    VoiceCommand,
)
from components.voice.grammar import AirConditionerGrammar, build_air_conditioner_grammar
from components.voice.recognition import (
    AirConditionerSpeechRecognition,
    ConsoleTranscriptSource,
)
from components.voice.synthesis import (
    ConsoleSpeechSynthesizer,
    RecordingSpeechSynthesizer,
    SpeechSynthesizer,
)
from components.voice.voice_controlled_air_conditioner import (
    VoiceControlledAirConditioner,
)

__all__ = [
    "VoiceCommand",
    "CommandType",
    "RecognitionResult",
    "PowerOn",
    "PowerOff",
    "CurrentTemperature",
    "HeatRoom",
    "CoolRoom",
    "ChangeRoomTemp",
    "AirConditionerGrammar",
    "build_air_conditioner_grammar",
    "AirConditionerSpeechRecognition",
    "ConsoleTranscriptSource",
    "SpeechSynthesizer",
    "ConsoleSpeechSynthesizer",
    "RecordingSpeechSynthesizer",
    "VoiceControlledAirConditioner",
]
