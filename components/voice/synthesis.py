# components/voice/synthesis.py
"""
Speech synthesis boundary.

Text-to-speech engines are external. The controller only needs something
that can `speak()` a response string.
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from components.monitoring.logging_system import (
    EventCategory,
    EventSeverity,
    get_logger,
)


class SpeechSynthesizer(ABC):
    """Speaks responses back to the user."""

    @abstractmethod
    async def speak(self, text: str) -> None:
        """Speak a response."""
        pass


class ConsoleSpeechSynthesizer(SpeechSynthesizer):
    """Writes responses to a text stream instead of audio."""

    def __init__(self, stream: TextIO | None = None, prefix: str = "AC> "):
        self.stream = stream if stream is not None else sys.stdout
        self.prefix = prefix
        self.logger = get_logger(self.__class__.__name__)

    async def speak(self, text: str) -> None:
        self.stream.write(f"{self.prefix}{text}\n")
        self.stream.flush()
        await self.logger.log_event(
            EventSeverity.DEBUG, EventCategory.VOICE, f"Spoke: {text}"
        )


class RecordingSpeechSynthesizer(SpeechSynthesizer):
    """Keeps spoken responses in memory."""

    def __init__(self):
        self.spoken: list[str] = []

    async def speak(self, text: str) -> None:
        self.spoken.append(text)

    def clear(self) -> None:
        self.spoken.clear()
