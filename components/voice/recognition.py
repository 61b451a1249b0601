# components/voice/recognition.py
"""
Speech recognition boundary.

Real recognizers (microphone capture and acoustic models) live outside this
project. Whatever produces text hands `RecognitionResult`s to
`AirConditionerSpeechRecognition`, which filters them by confidence, matches
them against the command grammar and queues the resulting commands.
"""

import asyncio
import sys
import threading
from typing import TextIO

from components.monitoring.logging_system import (
    EventCategory,
    EventSeverity,
    get_logger,
)
from components.voice.commands import RecognitionResult, VoiceCommand
from components.voice.grammar import AirConditionerGrammar


class AirConditionerSpeechRecognition:
    """
    Turns recognised phrases into queued air conditioner commands.

    Only results at or above the confidence threshold are accepted.
    Phrases outside the grammar are logged and dropped.
    """

    def __init__(
        self,
        grammar: AirConditionerGrammar,
        confidence_threshold: float = 0.6,
        queue: asyncio.Queue | None = None,
    ):
        """
        Args:
            grammar: Built command grammar
            confidence_threshold: Minimum accepted confidence (0.0 - 1.0)
            queue: Queue receiving commands (created if None)
        """
        if not 0.0 <= confidence_threshold <= 1.0:
            raise ValueError(
                f"confidence_threshold must be within [0, 1], got {confidence_threshold}"
            )

        self.grammar = grammar
        self.confidence_threshold = confidence_threshold
        self.commands: asyncio.Queue = queue if queue is not None else asyncio.Queue()
        self.logger = get_logger(self.__class__.__name__)

        self.accepted_count = 0
        self.rejected_count = 0

    async def submit(self, result: RecognitionResult) -> VoiceCommand | None:
        """
        Process one recognition result.

        Returns:
            The queued command, or None if the result was rejected
        """
        if result.confidence < self.confidence_threshold:
            self.rejected_count += 1
            await self.logger.log_event(
                EventSeverity.DEBUG,
                EventCategory.VOICE,
                f"Ignored '{result.text}' (confidence {result.confidence:.2f} "
                f"< {self.confidence_threshold:.2f})",
            )
            return None

        command = self.grammar.match(result.text)
        if command is None:
            self.rejected_count += 1
            await self.logger.log_event(
                EventSeverity.INFO,
                EventCategory.VOICE,
                f"Unrecognised phrase '{result.text}'",
            )
            return None

        self.accepted_count += 1
        await self.commands.put(command)
        await self.logger.log_event(
            EventSeverity.INFO,
            EventCategory.VOICE,
            f"Recognised '{result.text}' as {command.command_type.value}",
            command=command.command_type.value,
        )
        return command


class ConsoleTranscriptSource:
    """
    Reads typed phrases as recognition results.

    Each non-empty line becomes a result with full confidence. Reading runs in
    a daemon thread; lines are handed to the event loop thread-safely.
    """

    def __init__(
        self,
        recognition: AirConditionerSpeechRecognition,
        stream: TextIO | None = None,
    ):
        self.recognition = recognition
        self.stream = stream if stream is not None else sys.stdin
        self.logger = get_logger(self.__class__.__name__)

        self._lines: asyncio.Queue[str | None] = asyncio.Queue()
        self._thread: threading.Thread | None = None
        self._task: asyncio.Task | None = None
        self.finished = asyncio.Event()

    def start(self) -> None:
        """Start reading from the stream."""
        if self._task is not None:
            self.logger.warning("Transcript source already running")
            return

        loop = asyncio.get_running_loop()
        self._thread = threading.Thread(
            target=self._read_lines,
            args=(loop,),
            name="transcript-reader",
            daemon=True,
        )
        self._thread.start()
        self._task = asyncio.create_task(self._forward())

    async def stop(self) -> None:
        """Stop forwarding lines. The reader thread exits with the process."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    def _read_lines(self, loop: asyncio.AbstractEventLoop) -> None:
        """Blocking reader, runs in the worker thread."""
        try:
            for line in self.stream:
                loop.call_soon_threadsafe(self._lines.put_nowait, line)
        finally:
            # End of input
            loop.call_soon_threadsafe(self._lines.put_nowait, None)

    async def _forward(self) -> None:
        while True:
            line = await self._lines.get()
            if line is None:
                self.logger.info("Transcript input closed")
                self.finished.set()
                return

            text = line.strip()
            if text:
                await self.recognition.submit(RecognitionResult(text=text))
