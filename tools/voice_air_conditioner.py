#!/usr/bin/env python3
# tools/voice_air_conditioner.py
"""
Voice Controlled Air Conditioner - Main entry point

Wires the simulated air conditioner to the voice interface:
- ConfigLoader for YAML configuration
- FakeAirConditioner (via the device registry)
- Command grammar and recognition (typed phrases stand in for a microphone)
- Console speech synthesizer
- VoiceControlledAirConditioner routing commands to the unit

Runs until interrupted (Ctrl+C) or until the input stream closes, then
powers the unit off cleanly.
"""

import argparse
import asyncio
import dataclasses
import logging
import signal
import sys

from components.devices import DEVICE_REGISTRY
from components.devices.aircon.air_conditioner import AirConditioner
from components.monitoring.logging_system import configure_logging
from components.voice.grammar import build_air_conditioner_grammar
from components.voice.recognition import (
    AirConditionerSpeechRecognition,
    ConsoleTranscriptSource,
)
from components.voice.synthesis import ConsoleSpeechSynthesizer, SpeechSynthesizer
from components.voice.voice_controlled_air_conditioner import (
    VoiceControlledAirConditioner,
)
from config.config_loader import ConfigLoader, ConfigurationError

logger = logging.getLogger(__name__)


class VoiceAirConditionerApp:
    """
    Bootstraps and runs the voice controlled air conditioner.

    Example:
        >>> app = VoiceAirConditionerApp(config_dir="config")
        >>> await app.initialise()
        >>> await app.start()
        >>> # Commands are processed...
        >>> await app.stop()
    """

    def __init__(
        self,
        config_dir: str = "config",
        seconds_to_temperature_change: float | None = None,
        time_acceleration: float | None = None,
        log_level: str | None = None,
        input_stream=None,
        synthesizer: SpeechSynthesizer | None = None,
    ):
        """
        Args:
            config_dir: Directory containing configuration files
            seconds_to_temperature_change: Overrides the configured step interval
            time_acceleration: Overrides the configured time acceleration
            log_level: Overrides the configured logging level
            input_stream: Source of typed phrases (stdin if None)
            synthesizer: Response output (console if None)
        """
        self.config_loader = ConfigLoader(config_dir=config_dir)
        self.seconds_to_temperature_change = seconds_to_temperature_change
        self.time_acceleration = time_acceleration
        self.log_level = log_level
        self.input_stream = input_stream
        self.synthesizer = synthesizer

        self.air_conditioner: AirConditioner | None = None
        self.recognition: AirConditionerSpeechRecognition | None = None
        self.transcripts: ConsoleTranscriptSource | None = None
        self.controller: VoiceControlledAirConditioner | None = None

        self._running = False
        self._shutdown_event = asyncio.Event()

    # ----------------------------------------------------------------
    # Initialisation
    # ----------------------------------------------------------------

    async def initialise(self) -> None:
        """Load configuration and build all components.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config = self.config_loader.load_all()

        logging_cfg = config["logging"]
        configure_logging(
            log_dir=logging_cfg["log_dir"],
            level=self.log_level or logging_cfg["level"],
            enable_json=logging_cfg["json"],
        )

        settings = self.config_loader.air_conditioner_settings(config)
        overrides = {}
        if self.seconds_to_temperature_change is not None:
            overrides["seconds_to_temperature_change"] = self.seconds_to_temperature_change
        if self.time_acceleration is not None:
            overrides["time_acceleration"] = self.time_acceleration
        if overrides:
            settings = dataclasses.replace(settings, **overrides)

        device_class = DEVICE_REGISTRY.get(settings.device_type)
        if device_class is None:
            raise ConfigurationError(f"Unknown device type '{settings.device_type}'")

        self.air_conditioner = device_class.from_settings(settings)

        voice_cfg = config["voice"]
        grammar = build_air_conditioner_grammar(voice_cfg)
        self.recognition = AirConditionerSpeechRecognition(
            grammar,
            confidence_threshold=float(voice_cfg["confidence_threshold"]),
        )
        self.transcripts = ConsoleTranscriptSource(
            self.recognition, stream=self.input_stream
        )

        self.controller = VoiceControlledAirConditioner(
            self.air_conditioner,
            self.synthesizer or ConsoleSpeechSynthesizer(),
            commands=self.recognition.commands,
            announce_power_on=bool(voice_cfg["announce_power_on"]),
        )

        logger.info(f"Initialised {self.air_conditioner!r}")

    # ----------------------------------------------------------------
    # Lifecycle
    # ----------------------------------------------------------------

    async def start(self) -> None:
        """Start processing voice commands."""
        if self.controller is None:
            await self.initialise()

        await self.controller.start()
        self.transcripts.start()
        self._running = True

    async def stop(self) -> None:
        """Stop processing commands and power the unit off."""
        if not self._running:
            return

        self._running = False
        await self.transcripts.stop()

        # Let already recognised commands finish
        await self.recognition.commands.join()
        await self.controller.stop()
        await self.air_conditioner.power_off()

        logger.info("Voice controlled air conditioner stopped")

    # ----------------------------------------------------------------
    # Signal handling
    # ----------------------------------------------------------------

    def setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""

        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}")
            self._shutdown_event.set()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    async def wait_for_shutdown(self) -> None:
        """Wait for a shutdown signal or the end of the input stream."""
        shutdown = asyncio.create_task(self._shutdown_event.wait())
        input_closed = asyncio.create_task(self.transcripts.finished.wait())
        done, pending = await asyncio.wait(
            {shutdown, input_closed}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    async def run(self) -> None:
        """Run until interrupted."""
        try:
            self.setup_signal_handlers()
            await self.initialise()
            await self.start()

            logger.info("Listening for commands. Press Ctrl+C to stop.")
            await self.wait_for_shutdown()
        finally:
            await self.stop()


# ----------------------------------------------------------------
# Command-line interface
# ----------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Voice controlled air conditioner simulator",
        epilog="""
Type phrases such as:
  turn on the air conditioner
  what is the temperature
  cool the room to 21 degrees
  set the temperature to 24 degrees
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config-dir", default="config", help="Directory with YAML configuration"
    )
    parser.add_argument(
        "--interval",
        type=float,
        help="Time units between temperature steps (overrides config)",
    )
    parser.add_argument(
        "--acceleration",
        type=float,
        help="Time acceleration factor (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides config)",
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level or "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = VoiceAirConditionerApp(
        config_dir=args.config_dir,
        seconds_to_temperature_change=args.interval,
        time_acceleration=args.acceleration,
        log_level=args.log_level,
    )

    try:
        await app.run()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
