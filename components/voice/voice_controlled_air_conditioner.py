# components/voice/voice_controlled_air_conditioner.py
"""
Voice control of an air conditioner.

Consumes recognised commands from a queue, applies them to the device and
speaks the outcome. Heating or cooling a room powers the unit on first when
needed. Targets outside the device limits are announced as clamped.
"""

import asyncio

from components.devices.aircon.air_conditioner import AirConditioner
from components.monitoring.logging_system import (
    EventCategory,
    EventSeverity,
    get_logger,
)
from components.voice.commands import (
    ChangeRoomTemp,
    CommandType,
    CoolRoom,
    HeatRoom,
    VoiceCommand,
)
from components.voice.responses import AirConditionerSpeechResponses as Responses
from components.voice.synthesis import SpeechSynthesizer


class VoiceControlledAirConditioner:
    """
    Routes voice commands to an air conditioner.

    Example:
        >>> controller = VoiceControlledAirConditioner(ac, synthesizer, queue)
        >>> await controller.start()
        >>> await queue.put(CoolRoom(target_temperature=21))
        >>> await controller.stop()
    """

    def __init__(
        self,
        air_conditioner: AirConditioner,
        synthesizer: SpeechSynthesizer,
        commands: asyncio.Queue | None = None,
        announce_power_on: bool = True,
    ):
        """
        Args:
            air_conditioner: The unit controlled by voice
            synthesizer: Speaks the responses
            commands: Queue of recognised commands (created if None)
            announce_power_on: Power the unit on when starting
        """
        self.air_conditioner = air_conditioner
        self.synthesizer = synthesizer
        self.commands: asyncio.Queue = commands if commands is not None else asyncio.Queue()
        self.announce_power_on = announce_power_on
        self.logger = get_logger(
            self.__class__.__name__, device=air_conditioner.device_name
        )

        self._handlers = {
            CommandType.POWER_ON: self._power_on_command,
            CommandType.POWER_OFF: self._power_off_command,
            CommandType.CURRENT_TEMPERATURE: self._current_temperature_command,
            CommandType.HEAT_ROOM: self._heat_room_command,
            CommandType.COOL_ROOM: self._cool_room_command,
            CommandType.CHANGE_ROOM_TEMP: self._change_room_temperature_command,
        }

        self._running = False
        self._task: asyncio.Task | None = None
        self.handled_count = 0

    # ----------------------------------------------------------------
    # Lifecycle
    # ----------------------------------------------------------------

    async def start(self) -> None:
        """Power the unit on (if configured) and begin consuming commands."""
        if self._running:
            self.logger.warning("Voice controller already running")
            return

        if self.announce_power_on:
            await self._power_on_command(None)

        self._running = True
        self._task = asyncio.create_task(self.run())
        self.logger.info("Voice controller started")

    async def stop(self) -> None:
        """Stop consuming commands. The unit is left as it is."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        self.logger.info("Voice controller stopped")

    def is_running(self) -> bool:
        return self._running

    async def run(self) -> None:
        """Handle queued commands until stopped."""
        while True:
            command = await self.commands.get()
            try:
                await self.handle(command)
            except Exception as e:
                self.logger.error(
                    f"Failed to handle {command!r}: {e}",
                    exc_info=True,
                )
            finally:
                self.commands.task_done()

    async def handle(self, command: VoiceCommand) -> None:
        """Apply one command to the air conditioner."""
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise ValueError(f"Unsupported command: {command!r}")

        await self.logger.log_event(
            EventSeverity.INFO,
            EventCategory.COMMAND,
            f"Handling {command.command_type.value}",
            command=command.command_type.value,
            target=getattr(command, "target_temperature", None),
        )

        await handler(command)
        self.handled_count += 1

    # ----------------------------------------------------------------
    # Command handlers
    # ----------------------------------------------------------------

    async def _power_on_command(self, command) -> None:
        if self.air_conditioner.is_on:
            await self.synthesizer.speak(Responses.ALREADY_ON)
            return

        self.air_conditioner.power_on()
        await self.synthesizer.speak(Responses.POWERED_ON)

    async def _power_off_command(self, command) -> None:
        if not self.air_conditioner.is_on:
            await self.synthesizer.speak(Responses.ALREADY_OFF)
            return

        await self.synthesizer.speak(Responses.TURNING_OFF)
        await self.air_conditioner.power_off()
        await self.synthesizer.speak(Responses.TURNED_OFF)

    async def _current_temperature_command(self, command) -> None:
        await self.synthesizer.speak(
            Responses.CURRENT_TEMPERATURE.format(
                temperature=self.air_conditioner.room_temperature
            )
        )

    async def _heat_room_command(self, command: HeatRoom) -> None:
        """Heat the room; the unit does not start if the room is already warm enough."""
        if not self.air_conditioner.is_on:
            await self._power_on_command(command)

        requested = command.target_temperature
        started = await self.air_conditioner.start_heating_mode(requested)

        if started:
            target = min(requested, self.air_conditioner.max_temperature)
            await self.synthesizer.speak(
                Responses.HEATING_ROOM_TO_TEMPERATURE.format(target=target)
            )
            if target != requested:
                await self.synthesizer.speak(
                    Responses.TARGET_ABOVE_MAXIMUM.format(
                        requested=requested, target=target
                    )
                )
        elif self.air_conditioner.room_temperature >= requested:
            await self.synthesizer.speak(Responses.FAIL_STARTING_UP)
            await self._current_temperature_command(command)

    async def _cool_room_command(self, command: CoolRoom) -> None:
        """Cool the room; the unit does not start if the room is already cool enough.

        A rejected cool leaves the unit on, the same as a rejected heat.
        """
        if not self.air_conditioner.is_on:
            await self._power_on_command(command)

        requested = command.target_temperature
        started = await self.air_conditioner.start_cooling_mode(requested)

        if started:
            target = max(requested, self.air_conditioner.min_temperature)
            await self.synthesizer.speak(
                Responses.COOLING_ROOM_TO_TEMPERATURE.format(target=target)
            )
            if target != requested:
                await self.synthesizer.speak(
                    Responses.TARGET_BELOW_MINIMUM.format(
                        requested=requested, target=target
                    )
                )
        elif self.air_conditioner.room_temperature <= requested:
            await self.synthesizer.speak(Responses.FAIL_STARTING_UP)
            await self._current_temperature_command(command)

    async def _change_room_temperature_command(self, command: ChangeRoomTemp) -> None:
        target = command.target_temperature
        if target > self.air_conditioner.room_temperature:
            await self._heat_room_command(HeatRoom(target_temperature=target))
        else:
            await self._cool_room_command(CoolRoom(target_temperature=target))
