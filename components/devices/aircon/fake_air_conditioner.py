# components/devices/aircon/fake_air_conditioner.py
"""
Simulated air conditioner.

The unit does not drive any hardware. Heating and cooling are modelled as a
background loop that moves the room temperature by a fixed step every
`seconds_to_temperature_change` time units until the target is reached.

Only one temperature change process is active per unit. Starting a new mode
or powering off cancels the running process and waits for it to exit before
anything else touches the state, so two loops never write the temperature at
the same time.
"""

import asyncio
import random
from pathlib import Path
from typing import Any

from components.devices.aircon.air_conditioner import AirConditioner
from components.devices.aircon.temperature_change_process import (
    CancellationToken,
    TemperatureChangeProcess,
)
from components.monitoring.logging_system import EventCategory, EventSeverity
from components.state.aircon_state import AirConditionerMode, AirConditionerState


class FakeAirConditioner(AirConditioner):
    """
    In-memory air conditioner with gradual temperature changes.

    Example:
        >>> ac = FakeAirConditioner(initial_temperature=25)
        >>> ac.power_on()
        >>> await ac.start_cooling_mode(21)
        >>> ac.current_mode
        <AirConditionerMode.COOLING: 'cooling'>
    """

    DEFAULT_MIN_TEMPERATURE = -5.0
    DEFAULT_MAX_TEMPERATURE = 40.0
    DEFAULT_TEMPERATURE_STEP = 0.5
    DEFAULT_SECONDS_TO_TEMPERATURE_CHANGE = 5.0

    # Range of the random starting temperature when none is given
    INITIAL_TEMPERATURE_RANGE = (0, 35)

    def __init__(
        self,
        device_name: str = "fake_air_conditioner",
        initial_temperature: float | None = None,
        seconds_to_temperature_change: float = DEFAULT_SECONDS_TO_TEMPERATURE_CHANGE,
        min_temperature: float = DEFAULT_MIN_TEMPERATURE,
        max_temperature: float = DEFAULT_MAX_TEMPERATURE,
        temperature_step: float = DEFAULT_TEMPERATURE_STEP,
        time_acceleration: float = 1.0,
        description: str = "Simulated air conditioning unit",
        log_dir: Path | None = None,
    ):
        """
        Initialise the simulated air conditioner.

        Args:
            device_name: Unique identifier for this unit
            initial_temperature: Starting room temperature (None = random)
            seconds_to_temperature_change: Time units between steps
            min_temperature: Lowest reachable temperature
            max_temperature: Highest reachable temperature
            temperature_step: Degrees changed per step
            time_acceleration: Divisor turning time units into wall seconds
            description: Human-readable description
            log_dir: Directory for log files

        Raises:
            ValueError: If the limits, step or timing are inconsistent
        """
        if min_temperature >= max_temperature:
            raise ValueError(
                f"min_temperature {min_temperature} must be below "
                f"max_temperature {max_temperature}"
            )
        if temperature_step <= 0:
            raise ValueError(f"temperature_step must be > 0, got {temperature_step}")
        if seconds_to_temperature_change < 0:
            raise ValueError(
                "seconds_to_temperature_change must be >= 0, "
                f"got {seconds_to_temperature_change}"
            )
        if time_acceleration <= 0:
            raise ValueError(f"time_acceleration must be > 0, got {time_acceleration}")

        if initial_temperature is None:
            initial_temperature = self._generate_initial_room_temperature()
        elif not min_temperature <= initial_temperature <= max_temperature:
            raise ValueError(
                f"initial_temperature {initial_temperature} outside "
                f"[{min_temperature}, {max_temperature}]"
            )

        self._state = AirConditionerState(
            room_temperature=float(initial_temperature),
            min_temperature=float(min_temperature),
            max_temperature=float(max_temperature),
        )
        self.temperature_step = float(temperature_step)
        self.seconds_to_temperature_change = float(seconds_to_temperature_change)
        self.time_acceleration = float(time_acceleration)

        self._process: TemperatureChangeProcess | None = None
        # Serialises preemption, spawning and power off
        self._process_lock = asyncio.Lock()

        super().__init__(
            device_name=device_name,
            description=description,
            log_dir=log_dir,
        )

        self.logger.info(
            f"Room at {self._state.room_temperature}ºC, limits "
            f"[{self._state.min_temperature}, {self._state.max_temperature}]ºC, "
            f"step {self.temperature_step}ºC every "
            f"{self.seconds_to_temperature_change} time units"
        )

    @classmethod
    def from_settings(cls, settings, log_dir: Path | None = None) -> "FakeAirConditioner":
        """Create a unit from validated AirConditionerSettings."""
        return cls(
            device_name=settings.device_name,
            initial_temperature=settings.initial_temperature,
            seconds_to_temperature_change=settings.seconds_to_temperature_change,
            min_temperature=settings.min_temperature,
            max_temperature=settings.max_temperature,
            temperature_step=settings.temperature_step,
            time_acceleration=settings.time_acceleration,
            log_dir=log_dir,
        )

    # ----------------------------------------------------------------
    # BaseDevice implementation
    # ----------------------------------------------------------------

    def _device_type(self) -> str:
        """Return device type."""
        return "fake_air_conditioner"

    @property
    def is_on(self) -> bool:
        return self._state.is_on

    def power_on(self) -> bool:
        """Power on the unit. Starts no temperature change."""
        if not self._state.is_on:
            self._state.is_on = True
            self._state.touch()
            self.metadata["power_cycles"] += 1
            self.logger.info("Powered on")

        return True

    async def power_off(self) -> bool:
        """Power off the unit, stopping any temperature change first."""
        async with self._process_lock:
            was_on = self._state.is_on
            self._state.is_on = False

            await self._stop_process()

            self._state.mode = AirConditionerMode.STAND_BY
            self._state.target_temperature = None
            self._state.touch()

        if was_on:
            await self.logger.log_event(
                EventSeverity.INFO,
                EventCategory.DEVICE,
                f"Powered off at {self._state.room_temperature}ºC",
                room_temperature=self._state.room_temperature,
            )

        return True

    # ----------------------------------------------------------------
    # AirConditioner implementation
    # ----------------------------------------------------------------

    @property
    def current_mode(self) -> AirConditionerMode:
        return self._state.mode

    @property
    def room_temperature(self) -> float:
        return self._state.room_temperature

    @property
    def min_temperature(self) -> float:
        return self._state.min_temperature

    @property
    def max_temperature(self) -> float:
        return self._state.max_temperature

    @property
    def target_temperature(self) -> float | None:
        """Target of the running change process, None when in stand by."""
        return self._state.target_temperature

    @property
    def step_interval(self) -> float:
        """Wall-clock seconds between temperature steps."""
        return self.seconds_to_temperature_change / self.time_acceleration

    async def start_cooling_mode(self, target_temperature: float) -> bool:
        """
        Cool the room down to the target temperature.

        Rejected (returns False) when the unit is off or the room is already
        at or below the target. Targets below the minimum are clamped to it.
        Any running change process is stopped before cooling begins. Returns
        as soon as the loop has been spawned.
        """
        target = float(target_temperature)

        if not self._state.is_on or self._state.room_temperature <= target:
            await self._reject(AirConditionerMode.COOLING, target)
            return False

        clamped = max(target, self._state.min_temperature)
        if clamped != target:
            self.logger.info(
                f"Cooling target {target}ºC clamped to minimum {clamped}ºC"
            )

        return await self._start_process(AirConditionerMode.COOLING, clamped)

    async def start_heating_mode(self, target_temperature: float) -> bool:
        """
        Heat the room up to the target temperature.

        Rejected (returns False) when the unit is off or the room is already
        at or above the target. Targets above the maximum are clamped to it.
        """
        target = float(target_temperature)

        if not self._state.is_on or self._state.room_temperature >= target:
            await self._reject(AirConditionerMode.HEATING, target)
            return False

        clamped = min(target, self._state.max_temperature)
        if clamped != target:
            self.logger.info(
                f"Heating target {target}ºC clamped to maximum {clamped}ºC"
            )

        return await self._start_process(AirConditionerMode.HEATING, clamped)

    # ----------------------------------------------------------------
    # Process management
    # ----------------------------------------------------------------

    def is_changing_temperature(self) -> bool:
        """Whether a temperature change process is currently active."""
        return self._process is not None and self._process.is_running()

    async def wait_until_stand_by(self) -> None:
        """Wait for the active change process, if any, to finish on its own."""
        process = self._process
        if process is not None and process.is_running():
            await asyncio.shield(process.task)

    async def _reject(self, mode: AirConditionerMode, target: float) -> None:
        """Log a rejected mode start. A running process is left untouched."""
        if not self.is_changing_temperature():
            self._state.mode = AirConditionerMode.STAND_BY

        if not self._state.is_on:
            reason = "unit is off"
        else:
            reason = f"room already at {self._state.room_temperature}ºC"

        await self.logger.log_event(
            EventSeverity.INFO,
            EventCategory.DEVICE,
            f"{mode.value} to {target}ºC rejected: {reason}",
            mode=mode.value,
            target=target,
        )

    async def _start_process(self, mode: AirConditionerMode, target: float) -> bool:
        """Preempt any running process, then spawn a new change loop."""
        async with self._process_lock:
            await self._stop_process()

            # A power off may have won the lock while we waited
            if not self._state.is_on:
                await self._reject(mode, target)
                return False

            token = CancellationToken()
            self._state.mode = mode
            self._state.target_temperature = target
            self._state.touch()

            task = asyncio.create_task(
                self._temperature_change_loop(mode, target, token),
                name=f"{self.device_name}-{mode.value}",
            )
            task.add_done_callback(self._on_process_done)
            self._process = TemperatureChangeProcess(task, token)
            self.metadata["processes_started"] += 1

        await self.logger.log_event(
            EventSeverity.INFO,
            EventCategory.PROCESS,
            f"Started {mode.value} from {self._state.room_temperature}ºC "
            f"to {target}ºC",
            mode=mode.value,
            target=target,
        )
        return True

    async def _stop_process(self) -> None:
        """Cancel the running process and wait for it. Caller holds the lock."""
        process = self._process
        if process is None:
            return

        if process.is_running():
            self.logger.info(f"Stopping {self._state.mode.value} process")
            await process.cancel()
            self.metadata["processes_cancelled"] += 1

        self._process = None

    async def _temperature_change_loop(
        self,
        mode: AirConditionerMode,
        target: float,
        token: CancellationToken,
    ) -> None:
        """Step the room temperature towards the target until reached or cancelled."""
        interval = self.step_interval

        try:
            while not token.cancelled and self._needs_change(mode, target):
                current = self._state.room_temperature
                if mode is AirConditionerMode.COOLING:
                    new_temperature = max(current - self.temperature_step, target)
                else:
                    new_temperature = min(current + self.temperature_step, target)

                self._state.room_temperature = new_temperature
                self._state.touch()
                self.logger.debug(f"{mode.value}: {current}ºC -> {new_temperature}ºC")

                if await token.wait(interval):
                    break
        finally:
            self._state.mode = AirConditionerMode.STAND_BY
            self._state.target_temperature = None
            self._state.touch()

        if token.cancelled:
            self.logger.info(
                f"{mode.value} cancelled at {self._state.room_temperature}ºC"
            )
        else:
            self.metadata["processes_completed"] += 1
            self.logger.info(
                f"{mode.value} finished at {self._state.room_temperature}ºC"
            )

    def _needs_change(self, mode: AirConditionerMode, target: float) -> bool:
        if mode is AirConditionerMode.COOLING:
            return self._state.room_temperature > target
        return self._state.room_temperature < target

    def _on_process_done(self, task: asyncio.Task) -> None:
        """Report loops that died with an error."""
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error(
                f"Temperature change process failed: {error}",
                exc_info=error,
            )

    def _generate_initial_room_temperature(self) -> float:
        """Random whole-degree starting temperature in the initial range."""
        low, high = self.INITIAL_TEMPERATURE_RANGE
        return float(random.randrange(low, high))

    # ----------------------------------------------------------------
    # Status
    # ----------------------------------------------------------------

    def get_status(self) -> dict[str, Any]:
        """Device status including the air conditioner state."""
        status = super().get_status()
        status.update(self._state.snapshot())
        status["changing_temperature"] = self.is_changing_temperature()
        status["step_interval"] = self.step_interval
        return status
