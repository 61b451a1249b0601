# components/devices/aircon/temperature_change_process.py
"""
Cancellable handle for an in-flight temperature change.

A process pairs the asyncio task running the heating/cooling loop with the
token that loop checks between steps. Cancellation is cooperative: the token
is set and the owner awaits the task until the loop has exited.
"""

import asyncio


class CancellationToken:
    """Cooperative cancellation flag for a background loop."""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    async def wait(self, timeout: float) -> bool:
        """
        Suspend for up to `timeout` seconds, returning early on cancellation.

        Always yields to the event loop, even for a zero timeout.

        Returns:
            True if cancellation has been requested
        """
        if self._event.is_set():
            return True
        try:
            await asyncio.wait_for(self._event.wait(), timeout=max(0.0, timeout))
        except asyncio.TimeoutError:
            pass
        return self._event.is_set()


class TemperatureChangeProcess:
    """Represents the process of a temperature change by an air conditioner."""

    def __init__(self, task: asyncio.Task, token: CancellationToken):
        """
        Args:
            task: The task running the temperature change loop
            token: The token the loop observes between steps
        """
        self._task = task
        self._token = token

    @property
    def task(self) -> asyncio.Task:
        return self._task

    def is_running(self) -> bool:
        """Whether the loop has not yet completed, been cancelled or failed."""
        return not self._task.done()

    async def cancel(self) -> None:
        """
        Stop the temperature change and wait for the loop to exit.

        Does nothing if the process already finished. Errors raised by the
        loop propagate to the caller.
        """
        if not self.is_running():
            return

        self._token.cancel()

        await self._task

    def __repr__(self) -> str:
        state = "running" if self.is_running() else "finished"
        return f"<TemperatureChangeProcess ({state})>"
