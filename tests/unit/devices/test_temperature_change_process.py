# tests/unit/devices/test_temperature_change_process.py
"""Tests for TemperatureChangeProcess and CancellationToken.

This is Level 0 in our dependency tree - only asyncio primitives.

Test Coverage:
- Running state reporting
- Cooperative cancellation waits for the loop to exit
- Idempotent cancellation
- Early wake-up of token waits
"""

import asyncio

import pytest

from components.devices.aircon.temperature_change_process import (
    CancellationToken,
    TemperatureChangeProcess,
)


async def counting_loop(token: CancellationToken, counter: dict, interval: float):
    """Minimal loop shaped like the device loop."""
    try:
        while not token.cancelled:
            counter["steps"] += 1
            if await token.wait(interval):
                break
    finally:
        counter["exited"] = True


def start_process(interval: float = 0.01):
    token = CancellationToken()
    counter = {"steps": 0, "exited": False}
    task = asyncio.create_task(counting_loop(token, counter, interval))
    return TemperatureChangeProcess(task, token), counter


# ================================================================
# CANCELLATION TOKEN TESTS
# ================================================================
class TestCancellationToken:
    """Test the cooperative cancellation flag."""

    async def test_not_cancelled_initially(self):
        token = CancellationToken()
        assert not token.cancelled

    async def test_wait_times_out_without_cancellation(self):
        """WHY: A plain wait is the loop's step interval."""
        token = CancellationToken()
        assert await token.wait(0.01) is False

    async def test_wait_returns_early_when_cancelled(self):
        """WHY: Cancellation latency must not depend on a long interval."""
        token = CancellationToken()
        loop = asyncio.get_running_loop()
        loop.call_later(0.01, token.cancel)

        start = loop.time()
        assert await token.wait(10.0) is True
        assert loop.time() - start < 1.0

    async def test_zero_wait_yields_to_event_loop(self):
        """WHY: Zero-interval loops must still let other tasks run."""
        token = CancellationToken()
        ran = []

        async def other():
            ran.append(True)

        task = asyncio.create_task(other())
        await token.wait(0)
        assert ran == [True]
        await task

    async def test_wait_after_cancel_returns_immediately(self):
        token = CancellationToken()
        token.cancel()
        assert await token.wait(10.0) is True


# ================================================================
# PROCESS TESTS
# ================================================================
class TestTemperatureChangeProcess:
    """Test process state and cancellation."""

    async def test_is_running_while_loop_active(self):
        process, counter = start_process()
        await asyncio.sleep(0.02)

        assert process.is_running()
        assert counter["steps"] >= 1

        await process.cancel()

    async def test_cancel_waits_for_loop_exit(self):
        """WHY: After cancel() returns no further writes may happen."""
        process, counter = start_process(interval=0.05)
        await asyncio.sleep(0.01)

        await process.cancel()

        assert not process.is_running()
        assert counter["exited"] is True

        steps = counter["steps"]
        await asyncio.sleep(0.1)
        assert counter["steps"] == steps

    async def test_cancel_is_idempotent(self):
        process, _ = start_process()
        await process.cancel()
        await process.cancel()

        assert not process.is_running()

    async def test_cancel_on_finished_process_is_noop(self):
        token = CancellationToken()

        async def finishes():
            return None

        task = asyncio.create_task(finishes())
        await task
        process = TemperatureChangeProcess(task, token)

        await process.cancel()

        assert not process.is_running()
        assert not token.cancelled, "Finished process should not be signalled"

    async def test_failed_process_is_not_running(self):
        """WHY: Faulted tasks count as finished."""
        token = CancellationToken()

        async def fails():
            raise RuntimeError("boom")

        task = asyncio.create_task(fails())
        with pytest.raises(RuntimeError):
            await task

        process = TemperatureChangeProcess(task, token)
        assert not process.is_running()

    async def test_repr_reports_state(self):
        process, _ = start_process()
        assert "running" in repr(process)
        await process.cancel()
        assert "finished" in repr(process)
