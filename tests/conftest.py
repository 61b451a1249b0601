# tests/conftest.py
"""Shared pytest fixtures for the air conditioner simulator tests.

Foundation components are tested with real dependencies wherever possible:
real YAML files, real devices and real asyncio tasks.
"""

import asyncio
import tempfile
from pathlib import Path
from typing import Generator

import pytest
import yaml

from components.devices.aircon.fake_air_conditioner import FakeAirConditioner
from components.voice.synthesis import RecordingSpeechSynthesizer


# ----------------------------------------------------------------
# Configuration fixtures
# ----------------------------------------------------------------
@pytest.fixture
def temp_config_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test configuration files.

    Yields:
        Path to temporary configuration directory
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_config_file(temp_config_dir):
    """Factory fixture for writing YAML configuration files.

    Returns:
        Function that writes config dict to YAML file
    """

    def _write_config(config: dict, filename: str = "aircon.yml") -> Path:
        config_file = temp_config_dir / filename
        with open(config_file, "w") as f:
            yaml.dump(config, f)
        return config_file

    return _write_config


# ----------------------------------------------------------------
# Device fixtures
# ----------------------------------------------------------------
@pytest.fixture
async def make_air_conditioner():
    """Factory for FakeAirConditioner instances, powered off after the test.

    Returns:
        Function accepting FakeAirConditioner keyword arguments
    """
    created: list[FakeAirConditioner] = []

    def _make(**kwargs) -> FakeAirConditioner:
        kwargs.setdefault("device_name", f"test_ac_{len(created) + 1}")
        kwargs.setdefault("seconds_to_temperature_change", 0)
        ac = FakeAirConditioner(**kwargs)
        created.append(ac)
        return ac

    yield _make

    for ac in created:
        await ac.power_off()


@pytest.fixture
def synthesizer() -> RecordingSpeechSynthesizer:
    """Synthesizer that keeps spoken responses in memory."""
    return RecordingSpeechSynthesizer()


# ----------------------------------------------------------------
# Async utilities
# ----------------------------------------------------------------
@pytest.fixture
async def wait_for_condition():
    """Provide utility for waiting on async conditions.

    Returns:
        Async function that polls a condition until true or timeout
    """

    async def _wait(
        condition_fn,
        timeout: float = 2.0,
        poll_interval: float = 0.005,
        error_msg: str = "Condition not met within timeout",
    ):
        loop = asyncio.get_running_loop()
        start = loop.time()
        while loop.time() - start < timeout:
            if condition_fn():
                return
            await asyncio.sleep(poll_interval)

        raise AssertionError(error_msg)

    return _wait
