# tests/unit/state/test_aircon_state.py
"""Tests for AirConditionerMode and AirConditionerState.

This is Level 0 in our dependency tree - no internal dependencies.
"""

from datetime import datetime

from components.state.aircon_state import AirConditionerMode, AirConditionerState


class TestAirConditionerMode:
    """Test mode enum."""

    def test_mode_values(self):
        assert AirConditionerMode.COOLING.value == "cooling"
        assert AirConditionerMode.HEATING.value == "heating"
        assert AirConditionerMode.STAND_BY.value == "stand_by"

    def test_lookup_by_value(self):
        assert AirConditionerMode("stand_by") is AirConditionerMode.STAND_BY


class TestAirConditionerState:
    """Test state container."""

    def test_defaults(self):
        state = AirConditionerState(
            room_temperature=20.0, min_temperature=-5.0, max_temperature=40.0
        )

        assert state.is_on is False
        assert state.mode is AirConditionerMode.STAND_BY
        assert state.target_temperature is None
        assert isinstance(state.last_update, datetime)

    def test_touch_updates_timestamp(self):
        state = AirConditionerState(20.0, -5.0, 40.0)
        state.last_update = datetime(2000, 1, 1)

        state.touch()

        assert state.last_update > datetime(2000, 1, 1)

    def test_snapshot_is_plain_data(self):
        """WHY: Status reports are serialised to JSON and printed."""
        state = AirConditionerState(20.0, -5.0, 40.0)
        state.is_on = True
        state.mode = AirConditionerMode.COOLING
        state.target_temperature = 18.0

        snapshot = state.snapshot()

        assert snapshot["room_temperature"] == 20.0
        assert snapshot["is_on"] is True
        assert snapshot["mode"] == "cooling"
        assert snapshot["target_temperature"] == 18.0
        assert isinstance(snapshot["last_update"], str)

    def test_snapshot_is_a_copy(self):
        state = AirConditionerState(20.0, -5.0, 40.0)
        snapshot = state.snapshot()

        state.room_temperature = 25.0

        assert snapshot["room_temperature"] == 20.0
