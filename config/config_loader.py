# config/config_loader.py
"""
Config loader module for modular YAML configuration.
"""

import random
from dataclasses import dataclass
from pathlib import Path

import yaml


class ConfigurationError(ValueError):
    """Raised when a configuration file holds unusable values."""


DEFAULT_AIR_CONDITIONER = {
    "device_name": "living_room_ac",
    "type": "fake_air_conditioner",
    "initial_temperature": None,  # None = random room temperature
    "min_temperature": -5.0,
    "max_temperature": 40.0,
    "temperature_step": 0.5,
    "seconds_to_temperature_change": 5.0,
}

DEFAULT_VOICE = {
    "confidence_threshold": 0.6,
    "announce_power_on": True,
    "degrees_keyword": "degrees",
    "min_spoken_number": 0,
    "max_spoken_number": 99,
    "phrases": {
        "power_on": ["turn on the air conditioner", "power on"],
        "power_off": ["turn off the air conditioner", "power off"],
        "current_temperature": [
            "what is the temperature",
            "what is the current temperature",
        ],
        "heat_room": [
            "heat the room to",
            "warm the room to",
            "increase the temperature to",
        ],
        "cool_room": [
            "cool the room to",
            "cool down the room to",
            "lower the temperature to",
        ],
        "change_temperature": ["set the temperature to", "change the temperature to"],
    },
}


@dataclass
class AirConditionerSettings:
    """Validated air conditioner settings.

    Attributes:
        device_name: Name used for logging and registry lookup
        device_type: Registry key of the device class
        initial_temperature: Starting room temperature in degC
        min_temperature: Lowest temperature the device can reach
        max_temperature: Highest temperature the device can reach
        temperature_step: Degrees changed per step
        seconds_to_temperature_change: Time units between steps
        time_acceleration: Divisor applied to time units
    """

    device_name: str
    device_type: str
    initial_temperature: float
    min_temperature: float
    max_temperature: float
    temperature_step: float
    seconds_to_temperature_change: float
    time_acceleration: float = 1.0

    @property
    def step_interval(self) -> float:
        """Wall-clock seconds between temperature steps."""
        return self.seconds_to_temperature_change / self.time_acceleration


class ConfigLoader:
    """Loads and merges modular configuration files."""

    def __init__(self, config_dir="config"):
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load_all(self):
        """Load all configuration files and merge them."""
        config = {}

        # Load air conditioner config
        aircon_path = self.config_dir / "aircon.yml"
        if aircon_path.exists():
            aircon_data = self._read(aircon_path)
            config["air_conditioner"] = {
                **DEFAULT_AIR_CONDITIONER,
                **(aircon_data.get("air_conditioner") or {}),
            }
        else:
            config["air_conditioner"] = dict(DEFAULT_AIR_CONDITIONER)
            self._save_air_conditioner(config["air_conditioner"])

        # Load voice config
        voice_path = self.config_dir / "voice.yml"
        if voice_path.exists():
            voice_data = self._read(voice_path).get("voice") or {}
            config["voice"] = {
                **DEFAULT_VOICE,
                **voice_data,
                "phrases": {
                    **DEFAULT_VOICE["phrases"],
                    **(voice_data.get("phrases") or {}),
                },
            }
        else:
            config["voice"] = {
                **DEFAULT_VOICE,
                "phrases": dict(DEFAULT_VOICE["phrases"]),
            }

        # Load simulation config
        simulation_path = self.config_dir / "simulation.yml"
        if simulation_path.exists():
            config["simulation"] = self._read(simulation_path).get("simulation") or {}
        else:
            config["simulation"] = {}

        # Load logging config
        logging_path = self.config_dir / "logging.yml"
        if logging_path.exists():
            logging_data = self._read(logging_path).get("logging") or {}
            config["logging"] = {
                "level": logging_data.get("level", "INFO"),
                "log_dir": logging_data.get("log_dir"),
                "json": logging_data.get("json", True),
            }
        else:
            config["logging"] = {
                "level": "INFO",
                "log_dir": None,
                "json": True,
            }

        return config

    def air_conditioner_settings(self, config=None) -> AirConditionerSettings:
        """Build validated air conditioner settings.

        Args:
            config: Result of load_all() (loaded if None)

        Returns:
            AirConditionerSettings ready to construct a device

        Raises:
            ConfigurationError: If the values cannot describe a device
        """
        if config is None:
            config = self.load_all()

        aircon = config["air_conditioner"]
        runtime = (config.get("simulation") or {}).get("runtime") or {}

        try:
            min_temp = float(aircon["min_temperature"])
            max_temp = float(aircon["max_temperature"])
            step = float(aircon["temperature_step"])
            interval = float(aircon["seconds_to_temperature_change"])
            acceleration = float(runtime.get("time_acceleration", 1.0))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid air conditioner setting: {e}") from e

        if min_temp >= max_temp:
            raise ConfigurationError(
                f"min_temperature {min_temp} must be below max_temperature {max_temp}"
            )
        if step <= 0:
            raise ConfigurationError(f"temperature_step must be > 0, got {step}")
        if interval < 0:
            raise ConfigurationError(
                f"seconds_to_temperature_change must be >= 0, got {interval}"
            )
        if acceleration <= 0:
            raise ConfigurationError(
                f"time_acceleration must be > 0, got {acceleration}"
            )

        initial = aircon.get("initial_temperature")
        if initial is None:
            initial = float(random.randrange(0, 35))
        else:
            initial = float(initial)
            if not min_temp <= initial <= max_temp:
                raise ConfigurationError(
                    f"initial_temperature {initial} outside [{min_temp}, {max_temp}]"
                )

        return AirConditionerSettings(
            device_name=str(aircon["device_name"]),
            device_type=str(aircon["type"]),
            initial_temperature=initial,
            min_temperature=min_temp,
            max_temperature=max_temp,
            temperature_step=step,
            seconds_to_temperature_change=interval,
            time_acceleration=acceleration,
        )

    def _read(self, path):
        """Read one YAML file, treating an empty file as an empty mapping."""
        with open(path) as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping")
        return data

    def _save_air_conditioner(self, air_conditioner):
        """Save air conditioner configuration to file."""
        aircon_path = self.config_dir / "aircon.yml"
        with open(aircon_path, "w") as f:
            yaml.dump({"air_conditioner": air_conditioner}, f, default_flow_style=False)
        print(f"[INFO] Created default air conditioner config at {aircon_path}")
