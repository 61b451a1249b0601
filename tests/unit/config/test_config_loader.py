# tests/unit/config/test_config_loader.py
import pytest
import yaml

from config.config_loader import (
    DEFAULT_AIR_CONDITIONER,
    ConfigLoader,
    ConfigurationError,
)


def test_defaults_without_files(tmp_path):
    loader = ConfigLoader(config_dir=tmp_path)
    config = loader.load_all()

    assert config["air_conditioner"]["min_temperature"] == -5.0
    assert config["air_conditioner"]["max_temperature"] == 40.0
    assert config["voice"]["confidence_threshold"] == 0.6
    assert config["simulation"] == {}
    assert config["logging"] == {"level": "INFO", "log_dir": None, "json": True}


def test_save_and_load_air_conditioner(tmp_path):
    loader = ConfigLoader(config_dir=tmp_path)
    loader._save_air_conditioner(dict(DEFAULT_AIR_CONDITIONER))

    aircon_path = tmp_path / "aircon.yml"
    assert aircon_path.exists()

    with open(aircon_path) as f:
        data = yaml.safe_load(f)
    assert data["air_conditioner"] == DEFAULT_AIR_CONDITIONER


def test_partial_file_merged_with_defaults(write_config_file, temp_config_dir):
    write_config_file({"air_conditioner": {"max_temperature": 30.0}})

    config = ConfigLoader(config_dir=temp_config_dir).load_all()

    assert config["air_conditioner"]["max_temperature"] == 30.0
    assert config["air_conditioner"]["temperature_step"] == 0.5


def test_voice_phrases_merged_per_command(write_config_file, temp_config_dir):
    write_config_file(
        {"voice": {"phrases": {"power_on": ["wake up"]}}}, filename="voice.yml"
    )

    voice = ConfigLoader(config_dir=temp_config_dir).load_all()["voice"]

    assert voice["phrases"]["power_on"] == ["wake up"]
    assert voice["phrases"]["power_off"] == ["turn off the air conditioner", "power off"]


def test_empty_file_treated_as_defaults(temp_config_dir):
    (temp_config_dir / "aircon.yml").write_text("")

    config = ConfigLoader(config_dir=temp_config_dir).load_all()

    assert config["air_conditioner"]["device_name"] == "living_room_ac"


def test_non_mapping_file_rejected(temp_config_dir):
    (temp_config_dir / "aircon.yml").write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="mapping"):
        ConfigLoader(config_dir=temp_config_dir).load_all()


def test_settings_from_files(write_config_file, temp_config_dir):
    write_config_file(
        {
            "air_conditioner": {
                "device_name": "bedroom_ac",
                "initial_temperature": 22,
                "seconds_to_temperature_change": 4.0,
            }
        }
    )
    write_config_file(
        {"simulation": {"runtime": {"time_acceleration": 2.0}}},
        filename="simulation.yml",
    )

    settings = ConfigLoader(config_dir=temp_config_dir).air_conditioner_settings()

    assert settings.device_name == "bedroom_ac"
    assert settings.device_type == "fake_air_conditioner"
    assert settings.initial_temperature == 22.0
    assert settings.time_acceleration == 2.0
    assert settings.step_interval == 2.0


def test_random_initial_temperature(tmp_path):
    settings = ConfigLoader(config_dir=tmp_path).air_conditioner_settings()

    assert 0 <= settings.initial_temperature < 35


@pytest.mark.parametrize(
    "overrides",
    [
        {"min_temperature": 40.0, "max_temperature": -5.0},
        {"temperature_step": 0},
        {"seconds_to_temperature_change": -1},
        {"initial_temperature": 50},
        {"max_temperature": "hot"},
    ],
)
def test_invalid_settings_rejected(write_config_file, temp_config_dir, overrides):
    write_config_file({"air_conditioner": overrides})

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_dir=temp_config_dir).air_conditioner_settings()


def test_invalid_time_acceleration_rejected(write_config_file, temp_config_dir):
    write_config_file(
        {"simulation": {"runtime": {"time_acceleration": 0}}},
        filename="simulation.yml",
    )

    with pytest.raises(ConfigurationError, match="time_acceleration"):
        ConfigLoader(config_dir=temp_config_dir).air_conditioner_settings()


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_empty_runtime_section_uses_defaults(temp_config_dir):
    (temp_config_dir / "simulation.yml").write_text("simulation:\n  runtime:\n")

    settings = ConfigLoader(config_dir=temp_config_dir).air_conditioner_settings()

    assert settings.time_acceleration == 1.0


def test_empty_simulation_section_uses_defaults(temp_config_dir):
    (temp_config_dir / "simulation.yml").write_text("simulation:\n")

    settings = ConfigLoader(config_dir=temp_config_dir).air_conditioner_settings()

    assert settings.time_acceleration == 1.0
