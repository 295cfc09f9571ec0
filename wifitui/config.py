from dataclasses import dataclass
from pathlib import Path
from typing import cast

import yaml
from dacite import Config, DaciteError, from_dict

from wifitui.app import AUTO_REFRESH_TICKS
from wifitui.exceptions import ConfigError
from wifitui.util import system

CONFIG_FILE = system.get_config_directory() / "config.yaml"


@dataclass
class Configuration:
    device: str | None = None
    tick_interval: float = 0.25
    refresh_ticks: int = AUTO_REFRESH_TICKS
    redraw_interval: float = 0.05
    debug: bool = False


def validate(configuration: Configuration) -> Configuration:
    if configuration.tick_interval <= 0:
        raise ConfigError("tick_interval must be greater than zero")
    if configuration.redraw_interval <= 0:
        raise ConfigError("redraw_interval must be greater than zero")
    if configuration.refresh_ticks <= 0:
        raise ConfigError("refresh_ticks must be greater than zero")
    return configuration


def load_yaml(input: Path) -> Configuration:
    """
    Load the configuration file. A missing file gives the defaults.
    """
    if not input.exists():
        return Configuration()

    try:
        with open(input, "r") as f:
            yaml_data = cast(dict[str, object] | None, yaml.safe_load(f))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f'Failed to read "{input}": {e}') from e

    if yaml_data is None:
        return Configuration()
    if not isinstance(yaml_data, dict):
        raise ConfigError(f'"{input}" must contain a mapping')

    try:
        configuration = from_dict(
            data_class=Configuration,
            data=yaml_data,
            config=Config(cast=[str, int, float]),
        )
    except (DaciteError, ValueError, TypeError) as e:
        raise ConfigError(f'Failed to parse "{input}": {e}') from e

    return validate(configuration)
