"""Energy-calibration configuration file loading and saving."""

import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from ecalfit.core.domain.config import EnergyCalConfig, energy_cal_config
from ecalfit.core.shared.exceptions import ConfigError

ENERGY_TABLE = "energy"


def load_energy_config(path: Path) -> dict[str, Any]:
    """Load the energy configuration tree from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        dict: The ``[energy]`` table (``default`` plus per-detector overrides).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file has no ``[energy]`` table.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as f:
        data = tomllib.load(f)

    if ENERGY_TABLE not in data:
        msg = f"Configuration file {path} has no [{ENERGY_TABLE}] table"
        raise ConfigError(msg)
    return data[ENERGY_TABLE]


def load_detector_config(path: Path, detector: str) -> EnergyCalConfig:
    """Load the merged energy-calibration configuration of one detector."""
    return energy_cal_config(load_energy_config(path), detector)


def save_energy_config(energy_cfg: dict[str, EnergyCalConfig | dict[str, Any]], path: Path) -> None:
    """Save an energy configuration tree to a TOML file.

    Args:
        energy_cfg: Mapping of ``default``/detector ids to configurations.
        path: Path where to save the TOML file.
    """
    tables = {
        key: value.model_dump(mode="json") if isinstance(value, EnergyCalConfig) else dict(value)
        for key, value in energy_cfg.items()
    }
    with path.open("wb") as f:
        tomli_w.dump({ENERGY_TABLE: tables}, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# ecalfit Configuration File
# Generated automatically - edit as needed

# Settings shared by all detectors
[energy.default]
th228_names = ["Tl208a", "Bi212a", "Tl208b", "Tl208DEP", "Bi212FEP", "Tl208SEP", "Tl208FEP"]
th228_lines = [583.191, 727.330, 860.564, 1592.53, 1620.50, 2103.53, 2614.51]
left_window_sizes = [20.0, 40.0, 20.0, 25.0, 25.0, 25.0, 35.0]
right_window_sizes = [20.0, 20.0, 20.0, 25.0, 25.0, 25.0, 35.0]

# Per-detector overrides replace the matching keys of [energy.default]
# [energy.V05266A]
# left_window_sizes = [15.0, 30.0, 15.0, 20.0, 20.0, 20.0, 30.0]
"""
