"""Tests for configuration file loading and saving."""

import tomllib

import pytest

from ecalfit.core.domain.config import EnergyCalConfig, ecal_peak_windows
from ecalfit.core.shared.exceptions import ConfigError
from ecalfit.io.config import (
    generate_default_config,
    load_detector_config,
    load_energy_config,
    save_energy_config,
)


class TestLoadConfig:
    """Tests for loading TOML configuration."""

    def test_load_energy_config(self, sample_config_file):
        energy_cfg = load_energy_config(sample_config_file)
        assert set(energy_cfg) == {"default", "V05266A"}

    def test_load_detector_config(self, sample_config_file):
        cfg = load_detector_config(sample_config_file, "V05266A")
        assert cfg.left_window_sizes == [20.0, 30.0]
        assert cfg.right_window_sizes == [25.0, 35.0]
        assert cfg.model_extra["fit_func"] == "gamma_tails"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_energy_config(tmp_path / "missing.toml")

    def test_missing_energy_table(self, tmp_path):
        path = tmp_path / "other.toml"
        path.write_text("[fitting]\nmax_iterations = 10\n")
        with pytest.raises(ConfigError, match=r"\[energy\]"):
            load_energy_config(path)

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[energy.default\n")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_energy_config(path)


class TestSaveConfig:
    """Tests for writing TOML configuration."""

    def test_roundtrip(self, tmp_path):
        cfg = EnergyCalConfig(
            th228_names=["Tl208FEP"],
            th228_lines=[2614.51],
            left_window_sizes=[35.0],
            right_window_sizes=[35.0],
            fit_func="gamma_def",
        )
        path = tmp_path / "saved.toml"
        save_energy_config({"default": cfg, "V05266A": {"left_window_sizes": [30.0]}}, path)
        loaded = load_detector_config(path, "V05266A")
        assert loaded.left_window_sizes == [30.0]
        assert loaded.th228_lines == [2614.51]
        assert loaded.model_extra == {"fit_func": "gamma_def"}


class TestDefaultConfig:
    """Tests for the generated default configuration."""

    def test_valid_toml(self):
        data = tomllib.loads(generate_default_config())
        assert "default" in data["energy"]

    def test_th228_lines(self, tmp_path):
        path = tmp_path / "ecalfit.toml"
        path.write_text(generate_default_config())
        windows = ecal_peak_windows(load_detector_config(path, "default"))
        assert len(windows) == 7
        assert 2614.51 in windows["Tl208FEP"]
        assert 583.191 in windows["Tl208a"]
