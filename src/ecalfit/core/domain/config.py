"""Energy-calibration configuration models and peak-window lookup."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ecalfit.core.shared.exceptions import ConfigError

DEFAULT_SECTION = "default"


@dataclass(frozen=True, slots=True)
class PeakWindow:
    """Closed energy interval ``[left, right]`` around a calibration line."""

    left: float
    right: float

    def __post_init__(self) -> None:
        if self.left > self.right:
            msg = f"Peak window left edge {self.left} exceeds right edge {self.right}"
            raise ConfigError(msg)

    @property
    def width(self) -> float:
        """Window width."""
        return self.right - self.left

    def __contains__(self, energy: object) -> bool:
        return isinstance(energy, int | float) and self.left <= energy <= self.right


class EnergyCalConfig(BaseModel):
    """Energy-calibration settings for one detector.

    Only the peak-line lists are interpreted here; any other calibration keys
    found in the configuration are kept as extra fields and passed through.

    Example TOML configuration:
        [energy.default]
        th228_names = ["Tl208DEP", "Tl208FEP"]
        th228_lines = [1592.53, 2614.51]
        left_window_sizes = [25.0, 35.0]
        right_window_sizes = [25.0, 35.0]

        [energy.V05266A]
        left_window_sizes = [20.0, 30.0]
    """

    model_config = ConfigDict(extra="allow")

    th228_names: list[str] = Field(
        default_factory=list,
        description="Labels of the calibration lines.",
    )
    th228_lines: list[float] = Field(
        default_factory=list,
        description="Literature energies of the calibration lines.",
    )
    left_window_sizes: list[float] = Field(
        default_factory=list,
        description="Window extent below each line.",
    )
    right_window_sizes: list[float] = Field(
        default_factory=list,
        description="Window extent above each line.",
    )

    @model_validator(mode="after")
    def _check_line_lists(self) -> EnergyCalConfig:
        lengths = {
            "th228_names": len(self.th228_names),
            "th228_lines": len(self.th228_lines),
            "left_window_sizes": len(self.left_window_sizes),
            "right_window_sizes": len(self.right_window_sizes),
        }
        if len(set(lengths.values())) > 1:
            detail = ", ".join(f"{key}={value}" for key, value in lengths.items())
            msg = f"Peak line lists must have equal lengths ({detail})"
            raise ValueError(msg)
        if any(size < 0 for size in (*self.left_window_sizes, *self.right_window_sizes)):
            msg = "Window sizes must be non-negative"
            raise ValueError(msg)
        return self


def energy_cal_config(energy_cfg: Mapping[str, Any], detector: str) -> EnergyCalConfig:
    """Get the energy calibration configuration of a detector.

    The detector-specific table, if present, is merged over the default one
    (top-level keys of the override replace those of the default).

    Args:
        energy_cfg: Energy configuration tree with a ``default`` table and
            optional per-detector override tables
        detector: Detector identifier

    Returns
    -------
        Validated EnergyCalConfig for the detector

    Raises
    ------
        ConfigError: If there is no default table
    """
    if DEFAULT_SECTION not in energy_cfg:
        msg = f"Energy configuration has no '{DEFAULT_SECTION}' table"
        raise ConfigError(msg)

    merged = dict(energy_cfg[DEFAULT_SECTION])
    if detector in energy_cfg:
        merged.update(energy_cfg[detector])
    return EnergyCalConfig.model_validate(merged)


def ecal_peak_windows(ecal_cfg: EnergyCalConfig) -> dict[str, PeakWindow]:
    """Get the gamma peak windows used for energy calibration.

    Usage:
        ecal_peak_windows(energy_cal_config(energy_cfg, "V05266A"))

    Returns
    -------
        Mapping of line label to ``[line - left_size, line + right_size]``
    """
    return {
        label: PeakWindow(peak - left_size, peak + right_size)
        for label, peak, left_size, right_size in zip(
            ecal_cfg.th228_names,
            ecal_cfg.th228_lines,
            ecal_cfg.left_window_sizes,
            ecal_cfg.right_window_sizes,
            strict=True,
        )
    }
