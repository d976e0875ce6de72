"""Windows command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.markup import escape

from ecalfit.core.domain.config import ecal_peak_windows
from ecalfit.core.shared.exceptions import ConfigError
from ecalfit.io.config import load_detector_config
from ecalfit.ui import error, print_windows_table


def windows_command(
    config: Annotated[
        Path,
        typer.Argument(
            help="Energy-calibration configuration file (TOML)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    detector: Annotated[
        str,
        typer.Option("--detector", "-d", help="Detector identifier"),
    ] = "default",
) -> None:
    """Show the calibration peak windows of a detector.

    Examples
    --------
      $ ecalfit windows ecalfit.toml --detector V05266A
    """
    try:
        ecal_cfg = load_detector_config(config, detector)
    except (ConfigError, ValidationError) as exc:
        error(f"Invalid configuration: {escape(str(exc))}")
        raise typer.Exit(1) from exc

    print_windows_table(ecal_peak_windows(ecal_cfg), title=f"Peak windows ({detector})")
