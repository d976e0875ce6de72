"""Init command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ecalfit.core.domain.config import ecal_peak_windows
from ecalfit.io.config import generate_default_config, load_detector_config
from ecalfit.ui import error, info, print_windows_table, success


def init_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path for the new energy-calibration configuration",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = Path("ecalfit.toml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write a default energy-calibration configuration.

    The file lists the standard Th-228 calibration lines with their window
    sizes in an ``[energy.default]`` table, plus a commented example of a
    per-detector override. The resulting peak windows are printed.

    Examples
    --------
      $ ecalfit init
      $ ecalfit init th228.toml --force
    """
    if path.exists() and not force:
        error(f"File already exists: [path]{path}[/path]")
        info("Use [code]--force[/code] to overwrite")
        raise typer.Exit(1)

    path.write_text(generate_default_config())
    success(f"Created configuration file: [path]{path}[/path]")
    print_windows_table(
        ecal_peak_windows(load_detector_config(path, "default")),
        title="Default peak windows",
    )
