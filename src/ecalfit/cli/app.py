"""Main Typer application for ecalfit.

This module provides a thin orchestration layer that:
1. Creates the main Typer application
2. Imports commands from the commands/ subpackage
3. Registers commands
"""

from typing import Annotated

import typer

from ecalfit.cli.commands import gof_command, init_command, windows_command
from ecalfit.ui import VERSION, console

# Create main application
app = typer.Typer(
    name="ecalfit",
    help="ecalfit - Energy calibration peak fits and goodness-of-fit checks",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool | None) -> None:
    """Print the installed version and exit."""
    if value:
        console.print(f"ecalfit [success]{VERSION}[/success]")
        raise typer.Exit


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """ecalfit - Energy calibration peak fits and goodness-of-fit checks.

    Look up calibration peak windows and judge single-peak fits with
    chi-square, likelihood-ratio and Monte-Carlo tests.
    """


# Register commands
app.command(name="init")(init_command)
app.command(name="windows")(windows_command)
app.command(name="gof")(gof_command)
