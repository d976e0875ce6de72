"""CLI command implementations."""

from ecalfit.cli.commands.gof import gof_command
from ecalfit.cli.commands.init import init_command
from ecalfit.cli.commands.windows import windows_command

__all__ = ["gof_command", "init_command", "windows_command"]
