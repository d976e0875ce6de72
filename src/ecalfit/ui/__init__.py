"""UI and terminal output styling for ecalfit.

Submodules:
- console: Theme and console instance
- logging: Logging setup (file and rich console handlers)
- messages: Status messages (success, error, warning, etc.)
- tables: Table display utilities
- progress: Progress bar utilities
"""

from ecalfit.ui.console import ECALFIT_THEME, VERSION, console, icon
from ecalfit.ui.logging import close_logging, log, log_dict, log_section, setup_logging
from ecalfit.ui.messages import error, info, show_header, success, warning
from ecalfit.ui.progress import create_progress, sample_progress
from ecalfit.ui.tables import create_table, print_gof_table, print_summary, print_windows_table

__all__ = [
    "ECALFIT_THEME",
    "VERSION",
    "close_logging",
    "console",
    "create_progress",
    "sample_progress",
    "create_table",
    "error",
    "icon",
    "info",
    "log",
    "log_dict",
    "log_section",
    "print_gof_table",
    "print_summary",
    "print_windows_table",
    "setup_logging",
    "show_header",
    "success",
    "warning",
]
