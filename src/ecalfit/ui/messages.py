"""Status lines printed by the command-line interface.

Every status line is echoed to the ``ecalfit`` log (when logging is set up)
so a log file records the same story as the terminal.
"""

from __future__ import annotations

from .console import console, icon
from .logging import log, log_section

__all__ = [
    "error",
    "info",
    "show_header",
    "success",
    "warning",
]

# style, icon name, separator, log level
_STATUS = {
    "success": ("success", "check", " ", "info"),
    "warning": ("warning", "warn", "  ", "warning"),
    "error": ("error", "error", " ", "error"),
    "info": ("dim", "info", " ", "info"),
}


def _status(kind: str, message: str, indent: int, do_log: bool) -> None:
    style, icon_name, sep, level = _STATUS[kind]
    console.print(f"{'  ' * indent}[{style}]{icon(icon_name)}[/{style}]{sep}{message}")
    if do_log:
        log(message, level=level)


def show_header(text: str, do_log: bool = True) -> None:
    """Print a section title (e.g. the peak being analyzed) with a rule below."""
    console.print(f"\n[header]{text}[/header]")
    console.print("[dim]" + "─" * 40 + "[/dim]")
    if do_log:
        log_section(text)


def success(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Report a completed step."""
    _status("success", message, indent, do_log)


def warning(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Report a condition that does not stop the command, such as failed refits."""
    _status("warning", message, indent, do_log)


def error(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Report the error that ends the command."""
    _status("error", message, indent, do_log)


def info(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Print a hint."""
    _status("info", message, indent, do_log)
