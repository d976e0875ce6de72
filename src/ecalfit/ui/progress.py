"""Progress display for Monte-Carlo refits."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from .console import console, icon

__all__ = [
    "create_progress",
    "sample_progress",
]


def create_progress(transient: bool = False) -> Progress:
    """Create a progress bar counting finished samples.

    Args:
        transient: Whether the progress bar should disappear when complete

    Returns
    -------
        Configured Progress instance
    """
    return Progress(
        SpinnerColumn(finished_text=f"[success]{icon('check')}[/success]", spinner_name="dots"),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TextColumn("[dim]•[/dim]"),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
        console=console,
        transient=transient,
    )


@contextmanager
def sample_progress(
    n_samples: int, description: str = "Monte-Carlo refits"
) -> Iterator[Callable[[int], None]]:
    """Show a transient bar and yield a callback taking the finished-sample count.

    The callback is thread-safe, so it can be handed directly to a threaded
    sweep as its ``progress_callback``.
    """
    with create_progress(transient=True) as progress:
        task = progress.add_task(description, total=n_samples)
        yield lambda done: progress.update(task, completed=done)
