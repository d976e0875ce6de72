"""Parallel execution of independent Monte-Carlo samples.

Every synthetic histogram is refit on its own, so the sample loop is an
embarrassingly parallel fan-out followed by a reduction in the caller. Work is
spread over a thread pool: scipy's compiled optimizers and NumPy release the
GIL for the numerical parts, and threads avoid pickling the model and the
fitter for worker processes.
"""

from __future__ import annotations

import multiprocessing as mp
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from threadpoolctl import threadpool_limits

from ecalfit.core.constants import MC_MAX_WORKERS
from ecalfit.core.shared.exceptions import MonteCarloCancelledError

T = TypeVar("T")
R = TypeVar("R")


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and a sweep.

    Example:
        >>> token = CancellationToken()
        >>> # from another thread, e.g. a UI handler
        >>> token.cancel()
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation; pending samples are skipped."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation was requested."""
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise MonteCarloCancelledError if cancellation was requested."""
        if self._event.is_set():
            msg = "Monte-Carlo sweep cancelled"
            raise MonteCarloCancelledError(msg)


def optimal_worker_count(n_tasks: int) -> int:
    """Calculate the number of threads for ``n_tasks`` independent fits.

    Args:
        n_tasks: Number of independent tasks

    Returns
    -------
        Worker count, at least 1
    """
    return max(1, min(MC_MAX_WORKERS, n_tasks, mp.cpu_count()))


def run_independent(
    worker: Callable[[T], R],
    tasks: Sequence[T],
    *,
    n_workers: int | None = None,
    cancel_token: CancellationToken | None = None,
    progress_callback: Callable[[int], None] | None = None,
) -> list[R]:
    """Apply ``worker`` to every task, in parallel when worthwhile.

    Results keep the order of ``tasks``. The first error raised by a worker
    cancels the tasks that have not started yet. BLAS libraries are limited to
    one thread for the duration of the sweep so they do not fight with the pool.

    Args:
        worker: Function applied to each task; must not mutate shared state
        tasks: Task inputs
        n_workers: Number of threads (default: optimal_worker_count)
        cancel_token: Checked before each task starts
        progress_callback: Called with the number of finished tasks

    Returns
    -------
        Worker results in task order

    Raises
    ------
        MonteCarloCancelledError: If the token was cancelled during the sweep
    """
    if n_workers is None:
        n_workers = optimal_worker_count(len(tasks))
    n_workers = max(1, min(n_workers, len(tasks)))

    lock = threading.Lock()
    finished = 0

    def guarded(task: T) -> R:
        nonlocal finished
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        result = worker(task)
        if progress_callback is not None:
            with lock:
                finished += 1
                done = finished
            progress_callback(done)
        return result

    with threadpool_limits(limits=1, user_api="blas"):
        if n_workers > 1:
            with ThreadPoolExecutor(max_workers=n_workers) as executor:
                futures = [executor.submit(guarded, task) for task in tasks]
                try:
                    results = [future.result() for future in futures]
                except BaseException:
                    # Queued tasks are dropped; running ones finish before the error propagates
                    executor.shutdown(wait=False, cancel_futures=True)
                    raise
        else:
            results = [guarded(task) for task in tasks]

    return results
