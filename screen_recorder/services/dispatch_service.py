"""
Fire-and-forget execution of recorder operations.

Triggers must never block the loop that reads them, so each operation is
submitted to a thread pool and the caller moves on immediately. The caller never
sees the result: a failure is routed to the error sink together with a short
description of what was being attempted.
"""
import concurrent.futures
from typing import Any, Callable

from loguru import logger

from .logging_service import handle_error

DEFAULT_MAX_WORKERS = 4


class TaskDispatcher:
    """
    Runs operations on worker threads and reports their failures.

    The recorder's operations are themselves thread-safe, so several of them may
    be in flight at once. A long scale job occupies one worker while start and
    stop triggers keep running on the others.
    """

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS, error_handler: Callable[[BaseException, str], None] = handle_error):
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="recorder"
        )
        self._error_handler = error_handler

    def submit(self, context: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> concurrent.futures.Future:
        """
        Schedules `func(*args, **kwargs)` and returns without waiting.

        Args:
            context: Describes the operation for error reports, e.g. "starting recording".
            func: The operation to run.

        Returns:
            The future of the submitted work. Callers normally discard it; tests
            use it to wait for completion.
        """
        logger.debug(f"Dispatching: {context}")
        future = self._executor.submit(func, *args, **kwargs)
        future.add_done_callback(lambda f: self._report(f, context))
        return future

    def _report(self, future: concurrent.futures.Future, context: str):
        if future.cancelled():
            logger.debug(f"Cancelled before it ran: {context}")
            return
        error = future.exception()
        if error is not None:
            self._error_handler(error, context)

    def shutdown(self, wait: bool = True):
        """Stops accepting work. With `wait`, blocks until submitted operations finish."""
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)
