"""
This module provides the process-wide sink for operation failures.

Recorder triggers run fire-and-forget, so nothing is returned to the caller when
they fail. Instead every failure goes through `handle_error`, which logs it on
the console through loguru and, when an error log directory is configured,
also appends it to a plain-text file for later inspection.
"""

import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from ..config.common import ERROR_LOG_FILE_NAME


class ErrorLog:
    """
    Appends human-readable error reports to a text file.

    Each call to `write` appends one event: a timestamp, the given message lines,
    and a separator line. Writes are serialized with a lock because failures
    can be reported from several dispatcher threads at once.
    """

    linesep_marker: str = "=" * 50

    def __init__(self, error_log_dir: Path, filename: str = ERROR_LOG_FILE_NAME):
        """
        Args:
            error_log_dir: The directory where the error log file will be stored.
                           It is created if it does not exist.
            filename: The name of the error log file (defaults to "error.txt").
        """
        self.log_dir = Path(error_log_dir).resolve()
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file_path = self.log_dir / filename
        self._lock = threading.Lock()

    def write(self, *error_messages: str):
        if not error_messages:
            return

        timestamp = datetime.now().isoformat(timespec="seconds")
        content_to_write = "\n".join((timestamp,) + error_messages) + "\n" + self.linesep_marker + "\n"

        try:
            with self._lock, self.log_file_path.open("a", encoding="utf-8") as f:
                f.write(content_to_write)
        except OSError as e:
            # The console logger still has the original error.
            logger.error(f"Failed to write to error log {self.log_file_path}: {e}")


_error_log: Optional[ErrorLog] = None


def configure_error_log(error_log_dir: Optional[Path]) -> Optional[ErrorLog]:
    """
    Sets (or, with None, removes) the file that `handle_error` appends to.

    Returns:
        The active ErrorLog, or None when failures only go to the console.
    """
    global _error_log
    _error_log = ErrorLog(error_log_dir) if error_log_dir else None
    if _error_log:
        logger.debug(f"Operation failures will also be written to '{_error_log.log_file_path}'.")
    return _error_log


def handle_error(error: Optional[BaseException], context: str):
    """
    Reports a failed operation. Does nothing when `error` is None.

    Args:
        error: The exception raised by the operation.
        context: What was being done, phrased to follow "Error ", e.g. "starting recording".
    """
    if error is None:
        return

    logger.error(f"Error {context}: {error}")
    if error.__cause__ is not None:
        logger.debug(f"Caused by {type(error.__cause__).__name__}: {error.__cause__}")

    if _error_log is not None:
        _error_log.write(f"Error {context}", f"{type(error).__name__}: {error}")
