"""
Defines custom exception types for the Screen Recorder application.

Every operation of the recorder either fully succeeds or fails with one of these
exceptions. None of them is retried automatically: the failure is logged and the
user re-triggers the operation. Low-level causes (`OSError`, `BrokenPipeError`,
...) are chained onto them with `raise ... from`.

All custom exceptions inherit from the base `ScreenRecorderException`.
"""


class ScreenRecorderException(Exception):
    """Base class for all custom exceptions in the Screen Recorder application."""

    pass


# --- Recording Session Exceptions ---
class RecordingException(ScreenRecorderException):
    """Base class for failures of the recording session lifecycle."""

    pass


class ProcessSpawnError(RecordingException):
    """
    Raised when the FFmpeg capture process cannot be launched.

    Typical causes are FFmpeg missing from PATH or an invalid argument list.
    When this is raised, no session has been created.
    """

    pass


class ProcessTerminationError(RecordingException):
    """
    Raised when the kill signal cannot be delivered to the capture process.

    The session is kept so that the hard stop can be retried.
    """

    pass


class ProcessSignalError(RecordingException):
    """
    Raised when the quit sequence cannot be written to the capture process's stdin.

    This usually means FFmpeg already exited and the pipe is broken. The session
    is kept so that a hard stop can still be issued.
    """

    pass


class AlreadyActiveError(RecordingException):
    """
    Raised when a recording is started while another one is still running.

    The running recording is left untouched. Starting again requires stopping
    it first, or enabling `restart_on_start`.
    """

    pass


# --- Transcode Exceptions ---
class TranscodeException(ScreenRecorderException):
    """Base class for failures of the post-recording transcode step."""

    pass


class TranscodeError(TranscodeException):
    """Raised when FFmpeg cannot be spawned for a transcode or exits with a non-zero status."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class InputFileNotFoundError(TranscodeException, FileNotFoundError):
    """
    Raised when the file to transcode does not exist.

    It is also a built-in `FileNotFoundError`, so callers that only know about
    the standard exception still catch it. It is raised before FFmpeg is invoked.
    """

    pass
