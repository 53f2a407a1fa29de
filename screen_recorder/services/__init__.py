"""
Services Package for the Screen Recorder Application.

- **Recording Controller (`RecordingController`):**
  Owns the one FFmpeg capture process and exposes start, hard stop and
  graceful stop, safe to call from any thread.

- **Transcode Service (`scale_video`):**
  Writes a resized copy of a finished recording by running FFmpeg to completion.

- **Dispatch Service (`TaskDispatcher`):**
  Runs operations fire-and-forget on worker threads and reports failures.

- **Logging Service (`handle_error`, `ErrorLog`):**
  The process-wide sink for operation failures: console through loguru, and
  optionally a plain-text error file.
"""
from .dispatch_service import TaskDispatcher
from .logging_service import ErrorLog, configure_error_log, handle_error
from .recording_controller import RecordingController
from .transcode_service import scale_video

__all__ = [
    "ErrorLog",
    "RecordingController",
    "TaskDispatcher",
    "configure_error_log",
    "handle_error",
    "scale_video",
]
