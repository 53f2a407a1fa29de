"""
Defines the data model for an in-flight recording.
"""

import subprocess
from datetime import datetime, timedelta
from pathlib import Path
from typing import IO, Optional


class EncoderSession:
    """
    Holds the handles of one running FFmpeg capture process.

    A session is only ever built from a process that was spawned with a stdin
    pipe, so the process handle and the stdin handle always exist together. The
    controller owns the session exclusively and drops it as a whole when the
    recording is stopped. A session is never reused: a new recording gets a new
    session with a new process.

    Attributes:
        process (subprocess.Popen): The handle of the FFmpeg process.
        stdin (IO[bytes]): The write end of FFmpeg's stdin pipe. It is only used
                           to deliver the quit sequence and is closed exactly once.
        output_path (Path): The file FFmpeg is writing the recording to.
        started_at (datetime): When the process was spawned.
    """

    def __init__(self, process: subprocess.Popen, output_path: Path, started_at: Optional[datetime] = None):
        if process.stdin is None:
            raise ValueError("An encoder session requires a process spawned with stdin=PIPE.")
        self.process = process
        self.stdin: IO[bytes] = process.stdin
        self.output_path = Path(output_path)
        self.started_at = started_at or datetime.now()

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def elapsed(self) -> timedelta:
        return datetime.now() - self.started_at

    def is_running(self) -> bool:
        """Returns True while FFmpeg has not exited."""
        return self.process.poll() is None

    def close_stdin(self):
        """Closes the stdin handle. Calling it again on a closed handle does nothing."""
        if not self.stdin.closed:
            self.stdin.close()

    def __repr__(self) -> str:
        return f"EncoderSession(pid={self.pid}, output_path='{self.output_path}')"
