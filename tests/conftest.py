"""Shared pytest configuration and fixtures for the Screen Recorder test suite."""

import subprocess
import sys
import threading
from pathlib import Path

import pytest
from loguru import logger

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from screen_recorder.config.recording import RecordingSettings  # noqa: E402


# =============================================================================
# Fake FFmpeg process
# =============================================================================

class FakeStdin:
    """Stands in for the binary stdin pipe of a Popen object."""

    def __init__(self, write_error=None, on_write=None):
        self.written = bytearray()
        self.closed = False
        self.close_calls = 0
        self.write_error = write_error
        self.on_write = on_write

    def write(self, data: bytes) -> int:
        if self.closed:
            raise ValueError("write to closed file")
        if self.on_write is not None:
            self.on_write()
        if self.write_error is not None:
            raise self.write_error
        self.written.extend(data)
        return len(data)

    def flush(self):
        if self.closed:
            raise ValueError("flush of closed file")

    def close(self):
        self.close_calls += 1
        self.closed = True


class FakeProcess:
    """Stands in for a running FFmpeg Popen object."""

    _next_pid = 1000
    _pid_lock = threading.Lock()

    def __init__(
        self, args, stdin=None, stdout=None, stderr=None, kill_error=None, wait_result=0, action_delay=None
    ):
        with FakeProcess._pid_lock:
            FakeProcess._next_pid += 1
            self.pid = FakeProcess._next_pid
        self.args = args
        self.stdin = FakeStdin(on_write=action_delay) if stdin == subprocess.PIPE else None
        self.stdout_arg = stdout
        self.stderr_arg = stderr
        self.kill_error = kill_error
        self.wait_result = wait_result
        self.killed = False
        self.returncode = None
        self.wait_timeouts = []
        self.action_delay = action_delay

    def kill(self):
        if self.action_delay is not None:
            self.action_delay()
        if self.kill_error is not None:
            raise self.kill_error
        self.killed = True
        self.returncode = -9

    def poll(self):
        return self.returncode

    def wait(self, timeout=None):
        self.wait_timeouts.append(timeout)
        if isinstance(self.wait_result, BaseException):
            raise self.wait_result
        self.returncode = self.wait_result
        return self.returncode


class FakePopen:
    """
    A callable replacing subprocess.Popen. It records every spawned process and
    can be told to fail or to pause inside the call.
    """

    def __init__(self, spawn_error=None, delay=None, **process_kwargs):
        self.spawn_error = spawn_error
        self.delay = delay
        self.process_kwargs = process_kwargs
        self.processes = []
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, args, **kwargs):
        with self._lock:
            self.calls.append((list(args), kwargs))
        if self.delay is not None:
            self.delay()
        if self.spawn_error is not None:
            raise self.spawn_error
        process = FakeProcess(args, **kwargs, **self.process_kwargs)
        with self._lock:
            self.processes.append(process)
        return process


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def fake_popen():
    return FakePopen()


@pytest.fixture
def make_popen():
    """Returns the FakePopen class, for tests that need a failing or slow spawn."""
    return FakePopen


@pytest.fixture
def settings(tmp_path) -> RecordingSettings:
    """Recording settings with fixed capture values and files under tmp_path."""
    return RecordingSettings(
        capture_format="gdigrab",
        capture_input="desktop",
        output_path=tmp_path / "output.mp4",
        input_path=tmp_path / "input.mp4",
        scaled_output_path=tmp_path / "scaled_output.mp4",
    )


@pytest.fixture
def log_messages():
    """Collects loguru messages emitted during a test as 'LEVEL message' strings."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(f"{message.record['level'].name} {message.record['message']}"),
        level="TRACE",
    )
    yield messages
    logger.remove(handler_id)
