import subprocess
import threading
from pathlib import Path
from typing import Callable, Optional, Union

from loguru import logger

from ..config.recording import GRACEFUL_QUIT_SEQUENCE, RecordingSettings
from ..domain.exceptions import (
    AlreadyActiveError,
    ProcessSignalError,
    ProcessSpawnError,
    ProcessTerminationError,
)
from ..domain.session import EncoderSession
from ..utils.ffmpeg_utils import FFMPEG_COMMAND, build_capture_command, display_cmd
from ..utils.format_utils import file_size_label, format_timedelta


class RecordingController:
    """
    Owns the single FFmpeg desktop-capture process of the application.

    One instance is built at startup and shared with whatever dispatches the
    recording triggers. Its public operations may be called from any thread
    without external locking: start, stop_hard and stop_graceful each hold the
    same lock for their whole body, so the session slot is only ever changed by
    one of them at a time and every sequence of calls behaves like some serial
    order of those calls.

    A failing operation raises and leaves the slot as it was before the call,
    except for a failed spawn, which never fills it.
    """

    def __init__(
        self,
        settings: Optional[RecordingSettings] = None,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
        ffmpeg_cmd: str = FFMPEG_COMMAND,
    ):
        self.settings = settings or RecordingSettings()
        self.ffmpeg_cmd = ffmpeg_cmd
        self._popen = popen
        self._lock = threading.Lock()
        self._session: Optional[EncoderSession] = None

    @property
    def session(self) -> Optional[EncoderSession]:
        """The active session, read without taking the lock."""
        return self._session

    def is_active(self) -> bool:
        with self._lock:
            return self._session is not None

    def status(self) -> str:
        with self._lock:
            session = self._session
            if session is None:
                return "Idle: no recording in progress."
            state = "running" if session.is_running() else "exited"
            return (
                f"Recording to '{session.output_path}' (pid {session.pid}, {state}) "
                f"for {format_timedelta(session.elapsed)}, file size {file_size_label(session.output_path)}."
            )

    def start(self, output_path: Union[str, Path, None] = None):
        """
        Launches FFmpeg to record the desktop into `output_path`.

        The process keeps running after this returns. Its stdout and stderr are
        inherited from this process, and its stdin is a pipe kept for the
        graceful stop.

        If a recording is already active, the call is rejected with
        AlreadyActiveError, unless `settings.restart_on_start` is set, in which
        case the running recording is killed first.

        Raises:
            AlreadyActiveError: A recording is active and restarting is disabled.
            ProcessTerminationError: Restarting was requested but the running
                                     recording could not be killed.
            ProcessSpawnError: FFmpeg could not be launched.
        """
        output = Path(output_path) if output_path else self.settings.output_path

        with self._lock:
            if self._session is not None:
                if not self.settings.restart_on_start:
                    raise AlreadyActiveError(
                        f"A recording to '{self._session.output_path}' is already in progress (pid {self._session.pid})."
                    )
                logger.warning(f"Restarting: killing the active recording (pid {self._session.pid}) before starting a new one.")
                self._kill(self._session)
                self._session = None

            cmd_list = build_capture_command(self.settings, output, ffmpeg_cmd=self.ffmpeg_cmd)
            logger.debug(f"Executing command: {display_cmd(cmd_list)}")
            try:
                process = self._popen(cmd_list, stdin=subprocess.PIPE, stdout=None, stderr=None)
            except (OSError, ValueError, subprocess.SubprocessError) as e:
                raise ProcessSpawnError(f"Could not launch '{self.ffmpeg_cmd}': {e}") from e

            try:
                session = EncoderSession(process, output)
            except ValueError as e:
                process.kill()
                raise ProcessSpawnError(f"FFmpeg was launched without a stdin pipe: {e}") from e

            self._session = session
            logger.info(f"Recording started: pid {session.pid}, writing to '{output}'.")

    def stop_hard(self):
        """
        Kills the active FFmpeg process immediately. FFmpeg gets no chance to
        finalize the file, so the recording may be truncated or unplayable.
        Does nothing when no recording is active.

        Raises:
            ProcessTerminationError: The kill could not be delivered. The session is kept.
        """
        with self._lock:
            session = self._session
            if session is None:
                logger.debug("Hard stop requested but no recording is active.")
                return

            self._kill(session)
            self._session = None
            logger.info(f"Recording killed: pid {session.pid}, output '{session.output_path}' may be incomplete.")

    def stop_graceful(self):
        """
        Asks FFmpeg to finish the recording by writing the quit sequence (q and
        a newline) to its stdin, then closes stdin.

        By default this does not wait for FFmpeg to exit: it finalizes the file
        in the background. If `settings.graceful_wait_timeout` is set, the call
        waits up to that many seconds after releasing the lock and logs the
        outcome. A process still running after the timeout is left alone.
        Does nothing when no recording is active.

        Raises:
            ProcessSignalError: The quit sequence could not be written. The session is kept.
        """
        with self._lock:
            session = self._session
            if session is None:
                logger.debug("Graceful stop requested but no recording is active.")
                return

            try:
                session.stdin.write(GRACEFUL_QUIT_SEQUENCE)
                session.stdin.flush()
            except (OSError, ValueError) as e:
                raise ProcessSignalError(
                    f"Could not send the quit sequence to FFmpeg (pid {session.pid}): {e}"
                ) from e

            self._session = None
            try:
                session.close_stdin()
            except OSError as e:
                logger.warning(f"Quit sequence delivered, but closing FFmpeg's stdin failed: {e}")
            logger.info(f"Recording ending: pid {session.pid} is finalizing '{session.output_path}'.")

        if self.settings.graceful_wait_timeout is not None:
            self._wait_for_exit(session, self.settings.graceful_wait_timeout)

    @staticmethod
    def _kill(session: EncoderSession):
        try:
            session.process.kill()
        except OSError as e:
            raise ProcessTerminationError(f"Could not kill FFmpeg (pid {session.pid}): {e}") from e

        try:
            session.close_stdin()
        except OSError as e:
            logger.warning(f"FFmpeg (pid {session.pid}) was killed, but closing its stdin failed: {e}")

    @staticmethod
    def _wait_for_exit(session: EncoderSession, timeout: float):
        try:
            returncode = session.process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(
                f"FFmpeg (pid {session.pid}) is still finalizing '{session.output_path}' after {timeout:g}s. Leaving it running."
            )
            return

        if returncode == 0:
            logger.success(f"Recording saved: '{session.output_path}' ({file_size_label(session.output_path)}).")
        else:
            logger.warning(f"FFmpeg (pid {session.pid}) exited with code {returncode} while finalizing '{session.output_path}'.")
