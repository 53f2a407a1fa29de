"""
This module provides the FFmpegLocator class, which makes a locally shipped
FFmpeg build reachable and checks that it actually runs.
"""
import os
import subprocess
from pathlib import Path
from typing import Optional

from loguru import logger

from ..config.common import MODULE_PATH
from .ffmpeg_utils import FFMPEG_COMMAND


class FFmpegLocator:
    """
    Handles the lookup of the external FFmpeg executable.

    The application ships (or expects) FFmpeg in a local `ffmpeg/bin` directory
    next to the working directory, or in the `ffmpeg_dir` configured in
    `config.user.yaml`. Instead of passing absolute paths around, that
    directory is prepended to PATH once at startup, so every later invocation of
    plain "ffmpeg" finds the local build first and falls back to a system-wide
    install otherwise.
    """

    @staticmethod
    def prepend_to_path(ffmpeg_dir: Optional[Path] = None) -> Path:
        """
        Prepends the FFmpeg directory, made absolute against the working
        directory, to the PATH environment variable.

        Calling it twice with the same directory does not add a second entry.

        Args:
            ffmpeg_dir: The directory to add. Defaults to the configured `MODULE_PATH`.

        Returns:
            The absolute directory that is now first on PATH.
        """
        target_dir = Path(ffmpeg_dir or MODULE_PATH).resolve()
        if not target_dir.is_dir():
            logger.debug(f"FFmpeg directory '{target_dir}' does not exist. Relying on the system PATH.")

        current_entries = [entry for entry in os.environ.get("PATH", "").split(os.pathsep) if entry]
        if current_entries and Path(current_entries[0]) == target_dir:
            return target_dir

        os.environ["PATH"] = os.pathsep.join([str(target_dir)] + current_entries)
        logger.debug(f"Prepended '{target_dir}' to PATH.")
        return target_dir

    @staticmethod
    def verify_ffmpeg(ffmpeg_cmd: str = FFMPEG_COMMAND) -> bool:
        """
        Verifies that FFmpeg can be executed by running `ffmpeg -version`.

        The outcome is only logged. A missing FFmpeg is not fatal at startup,
        since the user learns about it again when a trigger fails.

        Returns:
            True if FFmpeg ran successfully, False otherwise.
        """
        try:
            result = subprocess.run(
                [ffmpeg_cmd, "-version"],
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.CalledProcessError as e:
            logger.error(f"FFmpeg version command failed (return code {e.returncode}):\n{e.stderr}")
            return False
        except FileNotFoundError:
            logger.error(
                "FFmpeg command not found. Place it in './ffmpeg/bin', add it to your system's PATH, "
                "or specify its location as 'paths.ffmpeg_dir' in 'config.user.yaml'."
            )
            return False
        except OSError as e:
            logger.error(f"Could not execute FFmpeg: {e}")
            return False

        version_output_lines = result.stdout.splitlines()
        first_line = version_output_lines[0] if version_output_lines else "(no output)"
        logger.info(f"FFmpeg version check successful: {first_line}")
        return True

    @staticmethod
    def run_all(ffmpeg_dir: Optional[Path] = None) -> bool:
        """
        Runs the startup steps in sequence: extend PATH, then verify FFmpeg.
        This is called once when the application starts.
        """
        FFmpegLocator.prepend_to_path(ffmpeg_dir)
        return FFmpegLocator.verify_ffmpeg()
