"""
This module provides utility functions related to FFmpeg.
It builds the argument lists for the capture and scale invocations and
contains the shared helper for running a command to completion.
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from ..config.recording import RecordingSettings

FFMPEG_COMMAND = "ffmpeg"


def display_cmd(cmd_list: List[str]) -> str:
    """Quotes and joins an argument list the way the current platform's shell would read it."""
    if os.name == "nt":
        return subprocess.list2cmdline(cmd_list)
    return shlex.join(cmd_list)


def build_capture_command(
    settings: RecordingSettings,
    output_path: Union[str, Path],
    ffmpeg_cmd: str = FFMPEG_COMMAND,
) -> List[str]:
    """
    Builds the FFmpeg argument list that grabs the full desktop into `output_path`.

    The order follows FFmpeg's grammar: input options, the input, output
    options, the output, and the global overwrite flag last.
    """
    return [
        ffmpeg_cmd,
        "-f", settings.capture_format,
        "-video_size", settings.video_size,
        "-framerate", str(settings.frame_rate),
        "-probesize", settings.probe_size,
        "-i", settings.capture_input,
        "-preset", settings.preset,
        "-tune", settings.tune,
        str(output_path),
        "-y",
    ]


def scale_filter(width: int, height: int) -> str:
    """Returns the `-vf` expression resizing to `width`x`height`, e.g. "scale=1280:720"."""
    return f"scale={int(width)}:{int(height)}"


def build_scale_command(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    width: int,
    height: int,
    ffmpeg_cmd: str = FFMPEG_COMMAND,
) -> List[str]:
    """
    Builds the FFmpeg argument list that writes a resized copy of `input_path`.

    `-nostdin` keeps FFmpeg from reading interactive keys: the console shares
    this process's stdin and a stray "q" would cut the output short.
    """
    return [
        ffmpeg_cmd,
        "-nostdin",
        "-i", str(input_path),
        "-vf", scale_filter(width, height),
        str(output_path),
        "-y",
    ]


def run_cmd(
    cmd_list: List[str],
    show_cmd: bool = False,
) -> Optional[subprocess.CompletedProcess]:
    """
    Executes an external command to completion and captures its output.

    This is a wrapper around `subprocess.run` that adds logging. It blocks until
    the command exits; no timeout is applied.

    Args:
        cmd_list: The command to execute as a list of arguments. The shell is
                  never involved. stdin is closed for the child, so it
                  cannot read input meant for the console.
        show_cmd: If True, the command is logged at the DEBUG level before execution.

    Returns:
        A `subprocess.CompletedProcess` once the command has exited, whatever its
        return code. Returns `None` if the command could not be started (e.g.,
        the executable is not on PATH).
    """
    if not cmd_list:
        logger.error("run_cmd received an empty command list.")
        return None

    display_cmd_str = display_cmd(cmd_list)
    if show_cmd:
        logger.debug(f"Executing command: {display_cmd_str}")

    try:
        result = subprocess.run(
            cmd_list,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            shell=False,
        )
    except FileNotFoundError:
        logger.error(
            f"Command not found: '{cmd_list[0]}'. Ensure it's in your system's PATH or configured in 'config.user.yaml'."
        )
        return None
    except OSError as e:
        logger.error(f"Could not start command '{display_cmd_str}': {e}")
        return None

    if result.stdout:
        logger.trace(f"Command stdout: {result.stdout[:500]}")
    # FFmpeg writes its progress to stderr, so only a non-zero exit makes it an error.
    if result.stderr and result.returncode != 0:
        logger.debug(f"Command stderr (rc={result.returncode}): {result.stderr}")
    elif result.stderr:
        logger.trace(f"Command stderr (rc={result.returncode}): {result.stderr[-500:]}")

    return result


def stderr_tail(stderr: Optional[str], lines: int = 5) -> str:
    """Returns the last non-empty lines of a command's stderr, joined with ' | '."""
    if not stderr:
        return ""
    tail = [line.strip() for line in stderr.splitlines() if line.strip()][-lines:]
    return " | ".join(tail)
