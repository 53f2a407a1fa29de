"""
Post-recording transcode: writing a resized copy of a finished recording.

Unlike the capture, this is a one-shot batch job. It runs FFmpeg synchronously
and blocks until FFmpeg exits, which can take minutes for a long recording, so
callers run it on a worker thread. It needs none of the session machinery of
the recording controller.
"""
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Union

from loguru import logger

from ..domain.exceptions import InputFileNotFoundError, TranscodeError
from ..utils.ffmpeg_utils import FFMPEG_COMMAND, build_scale_command, run_cmd, stderr_tail
from ..utils.format_utils import file_size_label

Runner = Callable[[List[str], bool], Optional[subprocess.CompletedProcess]]


def scale_video(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    width: int,
    height: int,
    runner: Runner = run_cmd,
    ffmpeg_cmd: str = FFMPEG_COMMAND,
):
    """
    Writes a copy of `input_path` resized to `width`x`height` pixels into
    `output_path`, overwriting it if it exists.

    Args:
        input_path: The recording to resize. It must exist.
        output_path: Where to write the resized copy.
        width: Target width in pixels.
        height: Target height in pixels.
        runner: Runs the command to completion. Returns the completed process,
                or None if it could not be started.
        ffmpeg_cmd: The FFmpeg executable to invoke.

    Raises:
        InputFileNotFoundError: `input_path` does not exist. FFmpeg is not invoked.
        TranscodeError: FFmpeg could not be started or exited with a non-zero status.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    if not input_path.exists():
        logger.error(f"Input file does not exist: {input_path}")
        raise InputFileNotFoundError(f"Input file does not exist: {input_path}")

    logger.info(f"Scaling video from: {input_path} to: {output_path} with resolution: {width}x{height}")
    cmd_list = build_scale_command(input_path, output_path, width, height, ffmpeg_cmd=ffmpeg_cmd)
    result = runner(cmd_list, True)

    if result is None:
        raise TranscodeError(f"Could not start '{ffmpeg_cmd}' to scale '{input_path}'.")
    if result.returncode != 0:
        details = stderr_tail(result.stderr)
        raise TranscodeError(
            f"FFmpeg exited with code {result.returncode} while scaling '{input_path}'"
            + (f": {details}" if details else "."),
            returncode=result.returncode,
        )

    logger.success(f"Scaled video written to '{output_path}' ({file_size_label(output_path)}).")
