"""
Command-Line Interface (CLI) setup for the Screen Recorder.

This module uses Python's `argparse` to define the options that override the
recording defaults and the user configuration file.
"""
import argparse
from pathlib import Path
from typing import List, Optional


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for the Screen Recorder.

    Options left unset stay None, so that values from `config.user.yaml` apply.

    Args:
        argv: The arguments to parse. Defaults to `sys.argv[1:]`.

    Returns:
        argparse.Namespace: The parsed arguments.
    """
    parser = argparse.ArgumentParser(description="Desktop screen recorder driven by FFmpeg.")
    parser.add_argument(
        "--output", type=Path, default=None, help="File the recording is written to (default: output.mp4)."
    )
    parser.add_argument(
        "--input", type=Path, default=None, help="File the scale command reads (default: input.mp4)."
    )
    parser.add_argument(
        "--scaled-output", type=Path, default=None,
        help="File the scale command writes (default: scaled_output.mp4).",
    )
    parser.add_argument(
        "--width", type=int, default=None, help="Target width of the scale command (default: 1280)."
    )
    parser.add_argument(
        "--height", type=int, default=None, help="Target height of the scale command (default: 720)."
    )
    parser.add_argument(
        "--ffmpeg-dir", type=Path, default=None,
        help="Directory holding the FFmpeg executable, prepended to PATH (default: ./ffmpeg/bin).",
    )
    parser.add_argument(
        "--graceful-wait", type=float, default=None,
        help="Seconds to wait for FFmpeg to finish after 'end'. By default 'end' does not wait.",
    )
    parser.add_argument(
        "--restart-on-start", action="store_true",
        help="Let 'start' kill an active recording instead of rejecting the command.",
    )
    parser.add_argument(
        "--error-log-dir", type=Path, default=None,
        help="Directory where operation failures are also appended to error.txt.",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO", choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level.",
    )

    args = parser.parse_args(argv)

    if args.width is not None and args.width <= 0:
        parser.error("--width must be a positive number of pixels.")
    if args.height is not None and args.height <= 0:
        parser.error("--height must be a positive number of pixels.")
    if args.graceful_wait is not None and args.graceful_wait < 0:
        parser.error("--graceful-wait cannot be negative.")

    return args
