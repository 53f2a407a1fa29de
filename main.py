"""
Main entry point for the Screen Recorder application.

This script configures logging, makes the local FFmpeg build reachable, builds
the single recording controller and hands it to the trigger console, which
runs until the user quits.
"""

import sys

from loguru import logger

from screen_recorder.cli import get_args
from screen_recorder.config.common import ERROR_LOG_DIR, LOGGER_FORMAT
from screen_recorder.config.recording import RecordingSettings
from screen_recorder.console import RecorderConsole
from screen_recorder.services.dispatch_service import TaskDispatcher
from screen_recorder.services.logging_service import configure_error_log
from screen_recorder.services.recording_controller import RecordingController
from screen_recorder.utils.ffmpeg_locator import FFmpegLocator


# Configure the logger for initial setup.
# The level is overridden below once the arguments are parsed.
logger.remove()
logger.add(sys.stderr, level="DEBUG" if __debug__ else "INFO", format=LOGGER_FORMAT)


def main(argv=None):
    """
    Starts the Screen Recorder.

    1. Parses command-line arguments and re-configures the logger.
    2. Prepends the FFmpeg directory to PATH and checks that FFmpeg runs.
    3. Resolves the recording settings (defaults, user config, arguments).
    4. Builds the controller and dispatcher once and runs the console on stdin.
    """
    args = get_args(argv)

    effective_log_level = "DEBUG" if __debug__ and args.log_level != "TRACE" else args.log_level
    logger.remove()
    logger.add(sys.stderr, level=effective_log_level, format=LOGGER_FORMAT)
    logger.debug(f"Parsed arguments: {args}")

    configure_error_log(args.error_log_dir or ERROR_LOG_DIR)
    FFmpegLocator.run_all(args.ffmpeg_dir)

    settings = RecordingSettings.from_args(args)
    logger.debug(f"Effective settings: {settings}")

    controller = RecordingController(settings)
    dispatcher = TaskDispatcher()
    RecorderConsole(controller, dispatcher, settings).run(sys.stdin)

    logger.info("Screen recorder closed.")


if __name__ == "__main__":
    main()
