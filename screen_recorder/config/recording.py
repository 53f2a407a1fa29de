"""
Configuration settings related to desktop recording and post-processing.

This module defines the FFmpeg capture parameters, the default file names used
by the recording triggers, and the target resolution of the scale operation.
Every value can be overridden in the `recording` section of `config.user.yaml`.
"""
import os
import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .common import USER_CONFIG

# ======================================================================================
# Capture Parameters
# ======================================================================================

# The capture resolution passed to FFmpeg as `-video_size`.
VIDEO_SIZE = "1920x1080"

# The capture frame rate passed as `-framerate`.
FRAME_RATE = "60"

# How much data FFmpeg reads to probe the input before starting. A large value
# avoids "not enough frames to estimate rate" warnings with screen grabbers.
PROBE_SIZE = "50M"

# x264 preset and tuning. Screen capture favours speed and latency over size.
PRESET = "ultrafast"
TUNE = "zerolatency"


def default_capture_source() -> tuple[str, str]:
    """
    Returns the FFmpeg input device and input name that grab the full desktop
    on the current platform.
    """
    if sys.platform == "win32":
        return "gdigrab", "desktop"
    if sys.platform == "darwin":
        return "avfoundation", "1"
    return "x11grab", os.environ.get("DISPLAY") or ":0.0"


CAPTURE_FORMAT, CAPTURE_INPUT = default_capture_source()

# The two bytes FFmpeg reads from its interactive stdin as the "quit" keystroke.
# On receiving them it stops grabbing, writes the trailer and closes the file.
GRACEFUL_QUIT_SEQUENCE = b"q\n"


# ======================================================================================
# File Defaults
# ======================================================================================

OUTPUT_PATH = Path("output.mp4")
INPUT_PATH = Path("input.mp4")
SCALED_OUTPUT_PATH = Path("scaled_output.mp4")
SCALED_WIDTH = 1280
SCALED_HEIGHT = 720


# ======================================================================================
# Session Behaviour
# ======================================================================================

# Seconds to wait for FFmpeg to exit after a graceful stop. None keeps the stop
# fire-and-forget.
GRACEFUL_WAIT_TIMEOUT: Optional[float] = None

# When True, starting while a recording is active kills the running recording
# first. When False, the second start is rejected.
RESTART_ON_START = False


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _strict_bool(value: Any) -> bool:
    """Reads a YAML flag. Only booleans, 0/1 and the usual yes/no spellings are accepted."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"expected true or false, got {value!r}")


def _positive_int(value: Any) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError("must be a positive number of pixels")
    return number


def _non_negative_float(value: Any) -> float:
    number = float(value)
    if number < 0:
        raise ValueError("cannot be negative")
    return number


class RecordingSettings:
    """
    The effective recording configuration handed to the controller and the
    scale trigger.

    Values are resolved in three layers: the module defaults above, then the
    `recording` section of the user config, then command-line arguments.
    """

    _FIELDS = {
        "video_size": str,
        "frame_rate": str,
        "probe_size": str,
        "preset": str,
        "tune": str,
        "capture_format": str,
        "capture_input": str,
        "output_path": Path,
        "input_path": Path,
        "scaled_output_path": Path,
        "scaled_width": _positive_int,
        "scaled_height": _positive_int,
        "graceful_wait_timeout": _non_negative_float,
        "restart_on_start": _strict_bool,
    }

    def __init__(
        self,
        video_size: str = VIDEO_SIZE,
        frame_rate: str = FRAME_RATE,
        probe_size: str = PROBE_SIZE,
        preset: str = PRESET,
        tune: str = TUNE,
        capture_format: str = CAPTURE_FORMAT,
        capture_input: str = CAPTURE_INPUT,
        output_path: Path = OUTPUT_PATH,
        input_path: Path = INPUT_PATH,
        scaled_output_path: Path = SCALED_OUTPUT_PATH,
        scaled_width: int = SCALED_WIDTH,
        scaled_height: int = SCALED_HEIGHT,
        graceful_wait_timeout: Optional[float] = GRACEFUL_WAIT_TIMEOUT,
        restart_on_start: bool = RESTART_ON_START,
    ):
        self.video_size = video_size
        self.frame_rate = frame_rate
        self.probe_size = probe_size
        self.preset = preset
        self.tune = tune
        self.capture_format = capture_format
        self.capture_input = capture_input
        self.output_path = Path(output_path)
        self.input_path = Path(input_path)
        self.scaled_output_path = Path(scaled_output_path)
        self.scaled_width = scaled_width
        self.scaled_height = scaled_height
        self.graceful_wait_timeout = graceful_wait_timeout
        self.restart_on_start = restart_on_start

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._FIELDS)
        return f"RecordingSettings({values})"

    def update(self, overrides: dict[str, Any]) -> "RecordingSettings":
        """
        Applies a mapping of overrides in place, converting each value to the
        field's type. Unknown keys and unconvertible values are logged and skipped.
        None values leave the field unchanged, except for the wait timeout where
        None means "do not wait".
        """
        for key, value in overrides.items():
            converter = self._FIELDS.get(key)
            if converter is None:
                logger.warning(f"Ignoring unknown recording setting '{key}'.")
                continue
            if value is None:
                if key == "graceful_wait_timeout":
                    self.graceful_wait_timeout = None
                continue
            try:
                setattr(self, key, converter(value))
            except (TypeError, ValueError) as e:
                logger.warning(f"Ignoring invalid value {value!r} for recording setting '{key}': {e}")
        return self

    @classmethod
    def from_user_config(cls, user_config: Optional[dict] = None) -> "RecordingSettings":
        """Builds settings from the defaults plus the user config `recording` section."""
        config = USER_CONFIG if user_config is None else user_config
        section = config.get("recording") or {}
        if not isinstance(section, dict):
            logger.warning("Ignoring 'recording' section of the user config: expected a mapping.")
            section = {}
        return cls().update(section)

    @classmethod
    def from_args(cls, args: Any, user_config: Optional[dict] = None) -> "RecordingSettings":
        """
        Builds settings from the defaults, the user config, and finally the
        parsed command-line arguments. Arguments left at None are not applied.
        """
        settings = cls.from_user_config(user_config)
        cli_overrides = {
            "output_path": getattr(args, "output", None),
            "input_path": getattr(args, "input", None),
            "scaled_output_path": getattr(args, "scaled_output", None),
            "scaled_width": getattr(args, "width", None),
            "scaled_height": getattr(args, "height", None),
        }
        settings.update({k: v for k, v in cli_overrides.items() if v is not None})
        if getattr(args, "graceful_wait", None) is not None:
            settings.graceful_wait_timeout = float(args.graceful_wait)
        if getattr(args, "restart_on_start", False):
            settings.restart_on_start = True
        return settings
