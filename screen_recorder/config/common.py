"""
Common configuration settings used throughout the application.

This module contains globally shared configuration settings and constants. It
centralizes parameters for logging and the location of external tools, and it
handles the loading of user-specific configuration from an external YAML file,
allowing for easy customization without modifying the source code.
"""
from pathlib import Path
from typing import Any, Dict

import yaml
from loguru import logger

# --- User-Defined Configuration ---
# This block loads user-specific settings from a 'config.user.yaml' file located
# at the project root.

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_PATH = PROJECT_ROOT / "config.user.yaml"

# The directory shipped next to the application that holds a local FFmpeg build.
# It is resolved against the working directory at startup and prepended to PATH
# so that FFmpeg is found without a system-wide install.
LOCAL_FFMPEG_DIR = Path("ffmpeg") / "bin"


def load_user_config(config_path: Path = USER_CONFIG_PATH) -> Dict[str, Any]:
    """
    Reads the user configuration file and returns its content as a dictionary.

    A missing file is not an error: the application simply runs on its defaults.
    A file that cannot be parsed, or whose top level is not a mapping, is logged
    and treated as empty.

    Args:
        config_path: The path of the YAML file to read.

    Returns:
        The parsed configuration, or an empty dictionary.
    """
    if not config_path.is_file():
        logger.debug(f"User config '{config_path}' not found. Using built-in defaults.")
        return {}

    try:
        with config_path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load or parse '{config_path}': {e}")
        return {}

    if user_config is None:
        return {}
    if not isinstance(user_config, dict):
        logger.warning(f"Ignoring '{config_path}': expected a mapping at the top level.")
        return {}
    return user_config


USER_CONFIG = load_user_config()
_paths_config = USER_CONFIG.get("paths") or {}

# The directory containing the FFmpeg executable. If not provided, the local
# `ffmpeg/bin` directory is used, with the system PATH as the final fallback.
MODULE_PATH: Path = Path(_paths_config.get("ffmpeg_dir") or LOCAL_FFMPEG_DIR)

# The directory where operation failures are appended as plain text. If not
# provided, failures only go to the console logger.
ERROR_LOG_DIR: Path | None = (
    Path(_paths_config["error_log_dir"]) if _paths_config.get("error_log_dir") else None
)


# --- Logging Configuration ---

# The format string for the Loguru logger. It defines the structure and appearance
# of log messages, including timestamp, level, module name, and the message itself.
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{process} - <level>{message}</level>"
)

# The file name used by ErrorLog inside the error log directory.
ERROR_LOG_FILE_NAME = "error.txt"
