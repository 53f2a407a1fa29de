"""
Helper functions that turn durations and file sizes into the short strings used
in status lines and log messages.
"""

from datetime import timedelta
from pathlib import Path


def format_timedelta(td_object: timedelta) -> str:
    """
    Formats a recording duration as "HH:MM:SS".

    Anything that is not a timedelta is shown as "00:00:00".
    """
    if not isinstance(td_object, timedelta):
        return "00:00:00"

    total_seconds = max(0, int(td_object.total_seconds()))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}"


def formatted_size(size_bytes: float) -> str:
    """
    Converts a byte count to a string with a binary unit, e.g. 1536 -> "1.50 KB".
    Whole values drop the decimals ("2 MB").
    """
    if size_bytes <= 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB"]
    for unit in units:
        if size_bytes < 1024.0:
            if unit == "B":
                return f"{int(size_bytes)} {unit}"
            return f"{size_bytes:.2f} {unit}".replace(".00", "")
        size_bytes /= 1024.0
    # Anything past GB is shown in TB.
    return f"{size_bytes:.2f} TB".replace(".00", "")


def file_size_label(path: Path) -> str:
    """Returns the formatted size of `path`, or "missing" when it does not exist yet."""
    try:
        return formatted_size(path.stat().st_size)
    except FileNotFoundError:
        return "missing"
