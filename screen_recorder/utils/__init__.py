"""
Utilities Package for the Screen Recorder Application.

Modules:
    - ffmpeg_utils.py: Builds FFmpeg argument lists and runs commands to completion.
    - ffmpeg_locator.py: Puts the local FFmpeg build on PATH and verifies it runs.
    - format_utils.py: Formats durations and file sizes for status and log lines.
"""
