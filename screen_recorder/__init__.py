"""
Screen Recorder: start, stop and post-process FFmpeg desktop recordings.

The `RecordingController` in `services` owns the capture process; `console`
exposes the triggers; `main.py` at the project root wires them together.
"""

__version__ = "0.1.0"
