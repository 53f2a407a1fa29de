"""
Configuration Package for the Screen Recorder.

This package centralizes the static configuration of the application. The
capture parameters that used to be hard-coded (resolution, frame rate, probe
size, encoder preset and tuning, default file names, scale target) live here as
defaults, and can be overridden from the user's `config.user.yaml` file or from
the command line.

This package includes settings for:
- Common application settings like the logging format and user-overridable
  paths for external tools like FFmpeg.
- Recording parameters for the desktop capture and the post-recording scale.
"""
