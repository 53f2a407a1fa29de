"""
This package contains the core domain models of the Screen Recorder application.

Modules:
    exceptions.py: Defines the exception hierarchy raised by the recording
                   controller and the transcode step.
    session.py: Contains the `EncoderSession` class, which holds the process and
                stdin handles of the one recording that may be running.
"""
