"""
The trigger surface of the Screen Recorder.

Reads one command per line and fires the matching recorder operation through
the dispatcher. Commands return immediately; their outcome is only reported
in the log.
"""
import sys
from typing import Callable, Dict, Optional, TextIO

from loguru import logger

from .config.recording import RecordingSettings
from .domain.exceptions import RecordingException
from .services.dispatch_service import TaskDispatcher
from .services.logging_service import handle_error
from .services.recording_controller import RecordingController
from .services.transcode_service import scale_video

HELP_TEXT = (
    "Commands:\n"
    "  start   start recording the desktop\n"
    "  stop    kill the recording immediately (file may be incomplete)\n"
    "  end     finish the recording cleanly\n"
    "  scale   write a resized copy of the input file\n"
    "  status  show the current recording\n"
    "  help    show this text\n"
    "  quit    end any recording and exit"
)

QUIT_COMMANDS = ("quit", "exit")


class RecorderConsole:
    def __init__(
        self,
        controller: RecordingController,
        dispatcher: TaskDispatcher,
        settings: Optional[RecordingSettings] = None,
        scaler: Callable[..., None] = scale_video,
    ):
        self.controller = controller
        self.dispatcher = dispatcher
        self.settings = settings or controller.settings
        self.scaler = scaler
        self._commands: Dict[str, Callable[[], None]] = {
            "start": self.trigger_start,
            "stop": self.trigger_stop,
            "end": self.trigger_end,
            "scale": self.trigger_scale,
            "status": self.show_status,
            "help": self.show_help,
        }

    def trigger_start(self):
        self.dispatcher.submit("starting recording", self.controller.start, self.settings.output_path)

    def trigger_stop(self):
        self.dispatcher.submit("stopping recording", self.controller.stop_hard)

    def trigger_end(self):
        self.dispatcher.submit("ending recording", self.controller.stop_graceful)

    def trigger_scale(self):
        self.dispatcher.submit(
            "scaling video",
            self.scaler,
            self.settings.input_path,
            self.settings.scaled_output_path,
            self.settings.scaled_width,
            self.settings.scaled_height,
        )

    def show_status(self):
        logger.info(self.controller.status())

    @staticmethod
    def show_help():
        logger.info(HELP_TEXT)

    def handle_command(self, line: str) -> bool:
        """
        Executes one input line.

        Returns:
            False if the line asks to quit, True otherwise.
        """
        command = line.strip().lower()
        if not command:
            return True
        if command in QUIT_COMMANDS:
            return False

        action = self._commands.get(command)
        if action is None:
            logger.warning(f"Unknown command '{command}'. Type 'help' for the list of commands.")
            return True
        action()
        return True

    def run(self, input_stream: TextIO = sys.stdin):
        """Reads commands until 'quit' or end of input, then shuts down."""
        logger.info("Screen recorder ready. Type 'help' for the list of commands.")
        try:
            for line in input_stream:
                if not self.handle_command(line):
                    break
        except KeyboardInterrupt:
            logger.info("Interrupted.")
        finally:
            self.shutdown()

    def shutdown(self):
        """
        Waits for dispatched operations to finish, then ends a recording that is
        still active so that FFmpeg can finalize its file.
        """
        self.dispatcher.shutdown(wait=True)
        if self.controller.is_active():
            logger.info("A recording is still active. Ending it before exit.")
            try:
                self.controller.stop_graceful()
            except RecordingException as e:
                handle_error(e, "ending recording")
