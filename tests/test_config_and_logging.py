"""Tests for configuration loading, CLI parsing and the error sink."""

from pathlib import Path

import pytest

from screen_recorder.cli import get_args
from screen_recorder.config.common import LOGGER_FORMAT, load_user_config
from screen_recorder.config.recording import RecordingSettings
from screen_recorder.domain.exceptions import ProcessSpawnError
from screen_recorder.services import logging_service
from screen_recorder.services.logging_service import ErrorLog, configure_error_log, handle_error


@pytest.fixture(autouse=True)
def reset_error_log():
    yield
    configure_error_log(None)


# =============================================================================
# User config
# =============================================================================

def test_load_user_config_missing_file_returns_empty(tmp_path):
    assert load_user_config(tmp_path / "config.user.yaml") == {}


def test_load_user_config_reads_mapping(tmp_path):
    config_path = tmp_path / "config.user.yaml"
    config_path.write_text("paths:\n  ffmpeg_dir: ./tools\nrecording:\n  frame_rate: 30\n", encoding="utf-8")

    config = load_user_config(config_path)

    assert config["paths"]["ffmpeg_dir"] == "./tools"
    assert config["recording"]["frame_rate"] == 30


@pytest.mark.parametrize("content", ["recording: [unclosed\n", "- just\n- a list\n"])
def test_load_user_config_rejects_bad_files(tmp_path, content, log_messages):
    config_path = tmp_path / "config.user.yaml"
    config_path.write_text(content, encoding="utf-8")

    assert load_user_config(config_path) == {}
    assert any(message.startswith("WARNING") for message in log_messages)


def test_defaults_match_builtin_constants():
    settings = RecordingSettings()

    assert settings.video_size == "1920x1080"
    assert settings.frame_rate == "60"
    assert settings.probe_size == "50M"
    assert settings.preset == "ultrafast"
    assert settings.tune == "zerolatency"
    assert settings.output_path == Path("output.mp4")
    assert settings.input_path == Path("input.mp4")
    assert settings.scaled_output_path == Path("scaled_output.mp4")
    assert (settings.scaled_width, settings.scaled_height) == (1280, 720)
    assert settings.graceful_wait_timeout is None
    assert settings.restart_on_start is False


def test_recording_section_overrides_defaults(log_messages):
    settings = RecordingSettings.from_user_config({
        "recording": {
            "frame_rate": 30,
            "scaled_width": "854",
            "output_path": "captures/session.mkv",
            "graceful_wait_timeout": 10,
            "restart_on_start": True,
            "bitrate": "8M",
            "scaled_height": "tall",
        }
    })

    assert settings.frame_rate == "30"
    assert settings.scaled_width == 854
    assert settings.output_path == Path("captures/session.mkv")
    assert settings.graceful_wait_timeout == 10.0
    assert settings.restart_on_start is True
    assert settings.scaled_height == 720
    assert any("unknown recording setting 'bitrate'" in message for message in log_messages)
    assert any("'scaled_height'" in message for message in log_messages)


@pytest.mark.parametrize("value, expected", [("false", False), ("no", False), (0, False), ("True", True), ("yes", True), (1, True)])
def test_restart_on_start_reads_yaml_flag_spellings(value, expected):
    settings = RecordingSettings.from_user_config({"recording": {"restart_on_start": value}})

    assert settings.restart_on_start is expected


def test_restart_on_start_rejects_unknown_spelling(log_messages):
    settings = RecordingSettings.from_user_config({"recording": {"restart_on_start": "sometimes"}})

    assert settings.restart_on_start is False
    assert any("'restart_on_start'" in message for message in log_messages)


@pytest.mark.parametrize("key, value", [("scaled_width", 0), ("scaled_height", -5), ("graceful_wait_timeout", -1)])
def test_recording_section_rejects_out_of_range_values(key, value, log_messages):
    defaults = RecordingSettings()

    settings = RecordingSettings.from_user_config({"recording": {key: value}})

    assert getattr(settings, key) == getattr(defaults, key)
    assert any(f"'{key}'" in message and message.startswith("WARNING") for message in log_messages)


def test_cli_arguments_override_user_config():
    args = get_args(["--output", "cli.mp4", "--width", "640", "--height", "360", "--graceful-wait", "5", "--restart-on-start"])

    settings = RecordingSettings.from_args(args, {"recording": {"output_path": "yaml.mp4", "preset": "fast"}})

    assert settings.output_path == Path("cli.mp4")
    assert settings.preset == "fast"
    assert (settings.scaled_width, settings.scaled_height) == (640, 360)
    assert settings.graceful_wait_timeout == 5.0
    assert settings.restart_on_start is True


def test_cli_defaults_leave_settings_untouched():
    args = get_args([])

    settings = RecordingSettings.from_args(args, {})

    assert args.log_level == "INFO"
    assert settings.output_path == Path("output.mp4")
    assert settings.restart_on_start is False


@pytest.mark.parametrize("argv", [["--width", "0"], ["--height", "-5"], ["--graceful-wait", "-1"]])
def test_cli_rejects_invalid_values(argv):
    with pytest.raises(SystemExit):
        get_args(argv)


# =============================================================================
# Error sink
# =============================================================================

def test_handle_error_ignores_none(log_messages):
    handle_error(None, "starting recording")

    assert log_messages == []


def test_handle_error_logs_with_context(log_messages):
    handle_error(ProcessSpawnError("ffmpeg not found"), "starting recording")

    assert "ERROR Error starting recording: ffmpeg not found" in log_messages


def test_handle_error_appends_to_error_log(tmp_path):
    error_log = configure_error_log(tmp_path / "logs")

    handle_error(ProcessSpawnError("ffmpeg not found"), "starting recording")
    handle_error(ValueError("bad"), "scaling video")

    content = error_log.log_file_path.read_text(encoding="utf-8")
    assert error_log.log_file_path == (tmp_path / "logs" / "error.txt").resolve()
    assert "Error starting recording\nProcessSpawnError: ffmpeg not found" in content
    assert "Error scaling video\nValueError: bad" in content
    assert content.count(ErrorLog.linesep_marker) == 2


def test_configure_error_log_none_disables_file(tmp_path):
    configure_error_log(tmp_path)
    configure_error_log(None)

    assert logging_service._error_log is None


def test_logger_format_renders_process_id():
    assert "{process}" in LOGGER_FORMAT
    assert "{thread" not in LOGGER_FORMAT
