"""Tests for the scale operation."""

import subprocess

import pytest

from screen_recorder.domain.exceptions import InputFileNotFoundError, TranscodeError
from screen_recorder.services.transcode_service import scale_video


class RecordingRunner:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def __call__(self, cmd_list, show_cmd=False):
        self.calls.append(cmd_list)
        if callable(self.result):
            return self.result(cmd_list)
        return self.result


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "input.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


def test_missing_input_raises_without_invoking_ffmpeg(tmp_path):
    runner = RecordingRunner(subprocess.CompletedProcess([], 0))

    with pytest.raises(FileNotFoundError) as exc_info:
        scale_video(tmp_path / "missing.mp4", tmp_path / "out.mp4", 1280, 720, runner=runner)

    assert isinstance(exc_info.value, InputFileNotFoundError)
    assert runner.calls == []


def test_scale_invokes_ffmpeg_with_scale_filter(input_file, tmp_path):
    output = tmp_path / "scaled_output.mp4"
    runner = RecordingRunner(lambda cmd: subprocess.CompletedProcess(cmd, 0, "", ""))

    scale_video(input_file, output, 1280, 720, runner=runner)

    assert runner.calls == [
        ["ffmpeg", "-nostdin", "-i", str(input_file), "-vf", "scale=1280:720", str(output), "-y"]
    ]


def test_nonzero_exit_raises_transcode_error(input_file, tmp_path):
    stderr = "Input #0, mov,mp4\n[vf] Invalid argument\nConversion failed!\n"
    runner = RecordingRunner(subprocess.CompletedProcess([], 1, "", stderr))

    with pytest.raises(TranscodeError) as exc_info:
        scale_video(input_file, tmp_path / "out.mp4", 1280, 720, runner=runner)

    assert exc_info.value.returncode == 1
    assert "Conversion failed!" in str(exc_info.value)


def test_ffmpeg_that_cannot_start_raises_transcode_error(input_file, tmp_path):
    runner = RecordingRunner(None)

    with pytest.raises(TranscodeError) as exc_info:
        scale_video(input_file, tmp_path / "out.mp4", 640, 360, runner=runner)

    assert exc_info.value.returncode is None
    assert len(runner.calls) == 1


def test_missing_executable_surfaces_as_transcode_error(input_file, tmp_path):
    with pytest.raises(TranscodeError):
        scale_video(input_file, tmp_path / "out.mp4", 640, 360, ffmpeg_cmd="ffmpeg-does-not-exist-here")
