#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
编码器模块测试
"""

import pytest

from reelcut.core import encoder as encoder_module
from reelcut.core.encoder import (
    build_encode_command,
    encode_video,
    execute_ffmpeg,
    format_command,
)
from reelcut.core.errors import EncodeError, OutputMissingError
from reelcut.core.filters import VideoCodecParams, AudioCodecParams
from reelcut.utils.process import terminate_all_ffmpeg


VIDEO = VideoCodecParams(crf=23, preset="faster")
AUDIO = AudioCodecParams(channels=2, bitrate="128k")


class FakePopen:
    """模拟 subprocess.Popen"""

    returncode = 0
    stderr = ""

    def __init__(self, cmd, **kwargs):
        self.cmd = cmd
        self.pid = 4242

    def communicate(self):
        return "", self.stderr

    def poll(self):
        return self.returncode


class TestBuildEncodeCommand:
    """编码命令构建测试"""

    def test_full_command(self):
        cmd = build_encode_command(
            "/in/clip.mov", "/out/clip-edited.mp4", "fps=24", VIDEO, AUDIO,
            start_time=5, duration=10,
        )
        assert cmd == [
            "ffmpeg", "-hide_banner", "-ss", "5", "-t", "10", "-i", "/in/clip.mov",
            "-vf", "fps=24",
            "-c:v", "libx264", "-preset", "faster", "-crf", "23",
            "-c:a", "aac", "-ac", "2", "-b:a", "128k",
            "-y", "/out/clip-edited.mp4",
        ]

    def test_no_duration_omits_t(self):
        cmd = build_encode_command("/in/clip.mov", "/out/x.mp4", "fps=24", VIDEO, AUDIO)
        assert "-t" not in cmd
        assert cmd.index("-ss") < cmd.index("-i")

    def test_custom_ffmpeg(self):
        cmd = build_encode_command(
            "/in/clip.mov", "/out/x.mp4", "fps=24", VIDEO, AUDIO, ffmpeg="/opt/ffmpeg/bin/ffmpeg"
        )
        assert cmd[0] == "/opt/ffmpeg/bin/ffmpeg"

    def test_format_command_quotes_spaces(self):
        assert format_command(["ffmpeg", "-i", "my clip.mov"]) == 'ffmpeg -i "my clip.mov"'


class TestExecuteFFmpeg:
    """FFmpeg 执行测试"""

    def test_success(self, monkeypatch):
        monkeypatch.setattr(encoder_module.subprocess, "Popen", FakePopen)
        assert execute_ffmpeg(["ffmpeg"]) == (True, None)

    def test_known_error_pattern(self, monkeypatch):
        class Failing(FakePopen):
            returncode = 1
            stderr = "[AVFilterGraph] No such filter: 'transpose2'\nError"

        monkeypatch.setattr(encoder_module.subprocess, "Popen", Failing)
        assert execute_ffmpeg(["ffmpeg"]) == (
            False, "[AVFilterGraph] No such filter: 'transpose2'"
        )

    def test_known_error_keeps_diagnostic_line(self, monkeypatch):
        class Failing(FakePopen):
            returncode = 1
            stderr = (
                "Input #0, mov, from 'clip.mov':\n"
                "[libx264 @ 0x1] -crf 99: Invalid argument\n"
                "Conversion failed!\n"
            )

        monkeypatch.setattr(encoder_module.subprocess, "Popen", Failing)
        assert execute_ffmpeg(["ffmpeg"]) == (
            False, "[libx264 @ 0x1] -crf 99: Invalid argument"
        )

    def test_unknown_error_returns_stderr_tail(self, monkeypatch):
        class Failing(FakePopen):
            returncode = 1
            stderr = "x" * 600

        monkeypatch.setattr(encoder_module.subprocess, "Popen", Failing)
        success, error = execute_ffmpeg(["ffmpeg"])
        assert not success
        assert len(error) == 500

    def test_missing_binary(self, monkeypatch):
        def missing(cmd, **kwargs):
            raise FileNotFoundError("ffmpeg")

        monkeypatch.setattr(encoder_module.subprocess, "Popen", missing)
        success, error = execute_ffmpeg(["ffmpeg"])
        assert not success
        assert "ffmpeg" in error

    def test_shutdown_requested(self, monkeypatch):
        monkeypatch.setattr(encoder_module.subprocess, "Popen", FakePopen)
        terminate_all_ffmpeg()
        assert execute_ffmpeg(["ffmpeg"]) == (False, "程序正在退出")


class TestEncodeVideo:
    """完整编码流程测试"""

    def test_success_returns_output(self, monkeypatch, tmp_path):
        output = tmp_path / "clip-edited.mp4"

        def fake_execute(cmd):
            output.write_bytes(b"data")
            return True, None

        monkeypatch.setattr(encoder_module, "execute_ffmpeg", fake_execute)
        result = encode_video("/in/clip.mov", str(output), "fps=24", VIDEO, AUDIO)
        assert result == str(output)

    def test_failure_raises_encode_error(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            encoder_module, "execute_ffmpeg", lambda cmd: (False, "Unknown encoder")
        )
        with pytest.raises(EncodeError) as exc_info:
            encode_video("/in/clip.mov", str(tmp_path / "x.mp4"), "fps=24", VIDEO, AUDIO)
        assert exc_info.value.reason == "Unknown encoder"

    def test_missing_output_raises(self, monkeypatch, tmp_path):
        monkeypatch.setattr(encoder_module, "execute_ffmpeg", lambda cmd: (True, None))
        with pytest.raises(OutputMissingError):
            encode_video("/in/clip.mov", str(tmp_path / "x.mp4"), "fps=24", VIDEO, AUDIO)
