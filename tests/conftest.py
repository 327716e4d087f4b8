#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
pytest 配置文件
"""

import os
import sys
import logging
import pytest

# 添加项目根目录到 Python 路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reelcut.utils.process import reset_shutdown_state


class ScriptedPrompt:
    """按顺序返回预设答案的交互输入，同时记录每次询问"""

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = []

    def __call__(self, label, default, options=None):
        self.calls.append((label, default, options))
        if not self.answers:
            raise AssertionError(f"未预期的询问: {label}")
        return self.answers.pop(0)

    @property
    def labels(self):
        return [label for label, _, _ in self.calls]


class CountingProbe:
    """返回固定分辨率的探测函数，记录调用次数"""

    def __init__(self, width, height):
        self.dimensions = (width, height)
        self.calls = []

    def __call__(self, filepath):
        self.calls.append(filepath)
        return self.dimensions


@pytest.fixture(autouse=True)
def restore_logging_and_process_state():
    """测试中 setup_logging 会替换根 logger 的 handler，结束后还原"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    reset_shutdown_state()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    reset_shutdown_state()


@pytest.fixture
def sample_video(tmp_path):
    """返回一个存在的输入文件路径（内容无关紧要）"""
    path = tmp_path / "clip.mov"
    path.write_bytes(b"\x00" * 2048)
    return str(path)


@pytest.fixture
def sample_config(tmp_path):
    """返回测试用配置"""
    return {
        "paths": {
            "output": str(tmp_path / "out"),
            "log": None,
        },
        "tools": {
            "ffmpeg": "ffmpeg",
            "ffprobe": "ffprobe",
        },
        "logging": {
            "level": "INFO",
            "plain": True,
            "json_console": False,
        },
    }


@pytest.fixture
def scripted_prompt():
    return ScriptedPrompt


@pytest.fixture
def counting_probe():
    return CountingProbe
