#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FFmpeg 编码器模块

构建和执行 FFmpeg 编码命令
"""

import os
import subprocess
import logging
from typing import List, Optional, Tuple

from reelcut.config.defaults import DEFAULT_FFMPEG
from reelcut.core.errors import EncodeError, OutputMissingError
from reelcut.core.filters import VideoCodecParams, AudioCodecParams

# 常见错误模式，命中时只报告 stderr 中包含该模式的那一行
KNOWN_ERRORS = [
    "No such file or directory",
    "Invalid data found when processing input",
    "No such filter:",
    "Unknown encoder",
    "Error initializing filter",
    "Invalid argument",
]


def format_command(cmd: List[str]) -> str:
    """把命令列表转换为便于复制的字符串"""
    return " ".join(f'"{arg}"' if " " in str(arg) else str(arg) for arg in cmd)


def _matching_line(stderr: str, pattern: str) -> str:
    """返回最后一条包含 pattern 的 stderr 行"""
    for line in reversed(stderr.splitlines()):
        if pattern in line:
            return line.strip()
    return pattern


def execute_ffmpeg(cmd: List[str]) -> Tuple[bool, Optional[str]]:
    """
    执行 FFmpeg 命令并检查错误

    Args:
        cmd: FFmpeg 命令列表

    Returns:
        (成功标志, 错误信息)
    """
    from reelcut.utils.process import (
        register_process,
        unregister_process,
        is_shutdown_requested,
    )

    if is_shutdown_requested():
        return False, "程序正在退出"

    logging.debug(f"FFmpeg 命令: {format_command(cmd)}")

    try:
        process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            universal_newlines=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        return False, str(e)

    register_process(process)
    try:
        _, stderr = process.communicate()
    finally:
        unregister_process(process)

    if process.returncode != 0:
        for error_pattern in KNOWN_ERRORS:
            if error_pattern in stderr:
                return False, _matching_line(stderr, error_pattern)
        return False, stderr[-500:] if len(stderr) > 500 else stderr

    return True, None


def build_encode_command(
    input_path: str,
    output_path: str,
    filter_chain: str,
    video_params: VideoCodecParams,
    audio_params: AudioCodecParams,
    start_time: int = 0,
    duration: Optional[int] = None,
    ffmpeg: str = DEFAULT_FFMPEG,
) -> List[str]:
    """
    构建编码命令

    -ss 放在 -i 之前做快速定位；仅在指定时长时添加 -t；-y 覆盖已存在的输出。
    """
    cmd = [ffmpeg, "-hide_banner", "-ss", str(start_time)]
    if duration is not None:
        cmd.extend(["-t", str(duration)])
    cmd.extend(["-i", input_path])

    if filter_chain:
        cmd.extend(["-vf", filter_chain])

    cmd.extend(video_params.to_args())
    cmd.extend(audio_params.to_args())
    cmd.extend(["-y", output_path])
    return cmd


def encode_video(
    input_path: str,
    output_path: str,
    filter_chain: str,
    video_params: VideoCodecParams,
    audio_params: AudioCodecParams,
    start_time: int = 0,
    duration: Optional[int] = None,
    ffmpeg: str = DEFAULT_FFMPEG,
) -> str:
    """
    执行一次完整编码

    Returns:
        输出文件路径

    Raises:
        EncodeError: ffmpeg 失败
        OutputMissingError: ffmpeg 报告成功但输出文件不存在
    """
    cmd = build_encode_command(
        input_path, output_path, filter_chain, video_params, audio_params,
        start_time=start_time, duration=duration, ffmpeg=ffmpeg,
    )
    logging.info(f"FFmpeg 命令: {format_command(cmd)}")

    success, error = execute_ffmpeg(cmd)
    if not success:
        raise EncodeError(error or "未知错误")

    if not os.path.isfile(output_path):
        raise OutputMissingError(output_path)

    return output_path
