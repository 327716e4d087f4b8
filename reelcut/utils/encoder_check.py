#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
外部工具可用性检测

在编码前确认 ffmpeg（含 libx264）和 ffprobe 可以正常调用
"""

import subprocess
import logging
from typing import Any, Dict, Tuple

from reelcut.config.defaults import DEFAULT_FFMPEG, DEFAULT_FFPROBE, VIDEO_CODEC
from reelcut.core.errors import EncodeError, DimensionProbeError

logger = logging.getLogger("EncoderCheck")


def check_tool_available(executable: str) -> Tuple[bool, str]:
    """
    检测可执行文件能否运行

    Returns:
        (是否可用, 错误信息)
    """
    try:
        result = subprocess.run(
            [executable, "-hide_banner", "-version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except FileNotFoundError:
        return False, f"{executable} 未安装或不在 PATH 中"
    except subprocess.TimeoutExpired:
        return False, f"{executable} 检测超时"

    if result.returncode != 0:
        return False, f"{executable} 返回错误码 {result.returncode}"
    return True, ""


def check_encoder_available(encoder_name: str, ffmpeg: str = DEFAULT_FFMPEG) -> Tuple[bool, str]:
    """
    检测 ffmpeg 是否提供指定编码器

    Args:
        encoder_name: ffmpeg 编码器名称 (如 libx264)
        ffmpeg: ffmpeg 可执行文件

    Returns:
        (是否可用, 错误信息)
    """
    try:
        result = subprocess.run(
            [ffmpeg, "-hide_banner", "-encoders"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except FileNotFoundError:
        return False, f"{ffmpeg} 未安装或不在 PATH 中"
    except subprocess.TimeoutExpired:
        return False, "ffmpeg 检测超时"

    if encoder_name in result.stdout:
        return True, ""
    return False, f"编码器 {encoder_name} 未在 ffmpeg 中找到"


def check_tools(tools_config: Dict[str, Any], need_probe: bool = True) -> None:
    """
    检测 ffprobe 与 ffmpeg/libx264

    need_probe 为假时（不需要源分辨率）跳过 ffprobe 检测。

    Raises:
        DimensionProbeError: ffprobe 不可用
        EncodeError: ffmpeg 或 libx264 不可用
    """
    ffprobe = tools_config.get("ffprobe") or DEFAULT_FFPROBE
    ffmpeg = tools_config.get("ffmpeg") or DEFAULT_FFMPEG

    if need_probe:
        available, error = check_tool_available(ffprobe)
        if not available:
            raise DimensionProbeError("-", error)
        logger.debug(f"✓ {ffprobe} 可用")

    available, error = check_encoder_available(VIDEO_CODEC, ffmpeg)
    if not available:
        raise EncodeError(error)
    logger.debug(f"✓ {ffmpeg} ({VIDEO_CODEC}) 可用")
