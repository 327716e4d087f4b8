#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
视频信息获取模块

通过 ffprobe 获取视频分辨率和文件大小
"""

import os
import subprocess
import logging
from typing import Callable, Optional, Tuple

from reelcut.config.defaults import DEFAULT_FFPROBE
from reelcut.core.errors import DimensionProbeError

Dimensions = Tuple[int, int]


def get_resolution(filepath: str, ffprobe: str = DEFAULT_FFPROBE) -> Dimensions:
    """
    获取视频文件的分辨率

    Args:
        filepath: 视频文件路径
        ffprobe: ffprobe 可执行文件

    Returns:
        (宽度, 高度) 元组

    Raises:
        DimensionProbeError: ffprobe 不可用、文件不可读或不含视频流
    """
    cmd = [
        ffprobe, '-v', 'error',
        '-select_streams', 'v:0',
        '-show_entries', 'stream=width,height',
        '-of', 'csv=s=x:p=0',
        filepath
    ]
    try:
        output = subprocess.check_output(cmd, stderr=subprocess.PIPE).decode('utf-8').strip()
    except FileNotFoundError as e:
        raise DimensionProbeError(filepath, f"未找到 {ffprobe}") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode('utf-8', errors='replace').strip()
        raise DimensionProbeError(filepath, stderr or f"ffprobe 退出码 {e.returncode}") from e

    # 多个视频流时只取第一行
    first_line = output.splitlines()[0] if output else ""
    try:
        width, height = (int(part) for part in first_line.split('x')[:2])
    except ValueError as e:
        raise DimensionProbeError(filepath, f"无法解析 ffprobe 输出: {output!r}") from e

    if width <= 0 or height <= 0:
        raise DimensionProbeError(filepath, f"分辨率无效: {width}x{height}")

    logging.debug(f"源视频分辨率: {width}x{height}")
    return width, height


def get_file_size(filepath: str) -> int:
    """获取文件大小（字节）"""
    return os.path.getsize(filepath)


class DimensionOracle:
    """分辨率查询，每次运行最多调用一次 ffprobe"""

    def __init__(self, probe: Callable[[str], Dimensions] = get_resolution):
        self._probe = probe
        self._cache: Optional[Tuple[str, Dimensions]] = None

    def probe(self, filepath: str) -> Dimensions:
        if self._cache is not None and self._cache[0] == filepath:
            return self._cache[1]
        dimensions = self._probe(filepath)
        self._cache = (filepath, dimensions)
        return dimensions

    __call__ = probe
