#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
输出文件命名

文件名 = 原文件名 + "-edited" + 每个非默认参数对应的后缀（顺序固定）+ ".mp4"
不做重名检测，同名文件会被覆盖。
"""

import os
from pathlib import Path
from typing import List

from reelcut.config.defaults import (
    DEFAULT_OUTPUT_FOLDER,
    DEFAULT_ROTATION,
    DEFAULT_CROP,
    DEFAULT_TARGET_SIZE,
    DEFAULT_QUALITY,
    OUTPUT_SUFFIX,
    OUTPUT_EXTENSION,
)
from reelcut.core.filters import format_number
from reelcut.core.params import ResolvedParameters


def suffix_tokens(params: ResolvedParameters) -> List[str]:
    tokens = []
    if params.start_time > 0:
        tokens.append(f"-s{params.start_time}")
    if params.duration is not None:
        tokens.append(f"-d{params.duration}")
    if params.has_speed_change:
        tokens.append(f"-speed{format_number(params.speed_modifier)}")
    if params.rotation != DEFAULT_ROTATION:
        tokens.append(f"-r{params.rotation}")
    if params.crop_ratio != DEFAULT_CROP:
        tokens.append(f"-crop{params.crop_ratio.replace(':', '')}")
    if params.target_size != DEFAULT_TARGET_SIZE:
        tokens.append(f"-{params.target_size}")
    if params.quality != DEFAULT_QUALITY:
        tokens.append(f"-q{params.quality}")
    return tokens


def build_output_name(base_name: str, params: ResolvedParameters) -> str:
    """
    生成输出文件名

    Args:
        base_name: 不含扩展名的原文件名
        params: 已解析参数

    Returns:
        输出文件名，例如 clip-edited-s5-r90-HD.mp4
    """
    return base_name + OUTPUT_SUFFIX + "".join(suffix_tokens(params)) + OUTPUT_EXTENSION


def build_output_path(params: ResolvedParameters, output_folder: str = DEFAULT_OUTPUT_FOLDER) -> str:
    """根据输入文件生成输出路径（默认当前目录）"""
    base_name = Path(params.input_path).stem
    return os.path.join(output_folder or DEFAULT_OUTPUT_FOLDER, build_output_name(base_name, params))
