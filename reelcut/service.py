#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
服务层

串联一次剪辑的完整流程，可被 CLI 或其他前端复用：

    命名 → 规划操作 → 组装滤镜链 → 编码 → 校验输出 → 生成报告

外部协作者（分辨率探测、编码、文件大小）均可注入，便于测试。
"""

import os
import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from reelcut.config.defaults import DEFAULT_OUTPUT_FOLDER, DEFAULT_FFMPEG, DEFAULT_FFPROBE
from reelcut.core.encoder import build_encode_command, encode_video, format_command
from reelcut.core.filters import (
    AudioCodecParams,
    VideoCodecParams,
    build_codec_params,
    build_filter_chain,
)
from reelcut.core.geometry import Operation, plan_operations
from reelcut.core.naming import build_output_path
from reelcut.core.params import ResolvedParameters
from reelcut.core.report import SizeReport, build_size_report, format_report
from reelcut.core.video import DimensionOracle, get_file_size, get_resolution

logger = logging.getLogger(__name__)


@dataclass
class EditResult:
    """一次剪辑的结果"""

    output_path: str
    plan: List[Operation]
    filter_chain: str
    video_params: VideoCodecParams
    audio_params: AudioCodecParams
    command: List[str]
    report: Optional[SizeReport] = None
    dry_run: bool = False


def run_edit(
    params: ResolvedParameters,
    config: Dict[str, Any],
    probe: Optional[Callable] = None,
    encode: Optional[Callable] = None,
    stat_size: Callable[[str], int] = get_file_size,
    dry_run: bool = False,
) -> EditResult:
    """
    执行一次剪辑

    Args:
        params: 已解析参数
        config: 配置字典（paths/tools）
        probe: 分辨率探测 path -> (width, height)，默认 ffprobe
        encode: 编码函数，签名同 encode_video，默认 ffmpeg
        stat_size: 文件大小函数
        dry_run: 只生成计划和命令，不执行编码

    Returns:
        EditResult

    Raises:
        DimensionProbeError / EncodeError / OutputMissingError
    """
    tools = config.get("tools", {})
    ffmpeg = tools.get("ffmpeg") or DEFAULT_FFMPEG
    ffprobe = tools.get("ffprobe") or DEFAULT_FFPROBE
    output_folder = config.get("paths", {}).get("output") or DEFAULT_OUTPUT_FOLDER

    if probe is None:
        probe = DimensionOracle(partial(get_resolution, ffprobe=ffprobe))
    if encode is None:
        encode = partial(encode_video, ffmpeg=ffmpeg)

    output_path = build_output_path(params, output_folder)
    logger.info(f"输出文件: {output_path}", extra={"file": params.input_path})

    plan = plan_operations(params, probe)
    filter_chain = build_filter_chain(plan)
    video_params, audio_params = build_codec_params(params)
    logger.debug(f"操作计划: {plan}", extra={"stage": "plan"})

    if params.smallest_file:
        logger.info(
            f"最小文件模式: CRF {video_params.crf}, 码率上限 {video_params.maxrate}, "
            f"{video_params.preset} 预设"
        )
    else:
        logger.info(f"质量 '{params.quality}': CRF {video_params.crf}, {video_params.preset} 预设")

    command = build_encode_command(
        params.input_path, output_path, filter_chain, video_params, audio_params,
        start_time=params.start_time, duration=params.duration, ffmpeg=ffmpeg,
    )
    result = EditResult(
        output_path=output_path,
        plan=plan,
        filter_chain=filter_chain,
        video_params=video_params,
        audio_params=audio_params,
        command=command,
        dry_run=dry_run,
    )

    if dry_run:
        logger.info(f"[DRY RUN] {format_command(command)}")
        return result

    os.makedirs(output_folder, exist_ok=True)
    encode(
        params.input_path, output_path, filter_chain, video_params, audio_params,
        start_time=params.start_time, duration=params.duration,
    )

    result.report = build_size_report(stat_size(params.input_path), stat_size(output_path))
    for line in format_report(output_path, result.report):
        logger.info(line)

    return result
