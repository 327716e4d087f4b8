#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
几何/时间变换规划

根据已解析参数生成有序的操作列表，顺序固定为：

    旋转 → 裁剪 → 缩放+填充 → 帧率统一 → 时间戳重映射

只有产生可见效果的操作才会进入计划。
旋转 90/270 度会交换宽高，缩放阶段看到的是交换后的尺寸。
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from reelcut.config.defaults import (
    SIZE_PRESETS,
    ORIGINAL_SIZE,
    DEFAULT_CROP,
    TARGET_FPS,
)
from reelcut.core.params import ResolvedParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rotate:
    degrees: int


@dataclass(frozen=True)
class Crop:
    ratio: str


@dataclass(frozen=True)
class ScaleAndPad:
    """等比缩放到目标框内，再用黑边填满目标尺寸"""

    width: int
    height: int


@dataclass(frozen=True)
class NormalizeFrameRate:
    fps: int


@dataclass(frozen=True)
class RemapTimestamps:
    """按速度倍率重映射时间戳，speed > 1 为加速"""

    speed: float

    @property
    def factor(self) -> float:
        return 1 / self.speed


Operation = Union[Rotate, Crop, ScaleAndPad, NormalizeFrameRate, RemapTimestamps]


def _square_crop_needed(params: ResolvedParameters) -> bool:
    return params.crop_ratio == "1:1"


def needs_source_dimensions(params: ResolvedParameters) -> bool:
    """仅在正方形裁剪或指定目标尺寸时才需要源分辨率"""
    return _square_crop_needed(params) or params.target_size != ORIGINAL_SIZE


def effective_dimensions(
    params: ResolvedParameters, source: Tuple[int, int]
) -> Tuple[int, int]:
    """
    计算缩放阶段看到的参考尺寸

    只有正方形裁剪会改变参考尺寸；16:9/9:16 仍使用未裁剪的源尺寸，
    且这两种裁剪（以及不裁剪）配合目标尺寸时总是缩放。
    """
    width, height = source
    if _square_crop_needed(params):
        side = min(width, height)
        width, height = side, side
    if params.is_vertical_swap:
        width, height = height, width
    return width, height


def plan_operations(
    params: ResolvedParameters,
    probe: Callable[[str], Tuple[int, int]],
) -> List[Operation]:
    """
    生成操作计划

    Args:
        params: 已解析参数
        probe: 分辨率查询函数 path -> (width, height)，最多调用一次

    Returns:
        有序操作列表

    Raises:
        DimensionProbeError: 需要分辨率但无法获取
    """
    plan: List[Operation] = []

    if params.rotation != 0:
        plan.append(Rotate(params.rotation))

    if params.crop_ratio != DEFAULT_CROP:
        plan.append(Crop(params.crop_ratio))

    effective: Optional[Tuple[int, int]] = None
    if needs_source_dimensions(params):
        source = probe(params.input_path)
        effective = effective_dimensions(params, source)
        logger.debug(
            f"源尺寸 {source[0]}x{source[1]}，参考尺寸 {effective[0]}x{effective[1]}",
            extra={"stage": "probe"},
        )

    if params.target_size != ORIGINAL_SIZE:
        target_width, target_height = SIZE_PRESETS[params.target_size]
        if params.is_vertical_swap:
            target_width, target_height = target_height, target_width

        # 只有正方形裁剪分支可以跳过缩放
        redundant = (
            _square_crop_needed(params)
            and effective is not None
            and (target_width, target_height) == effective
        )
        if not redundant:
            logger.info(f"缩放/填充到 {target_width}x{target_height}", extra={"op": "scale"})
            plan.append(ScaleAndPad(target_width, target_height))
        else:
            logger.info("目标尺寸与裁剪/旋转后的尺寸一致，无需缩放")

    plan.append(NormalizeFrameRate(TARGET_FPS))

    if params.has_speed_change:
        plan.append(RemapTimestamps(params.speed_modifier))

    return plan
