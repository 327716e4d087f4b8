#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
参数解析模块

把可能不完整的用户输入（命令行参数 / 交互输入）补全为一组
完整且相互一致的参数。解析按固定顺序逐字段进行：

    输入文件 → 起始时间 → 时长 → 速度 → 旋转 → 裁剪 → 目标尺寸 → 质量

交互输入通过注入的 prompt_fn 完成，核心逻辑本身不读写终端。
"""

import os
import re
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple

from reelcut.config.defaults import (
    DEFAULT_START_TIME,
    DEFAULT_DURATION,
    DEFAULT_SPEED,
    DEFAULT_ROTATION,
    DEFAULT_CROP,
    DEFAULT_TARGET_SIZE,
    DEFAULT_QUALITY,
    SMALLEST_FILE_QUALITY,
    SIZE_PRESETS,
    QUALITY_PRESETS,
    ROTATION_OPTIONS,
    CROP_OPTIONS,
    VERTICAL_SWAP_ROTATIONS,
)
from reelcut.core.errors import (
    ValidationError,
    MissingRequiredFieldError,
    InputNotFoundError,
)

logger = logging.getLogger(__name__)

# prompt_fn(label, default, options) -> 用户输入的原始字符串
PromptFn = Callable[[str, Any, Optional[Mapping]], str]

_INT_RE = re.compile(r"^[0-9]+$")
_DECIMAL_RE = re.compile(r"^[0-9]+(\.[0-9]+)?$")


@dataclass
class RawParameters:
    """原始参数，每个字段都可以缺失（None）"""

    input_path: Optional[str] = None
    start_time: Any = None
    duration: Any = None
    speed_modifier: Any = None
    rotation: Any = None
    crop_ratio: Any = None
    target_size: Any = None
    quality: Any = None
    smallest_file: bool = False
    assume_defaults: bool = False


@dataclass(frozen=True)
class ResolvedParameters:
    """解析完成的参数，构建后只读"""

    input_path: str
    start_time: int = DEFAULT_START_TIME
    duration: Optional[int] = DEFAULT_DURATION
    speed_modifier: float = DEFAULT_SPEED
    rotation: int = DEFAULT_ROTATION
    crop_ratio: str = DEFAULT_CROP
    target_size: str = DEFAULT_TARGET_SIZE
    quality: str = DEFAULT_QUALITY
    smallest_file: bool = False

    @property
    def crf(self) -> int:
        return QUALITY_PRESETS[self.quality]

    @property
    def is_vertical_swap(self) -> bool:
        """90/270 度旋转会交换宽高"""
        return self.rotation in VERTICAL_SWAP_ROTATIONS

    @property
    def has_speed_change(self) -> bool:
        return self.speed_modifier != DEFAULT_SPEED


# ============================================================
# 校验/解析函数：成功返回规范化后的值，失败抛出 ValueError
# ============================================================

def parse_input_path(value: Any) -> str:
    text = str(value).strip()
    if not text:
        raise ValueError("路径为空")
    return os.path.expanduser(text)


def parse_non_negative_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("必须为非负整数")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("必须为非负整数")
        return value
    text = str(value).strip()
    if not _INT_RE.match(text):
        raise ValueError("必须为非负整数")
    return int(text)


def parse_duration(value: Any) -> int:
    seconds = parse_non_negative_int(value)
    if seconds == 0:
        raise ValueError("时长必须大于 0")
    return seconds


def parse_speed(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("必须为正数")
    if isinstance(value, (int, float)):
        speed = float(value)
    else:
        text = str(value).strip()
        if not _DECIMAL_RE.match(text):
            raise ValueError("必须为正数，例如 1.0 或 2")
        speed = float(text)
    # 0 会导致时间戳除零
    if speed <= 0:
        raise ValueError("必须大于 0")
    return speed


def parse_rotation(value: Any) -> int:
    text = str(value).strip()
    if not _INT_RE.match(text) or int(text) not in ROTATION_OPTIONS:
        raise ValueError(f"可选值: {', '.join(str(k) for k in ROTATION_OPTIONS)}")
    return int(text)


def _table_parser(table: Mapping, label: str) -> Callable[[Any], str]:
    def parse(value: Any) -> str:
        text = str(value).strip()
        if text not in table:
            raise ValueError(f"未知{label}，可选值: {', '.join(table)}")
        return text
    return parse


parse_crop = _table_parser(CROP_OPTIONS, "裁剪比例")
parse_target_size = _table_parser(SIZE_PRESETS, "尺寸预设")
parse_quality = _table_parser(QUALITY_PRESETS, "质量预设")


@dataclass(frozen=True)
class FieldSpec:
    """单个参数字段的解析规则"""

    name: str
    label: str
    default: Any
    parser: Callable[[Any], Any]
    required: bool = False
    options: Optional[Mapping] = None


# 解析顺序即表顺序
FIELD_SPECS: Tuple[FieldSpec, ...] = (
    FieldSpec("input_path", "输入文件路径", None, parse_input_path, required=True),
    FieldSpec("start_time", "起始时间（秒）", DEFAULT_START_TIME, parse_non_negative_int),
    FieldSpec("duration", "时长（秒，留空表示到视频结尾）", DEFAULT_DURATION, parse_duration),
    FieldSpec("speed_modifier", "速度倍率（1.0 为原速）", DEFAULT_SPEED, parse_speed),
    FieldSpec("rotation", "旋转角度", DEFAULT_ROTATION, parse_rotation, options=ROTATION_OPTIONS),
    FieldSpec("crop_ratio", "裁剪比例", DEFAULT_CROP, parse_crop, options=CROP_OPTIONS),
    FieldSpec("target_size", "目标尺寸", DEFAULT_TARGET_SIZE, parse_target_size, options=SIZE_PRESETS),
    FieldSpec("quality", "质量", DEFAULT_QUALITY, parse_quality, options=QUALITY_PRESETS),
)


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve_field(spec: FieldSpec, raw_value: Any, prompt_fn: Optional[PromptFn] = None) -> Any:
    """
    解析单个字段

    Args:
        spec: 字段规则
        raw_value: 原始值，None 表示未提供
        prompt_fn: 交互输入函数，None 表示非交互模式

    Returns:
        规范化后的字段值（可选字段可能为 None）

    Raises:
        ValidationError: 非交互模式下提供了无效值
        MissingRequiredFieldError: 非交互模式下必填字段缺失
    """
    if not _is_absent(raw_value):
        try:
            return spec.parser(raw_value)
        except ValueError as e:
            if prompt_fn is None:
                raise ValidationError(spec.name, raw_value, str(e)) from e
            logger.warning(f"输入无效: {spec.label} = {raw_value!r} ({e})")
    elif prompt_fn is None:
        if spec.default is not None:
            return spec.default
        if spec.required:
            raise MissingRequiredFieldError(spec.name)
        return None

    while True:
        answer = prompt_fn(spec.label, spec.default, spec.options)
        if _is_absent(answer):
            if spec.default is not None:
                return spec.default
            if spec.required:
                logger.warning("此项为必填项，请输入")
                continue
            return None
        try:
            return spec.parser(answer)
        except ValueError as e:
            logger.warning(f"输入无效，请重试 ({e})")


def resolve_parameters(raw: RawParameters, prompt_fn: Optional[PromptFn] = None) -> ResolvedParameters:
    """
    把原始参数补全为 ResolvedParameters

    assume_defaults 为真或未提供 prompt_fn 时不进行任何交互。
    smallest_file 会在质量校验之前把质量强制改为 verylow。

    Raises:
        ValidationError / MissingRequiredFieldError / InputNotFoundError
    """
    interactive_fn = None if raw.assume_defaults else prompt_fn
    values = {}

    for spec in FIELD_SPECS:
        raw_value = getattr(raw, spec.name)

        if spec.name == "quality" and raw.smallest_file:
            if not _is_absent(raw_value) and str(raw_value).strip() != SMALLEST_FILE_QUALITY:
                logger.debug(f"忽略显式指定的质量 {raw_value!r}")
            logger.info(f"已请求最小文件，质量设置为 {SMALLEST_FILE_QUALITY}")
            raw_value = SMALLEST_FILE_QUALITY

        values[spec.name] = resolve_field(spec, raw_value, interactive_fn)

        if spec.name == "input_path" and not os.path.isfile(values["input_path"]):
            raise InputNotFoundError(values["input_path"])

    return ResolvedParameters(smallest_file=bool(raw.smallest_file), **values)
