#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
滤镜链组装

把操作计划序列化为 ffmpeg -vf 字符串，并根据质量/最小文件设置
生成视频与音频编码参数。ffmpeg 对滤镜顺序敏感，这里不做任何重排。
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from reelcut.config.defaults import (
    VIDEO_CODEC,
    AUDIO_CODEC,
    DEFAULT_VIDEO_PROFILE,
    SMALLEST_VIDEO_PROFILE,
    DEFAULT_AUDIO_PROFILE,
    LOW_AUDIO_PROFILE,
    SMALLEST_FILE_QUALITY,
)
from reelcut.core.geometry import (
    Operation,
    Rotate,
    Crop,
    ScaleAndPad,
    NormalizeFrameRate,
    RemapTimestamps,
)
from reelcut.core.params import ResolvedParameters

ROTATE_FILTERS = {
    90: "transpose=1",  # 顺时针 90 度
    180: "transpose=2,transpose=2",
    270: "transpose=2",  # 逆时针 90 度
}

# 逗号在 min() 内需要转义，否则会被当成滤镜分隔符
CROP_FILTERS = {
    "1:1": r"crop=min(iw\,ih):min(iw\,ih)",
    "16:9": "crop=iw:iw*9/16",
    "9:16": "crop=ih*9/16:ih",
}


def format_number(value: float) -> str:
    """
    无损的十进制表示，不使用科学计数法

    2.0 -> "2"，1.5 -> "1.5"，1.0000001 -> "1.0000001"，1234567.0 -> "1234567"
    """
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def operation_to_filter(op: Operation) -> str:
    """把单个操作转换为 ffmpeg 滤镜表达式"""
    if isinstance(op, Rotate):
        return ROTATE_FILTERS[op.degrees]
    if isinstance(op, Crop):
        return CROP_FILTERS[op.ratio]
    if isinstance(op, ScaleAndPad):
        w, h = op.width, op.height
        return (
            f"scale={w}:{h}:force_original_aspect_ratio=decrease,"
            f"pad={w}:{h}:(ow-iw)/2:(oh-ih)/2:color=black"
        )
    if isinstance(op, NormalizeFrameRate):
        return f"fps={op.fps}"
    if isinstance(op, RemapTimestamps):
        return f"setpts=PTS/{format_number(op.speed)}"
    raise TypeError(f"未知操作类型: {op!r}")


def build_filter_chain(plan: Sequence[Operation]) -> str:
    """按计划顺序用逗号连接所有滤镜"""
    return ",".join(operation_to_filter(op) for op in plan)


@dataclass(frozen=True)
class VideoCodecParams:
    crf: int
    preset: str
    codec: str = VIDEO_CODEC
    bitrate: Optional[str] = None
    maxrate: Optional[str] = None
    bufsize: Optional[str] = None

    def to_args(self) -> List[str]:
        args = ["-c:v", self.codec, "-preset", self.preset]
        if self.bitrate:
            args.extend(["-b:v", self.bitrate])
        if self.maxrate:
            args.extend(["-maxrate", self.maxrate])
        if self.bufsize:
            args.extend(["-bufsize", self.bufsize])
        args.extend(["-crf", str(self.crf)])
        return args


@dataclass(frozen=True)
class AudioCodecParams:
    channels: int
    bitrate: str
    codec: str = AUDIO_CODEC

    @property
    def is_mono(self) -> bool:
        return self.channels == 1

    def to_args(self) -> List[str]:
        return ["-c:a", self.codec, "-ac", str(self.channels), "-b:a", self.bitrate]


def build_video_params(params: ResolvedParameters) -> VideoCodecParams:
    profile = SMALLEST_VIDEO_PROFILE if params.smallest_file else DEFAULT_VIDEO_PROFILE
    return VideoCodecParams(crf=params.crf, **profile)


def build_audio_params(params: ResolvedParameters) -> AudioCodecParams:
    low = params.quality == SMALLEST_FILE_QUALITY or params.smallest_file
    profile = LOW_AUDIO_PROFILE if low else DEFAULT_AUDIO_PROFILE
    return AudioCodecParams(**profile)


def build_codec_params(params: ResolvedParameters) -> Tuple[VideoCodecParams, AudioCodecParams]:
    """
    生成编码参数

    最小文件：veryslow + 500k 码率封顶；否则 faster。
    verylow 或最小文件时音频为单声道 64k，否则立体声 128k。
    """
    return build_video_params(params), build_audio_params(params)
