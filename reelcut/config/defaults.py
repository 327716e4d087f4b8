#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
默认配置常量

定义参数默认值、预设表（尺寸/质量/旋转/裁剪）以及编码参数档位。
所有预设表均为只读映射，进程内初始化一次，不允许修改。
"""

from types import MappingProxyType

# ============================================================
# 路径配置
# ============================================================
DEFAULT_OUTPUT_FOLDER = "."
DEFAULT_LOG_FOLDER = None  # None 表示不写日志文件
DEFAULT_CONFIG_FILENAME = "reelcut.yaml"

# ============================================================
# 外部工具
# ============================================================
DEFAULT_FFMPEG = "ffmpeg"
DEFAULT_FFPROBE = "ffprobe"

# ============================================================
# 参数默认值
# ============================================================
DEFAULT_START_TIME = 0
DEFAULT_DURATION = None  # None 表示一直到视频结尾
DEFAULT_SPEED = 1.0
DEFAULT_ROTATION = 0
DEFAULT_CROP = "none"
DEFAULT_TARGET_SIZE = "original"
DEFAULT_QUALITY = "medium"
SMALLEST_FILE_QUALITY = "verylow"

# ============================================================
# 尺寸预设（original 表示保持原始尺寸）
# ============================================================
ORIGINAL_SIZE = "original"

SIZE_PRESETS = MappingProxyType({
    "original": ORIGINAL_SIZE,
    "256x256": (256, 256),
    "512x512": (512, 512),
    "640x640": (640, 640),
    "720x720": (720, 720),
    "1024x1024": (1024, 1024),
    "nHD": (640, 360),
    "qHD": (960, 540),
    "HD": (1280, 720),
    "FHD": (1920, 1080),
    "2K": (2048, 1080),
    "UHD": (3840, 2160),
    "4K": (4096, 2160),
})

# ============================================================
# 质量预设（CRF，数值越小画质越好、文件越大）
# ============================================================
QUALITY_PRESETS = MappingProxyType({
    "high": 18,
    "medium": 23,
    "low": 28,
    "verylow": 35,
})

# ============================================================
# 旋转选项
# ============================================================
ROTATION_OPTIONS = MappingProxyType({
    0: "不旋转",
    90: "顺时针旋转 90 度",
    180: "旋转 180 度",
    270: "逆时针旋转 90 度",
})

# 90/270 度会交换宽高
VERTICAL_SWAP_ROTATIONS = (90, 270)

# ============================================================
# 裁剪选项
# ============================================================
CROP_OPTIONS = MappingProxyType({
    "none": "不裁剪",
    "1:1": "正方形 (1:1)",
    "16:9": "宽屏 (16:9)",
    "9:16": "竖屏 (9:16)",
})

# ============================================================
# 帧率
# ============================================================
TARGET_FPS = 24

# ============================================================
# 视频编码档位
# ============================================================
VIDEO_CODEC = "libx264"

DEFAULT_VIDEO_PROFILE = MappingProxyType({
    "preset": "faster",
})

# 最小文件档位：最慢预设 + 码率封顶
SMALLEST_VIDEO_PROFILE = MappingProxyType({
    "preset": "veryslow",
    "bitrate": "500k",
    "maxrate": "500k",
    "bufsize": "1000k",
})

# ============================================================
# 音频策略
# ============================================================
AUDIO_CODEC = "aac"

DEFAULT_AUDIO_PROFILE = MappingProxyType({
    "channels": 2,
    "bitrate": "128k",
})

# verylow 或最小文件时使用单声道低码率
LOW_AUDIO_PROFILE = MappingProxyType({
    "channels": 1,
    "bitrate": "64k",
})

# ============================================================
# 输出文件
# ============================================================
OUTPUT_SUFFIX = "-edited"
OUTPUT_EXTENSION = ".mp4"

# ============================================================
# 报告
# ============================================================
BYTES_PER_MB = 1024 * 1024

# ============================================================
# 默认配置字典（用于配置加载）
# ============================================================
DEFAULT_CONFIG = {
    "paths": {
        "output": DEFAULT_OUTPUT_FOLDER,
        "log": DEFAULT_LOG_FOLDER,
    },
    "tools": {
        "ffmpeg": DEFAULT_FFMPEG,
        "ffprobe": DEFAULT_FFPROBE,
    },
    "logging": {
        "level": "INFO",
        "plain": False,
        "json_console": False,
    },
}
