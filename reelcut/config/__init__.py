# 配置模块
"""配置加载和预设表"""

from reelcut.config.loader import load_config, apply_cli_overrides, deep_merge
from reelcut.config.defaults import (
    DEFAULT_CONFIG,
    SIZE_PRESETS,
    QUALITY_PRESETS,
    ROTATION_OPTIONS,
    CROP_OPTIONS,
)

__all__ = [
    "load_config",
    "apply_cli_overrides",
    "deep_merge",
    "DEFAULT_CONFIG",
    "SIZE_PRESETS",
    "QUALITY_PRESETS",
    "ROTATION_OPTIONS",
    "CROP_OPTIONS",
]
