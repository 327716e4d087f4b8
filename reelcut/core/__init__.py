# 核心模块
"""参数解析、几何规划、滤镜链组装、命名与报告"""

from reelcut.core.errors import (
    ReelCutError,
    ValidationError,
    MissingRequiredFieldError,
    InputNotFoundError,
    DimensionProbeError,
    EncodeError,
    OutputMissingError,
)
from reelcut.core.params import RawParameters, ResolvedParameters, resolve_parameters, resolve_field
from reelcut.core.video import get_resolution, get_file_size, DimensionOracle
from reelcut.core.geometry import plan_operations
from reelcut.core.filters import build_filter_chain, build_codec_params
from reelcut.core.naming import build_output_name, build_output_path
from reelcut.core.report import build_size_report, format_report
from reelcut.core.encoder import build_encode_command, encode_video, execute_ffmpeg

__all__ = [
    "ReelCutError",
    "ValidationError",
    "MissingRequiredFieldError",
    "InputNotFoundError",
    "DimensionProbeError",
    "EncodeError",
    "OutputMissingError",
    "RawParameters",
    "ResolvedParameters",
    "resolve_parameters",
    "resolve_field",
    "get_resolution",
    "get_file_size",
    "DimensionOracle",
    "plan_operations",
    "build_filter_chain",
    "build_codec_params",
    "build_output_name",
    "build_output_path",
    "build_size_report",
    "format_report",
    "build_encode_command",
    "encode_video",
    "execute_ffmpeg",
]
