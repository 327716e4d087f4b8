#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
错误类型

所有错误均继承自 ReelCutError，stage 标明失败发生在哪个阶段，
由 CLI 统一转换为非零退出码和可读的诊断信息。
"""

from typing import Any, Optional


class ReelCutError(Exception):
    """所有 ReelCut 错误的基类"""

    stage = "run"


class ValidationError(ReelCutError):
    """参数值不满足约束"""

    stage = "resolve"

    def __init__(self, field: str, value: Any, reason: str = ""):
        self.field = field
        self.value = value
        self.reason = reason
        message = f"参数 {field} 的取值无效: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MissingRequiredFieldError(ReelCutError):
    """必填参数缺失且无法取默认值"""

    stage = "resolve"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"缺少必填参数: {field}")


class InputNotFoundError(ReelCutError):
    """输入文件不存在"""

    stage = "resolve"

    def __init__(self, filepath: str):
        self.filepath = filepath
        super().__init__(f"输入文件不存在: {filepath}")


class DimensionProbeError(ReelCutError):
    """无法获取视频分辨率"""

    stage = "probe"

    def __init__(self, filepath: str, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"无法获取视频分辨率 {filepath}: {reason}")


class EncodeError(ReelCutError):
    """FFmpeg 编码失败"""

    stage = "encode"

    def __init__(self, reason: str, returncode: Optional[int] = None):
        self.reason = reason
        self.returncode = returncode
        super().__init__(f"FFmpeg 编码失败: {reason}")


class OutputMissingError(ReelCutError):
    """编码报告成功，但输出文件不存在"""

    stage = "verify"

    def __init__(self, filepath: str):
        self.filepath = filepath
        super().__init__(f"编码结束后未找到输出文件: {filepath}")
