#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""压缩结果报告"""

from dataclasses import dataclass
from typing import List

from reelcut.config.defaults import BYTES_PER_MB


@dataclass(frozen=True)
class SizeReport:
    original_bytes: int
    new_bytes: int
    original_mb: float
    new_mb: float
    reduction_percent: float


def reduction_percent(original_bytes: int, new_bytes: int) -> float:
    """体积减少百分比，原文件为 0 字节时返回 0"""
    if original_bytes <= 0:
        return 0.0
    return round((1 - new_bytes / original_bytes) * 100, 2)


def build_size_report(original_bytes: int, new_bytes: int) -> SizeReport:
    return SizeReport(
        original_bytes=original_bytes,
        new_bytes=new_bytes,
        original_mb=original_bytes / BYTES_PER_MB,
        new_mb=new_bytes / BYTES_PER_MB,
        reduction_percent=reduction_percent(original_bytes, new_bytes),
    )


def format_report(output_path: str, report: SizeReport) -> List[str]:
    return [
        "-" * 60,
        f"视频生成成功: {output_path}",
        f"原始大小: {report.original_mb:.2f} MB",
        f"新大小: {report.new_mb:.2f} MB",
        f"体积减少: {report.reduction_percent:.2f}%",
        "-" * 60,
    ]
