#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
启动准备模块

统一处理控制台编码、信号处理和日志初始化。
"""

import sys
import io
from typing import Dict, Any, Optional

from reelcut.utils.process import setup_signal_handlers
from reelcut.utils.logging import setup_logging


def enforce_utf8_windows() -> None:
    """在 Windows 强制 stdout/stderr 使用 UTF-8，避免中文乱码"""
    if sys.platform != 'win32':
        return
    if sys.stdout.encoding != 'utf-8':
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')
    if sys.stderr.encoding != 'utf-8':
        sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8', errors='replace')


def prepare_environment(config: Dict[str, Any]) -> Optional[str]:
    """
    启动前统一准备工作：编码、信号处理、日志初始化。

    Args:
        config: 已加载并应用 CLI 覆盖的配置

    Returns:
        日志文件路径（未启用文件日志时为 None）
    """
    enforce_utf8_windows()

    # 信号处理需尽早注册
    setup_signal_handlers()

    log_cfg = config.get("logging", {})
    return setup_logging(
        config.get("paths", {}).get("log"),
        level=log_cfg.get("level", "INFO"),
        plain=log_cfg.get("plain", False),
        json_console=log_cfg.get("json_console", False),
    )
