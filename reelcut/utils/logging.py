#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日志配置模块

控制台支持彩色/纯文本/JSON 行三种输出，可选写入日志文件。
通过 extra= 传入的 stage 渲染为 "[stage]" 前缀，file/op 附加在行尾。
"""

import os
import sys
import json
import logging
import datetime
from typing import Any, Dict, Optional

import colorama


LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LEVEL_COLORS = {
    logging.DEBUG: colorama.Style.DIM,
    logging.INFO: colorama.Fore.GREEN,
    logging.WARNING: colorama.Fore.YELLOW,
    logging.ERROR: colorama.Fore.RED,
    logging.CRITICAL: colorama.Back.RED + colorama.Fore.WHITE,
}

STAGE_KEY = "stage"
TRAILING_KEYS = ("file", "op")


def _resolve_level(level: Any) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        return LEVEL_MAP.get(level.upper(), logging.INFO)
    return logging.INFO


def level_for_verbosity(verbose: int = 0, quiet: int = 0) -> Optional[str]:
    """
    -v/--quiet 计数转换为级别名

    -v 优先；--quiet 一次为 WARNING，两次及以上为 ERROR；都没有时返回 None。
    """
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING" if quiet == 1 else "ERROR"
    return None


def _stage_prefix(record: logging.LogRecord) -> str:
    stage = getattr(record, STAGE_KEY, None)
    return f"[{stage}] " if stage else ""


def _trailing_context(record: logging.LogRecord) -> str:
    parts = [
        f"{key}={getattr(record, key)}"
        for key in TRAILING_KEYS
        if getattr(record, key, None) not in (None, "")
    ]
    return f" ({' '.join(parts)})" if parts else ""


class ConsoleFormatter(logging.Formatter):
    """控制台格式化器，支持彩色/纯文本。"""

    def __init__(self, enable_color: bool = False):
        super().__init__()
        self.enable_color = enable_color

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = (
            f"[{ts}] {record.levelname:<5} "
            f"{_stage_prefix(record)}{record.getMessage()}{_trailing_context(record)}"
        )
        if self.enable_color:
            color = LEVEL_COLORS.get(record.levelno, "")
            return f"{color}{line}{colorama.Style.RESET_ALL}"
        return line


class FileFormatter(logging.Formatter):
    """文件格式，带 logger 名称和异常堆栈。"""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.datetime.fromtimestamp(record.created).strftime(
            "%Y-%m-%d %H:%M:%S"
        )
        line = (
            f"{ts} | {record.levelname:<7} | {record.name} | "
            f"{_stage_prefix(record)}{record.getMessage()}{_trailing_context(record)}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JsonFormatter(logging.Formatter):
    """JSON 行格式，便于采集或 CI 解析。"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        for key in (STAGE_KEY,) + TRAILING_KEYS:
            value = getattr(record, key, None)
            if value not in (None, ""):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _should_use_color(stream, plain: bool) -> bool:
    if plain:
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def setup_logging(
    log_folder: Optional[str] = None,
    level: Any = "INFO",
    plain: bool = False,
    json_console: bool = False,
    console_level: Any = None,
) -> Optional[str]:
    """
    配置根日志记录器

    Args:
        log_folder: 日志文件夹路径，None 表示只输出到控制台
        level: 控制台级别（字符串或数字）
        plain: 控制台禁用彩色
        json_console: 控制台使用 JSON 行输出
        console_level: 单独指定控制台级别，默认为 level

    Returns:
        日志文件路径（未写文件时为 None）
    """
    # Windows 终端需要 colorama 处理 ANSI 转义，其他平台无副作用
    colorama.just_fix_windows_console()

    logger = logging.getLogger()
    logger.handlers.clear()
    # 根 logger 放宽到 DEBUG，由 handler 控制输出级别
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(_resolve_level(console_level or level))
    if json_console:
        console_handler.setFormatter(JsonFormatter())
    else:
        console_handler.setFormatter(
            ConsoleFormatter(enable_color=_should_use_color(sys.stdout, plain))
        )
    logger.addHandler(console_handler)

    log_file = None
    if log_folder:
        os.makedirs(log_folder, exist_ok=True)
        timestamp = datetime.datetime.now().strftime("%Y%m%d%H%M%S")
        log_file = os.path.join(log_folder, f"reelcut_{timestamp}.log")

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    logger.debug("日志初始化完成", extra={"file": log_file})

    return log_file
