# 工具模块
"""日志、进程管理、外部工具检测"""

from reelcut.utils.logging import setup_logging

__all__ = [
    "setup_logging",
]
