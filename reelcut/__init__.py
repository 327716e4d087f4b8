# ReelCut - 视频剪辑命令行工具
"""
ReelCut 包

主要模块:
- config: 预设表与配置加载
- core: 参数解析、几何规划、滤镜链、命名、报告
- service: 单次剪辑流程
- utils: 日志、进程、工具检测
"""

__version__ = "1.0.0"

from reelcut.config import load_config, apply_cli_overrides
from reelcut.core import resolve_parameters, plan_operations, build_filter_chain
from reelcut.service import run_edit

__all__ = [
    "__version__",
    "load_config",
    "apply_cli_overrides",
    "resolve_parameters",
    "plan_operations",
    "build_filter_chain",
    "run_edit",
]
