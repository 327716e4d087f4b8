#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置加载器

支持从 YAML 文件加载配置，并实现配置优先级合并
优先级: 命令行参数 > 配置文件 > 程序默认值
"""

import os
import logging
import copy
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from reelcut.utils.logging import level_for_verbosity
from reelcut.config.defaults import (
    DEFAULT_CONFIG,
    DEFAULT_CONFIG_FILENAME,
)


def find_default_config() -> Optional[str]:
    """
    查找默认配置文件

    按以下顺序查找:
    1. 当前工作目录下的 reelcut.yaml
    2. 用户目录下的 .reelcut/config.yaml

    Returns:
        找到的配置文件路径，如果没找到返回 None
    """
    local_config = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if local_config.exists():
        return str(local_config)

    home_config = Path.home() / ".reelcut" / "config.yaml"
    if home_config.exists():
        return str(home_config)

    return None


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    深度合并两个字典，override 中的值会覆盖 base 中的值

    Args:
        base: 基础字典
        override: 覆盖字典

    Returns:
        合并后的字典
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    加载配置文件

    Args:
        config_path: 配置文件路径，如果为 None 则使用默认路径

    Returns:
        配置字典
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is None:
        config_path = find_default_config()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                logging.warning(f"配置文件格式不正确（顶层应为映射）: {config_path}，使用默认配置")
                return config
            logging.info(f"已加载配置文件: {config_path}")
            return deep_merge(config, file_config)
        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"加载配置文件失败: {e}，使用默认配置")
            return config
    elif config_path:
        logging.warning(f"配置文件不存在: {config_path}，使用默认配置")

    return config


def apply_cli_overrides(config: Dict[str, Any], args) -> Dict[str, Any]:
    """
    将命令行参数覆盖到配置中

    优先级: 命令行参数 > 配置文件 > 程序默认值

    Args:
        config: 配置字典
        args: 命令行参数

    Returns:
        更新后的配置字典
    """
    paths = config.setdefault("paths", {})
    log_cfg = config.setdefault("logging", {})

    # 路径覆盖
    if getattr(args, 'output_dir', None):
        paths["output"] = args.output_dir
    if getattr(args, 'log', None):
        paths["log"] = args.log

    level = level_for_verbosity(getattr(args, "verbose", 0), getattr(args, "quiet", 0))
    if level:
        log_cfg["level"] = level
    if getattr(args, 'plain', False):
        log_cfg["plain"] = True
    if getattr(args, 'json_logs', False):
        log_cfg["json_console"] = True

    return config
