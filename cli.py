#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReelCut - CLI 入口

命令行参数解析、交互输入和退出码
"""

import os
import sys
import logging
import argparse
from typing import Any, Mapping, Optional

# 确保可以导入 reelcut 模块
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from reelcut import __version__
from reelcut.bootstrap import prepare_environment
from reelcut.config import load_config, apply_cli_overrides
from reelcut.config.defaults import (
    SIZE_PRESETS,
    QUALITY_PRESETS,
    ROTATION_OPTIONS,
    CROP_OPTIONS,
    ORIGINAL_SIZE,
)
from reelcut.core.errors import ReelCutError
from reelcut.core.geometry import needs_source_dimensions
from reelcut.core.params import RawParameters, resolve_parameters
from reelcut.service import run_edit
from reelcut.utils.encoder_check import check_tools
from reelcut.utils.process import terminate_all_ffmpeg


def parse_arguments(argv=None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        prog='reelcut',
        description='ReelCut - 视频裁剪/旋转/变速/压缩工具',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
使用示例:
  # 交互模式（缺失的参数会逐项询问）
  reelcut -i clip.mov

  # 截取 5 秒起的 10 秒，旋转 90 度，裁成正方形并缩放到 512x512
  reelcut -i clip.mov -s 5 -d 10 -r 90 --crop 1:1 --target 512x512 -y

  # 尽可能小的文件
  reelcut -i clip.mov --smallest -y

  # 只查看将要执行的 ffmpeg 命令
  reelcut -i clip.mov --target HD -y --dry-run
        '''
    )

    # 剪辑参数
    parser.add_argument('-i', '--input', default=None,
                        help='输入视频文件路径')
    parser.add_argument('-s', '--start', default=None,
                        help='起始时间（秒，默认: 0）')
    parser.add_argument('-d', '--duration', default=None,
                        help='时长（秒，默认: 到视频结尾）')
    parser.add_argument('--speed', default=None,
                        help='速度倍率（默认: 1.0）')
    parser.add_argument('-r', '--rotation', default=None,
                        help=f"旋转角度: {'/'.join(str(k) for k in ROTATION_OPTIONS)} (默认: 0)")
    parser.add_argument('--crop', default=None,
                        help=f"裁剪比例: {'/'.join(CROP_OPTIONS)} (默认: none)")
    parser.add_argument('--target', default=None,
                        help=f'目标尺寸预设 (默认: {ORIGINAL_SIZE}，--list-presets 查看全部)')
    parser.add_argument('-q', '--quality', default=None,
                        help=f"质量: {'/'.join(QUALITY_PRESETS)} (默认: medium)")
    parser.add_argument('--smallest', action='store_true',
                        help='生成尽可能小的文件（强制质量为 verylow）')
    parser.add_argument('-y', '--yes', action='store_true',
                        help='不询问，未指定的参数使用默认值')

    # 输出与配置
    parser.add_argument('-o', '--output-dir', default=None,
                        help='输出目录 (默认: 当前目录)')
    parser.add_argument('--config', type=str, default=None,
                        help='配置文件路径 (YAML 格式)')
    parser.add_argument('-l', '--log', default=None,
                        help='日志文件夹路径（指定后写入日志文件）')

    # 日志选项
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='输出调试日志')
    parser.add_argument('--quiet', action='count', default=0,
                        help='减少输出（--quiet 仅警告，--quiet --quiet 仅错误）')
    parser.add_argument('--plain', action='store_true',
                        help='控制台禁用彩色输出')
    parser.add_argument('--json-logs', action='store_true',
                        help='控制台输出 JSON 行日志')

    # 其他
    parser.add_argument('--dry-run', action='store_true',
                        help='仅显示操作计划和 ffmpeg 命令，不实际执行')
    parser.add_argument('--list-presets', action='store_true',
                        help='列出所有预设后退出')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser.parse_args(argv)


def describe_option(value: Any) -> str:
    """预设值的可读描述"""
    if isinstance(value, tuple):
        return f"{value[0]}x{value[1]}"
    if isinstance(value, int):
        return f"CRF: {value}"
    return str(value)


def console_prompt(label: str, default: Any, options: Optional[Mapping] = None) -> str:
    """终端交互输入，回车使用默认值"""
    if options:
        print(f"{label}选项:")
        for key, value in options.items():
            print(f"  {key} - {describe_option(value)}")
    shown = "" if default is None else default
    return input(f"{label} [默认: {shown}]: ")


def print_presets() -> None:
    """打印所有预设表"""
    tables = (
        ("目标尺寸", SIZE_PRESETS),
        ("质量", QUALITY_PRESETS),
        ("旋转", ROTATION_OPTIONS),
        ("裁剪", CROP_OPTIONS),
    )
    for title, table in tables:
        print(f"{title}:")
        for key, value in table.items():
            print(f"  {key} - {describe_option(value)}")


def raw_parameters_from_args(args) -> RawParameters:
    return RawParameters(
        input_path=args.input,
        start_time=args.start,
        duration=args.duration,
        speed_modifier=args.speed,
        rotation=args.rotation,
        crop_ratio=args.crop,
        target_size=args.target,
        quality=args.quality,
        smallest_file=args.smallest,
        assume_defaults=args.yes,
    )


def main(argv=None) -> int:
    """主函数"""
    args = parse_arguments(argv)

    if args.list_presets:
        print_presets()
        return 0

    try:
        config = load_config(args.config)
        config = apply_cli_overrides(config, args)
        prepare_environment(config)

        params = resolve_parameters(raw_parameters_from_args(args), prompt_fn=console_prompt)

        if not args.dry_run:
            check_tools(config.get("tools", {}), need_probe=needs_source_dimensions(params))

        run_edit(params, config, dry_run=args.dry_run)
        return 0

    except ReelCutError as e:
        logging.error(str(e), extra={"stage": e.stage})
        return 1
    except EOFError:
        logging.error("输入已结束，无法继续交互，请使用 -y 或直接传入参数", extra={"stage": "resolve"})
        return 1
    except KeyboardInterrupt:
        logging.warning("用户中断操作")
        terminate_all_ffmpeg()
        return 130
    except Exception as e:
        logging.critical(f"程序执行过程中发生严重错误: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
