#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
进程管理模块

记录正在运行的 FFmpeg 进程，收到退出信号时先终止它们
"""

import signal
import subprocess
import logging
from typing import Set

_ffmpeg_processes: Set = set()
_shutdown_requested = False


def register_process(process) -> None:
    """
    注册一个 FFmpeg 进程

    Args:
        process: subprocess.Popen 对象
    """
    _ffmpeg_processes.add(process)


def unregister_process(process) -> None:
    _ffmpeg_processes.discard(process)


def is_shutdown_requested() -> bool:
    return _shutdown_requested


def reset_shutdown_state() -> None:
    """清除退出标记（测试和重复调用 main 时使用）"""
    global _shutdown_requested
    _shutdown_requested = False
    _ffmpeg_processes.clear()


def terminate_all_ffmpeg() -> None:
    """
    终止所有注册的 FFmpeg 进程
    """
    global _shutdown_requested
    _shutdown_requested = True

    processes = list(_ffmpeg_processes)
    if not processes:
        return

    logging.info(f"正在终止 {len(processes)} 个 FFmpeg 进程...")

    for process in processes:
        try:
            if process.poll() is None:
                process.terminate()
                logging.debug(f"已发送 SIGTERM 到进程 {process.pid}")
        except OSError as e:
            logging.warning(f"终止进程时出错: {e}")

    # 等待进程退出，超时则强制杀死
    for process in processes:
        try:
            process.wait(timeout=3)
        except subprocess.TimeoutExpired:
            try:
                process.kill()
                logging.debug(f"已发送 SIGKILL 到进程 {process.pid}")
            except OSError:
                pass

    logging.info("FFmpeg 进程已终止")


def setup_signal_handlers() -> None:
    """
    设置信号处理器，捕获 SIGINT (Ctrl+C) 和 SIGTERM
    """

    def signal_handler(signum, frame):
        sig_name = "SIGINT" if signum == signal.SIGINT else "SIGTERM"
        logging.warning(f"收到 {sig_name} 信号，正在清理...")
        terminate_all_ffmpeg()
        raise KeyboardInterrupt()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)
