"""
日志模块

使用 loguru 提供统一的日志记录功能。
"""

import os
import sys
from typing import Optional

from loguru import logger


def setup_logger(
    level: Optional[str] = None,
    sink=sys.stderr,
    enqueue: bool = False,
    colorize: bool = True,
) -> None:
    """
    设置日志记录器

    版本号输出到 stdout，日志默认写到 stderr，避免混在一起。

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR)
        sink: 输出目标
        enqueue: 是否启用队列（线程安全）
        colorize: 是否启用颜色
    """
    # 从环境变量获取日志级别
    if level is None:
        level = "DEBUG" if os.environ.get("MODVERSION_DEBUG", "0") == "1" else "INFO"

    # 移除默认处理器
    logger.remove()

    logger.add(
        sink=sink,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
        enqueue=enqueue,
        level=level,
        colorize=colorize,
        backtrace=(level == "DEBUG"),
        diagnose=(level == "DEBUG"),
    )

    if level == "DEBUG":
        logger.debug("DEBUG 模式已启用")


__all__ = ["logger", "setup_logger"]
