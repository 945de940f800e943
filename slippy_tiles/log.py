# slippy_tiles/log.py
import os
import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "slippy_tiles.log"


def setup_logging(level: str = "INFO", log_dir: str = "log") -> str:
    """
    配置 loguru：替换默认的 stderr 输出，并增加按大小滚动的日志文件

    Args:
        level: stderr 的日志级别
        log_dir: 日志目录，不存在时自动创建

    Returns:
        str: 日志文件路径
    """
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_path = os.path.join(log_dir, LOG_FILE_NAME)

    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    logger.add(log_path, rotation="10 MB", level="DEBUG")
    return log_path
