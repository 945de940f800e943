"""slippy_tiles 测试共用的 fixture"""

import tempfile
from pathlib import Path

import pytest
from loguru import logger

from slippy_tiles import BBox


@pytest.fixture
def temp_dir():
    """临时目录，测试结束后自动删除"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def ie_bbox():
    """爱尔兰（岛）的范围"""
    return BBox(55.7, -11.32, 51.11, -4.97)


@pytest.fixture
def dublin_bbox():
    """都柏林的范围"""
    return BBox(53.61, -6.66, 53.08, -5.98)


@pytest.fixture
def log_messages():
    """收集 WARNING 及以上级别的 loguru 日志"""
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{level} {message}")
    yield messages
    logger.remove(handler_id)
