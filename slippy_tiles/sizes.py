# slippy_tiles/sizes.py
"""
瓦片数量计算

所有函数在结果超出 u64 时返回 None，而不是回绕或抛出异常。
"""
from typing import Optional

from .tile_math import TileMath, U64_MAX, tiles_across

# 超过该缩放级别的整层瓦片数按"未知"处理
MAX_COUNTABLE_ZOOM = 5


def checked_add(a: Optional[int], b: Optional[int]) -> Optional[int]:
    """
    u64 加法，溢出或任一参数为 None 时返回 None
    """
    if a is None or b is None:
        return None
    total = a + b
    return total if total <= U64_MAX else None


def checked_mul(a: Optional[int], b: Optional[int]) -> Optional[int]:
    """
    u64 乘法，溢出或任一参数为 None 时返回 None
    """
    if a is None or b is None:
        return None
    total = a * b
    return total if total <= U64_MAX else None


def num_tiles_in_zoom(zoom: int) -> Optional[int]:
    """
    某一缩放级别的瓦片总数：zoom 0 为 1，其余为 4^zoom

    只对 zoom <= 5 给出数值，更深的层级返回 None。
    """
    if zoom == 0:
        return 1
    if zoom <= MAX_COUNTABLE_ZOOM:
        return 4 ** zoom
    return None


def remaining_in_this_zoom(next_zoom: int, next_x: int, next_y: int) -> Optional[int]:
    """
    按 y 优先、x 其次的顺序扫描时，从 (next_x, next_y)（含）开始本层还剩多少瓦片
    """
    if next_zoom == 0 and next_x == 0 and next_y == 0:
        return 1

    max_tile_no = tiles_across(next_zoom)
    remaining_in_column = max_tile_no - next_y
    remaining_rows = max_tile_no - next_x - 1

    remaining_after_this_column = checked_mul(remaining_rows, max_tile_no)
    return checked_add(remaining_in_column, remaining_after_this_column)


def size_bbox_zoom(bbox, zoom: int) -> Optional[int]:
    """
    该范围在某一缩放级别覆盖多少瓦片
    """
    x1, y1 = TileMath.latlon_to_tile(bbox.top, bbox.left, zoom)
    x2, y2 = TileMath.latlon_to_tile(bbox.bottom, bbox.right, zoom)
    width = x2 - x1 + 1
    height = y2 - y1 + 1
    if width <= 0 or height <= 0:
        return 0
    return checked_mul(width, height)


def size_bbox_zoom_metatiles(bbox, zoom: int, metatile_scale: int) -> Optional[int]:
    """
    该范围在某一缩放级别覆盖多少个 metatile
    """
    x1, y1 = TileMath.latlon_to_tile(bbox.top, bbox.left, zoom)
    x2, y2 = TileMath.latlon_to_tile(bbox.bottom, bbox.right, zoom)
    width = x2 // metatile_scale - x1 // metatile_scale + 1
    height = y2 // metatile_scale - y1 // metatile_scale + 1
    if width <= 0 or height <= 0:
        return 0
    return checked_mul(width, height)
