# slippy_tiles/zorder.py
"""
Z-order（Morton）编码

把二维瓦片坐标交织成一个 64 位的遍历序号：x 占偶数位，y 占奇数位。
序号递增再解码，就能按四叉树递归的顺序逐个访问一个方形区域内的坐标，
并且可以从任意序号继续遍历。
"""
from typing import Tuple

from .tile_math import U32_MAX, U64_MAX


def xy_to_zorder(x: int, y: int) -> int:
    """
    (x, y) -> Z-order 序号，只取 x、y 的低 32 位

    Args:
        x: x 坐标
        y: y 坐标

    Returns:
        int: 64 位序号
    """
    x &= U32_MAX
    y &= U32_MAX
    zorder = 0
    for i in range(32):
        mask = 1 << i
        if x & mask:
            zorder |= 1 << (2 * i)
        if y & mask:
            zorder |= 1 << (2 * i + 1)
    return zorder


def zorder_to_xy(zorder: int) -> Tuple[int, int]:
    """
    Z-order 序号 -> (x, y)，xy_to_zorder 的逆运算

    Args:
        zorder: 64 位序号

    Returns:
        Tuple[int, int]: (x, y)
    """
    zorder &= U64_MAX
    x = 0
    y = 0
    for i in range(32):
        if (zorder >> (2 * i)) & 1:
            x |= 1 << i
        if (zorder >> (2 * i + 1)) & 1:
            y |= 1 << i
    return x, y
