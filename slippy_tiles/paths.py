# slippy_tiles/paths.py
"""
瓦片缓存目录结构编码

各种历史上的瓦片缓存工具（TileCache、MapProxy、TileStash、mod_tile）
用不同的方式把 (x, y) 拆成多级目录，这里生成的目录段必须和这些工具完全一致。
"""
from enum import Enum
from typing import List


class PathScheme(Enum):
    """
    目录结构类型枚举
    """
    ZXY = "zxy"
    TC = "tc"
    MP = "mp"
    TS = "ts"
    MT = "mt"


def xy_to_tc(x: int, y: int) -> List[str]:
    """
    TileCache：x、y 各按百万/千/个位拆成 3 位一组
    """
    return [
        f"{x // 1_000_000:03d}",
        f"{(x // 1_000) % 1_000:03d}",
        f"{x % 1_000:03d}",
        f"{y // 1_000_000:03d}",
        f"{(y // 1_000) % 1_000:03d}",
        f"{y % 1_000:03d}",
    ]


def xy_to_mp(x: int, y: int) -> List[str]:
    """
    MapProxy：x、y 各按 10000 拆成 4 位一组
    """
    return [
        f"{x // 10_000:04d}",
        f"{x % 10_000:04d}",
        f"{y // 10_000:04d}",
        f"{y % 10_000:04d}",
    ]


def xy_to_ts(x: int, y: int) -> List[str]:
    """
    TileStash（safe 模式）：x、y 各按 1000 拆成 3 位一组
    """
    return [
        f"{x // 1_000:03d}",
        f"{x % 1_000:03d}",
        f"{y // 1_000:03d}",
        f"{y % 1_000:03d}",
    ]


def xy_to_mt(x: int, y: int) -> List[str]:
    """
    mod_tile：/[Z]/a/b/c/d/e.png，每一段是一个字节 [xxxxyyyy]

    每次取 x、y 的低 4 位拼成 (x << 4) | y，共 5 个字节覆盖 x、y 各 20 位；
    最后取到的（最高位的）字节排在路径最前面，字节以十进制输出。
    """
    parts = []
    for _ in range(5):
        parts.append(((x & 0x0F) << 4) | (y & 0x0F))
        x >>= 4
        y >>= 4
    return [str(b) for b in reversed(parts)]


_SEGMENTERS = {
    PathScheme.TC: xy_to_tc,
    PathScheme.MP: xy_to_mp,
    PathScheme.TS: xy_to_ts,
    PathScheme.MT: xy_to_mt,
}


def format_path(scheme: PathScheme, zoom: int, x: int, y: int, ext: str) -> str:
    """
    生成 zoom/<目录段>.<扩展名> 形式的相对路径

    Args:
        scheme: 目录结构类型（也接受 "tc" 之类的字符串）
        zoom: 缩放级别
        x: 瓦片 x 坐标
        y: 瓦片 y 坐标
        ext: 扩展名（不带点）

    Returns:
        str: 相对路径
    """
    scheme = PathScheme(scheme)
    if scheme is PathScheme.ZXY:
        segments = [str(x), str(y)]
    else:
        segments = _SEGMENTERS[scheme](x, y)
    return f"{zoom}/{'/'.join(segments)}.{ext}"
