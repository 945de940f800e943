# slippy_tiles/parsing.py
"""
文本形式解析

- 瓦片 "zoom/x/y"
- TMS 风格的 URL 或路径，以 "zoom/x/y(.ext)" 结尾
- metatile "<scale> <zoom>/<x>/<y>"
- 范围 "minlon minlat maxlon maxlat"（空格或逗号分隔）

正则在第一次使用时编译，之后复用。
"""
import re
from functools import lru_cache
from typing import Optional

from .core.bbox import BBox
from .core.metatile import Metatile
from .core.tile import Tile
from .errors import GrammarMismatchError, InvalidCoordinatesError

_NUM = r"-?[0-9]{1,3}(?:\.[0-9]{1,10})?"

_PATTERNS = {
    "tile": r"(?P<zoom>[0-9]?[0-9])/(?P<x>[0-9]{1,10})/(?P<y>[0-9]{1,10})",
    "tms": r"/?(?P<zoom>[0-9]?[0-9])/(?P<x>[0-9]{1,10})/(?P<y>[0-9]{1,10})(?:\.[a-zA-Z]{3,4})?\Z",
    "metatile": r"(?P<scale>[0-9]+) (?P<zoom>[0-9]?[0-9])/(?P<x>[0-9]{1,10})/(?P<y>[0-9]{1,10})",
    "bbox_space": rf"(?P<minlon>{_NUM}) (?P<minlat>{_NUM}) (?P<maxlon>{_NUM}) (?P<maxlat>{_NUM})",
    "bbox_comma": rf"(?P<minlon>{_NUM}),(?P<minlat>{_NUM}),(?P<maxlon>{_NUM}),(?P<maxlat>{_NUM})",
}


@lru_cache(maxsize=None)
def _pattern(name: str) -> "re.Pattern":
    return re.compile(_PATTERNS[name])


def parse_tile(text: str) -> Tile:
    """
    解析 "zoom/x/y"

    Args:
        text: 例如 "10/547/380"

    Returns:
        Tile

    Raises:
        GrammarMismatchError: 格式不对
        InvalidCoordinatesError: x、y 对该 zoom 无效
    """
    m = _pattern("tile").fullmatch(text)
    if m is None:
        raise GrammarMismatchError(text, "不是 zoom/x/y 格式")

    tile = Tile.new(int(m.group("zoom")), int(m.group("x")), int(m.group("y")))
    if tile is None:
        raise InvalidCoordinatesError(text, "x 或 y 对该 zoom 无效")
    return tile


def parse_tms(text: str) -> Optional[Tile]:
    """
    从以 zoom/x/y（可带 3-4 个字母的扩展名）结尾的 URL 或路径中取出瓦片

    Returns:
        Optional[Tile]: 不匹配或坐标无效时为 None
    """
    m = _pattern("tms").search(text)
    if m is None:
        return None
    return Tile.new(int(m.group("zoom")), int(m.group("x")), int(m.group("y")))


def parse_metatile(text: str) -> Metatile:
    """
    解析 "<scale> <zoom>/<x>/<y>"

    x、y 不必对齐到 scale，会向下对齐，例如 "8 4/1/1" 得到 8 4/0/0。

    Raises:
        GrammarMismatchError: 格式不对
        InvalidCoordinatesError: scale 不是 2 的幂，或 x、y 对该 zoom 无效
    """
    m = _pattern("metatile").fullmatch(text)
    if m is None:
        raise GrammarMismatchError(text, "不是 <scale> <zoom>/<x>/<y> 格式")

    metatile = Metatile.new(
        int(m.group("scale")), int(m.group("zoom")), int(m.group("x")), int(m.group("y"))
    )
    if metatile is None:
        raise InvalidCoordinatesError(text, "scale、x 或 y 无效")
    return metatile


def parse_bbox(text: str) -> BBox:
    """
    解析 "minlon minlat maxlon maxlat"，也接受逗号分隔

    Returns:
        BBox: top=maxlat, left=minlon, bottom=minlat, right=maxlon

    Raises:
        GrammarMismatchError: 格式不对
        InvalidCoordinatesError: 经纬度超出范围
    """
    m = _pattern("bbox_space").fullmatch(text) or _pattern("bbox_comma").fullmatch(text)
    if m is None:
        raise GrammarMismatchError(text, "不是 minlon minlat maxlon maxlat 格式")

    bbox = BBox.new(
        float(m.group("maxlat")),
        float(m.group("minlon")),
        float(m.group("minlat")),
        float(m.group("maxlon")),
    )
    if bbox is None:
        raise InvalidCoordinatesError(text, "经纬度超出范围")
    return bbox
