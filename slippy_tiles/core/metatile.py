# slippy_tiles/core/metatile.py

from dataclasses import dataclass
from typing import List, Optional

from ..paths import xy_to_mt
from ..tile_math import TileMath
from ..errors import ModTileScaleError
from .bbox import BBox
from .latlon import LatLon
from .tile import Tile, is_integer, is_valid_tile

MODTILE_SCALE = 8


def is_valid_scale(scale: int) -> bool:
    """
    scale 必须是 u8 范围内的 2 的幂
    """
    return is_integer(scale) and 0 < scale <= 0xFF and scale & (scale - 1) == 0


@dataclass(frozen=True)
class Metatile:
    """
    scale x scale 个瓦片组成的 metatile

    x、y 会向下对齐到 scale 的整数倍，所以 metatile 内任意瓦片坐标
    都得到同一个 metatile。

    Raises:
        ValueError: scale 不是 2 的幂，或 zoom/x/y 不是有效瓦片
    """
    scale: int
    zoom: int
    x: int
    y: int

    def __post_init__(self):
        if not is_valid_scale(self.scale):
            raise ValueError(f"metatile scale 必须是 2 的幂: {self.scale}")
        if not is_valid_tile(self.zoom, self.x, self.y):
            raise ValueError(f"无效的瓦片: {self.zoom}/{self.x}/{self.y}")
        object.__setattr__(self, "x", (self.x // self.scale) * self.scale)
        object.__setattr__(self, "y", (self.y // self.scale) * self.scale)

    @classmethod
    def new(cls, scale: int, zoom: int, x: int, y: int) -> Optional["Metatile"]:
        """
        构造 metatile，参数无效时返回 None
        """
        try:
            return cls(scale, zoom, x, y)
        except ValueError:
            return None

    @classmethod
    def from_str(cls, text: str) -> "Metatile":
        """
        解析 "<scale> <zoom>/<x>/<y>"

        Raises:
            TileParseError: 解析失败
        """
        from ..parsing import parse_metatile

        return parse_metatile(text)

    def size(self) -> int:
        """
        metatile 的宽（也是高）

        低缩放级别整个世界都不足 scale 个瓦片宽，例如 z1 只有 2 个。
        """
        return min(self.scale, 2 ** self.zoom)

    def centre_point(self) -> LatLon:
        half = self.size() / 2.0
        return TileMath.tile_to_latlon(self.zoom, self.x + half, self.y + half)

    def center_point(self) -> LatLon:
        return self.centre_point()

    def nw_corner(self) -> LatLon:
        return TileMath.tile_to_latlon(self.zoom, self.x, self.y)

    def ne_corner(self) -> LatLon:
        return TileMath.tile_to_latlon(self.zoom, self.x + self.size(), self.y)

    def sw_corner(self) -> LatLon:
        return TileMath.tile_to_latlon(self.zoom, self.x, self.y + self.size())

    def se_corner(self) -> LatLon:
        size = self.size()
        return TileMath.tile_to_latlon(self.zoom, self.x + size, self.y + size)

    @property
    def top(self) -> float:
        return self.nw_corner().lat

    @property
    def bottom(self) -> float:
        return self.sw_corner().lat

    @property
    def left(self) -> float:
        return self.nw_corner().lon

    @property
    def right(self) -> float:
        return self.se_corner().lon

    def bbox(self) -> BBox:
        return BBox.from_points(self.nw_corner(), self.se_corner())

    def tiles(self) -> List[Tile]:
        """
        metatile 包含的所有瓦片，x 在外层，y 在内层

        每次调用都重新计算。
        """
        size = self.size()
        return [
            Tile._unchecked(self.zoom, self.x + i, self.y + j)
            for i in range(size)
            for j in range(size)
        ]

    @staticmethod
    def all(scale: int):
        """
        按层遍历世界上所有该 scale 的 metatile
        """
        from ..iterators.metatiles import MetatilesIterator

        if not is_valid_scale(scale):
            raise ValueError(f"metatile scale 必须是 2 的幂: {scale}")
        return MetatilesIterator.all(scale)

    def __str__(self) -> str:
        return f"{self.scale} {self.zoom}/{self.x}/{self.y}"


class ModTileMetatile:
    """
    mod_tile 使用的 metatile，固定为 8x8

    内部持有一个 Metatile，Metatile 的所有属性和方法都委托给它。
    """

    __slots__ = ("_inner",)

    def __init__(self, inner: Metatile):
        if inner.scale != MODTILE_SCALE:
            raise ModTileScaleError(inner.scale)
        object.__setattr__(self, "_inner", inner)

    @classmethod
    def new(cls, zoom: int, x: int, y: int) -> Optional["ModTileMetatile"]:
        inner = Metatile.new(MODTILE_SCALE, zoom, x, y)
        if inner is None:
            return None
        return cls(inner)

    @classmethod
    def from_metatile(cls, metatile: Metatile) -> "ModTileMetatile":
        """
        Raises:
            ModTileScaleError: metatile 的 scale 不是 8
        """
        return cls(metatile)

    @property
    def metatile(self) -> Metatile:
        return self._inner

    def path(self, ext: str) -> str:
        """
        该 metatile 在 mod_tile 目录结构中的路径
        """
        mt = xy_to_mt(self._inner.x, self._inner.y)
        return f"{self._inner.zoom}/{'/'.join(mt)}.{ext}"

    def __getattr__(self, name):
        if name == "_inner":
            raise AttributeError(name)
        return getattr(self._inner, name)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} 不可修改")

    def __eq__(self, other):
        if isinstance(other, ModTileMetatile):
            return self._inner == other._inner
        return NotImplemented

    def __hash__(self):
        return hash((ModTileMetatile, self._inner))

    def __reduce__(self):
        # __setattr__ 被禁用，copy / pickle 通过构造函数重建
        return (ModTileMetatile, (self._inner,))

    def __str__(self):
        return str(self._inner)

    def __repr__(self):
        inner = self._inner
        return f"ModTileMetatile(zoom={inner.zoom}, x={inner.x}, y={inner.y})"
