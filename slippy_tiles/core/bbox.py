# slippy_tiles/core/bbox.py

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ..tile_math import TileMath, ZOOM_LIMIT
from .latlon import LatLon


@dataclass(frozen=True)
class BBox:
    """
    经纬度空间中的矩形范围

    top/bottom 必须在 [-90, 90] 内，left/right 必须在 [-180, 180] 内。
    不要求 top > bottom 或 right > left：退化的或跨越 180 度经线的范围也能构造，
    但重叠/包含判断默认它是一个正常的矩形。

    Raises:
        ValueError: 某个边界超出范围
    """
    top: float
    left: float
    bottom: float
    right: float

    def __post_init__(self):
        if not (
            -90.0 <= self.top <= 90.0
            and -90.0 <= self.bottom <= 90.0
            and -180.0 <= self.left <= 180.0
            and -180.0 <= self.right <= 180.0
        ):
            raise ValueError(
                f"无效的范围: top={self.top}, left={self.left}, "
                f"bottom={self.bottom}, right={self.right}"
            )

    @classmethod
    def new(cls, top: float, left: float, bottom: float, right: float) -> Optional["BBox"]:
        """
        构造 BBox，任一边界无效时返回 None
        """
        try:
            return cls(top, left, bottom, right)
        except ValueError:
            return None

    @classmethod
    def from_points(cls, topleft: LatLon, bottomright: LatLon) -> "BBox":
        """
        由左上角、右下角两个点构造范围
        """
        return cls(topleft.lat, topleft.lon, bottomright.lat, bottomright.lon)

    @classmethod
    def from_tile(cls, tile) -> "BBox":
        """
        瓦片覆盖的范围
        """
        return tile.bbox()

    @classmethod
    def from_str(cls, text: str) -> "BBox":
        """
        解析 "minlon minlat maxlon maxlat"（空格或逗号分隔）

        Raises:
            TileParseError: 解析失败
        """
        from ..parsing import parse_bbox

        return parse_bbox(text)

    def as_wsen(self) -> Tuple[float, float, float, float]:
        """
        (west, south, east, north) 元组
        """
        return self.left, self.bottom, self.right, self.top

    def contains_point(self, point: LatLon) -> bool:
        """
        点是否在范围内

        上边界和左边界包含在内，下边界和右边界不包含，
        这样落在相邻瓦片公共边上的点只属于其中一个瓦片。
        """
        return (
            self.bottom < point.lat <= self.top
            and self.left <= point.lon < self.right
        )

    def overlaps_bbox(self, other: "BBox") -> bool:
        """
        两个范围是否有公共部分，只接触边界不算
        """
        return TileMath.is_bbox_intersect(self.as_wsen(), other.as_wsen())

    def tiles(self) -> Iterator:
        """
        从 zoom 0 开始，逐级遍历与该范围重叠的所有瓦片
        """
        from ..iterators.tiles import BBoxTilesIterator

        return BBoxTilesIterator(self)

    def metatiles(self, scale: int) -> Iterator:
        """
        从 zoom 0 到 32，遍历覆盖该范围的所有 metatile
        """
        from ..iterators.metatiles import MetatilesIterator

        return MetatilesIterator.for_bbox(scale, self)

    def tiles_for_zoom(self, zoom: int) -> Iterator:
        """
        某一缩放级别上覆盖该范围的瓦片，x 在外层循环，y 在内层循环

        跳过落在 x = 2^zoom 或 y = 2^zoom 边界上的无效坐标。
        """
        from .tile import Tile

        if not 0 <= zoom < ZOOM_LIMIT:
            return
        x1, y1 = TileMath.latlon_to_tile(self.top, self.left, zoom)
        x2, y2 = TileMath.latlon_to_tile(self.bottom, self.right, zoom)
        for x in range(x1, x2 + 1):
            for y in range(y1, y2 + 1):
                tile = Tile.new(zoom, x, y)
                if tile is not None:
                    yield tile

    def centre_point(self) -> LatLon:
        return LatLon((self.top + self.bottom) / 2.0, (self.left + self.right) / 2.0)

    def center_point(self) -> LatLon:
        return self.centre_point()

    def nw_corner(self) -> LatLon:
        return LatLon(self.top, self.left)

    def ne_corner(self) -> LatLon:
        return LatLon(self.top, self.right)

    def sw_corner(self) -> LatLon:
        return LatLon(self.bottom, self.left)

    def se_corner(self) -> LatLon:
        return LatLon(self.bottom, self.right)
