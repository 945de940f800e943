# slippy_tiles/core/tile.py

from dataclasses import dataclass
from typing import Optional, Tuple

from ..paths import PathScheme, format_path
from ..tile_math import MAX_ZOOM, TileMath, U32_MAX, ZOOM_LIMIT
from .bbox import BBox
from .latlon import LatLon


def is_integer(value) -> bool:
    """
    int 但不是 bool
    """
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_tile(zoom: int, x: int, y: int) -> bool:
    """
    zoom < 100，且 x、y 都是 [0, 2^zoom) 内的 u32
    """
    if not (is_integer(zoom) and is_integer(x) and is_integer(y)):
        return False
    if not 0 <= zoom < ZOOM_LIMIT:
        return False
    limit = 2 ** zoom
    return 0 <= x < limit and 0 <= y < limit and x <= U32_MAX and y <= U32_MAX


@dataclass(frozen=True)
class Tile:
    """
    一个瓦片（zoom/x/y）

    构造函数是唯一的校验入口：无效坐标会抛出 ValueError，
    Tile.new() 在同样的情况下返回 None。

    Args:
        zoom: 缩放级别，[0, 100)
        x: 瓦片 x 坐标，[0, 2^zoom)
        y: 瓦片 y 坐标，[0, 2^zoom)
    """
    zoom: int
    x: int
    y: int

    def __post_init__(self):
        if not is_valid_tile(self.zoom, self.x, self.y):
            raise ValueError(f"无效的瓦片: {self.zoom}/{self.x}/{self.y}")

    @classmethod
    def new(cls, zoom: int, x: int, y: int) -> Optional["Tile"]:
        """
        构造瓦片，坐标无效时返回 None

        >>> Tile.new(0, 3, 3) is None
        True
        """
        if not is_valid_tile(zoom, x, y):
            return None
        return cls._unchecked(zoom, x, y)

    @classmethod
    def _unchecked(cls, zoom: int, x: int, y: int) -> "Tile":
        # 调用方已经保证坐标有效（例如由有效的父瓦片推导出的子瓦片）
        tile = object.__new__(cls)
        object.__setattr__(tile, "zoom", zoom)
        object.__setattr__(tile, "x", x)
        object.__setattr__(tile, "y", y)
        return tile

    @classmethod
    def from_str(cls, text: str) -> "Tile":
        """
        解析 "zoom/x/y"

        Raises:
            GrammarMismatchError: 格式不对
            InvalidCoordinatesError: x、y 对该 zoom 无效
        """
        from ..parsing import parse_tile

        return parse_tile(text)

    @classmethod
    def from_tms(cls, tms: str) -> Optional["Tile"]:
        """
        从 TMS 风格的 URL 或路径构造瓦片，例如 "/10/547/380.png"

        只要求字符串以 zoom/x/y（可带扩展名）结尾，所以完整 URL 也可以。
        不匹配或坐标无效时返回 None。
        """
        from ..parsing import parse_tms

        return parse_tms(tms)

    # 父子关系

    def parent(self) -> Optional["Tile"]:
        """
        上一级中包含该瓦片的瓦片，zoom 0 没有父瓦片
        """
        if self.zoom == 0:
            return None
        return Tile._unchecked(self.zoom - 1, self.x // 2, self.y // 2)

    def subtiles(self) -> Optional[Tuple["Tile", "Tile", "Tile", "Tile"]]:
        """
        下一级覆盖该瓦片的 4 个子瓦片，顺序为 (0,0)、(1,0)、(0,1)、(1,1)

        到达最大缩放级别，或子瓦片坐标超出 u32 范围时返回 None。
        """
        if self.zoom >= MAX_ZOOM:
            return None
        x = 2 * self.x
        y = 2 * self.y
        if x + 1 > U32_MAX or y + 1 > U32_MAX:
            return None
        z = self.zoom + 1
        return (
            Tile._unchecked(z, x, y),
            Tile._unchecked(z, x + 1, y),
            Tile._unchecked(z, x, y + 1),
            Tile._unchecked(z, x + 1, y + 1),
        )

    def all_subtiles_iter(self):
        """
        逐级遍历该瓦片下的所有子孙瓦片
        """
        from ..iterators.tiles import AllSubTilesIterator

        return AllSubTilesIterator(self)

    def metatile(self, scale: int):
        """
        包含该瓦片的 metatile，scale 无效时返回 None
        """
        from .metatile import Metatile

        return Metatile.new(scale, self.zoom, self.x, self.y)

    def modtile_metatile(self):
        """
        包含该瓦片的 mod_tile metatile（8x8）
        """
        from .metatile import ModTileMetatile

        return ModTileMetatile.new(self.zoom, self.x, self.y)

    # 几何

    def centre_point(self) -> LatLon:
        return TileMath.tile_to_latlon(self.zoom, self.x + 0.5, self.y + 0.5)

    def center_point(self) -> LatLon:
        return self.centre_point()

    def nw_corner(self) -> LatLon:
        return TileMath.tile_to_latlon(self.zoom, self.x, self.y)

    def ne_corner(self) -> LatLon:
        return TileMath.tile_to_latlon(self.zoom, self.x + 1, self.y)

    def sw_corner(self) -> LatLon:
        return TileMath.tile_to_latlon(self.zoom, self.x, self.y + 1)

    def se_corner(self) -> LatLon:
        return TileMath.tile_to_latlon(self.zoom, self.x + 1, self.y + 1)

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
        west, south, east, north = TileMath.tile_bbox(self.zoom, self.x, self.y)
        return BBox(north, west, south, east)

    # 路径

    def zxy(self) -> str:
        return f"{self.zoom}/{self.x}/{self.y}"

    def zxy_path(self, ext: str) -> str:
        return format_path(PathScheme.ZXY, self.zoom, self.x, self.y, ext)

    def tc_path(self, ext: str) -> str:
        """
        TileCache 路径
        """
        return format_path(PathScheme.TC, self.zoom, self.x, self.y, ext)

    def mp_path(self, ext: str) -> str:
        """
        MapProxy 路径
        """
        return format_path(PathScheme.MP, self.zoom, self.x, self.y, ext)

    def ts_path(self, ext: str) -> str:
        """
        TileStash（safe）路径
        """
        return format_path(PathScheme.TS, self.zoom, self.x, self.y, ext)

    def mt_path(self, ext: str) -> str:
        """
        mod_tile 路径
        """
        return format_path(PathScheme.MT, self.zoom, self.x, self.y, ext)

    def path(self, scheme: PathScheme, ext: str) -> str:
        return format_path(scheme, self.zoom, self.x, self.y, ext)

    def world_file(self):
        """
        该瓦片的 World File（EPSG:3857）
        """
        from ..worldfile import WorldFile

        return WorldFile.for_tile(self.zoom, self.x, self.y)

    # 遍历

    @staticmethod
    def all():
        """
        从 0/0/0 开始按层遍历世界上所有的瓦片，每层内部按 Z-order 顺序
        """
        from ..iterators.tiles import AllTilesIterator

        return AllTilesIterator()

    @staticmethod
    def all_to_zoom(max_zoom: int):
        """
        从 zoom 0 遍历到 max_zoom（包含）的所有瓦片
        """
        from ..iterators.tiles import AllTilesToZoomIterator

        return AllTilesToZoomIterator(max_zoom)

    def __str__(self) -> str:
        return self.zxy()
