# slippy_tiles/core/latlon.py

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class LatLon:
    """
    世界上的一个点（WGS84 经纬度）

    Args:
        lat: 纬度，[-90, 90]
        lon: 经度，[-180, 180]

    Raises:
        ValueError: 经纬度超出范围
    """
    lat: float
    lon: float

    def __post_init__(self):
        if not (-90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0):
            raise ValueError(f"无效的经纬度: lat={self.lat}, lon={self.lon}")

    @classmethod
    def new(cls, lat: float, lon: float) -> Optional["LatLon"]:
        """
        构造 LatLon，经纬度无效时返回 None
        """
        try:
            return cls(lat, lon)
        except ValueError:
            return None

    def to_3857(self) -> Tuple[float, float]:
        """
        转换为 Web Mercator 米（SRID 3857）
        """
        from ..tile_math import TileMath

        return TileMath.to_web_mercator(self.lat, self.lon)

    def tile(self, zoom: int):
        """
        该点在某一缩放级别所在的瓦片

        Returns:
            Optional[Tile]: 点在 x = 2^zoom 的边界上（经度 180）时为 None
        """
        from ..tile_math import TileMath
        from .tile import Tile

        x, y = TileMath.latlon_to_tile(self.lat, self.lon, zoom)
        return Tile.new(zoom, x, y)
