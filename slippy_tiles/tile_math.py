# slippy_tiles/tile_math.py
import math
from typing import Tuple

# Tile 的 zoom 必须小于该值
ZOOM_LIMIT = 100
MAX_ZOOM = ZOOM_LIMIT - 1

U32_MAX = 2 ** 32 - 1
U64_MAX = 2 ** 64 - 1

TILE_SIZE = 256

# EPSG:3857 平面半宽（米）
MERC_EXTENT = 20037508.342789244
# to_3857 使用的近似半宽
MERC_EXTENT_APPROX = 20037508.34

# Web Mercator 可表示的最大纬度（弧度），约 85.0511°
MAX_LAT_RAD = math.atan(math.sinh(math.pi))


def tiles_across(zoom: int) -> int:
    """
    某一缩放级别每行的瓦片数，受 u32 坐标范围限制
    """
    return min(2 ** zoom, U32_MAX + 1)


class TileMath:
    """
    瓦片坐标计算工具类（Web Mercator / XYZ）
    """

    @staticmethod
    def tile_to_latlon(zoom: int, x: float, y: float):
        """
        瓦片坐标（可为小数）-> LatLon

        角点使用整数偏移，中心点使用 +0.5

        Args:
            zoom: 缩放级别
            x: 瓦片 x 坐标
            y: 瓦片 y 坐标

        Returns:
            LatLon: 该点的经纬度
        """
        from .core.latlon import LatLon

        n = 2.0 ** zoom
        lon = x / n * 360.0 - 180.0
        lat_rad = math.atan(math.sinh(math.pi * (1 - 2 * y / n)))
        lat = math.degrees(lat_rad)

        # 有效瓦片坐标一定得到有效经纬度，这里失败说明有 bug
        return LatLon(lat, lon)

    @staticmethod
    def latlon_to_tile(lat: float, lon: float, zoom: int) -> Tuple[int, int]:
        """
        经纬度 -> 瓦片坐标 (x, y)

        纬度会被静默限制在 Web Mercator 范围内（约 ±85.0511°），
        结果向零截断而不是四舍五入。

        Args:
            lat: 纬度
            lon: 经度
            zoom: 缩放级别

        Returns:
            Tuple[int, int]: 瓦片坐标
        """
        lat_rad = math.radians(lat)
        # 限制纬度避免溢出
        lat_rad = max(min(lat_rad, MAX_LAT_RAD), -MAX_LAT_RAD)

        n = 2.0 ** zoom
        x_tile = n * ((lon + 180.0) / 360.0)
        y_tile = (
            n * (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0
        )

        # 负数饱和到 0
        return max(0, int(x_tile)), max(0, int(y_tile))

    @staticmethod
    def to_web_mercator(lat: float, lon: float) -> Tuple[float, float]:
        """
        经纬度 -> Web Mercator 米（EPSG:3857）

        Args:
            lat: 纬度
            lon: 经度

        Returns:
            Tuple[float, float]: (x, y) 米
        """
        x = lon * MERC_EXTENT_APPROX / 180.0
        y = math.log(math.tan((90.0 + lat) * math.pi / 360.0)) / (math.pi / 180.0)
        y = y * MERC_EXTENT_APPROX / 180.0
        return x, y

    @staticmethod
    def merc_location_to_tile_coords(
        x: float, y: float, zoom: int
    ) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """
        Web Mercator 米 -> (瓦片坐标, 瓦片内像素坐标)

        瓦片坐标从投影平面的西南角开始计数；像素坐标对应 256x256 图片，
        像素 y 翻转为图片坐标系（向下递增）。

        Args:
            x: 米
            y: 米
            zoom: 缩放级别

        Returns:
            ((tile_x, tile_y), (pixel_x, pixel_y))
        """
        num_tiles = 2.0 ** zoom
        tile_width = (2.0 * MERC_EXTENT) / num_tiles

        tile_x = int((x + MERC_EXTENT) / tile_width)
        tile_y = int((y + MERC_EXTENT) / tile_width)

        frac_x = ((x + MERC_EXTENT) % tile_width) / tile_width
        frac_y = ((y + MERC_EXTENT) % tile_width) / tile_width
        pixel_x = int(frac_x * TILE_SIZE)
        pixel_y = max(0, int(TILE_SIZE - frac_y * TILE_SIZE - 1))

        return (tile_x, tile_y), (pixel_x, pixel_y)

    @staticmethod
    def tile_bbox(zoom: int, x: int, y: int) -> Tuple[float, float, float, float]:
        """
        获取瓦片的边界范围

        Returns:
            (west, south, east, north)
        """
        nw = TileMath.tile_to_latlon(zoom, x, y)
        se = TileMath.tile_to_latlon(zoom, x + 1, y + 1)
        return nw.lon, se.lat, se.lon, nw.lat

    @staticmethod
    def is_bbox_intersect(tile_bbox, search_bbox) -> bool:
        """
        两个 (west, south, east, north) 范围是否相交，只接触边界不算相交
        """
        w1, s1, e1, n1 = tile_bbox
        w2, s2, e2, n2 = search_bbox

        # 不相交的四种情形
        if (w1 >= e2) or (e1 <= w2) or (s1 >= n2) or (n1 <= s2):
            return False
        return True
