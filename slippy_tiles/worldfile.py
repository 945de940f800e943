# slippy_tiles/worldfile.py
"""
World File（.pgw / .jgw 等）

六行文本依次为：x 方向像素大小、y 方向旋转、x 方向旋转、y 方向像素大小（负数）、
左上角像素中心的 x、y 坐标。这里坐标系为 EPSG:3857。
"""
import os
from dataclasses import dataclass

from .tile_math import MERC_EXTENT, TILE_SIZE


def _format_number(value: float) -> str:
    # 整数值不带 ".0"，其余使用能还原该浮点数的最短表示
    if value == int(value):
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class WorldFile:
    x_scale: float
    y_scale: float
    x_skew: float
    y_skew: float
    x_coord: float
    y_coord: float

    @classmethod
    def for_tile(cls, zoom: int, x: int, y: int) -> "WorldFile":
        """
        256x256 瓦片图片在 Web Mercator 下的 World File

        Args:
            zoom: 缩放级别
            x: 瓦片 x 坐标
            y: 瓦片 y 坐标

        Returns:
            WorldFile
        """
        tile_merc_width = (2.0 * MERC_EXTENT) / 2.0 ** zoom
        scale = tile_merc_width / TILE_SIZE
        return cls(
            x_scale=scale,
            y_scale=-scale,
            x_skew=0.0,
            y_skew=0.0,
            x_coord=tile_merc_width * x - MERC_EXTENT,
            y_coord=-tile_merc_width * y + MERC_EXTENT,
        )

    def lines(self):
        return [
            _format_number(v)
            for v in (
                self.x_scale,
                self.y_skew,
                self.x_skew,
                self.y_scale,
                self.x_coord,
                self.y_coord,
            )
        ]

    def __str__(self) -> str:
        return "".join(f"{line}\n" for line in self.lines())

    def write(self, path: str):
        """
        写入文件，目录不存在时自动创建
        """
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(str(self))
