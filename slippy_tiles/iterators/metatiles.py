# slippy_tiles/iterators/metatiles.py

import os
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple, Union

from loguru import logger

from ..core.bbox import BBox
from ..core.metatile import Metatile, is_valid_scale
from ..errors import TileParseError
from ..tile_math import MAX_ZOOM, TileMath, tiles_across
from ..zorder import xy_to_zorder, zorder_to_xy

# metatile 遍历默认的最大缩放级别
DEFAULT_MAX_ZOOM = 32


@dataclass
class ComputedGrid:
    """
    按 Z-order 计算出的 metatile 网格

    width_height、start_xy 都是 metatile 坐标（即瓦片坐标 // scale），
    bbox 为 None 时表示整个世界，此时两者也为 None。
    """
    scale: int
    zoom: int
    max_zoom: int
    zorder: int = 0
    bbox: Optional[BBox] = None
    width_height: Optional[Tuple[int, int]] = None
    start_xy: Optional[Tuple[int, int]] = None


@dataclass
class FileReplay:
    """
    从文件逐行读取 "<scale> <zoom>/<x>/<y>"

    文件以二进制打开，每行单独按 UTF-8 解码。
    """
    handle: Optional[BinaryIO]
    total: int


class MetatilesIterator:
    """
    metatile 迭代器

    两种数据源二选一：
    - ComputedGrid：按层遍历整个世界或某个范围内的 metatile，
      每层内部按 Z-order 顺序；
    - FileReplay：按行回放一个 metatile 列表文件。

    作为上下文管理器使用时，退出时会关闭回放文件。
    """

    def __init__(self, state: Union[ComputedGrid, FileReplay]):
        if isinstance(state, ComputedGrid) and not is_valid_scale(state.scale):
            raise ValueError(f"metatile scale 必须是 2 的幂: {state.scale}")
        self.state = state
        if isinstance(state, ComputedGrid):
            # zoom 超过上限时没有有效的 metatile
            state.max_zoom = min(state.max_zoom, MAX_ZOOM)
            self._compute_zoom_grid()

    @classmethod
    def all(cls, scale: int) -> "MetatilesIterator":
        """
        世界上所有的 metatile，zoom 0 到 32
        """
        return cls(ComputedGrid(scale=scale, zoom=0, max_zoom=DEFAULT_MAX_ZOOM))

    @classmethod
    def for_bbox(cls, scale: int, bbox: BBox) -> "MetatilesIterator":
        """
        覆盖某个范围的所有 metatile，zoom 0 到 32
        """
        return cls.for_bbox_zoom(scale, bbox, 0, DEFAULT_MAX_ZOOM)

    @classmethod
    def for_bbox_zoom(
        cls, scale: int, bbox: Optional[BBox], min_zoom: int, max_zoom: int
    ) -> "MetatilesIterator":
        """
        覆盖某个范围的 metatile，zoom 从 min_zoom 到 max_zoom（包含）

        Args:
            scale: metatile 大小
            bbox: 范围，None 表示整个世界
            min_zoom: 起始缩放级别
            max_zoom: 结束缩放级别

        Returns:
            MetatilesIterator
        """
        return cls(
            ComputedGrid(scale=scale, zoom=min_zoom, max_zoom=max_zoom, bbox=bbox)
        )

    @classmethod
    def from_filelist(cls, path: str) -> "MetatilesIterator":
        """
        回放 metatile 列表文件，每行一个 "<scale> <zoom>/<x>/<y>"

        先完整读一遍文件统计行数（total()），再重新打开用于回放。
        遇到文件结尾或无法解析的行时遍历结束。

        Raises:
            OSError: 文件无法打开
        """
        with open(path, "rb") as f:
            total = sum(1 for _ in f)

        handle = open(path, "rb")
        logger.debug(f"打开 metatile 列表 {os.path.abspath(path)}，共 {total} 行")
        return cls(FileReplay(handle=handle, total=total))

    def total(self) -> Optional[int]:
        """
        回放文件的总行数，计算模式下为 None
        """
        if isinstance(self.state, FileReplay):
            return self.state.total
        return None

    # 计算模式

    def _compute_zoom_grid(self):
        # 根据当前 zoom 更新范围在 metatile 坐标下的起点和宽高
        grid = self.state
        if grid.bbox is None:
            return

        scale = grid.scale
        x1, y1 = TileMath.latlon_to_tile(grid.bbox.top, grid.bbox.left, grid.zoom)
        x2, y2 = TileMath.latlon_to_tile(grid.bbox.bottom, grid.bbox.right, grid.zoom)
        x1, y1 = x1 // scale, y1 // scale
        x2, y2 = x2 // scale, y2 // scale

        grid.start_xy = (x1, y1)
        grid.width_height = (x2 - x1 + 1, y2 - y1 + 1)

    def _next_zoom(self):
        grid = self.state
        grid.zoom += 1
        grid.zorder = 0
        self._compute_zoom_grid()
        logger.debug(f"MetatilesIterator 进入 zoom {grid.zoom}")

    def _next_from_grid(self) -> Optional[Metatile]:
        grid = self.state
        scale = grid.scale

        while grid.zoom <= grid.max_zoom:
            if grid.width_height is None:
                # 整个世界，最后一列/行可能不足 scale 个瓦片
                num_tiles = tiles_across(grid.zoom)
                size = num_tiles // scale + (1 if num_tiles % scale else 0)
                width, height = size, size
            else:
                width, height = grid.width_height

            if width <= 0 or height <= 0:
                # 倒置的范围在这一层没有 metatile
                self._next_zoom()
                continue

            if grid.zorder > xy_to_zorder(width - 1, height - 1):
                self._next_zoom()
                continue

            i, j = zorder_to_xy(grid.zorder)
            grid.zorder += 1

            # 非正方形范围在 Z-order 方形中会有落在外面的格子
            if i >= width or j >= height:
                continue

            if grid.start_xy is not None:
                i += grid.start_xy[0]
                j += grid.start_xy[1]

            metatile = Metatile.new(scale, grid.zoom, i * scale, j * scale)
            if metatile is None:
                # 范围边界投影到 x = 2^zoom 上
                continue
            return metatile

        return None

    # 回放模式

    def _next_from_file(self) -> Optional[Metatile]:
        replay = self.state
        if replay.handle is None:
            return None

        line = replay.handle.readline()
        if not line:
            self.close()
            return None

        try:
            return Metatile.from_str(line.decode("utf-8").rstrip())
        except UnicodeDecodeError as e:
            logger.warning(f"metatile 列表中有无法解码的行，停止回放: {e}")
            self.close()
            return None
        except TileParseError as e:
            logger.warning(f"metatile 列表中有无法解析的行，停止回放: {e}")
            self.close()
            return None

    def close(self):
        """
        关闭回放文件，计算模式下什么都不做
        """
        if isinstance(self.state, FileReplay) and self.state.handle is not None:
            self.state.handle.close()
            self.state.handle = None
            logger.debug("关闭 metatile 列表")

    def __iter__(self):
        return self

    def __next__(self) -> Metatile:
        if isinstance(self.state, FileReplay):
            metatile = self._next_from_file()
        else:
            metatile = self._next_from_grid()
        if metatile is None:
            raise StopIteration
        return metatile

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __del__(self):
        state = getattr(self, "state", None)
        if isinstance(state, FileReplay) and state.handle is not None:
            state.handle.close()
