# slippy_tiles/iterators/tiles.py

from collections import deque
from typing import Deque, List

from loguru import logger

from ..core.bbox import BBox
from ..core.tile import Tile
from ..sizes import checked_add, num_tiles_in_zoom, remaining_in_this_zoom
from ..tile_math import tiles_across
from ..zorder import zorder_to_xy
from .base import SizeHint, UNKNOWN_SIZE, exact


class AllTilesIterator:
    """
    遍历世界上所有的瓦片

    按层（广度优先）输出，每层内部按 Z-order 顺序；
    游标是 (zoom, zorder)，只受 zoom 上限约束。
    """

    def __init__(self):
        self.next_zoom = 0
        self.next_zorder = 0

    def __iter__(self):
        return self

    def __next__(self) -> Tile:
        zoom = self.next_zoom
        x, y = zorder_to_xy(self.next_zorder)
        tile = Tile.new(zoom, x, y)
        if tile is None:
            raise StopIteration

        max_tile_no = tiles_across(zoom) - 1
        if x == max_tile_no and y == max_tile_no:
            # 本层结束
            self.next_zoom = zoom + 1
            self.next_zorder = 0
            logger.debug(f"AllTilesIterator 进入 zoom {self.next_zoom}")
        else:
            self.next_zorder += 1

        return tile


class AllTilesToZoomIterator:
    """
    遍历 zoom 0 到 max_zoom（包含）的所有瓦片

    每层内部 y 变化最快，其次是 x。
    """

    def __init__(self, max_zoom: int):
        self.max_zoom = max_zoom
        self.next_zoom = 0
        self.next_x = 0
        self.next_y = 0

    def __iter__(self):
        return self

    def __next__(self) -> Tile:
        if self.next_zoom > self.max_zoom:
            raise StopIteration

        tile = Tile.new(self.next_zoom, self.next_x, self.next_y)
        if tile is None:
            raise StopIteration

        max_tile_no = tiles_across(self.next_zoom) - 1
        if self.next_y < max_tile_no:
            self.next_y += 1
        elif self.next_x < max_tile_no:
            self.next_x += 1
            self.next_y = 0
        else:
            self.next_zoom += 1
            self.next_x = 0
            self.next_y = 0

        return tile

    def size_hint(self) -> SizeHint:
        """
        剩余瓦片数

        Returns:
            SizeHint: 能用 u64 精确表示时为 (n, n)，否则为 UNKNOWN_SIZE
        """
        if self.next_zoom > self.max_zoom:
            return exact(0)

        total = remaining_in_this_zoom(self.next_zoom, self.next_x, self.next_y)
        if total is None:
            return UNKNOWN_SIZE

        for zoom in range(self.next_zoom + 1, self.max_zoom + 1):
            total = checked_add(total, num_tiles_in_zoom(zoom))
            if total is None:
                return UNKNOWN_SIZE

        return exact(total)

    def __length_hint__(self):
        hint = self.size_hint()
        if hint.upper is None:
            return NotImplemented
        return hint.upper


class AllSubTilesIterator:
    """
    遍历某个瓦片下的所有子孙瓦片

    用 FIFO 队列实现：取出队首瓦片时把它的 4 个子瓦片加入队尾，
    所以输出是逐层展开的整棵子树，只有到达最大缩放级别时队列才会变空。
    """

    def __init__(self, base_tile: Tile):
        self._tiles: Deque[Tile] = deque(base_tile.subtiles() or ())

    def __iter__(self):
        return self

    def __next__(self) -> Tile:
        if not self._tiles:
            raise StopIteration
        tile = self._tiles.popleft()
        subtiles = tile.subtiles()
        if subtiles is not None:
            self._tiles.extend(subtiles)
        return tile


class BBoxTilesIterator:
    """
    从 zoom 0 开始逐层遍历与范围重叠的瓦片

    只保存当前一层中与范围重叠的瓦片，输出完后再展开它们的子瓦片，
    所以占用的内存取决于范围大小而不是瓦片总数。
    """

    def __init__(self, bbox: BBox):
        self.bbox = bbox
        # 所有东西都在 0/0/0 里
        self.tiles: List[Tile] = [Tile(0, 0, 0)]
        self.tile_index = 0

    def __iter__(self):
        return self

    def _expand(self):
        new_tiles = []
        for tile in self.tiles:
            subtiles = tile.subtiles()
            if subtiles is None:
                continue
            for sub in subtiles:
                if self.bbox.overlaps_bbox(sub.bbox()):
                    new_tiles.append(sub)
        self.tiles = new_tiles
        self.tile_index = 0
        if new_tiles:
            logger.debug(
                f"BBoxTilesIterator zoom {new_tiles[0].zoom}: {len(new_tiles)} 个瓦片"
            )

    def __next__(self) -> Tile:
        if self.tile_index >= len(self.tiles):
            self._expand()
            if not self.tiles:
                raise StopIteration

        tile = self.tiles[self.tile_index]
        self.tile_index += 1
        return tile
