# slippy_tiles/iterators/__init__.py
"""
瓦片 / metatile 迭代器
"""

from .base import SizeHint, UNKNOWN_SIZE
from .tiles import (
    AllTilesIterator,
    AllTilesToZoomIterator,
    AllSubTilesIterator,
    BBoxTilesIterator,
)
from .metatiles import MetatilesIterator, ComputedGrid, FileReplay

__all__ = [
    'SizeHint',
    'UNKNOWN_SIZE',
    'AllTilesIterator',
    'AllTilesToZoomIterator',
    'AllSubTilesIterator',
    'BBoxTilesIterator',
    'MetatilesIterator',
    'ComputedGrid',
    'FileReplay',
]
