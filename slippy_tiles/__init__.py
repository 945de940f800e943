# slippy_tiles/__init__.py
"""
slippy map 瓦片坐标库

Web Mercator 下的瓦片 / metatile 坐标、经纬度换算、按范围遍历，
以及 TileCache、MapProxy、TileStash、mod_tile 的缓存目录结构。
"""

__version__ = "0.1.0"

from .core import LatLon, BBox, Tile, Metatile, ModTileMetatile
from .errors import (
    SlippyTilesError,
    TileParseError,
    GrammarMismatchError,
    InvalidCoordinatesError,
    ModTileScaleError,
    ConfigError,
)
from .iterators import (
    SizeHint,
    UNKNOWN_SIZE,
    AllTilesIterator,
    AllTilesToZoomIterator,
    AllSubTilesIterator,
    BBoxTilesIterator,
    MetatilesIterator,
)
from .paths import PathScheme, xy_to_tc, xy_to_mp, xy_to_ts, xy_to_mt
from .sizes import (
    num_tiles_in_zoom,
    remaining_in_this_zoom,
    size_bbox_zoom,
    size_bbox_zoom_metatiles,
)
from .tile_math import TileMath
from .worldfile import WorldFile
from .zorder import xy_to_zorder, zorder_to_xy

__all__ = [
    'LatLon',
    'BBox',
    'Tile',
    'Metatile',
    'ModTileMetatile',
    'SlippyTilesError',
    'TileParseError',
    'GrammarMismatchError',
    'InvalidCoordinatesError',
    'ModTileScaleError',
    'ConfigError',
    'SizeHint',
    'UNKNOWN_SIZE',
    'AllTilesIterator',
    'AllTilesToZoomIterator',
    'AllSubTilesIterator',
    'BBoxTilesIterator',
    'MetatilesIterator',
    'PathScheme',
    'xy_to_tc',
    'xy_to_mp',
    'xy_to_ts',
    'xy_to_mt',
    'num_tiles_in_zoom',
    'remaining_in_this_zoom',
    'size_bbox_zoom',
    'size_bbox_zoom_metatiles',
    'TileMath',
    'WorldFile',
    'xy_to_zorder',
    'zorder_to_xy',
]
