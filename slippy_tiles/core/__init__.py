# slippy_tiles/core/__init__.py
"""
坐标值类型：LatLon、BBox、Tile、Metatile、ModTileMetatile
"""

from .latlon import LatLon
from .bbox import BBox
from .tile import Tile
from .metatile import Metatile, ModTileMetatile

__all__ = ['LatLon', 'BBox', 'Tile', 'Metatile', 'ModTileMetatile']
