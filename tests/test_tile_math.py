"""slippy_tiles.tile_math 测试"""

import pytest

from slippy_tiles.tile_math import (
    MERC_EXTENT,
    TileMath,
    U32_MAX,
    tiles_across,
)


class TestLatLonToTile:
    """经纬度 -> 瓦片坐标"""

    @pytest.mark.parametrize("zoom, expected", [
        (18, (130981, 87177)),
        (17, (65490, 43588)),
        (16, (32745, 21794)),
        (15, (16372, 10897)),
        (14, (8186, 5448)),
        (13, (4093, 2724)),
        (11, (1023, 681)),
        (10, (511, 340)),
        (9, (255, 170)),
        (8, (127, 85)),
        (7, (63, 42)),
        (6, (31, 21)),
        (5, (15, 10)),
        (4, (7, 5)),
        (3, (3, 2)),
        (2, (1, 1)),
        (0, (0, 0)),
    ])
    def test_london(self, zoom, expected):
        """伦敦市中心在各级别所在的瓦片"""
        assert TileMath.latlon_to_tile(51.50101, -0.12418, zoom) == expected

    def test_dublin_corners(self):
        """都柏林范围两个角点"""
        assert TileMath.latlon_to_tile(53.61, -6.66, 9) == (246, 165)
        assert TileMath.latlon_to_tile(53.08, -5.98, 9) == (247, 166)
        assert TileMath.latlon_to_tile(53.61, -6.66, 10) == (493, 330)
        assert TileMath.latlon_to_tile(53.08, -5.98, 10) == (494, 333)

    def test_latitude_is_clamped(self):
        """超出 Web Mercator 范围的纬度被限制，不会抛出异常"""
        assert TileMath.latlon_to_tile(90.0, 0.0, 3)[1] == 0
        assert TileMath.latlon_to_tile(89.9, 0.0, 3)[1] == 0

    def test_result_floored_at_zero(self):
        """西边界得到 x = 0"""
        assert TileMath.latlon_to_tile(0.0, -180.0, 5)[0] == 0

    def test_east_edge_is_one_past_the_end(self):
        """经度 180 投影到 x = 2^zoom"""
        assert TileMath.latlon_to_tile(0.0, 180.0, 4)[0] == 16


class TestTileToLatLon:
    """瓦片坐标 -> 经纬度"""

    def test_world_corners(self):
        """zoom 0 的两个角点"""
        nw = TileMath.tile_to_latlon(0, 0, 0)
        se = TileMath.tile_to_latlon(0, 1, 1)
        assert nw.lat == pytest.approx(85.0511287798)
        assert nw.lon == pytest.approx(-180.0)
        assert se.lat == pytest.approx(-85.0511287798)
        assert se.lon == pytest.approx(180.0)

    def test_fractional_coordinates(self):
        """小数坐标得到中心点"""
        centre = TileMath.tile_to_latlon(0, 0.5, 0.5)
        assert centre.lat == pytest.approx(0.0, abs=1e-9)
        assert centre.lon == pytest.approx(0.0, abs=1e-9)

    def test_tile_bbox(self):
        """tile_bbox 返回 (west, south, east, north)"""
        west, south, east, north = TileMath.tile_bbox(1, 0, 0)
        assert west == pytest.approx(-180.0)
        assert south == pytest.approx(0.0, abs=1e-9)
        assert east == pytest.approx(0.0, abs=1e-9)
        assert north == pytest.approx(85.0511287798)


class TestWebMercator:
    """EPSG:3857 换算"""

    def test_to_web_mercator(self):
        x, y = TileMath.to_web_mercator(54.9, 5.5)
        assert x == pytest.approx(612257.20, rel=1e-6)
        assert y == pytest.approx(7342482.29, rel=1e-6)

    def test_origin(self):
        x, y = TileMath.to_web_mercator(0.0, 0.0)
        assert x == pytest.approx(0.0, abs=1e-6)
        assert y == pytest.approx(0.0, abs=1e-6)

    def test_merc_location_to_tile_coords_origin(self):
        """投影平面原点是 zoom 1 右上方瓦片的左下角"""
        (tile_x, tile_y), (pixel_x, pixel_y) = TileMath.merc_location_to_tile_coords(0.0, 0.0, 1)
        assert (tile_x, tile_y) == (1, 1)
        assert (pixel_x, pixel_y) == (0, 255)

    def test_merc_location_to_tile_coords_south_west(self):
        """瓦片坐标从西南角开始计数"""
        tile, pixel = TileMath.merc_location_to_tile_coords(-MERC_EXTENT, -MERC_EXTENT, 0)
        assert tile == (0, 0)
        assert pixel == (0, 255)


class TestBBoxIntersect:
    """(west, south, east, north) 相交判断"""

    def test_overlapping(self):
        assert TileMath.is_bbox_intersect((0, 0, 10, 10), (5, 5, 15, 15))

    def test_touching_edges_do_not_intersect(self):
        assert not TileMath.is_bbox_intersect((0, 0, 10, 10), (10, 0, 20, 10))
        assert not TileMath.is_bbox_intersect((0, 0, 10, 10), (0, 10, 10, 20))

    def test_disjoint(self):
        assert not TileMath.is_bbox_intersect((0, 0, 1, 1), (5, 5, 6, 6))


class TestTilesAcross:
    """每行瓦片数"""

    def test_small_zooms(self):
        assert tiles_across(0) == 1
        assert tiles_across(1) == 2
        assert tiles_across(10) == 1024

    def test_capped_at_u32_range(self):
        assert tiles_across(32) == U32_MAX + 1
        assert tiles_across(40) == U32_MAX + 1
