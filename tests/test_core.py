"""slippy_tiles.core 测试：LatLon、BBox、Tile、Metatile、ModTileMetatile"""

import copy
import dataclasses
import pickle

import pytest

from slippy_tiles import (
    BBox,
    LatLon,
    Metatile,
    ModTileMetatile,
    ModTileScaleError,
    Tile,
)
from slippy_tiles.tile_math import U32_MAX, TileMath

WORLD_LAT = 85.0511287798


class TestLatLon:
    """LatLon"""

    def test_valid(self):
        p = LatLon(51.5, -0.12)
        assert p.lat == 51.5
        assert p.lon == -0.12

    @pytest.mark.parametrize("lat, lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0)])
    def test_out_of_range(self, lat, lon):
        with pytest.raises(ValueError):
            LatLon(lat, lon)
        assert LatLon.new(lat, lon) is None

    def test_boundaries_are_valid(self):
        assert LatLon.new(90.0, 180.0) is not None
        assert LatLon.new(-90.0, -180.0) is not None

    def test_to_3857(self):
        x, y = LatLon(54.9, 5.5).to_3857()
        assert x == pytest.approx(612257.20, rel=1e-6)
        assert y == pytest.approx(7342482.29, rel=1e-6)

    def test_tile(self):
        assert LatLon(51.50101, -0.12418).tile(18) == Tile(18, 130981, 87177)
        assert LatLon(51.50101, -0.12418).tile(0) == Tile(0, 0, 0)

    def test_tile_on_east_edge_is_none(self):
        """经度 180 落在 x = 2^zoom 上，没有对应的瓦片"""
        assert LatLon(0.0, 180.0).tile(1) is None

    def test_frozen(self):
        p = LatLon(1.0, 2.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.lat = 3.0


class TestBBox:
    """BBox"""

    def test_valid(self, ie_bbox):
        assert ie_bbox.top == 55.7
        assert ie_bbox.left == -11.32
        assert ie_bbox.bottom == 51.11
        assert ie_bbox.right == -4.97

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            BBox(91.0, 0.0, 0.0, 10.0)
        assert BBox.new(10.0, -181.0, 0.0, 10.0) is None
        assert BBox.new(10.0, 0.0, 0.0, 10.0) is not None

    def test_corners_and_centre(self):
        bbox = BBox(10.0, 0.0, 0.0, 20.0)
        assert bbox.nw_corner() == LatLon(10.0, 0.0)
        assert bbox.ne_corner() == LatLon(10.0, 20.0)
        assert bbox.sw_corner() == LatLon(0.0, 0.0)
        assert bbox.se_corner() == LatLon(0.0, 20.0)
        assert bbox.centre_point() == LatLon(5.0, 10.0)
        assert bbox.center_point() == bbox.centre_point()

    def test_from_points(self):
        bbox = BBox.from_points(LatLon(10.0, 0.0), LatLon(0.0, 20.0))
        assert bbox == BBox(10.0, 0.0, 0.0, 20.0)

    def test_from_tile(self):
        tile = Tile(7, 63, 42)
        assert BBox.from_tile(tile) == tile.bbox()

    def test_as_wsen(self):
        assert BBox(10.0, 0.0, 0.0, 20.0).as_wsen() == (0.0, 0.0, 20.0, 10.0)

    def test_contains_point(self):
        """上边界、左边界包含在内，下边界、右边界不包含"""
        tile_bbox = Tile(7, 63, 42).bbox()
        oxford = LatLon(51.75193, -1.25781)
        paris = LatLon(48.8566, 2.3522)
        assert tile_bbox.contains_point(oxford)
        assert not tile_bbox.contains_point(paris)

        assert tile_bbox.contains_point(tile_bbox.nw_corner())
        assert tile_bbox.contains_point(LatLon(tile_bbox.top, tile_bbox.left + 0.001))
        assert not tile_bbox.contains_point(tile_bbox.sw_corner())
        assert not tile_bbox.contains_point(tile_bbox.ne_corner())
        assert not tile_bbox.contains_point(tile_bbox.se_corner())

    def test_overlaps_bbox(self):
        tile_bbox = Tile(7, 63, 42).bbox()
        parent_bbox = Tile(7, 63, 42).parent().bbox()
        below_bbox = Tile(7, 63, 43).bbox()
        assert tile_bbox.overlaps_bbox(parent_bbox)
        assert parent_bbox.overlaps_bbox(tile_bbox)
        # 只有公共边
        assert not tile_bbox.overlaps_bbox(below_bbox)

    def test_tiles_for_zoom(self, ie_bbox):
        """x 在外层，y 在内层"""
        assert list(ie_bbox.tiles_for_zoom(5)) == [Tile(5, 14, 10), Tile(5, 15, 10)]
        assert len(list(ie_bbox.tiles_for_zoom(6))) == 6
        assert list(ie_bbox.tiles_for_zoom(0)) == [Tile(0, 0, 0)]

    def test_tiles_for_zoom_skips_east_edge(self):
        """经度 180 投影出的 x = 2^zoom 被跳过"""
        bbox = BBox(10.0, 170.0, 0.0, 180.0)
        assert list(bbox.tiles_for_zoom(1)) == [Tile(1, 1, 0), Tile(1, 1, 1)]

    def test_tiles_for_zoom_beyond_limit(self, ie_bbox):
        assert list(ie_bbox.tiles_for_zoom(100)) == []

    def test_inverted_bbox_is_accepted(self):
        """倒置的范围也能构造，但在较高的缩放级别上不覆盖任何瓦片"""
        inverted = BBox(10.0, 10.0, 20.0, 20.0)
        assert list(inverted.tiles_for_zoom(5)) == []


class TestTile:
    """Tile"""

    def test_valid(self):
        tile = Tile(3, 1, 2)
        assert (tile.zoom, tile.x, tile.y) == (3, 1, 2)

    @pytest.mark.parametrize("zoom, x, y", [
        (0, 1, 0),
        (0, 0, 1),
        (3, 8, 0),
        (100, 0, 0),
        (-1, 0, 0),
        (33, 2 ** 32, 0),
        (1, 0.5, 0),
        (1, 0, 1.0),
        (1.0, 0, 0),
        (1, True, 0),
    ])
    def test_invalid(self, zoom, x, y):
        with pytest.raises(ValueError):
            Tile(zoom, x, y)
        assert Tile.new(zoom, x, y) is None

    def test_limits(self):
        assert Tile.new(99, 0, 0) is not None
        assert Tile.new(33, U32_MAX, U32_MAX) is not None

    def test_equality_and_hash(self):
        assert Tile(1, 0, 0) == Tile.new(1, 0, 0)
        assert len({Tile(1, 0, 0), Tile(1, 0, 0), Tile(1, 1, 0)}) == 2
        assert Tile(0, 0, 0).subtiles()[0] == Tile(1, 0, 0)

    def test_frozen(self):
        tile = Tile(0, 0, 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tile.x = 1

    def test_world_tile_geometry(self):
        tile = Tile(0, 0, 0)
        assert tile.nw_corner().lat == pytest.approx(WORLD_LAT)
        assert tile.nw_corner().lon == pytest.approx(-180.0)
        assert tile.se_corner().lat == pytest.approx(-WORLD_LAT)
        assert tile.se_corner().lon == pytest.approx(180.0)
        assert tile.ne_corner().lon == pytest.approx(180.0)
        assert tile.sw_corner().lat == pytest.approx(-WORLD_LAT)
        assert tile.centre_point().lat == pytest.approx(0.0, abs=1e-9)
        assert tile.centre_point().lon == pytest.approx(0.0, abs=1e-9)
        assert tile.center_point() == tile.centre_point()
        assert tile.top == pytest.approx(WORLD_LAT)
        assert tile.bottom == pytest.approx(-WORLD_LAT)
        assert tile.left == pytest.approx(-180.0)
        assert tile.right == pytest.approx(180.0)

    def test_bbox_matches_corners(self):
        tile = Tile(7, 63, 42)
        bbox = tile.bbox()
        assert bbox.nw_corner() == tile.nw_corner()
        assert bbox.se_corner() == tile.se_corner()
        assert bbox.as_wsen() == TileMath.tile_bbox(7, 63, 42)

    def test_paths(self):
        tile = Tile(0, 0, 0)
        assert tile.tc_path("png") == "0/000/000/000/000/000/000.png"
        assert tile.mp_path("png") == "0/0000/0000/0000/0000.png"
        assert tile.ts_path("png") == "0/000/000/000/000.png"
        assert tile.mt_path("png") == "0/0/0/0/0/0.png"
        assert tile.zxy_path("png") == "0/0/0.png"

    def test_zxy(self):
        tile = Tile(3, 1, 2)
        assert tile.zxy() == "3/1/2"
        assert str(tile) == "3/1/2"

    def test_parent(self):
        assert Tile(1, 1, 1).parent() == Tile(0, 0, 0)
        assert Tile(7, 63, 42).parent() == Tile(6, 31, 21)
        assert Tile(0, 0, 0).parent() is None

    def test_subtiles(self):
        children = Tile(0, 0, 0).subtiles()
        assert children == (Tile(1, 0, 0), Tile(1, 1, 0), Tile(1, 0, 1), Tile(1, 1, 1))
        assert [c.tc_path("png") for c in children] == [
            "1/000/000/000/000/000/000.png",
            "1/000/000/001/000/000/000.png",
            "1/000/000/000/000/000/001.png",
            "1/000/000/001/000/000/001.png",
        ]
        assert all(c.parent() == Tile(0, 0, 0) for c in children)

    def test_parent_child_relation(self):
        for tile in (Tile(0, 0, 0), Tile(5, 14, 10), Tile(12, 2047, 1361)):
            for child in tile.subtiles():
                assert child.parent() == tile
                assert child in child.parent().subtiles()

    def test_subtiles_at_limits(self):
        """最大缩放级别和 u32 坐标边界上没有子瓦片"""
        assert Tile(99, 0, 0).subtiles() is None
        assert Tile(32, U32_MAX, 0).subtiles() is None
        assert Tile(31, 0, 0).subtiles() is not None

    def test_metatile(self):
        assert Tile(4, 9, 13).metatile(8) == Metatile(8, 4, 8, 8)
        assert Tile(4, 9, 13).metatile(3) is None

    def test_modtile_metatile(self):
        mt = Tile(5, 9, 10).modtile_metatile()
        assert mt.metatile == Metatile(8, 5, 8, 8)
        assert mt.path("png") == "5/0/0/0/0/136.png"

    def test_world_file(self):
        wf = Tile(6, 33, 21).world_file()
        assert str(wf) == (
            "2445.98490512564\n0\n0\n-2445.98490512564\n626172.1357121654\n6887893.4928338025\n"
        )


class TestMetatile:
    """Metatile"""

    def test_valid(self):
        mt = Metatile(8, 3, 0, 0)
        assert (mt.scale, mt.zoom, mt.x, mt.y) == (8, 3, 0, 0)

    def test_coordinates_are_aligned(self):
        assert Metatile(8, 4, 1, 1) == Metatile(8, 4, 0, 0)
        assert Metatile(8, 10, 15, 17).x == 8
        assert Metatile(8, 10, 15, 17).y == 16

    @pytest.mark.parametrize("scale, zoom, x, y", [
        (0, 0, 0, 0),
        (3, 0, 0, 0),
        (256, 0, 0, 0),
        (8, 0, 10, 10),
        (8, 100, 0, 0),
        (8.0, 1, 0, 0),
        (8, 1, 0.5, 0),
    ])
    def test_invalid(self, scale, zoom, x, y):
        with pytest.raises(ValueError):
            Metatile(scale, zoom, x, y)
        assert Metatile.new(scale, zoom, x, y) is None

    def test_size(self):
        assert Metatile(8, 0, 0, 0).size() == 1
        assert Metatile(8, 1, 0, 0).size() == 2
        assert Metatile(8, 10, 0, 0).size() == 8

    def test_world_metatile_geometry(self):
        mt = Metatile(8, 0, 0, 0)
        assert mt.nw_corner().lat == pytest.approx(WORLD_LAT)
        assert mt.se_corner().lat == pytest.approx(-WORLD_LAT)
        assert mt.se_corner().lon == pytest.approx(180.0)
        assert mt.bbox() == Tile(0, 0, 0).bbox()

    def test_centre_point(self):
        mt = Metatile(8, 1, 0, 0)
        assert mt.centre_point().lat == pytest.approx(0.0, abs=1e-9)
        assert mt.centre_point().lon == pytest.approx(0.0, abs=1e-9)

    def test_tiles(self):
        """x 在外层，y 在内层"""
        assert Metatile(8, 0, 0, 0).tiles() == [Tile(0, 0, 0)]
        assert Metatile(8, 1, 0, 0).tiles() == [
            Tile(1, 0, 0), Tile(1, 0, 1), Tile(1, 1, 0), Tile(1, 1, 1),
        ]
        expected = [Tile(2, x, y) for x in range(4) for y in range(4)]
        assert Metatile(8, 2, 0, 0).tiles() == expected

    def test_tiles_full_size(self):
        tiles = Metatile(8, 10, 8, 16).tiles()
        assert len(tiles) == 64
        assert tiles[0] == Tile(10, 8, 16)
        assert tiles[-1] == Tile(10, 15, 23)

    def test_whole_pyramid_at_zoom_3(self):
        """zoom 3 只有 8 个瓦片宽，一个 metatile 覆盖整个世界"""
        mt = Metatile(8, 3, 3, 2)
        assert (mt.x, mt.y) == (0, 0)
        assert mt.size() == 8

    def test_str(self):
        assert str(Metatile(8, 4, 1, 1)) == "8 4/0/0"

    def test_all_rejects_invalid_scale(self):
        with pytest.raises(ValueError):
            Metatile.all(3)


class TestModTileMetatile:
    """ModTileMetatile"""

    def test_path(self):
        assert ModTileMetatile.new(0, 0, 0).path("png") == "0/0/0/0/0/0.png"

    def test_invalid_coordinates(self):
        assert ModTileMetatile.new(0, 1, 1) is None

    def test_from_metatile(self):
        mt = ModTileMetatile.from_metatile(Metatile(8, 5, 8, 8))
        assert mt == ModTileMetatile.new(5, 9, 10)

    def test_only_scale_8(self):
        with pytest.raises(ModTileScaleError):
            ModTileMetatile.from_metatile(Metatile(16, 5, 0, 0))
        # 也是 ValueError
        with pytest.raises(ValueError):
            ModTileMetatile(Metatile(4, 5, 0, 0))

    def test_delegates_to_metatile(self):
        mt = ModTileMetatile.new(5, 9, 10)
        assert mt.scale == 8
        assert (mt.zoom, mt.x, mt.y) == (5, 8, 8)
        assert len(mt.tiles()) == 64
        assert mt.bbox() == Metatile(8, 5, 8, 8).bbox()
        assert str(mt) == "8 5/8/8"

    def test_immutable(self):
        mt = ModTileMetatile.new(0, 0, 0)
        with pytest.raises(AttributeError):
            mt.zoom = 3

    def test_hashable(self):
        assert len({ModTileMetatile.new(5, 9, 10), ModTileMetatile.new(5, 8, 8)}) == 1

    def test_copy(self):
        mt = ModTileMetatile.new(10, 488, 328)
        assert copy.copy(mt) == mt
        assert copy.deepcopy(mt) == mt
        assert copy.deepcopy(mt).path("png") == mt.path("png")

    def test_pickle(self):
        mt = ModTileMetatile.new(10, 488, 328)
        restored = pickle.loads(pickle.dumps(mt))
        assert restored == mt
        assert isinstance(restored, ModTileMetatile)
        assert restored.metatile == Metatile(8, 10, 488, 328)
