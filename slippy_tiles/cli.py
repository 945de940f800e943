# slippy_tiles/cli.py
import argparse
from itertools import islice

from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import load_config
from .core import BBox, Tile
from .core.metatile import is_valid_scale
from .errors import SlippyTilesError
from .iterators import AllTilesToZoomIterator, MetatilesIterator
from .log import setup_logging
from .paths import PathScheme
from .sizes import size_bbox_zoom, size_bbox_zoom_metatiles
from .tile_math import MAX_ZOOM

console = Console()


def _zoom_range(args, cfg):
    min_zoom = cfg["min_zoom"] if args.min_zoom is None else args.min_zoom
    max_zoom = cfg["max_zoom"] if args.max_zoom is None else args.max_zoom
    if not 0 <= min_zoom <= MAX_ZOOM or not 0 <= max_zoom <= MAX_ZOOM:
        raise SlippyTilesError(f"缩放级别必须在 0 到 {MAX_ZOOM} 之间: {min_zoom}-{max_zoom}")
    if min_zoom > max_zoom:
        raise SlippyTilesError(f"min-zoom 不能大于 max-zoom: {min_zoom} > {max_zoom}")
    return min_zoom, max_zoom


def _scale(args, cfg):
    scale = cfg["scale"] if args.scale is None else args.scale
    if not is_valid_scale(scale):
        raise SlippyTilesError(f"metatile scale 必须是 2 的幂: {scale}")
    return scale


def _print_lines(lines, limit):
    if limit is not None:
        lines = islice(lines, limit)
    count = 0
    for line in lines:
        console.print(line, highlight=False, soft_wrap=True)
        count += 1
    return count


def cmd_tiles(args, cfg):
    bbox = BBox.from_str(args.bbox)
    min_zoom, max_zoom = _zoom_range(args, cfg)
    scheme = PathScheme(args.scheme or cfg["scheme"])
    ext = args.ext or cfg["extension"]

    def paths():
        for zoom in range(min_zoom, max_zoom + 1):
            for tile in bbox.tiles_for_zoom(zoom):
                yield tile.path(scheme, ext)

    count = _print_lines(paths(), args.limit)
    logger.info(f"输出 {count} 个瓦片")


def cmd_metatiles(args, cfg):
    if args.file:
        with MetatilesIterator.from_filelist(args.file) as metatiles:
            logger.info(f"metatile 列表共 {metatiles.total()} 行")
            count = _print_lines((str(mt) for mt in metatiles), args.limit)
    else:
        bbox = BBox.from_str(args.bbox)
        min_zoom, max_zoom = _zoom_range(args, cfg)
        scale = _scale(args, cfg)
        metatiles = MetatilesIterator.for_bbox_zoom(scale, bbox, min_zoom, max_zoom)
        count = _print_lines((str(mt) for mt in metatiles), args.limit)
    logger.info(f"输出 {count} 个 metatile")


def cmd_path(args, cfg):
    tile = Tile.from_str(args.tile)
    scheme = PathScheme(args.scheme or cfg["scheme"])
    ext = args.ext or cfg["extension"]
    console.print(tile.path(scheme, ext), highlight=False)


def cmd_info(args, cfg):
    tile = Tile.from_str(args.tile)

    table = Table(title=f"瓦片 {tile}")
    table.add_column("属性", style="cyan")
    table.add_column("值")

    for name in ("nw_corner", "ne_corner", "sw_corner", "se_corner", "centre_point"):
        point = getattr(tile, name)()
        table.add_row(name, f"{point.lat:.6f}, {point.lon:.6f}")

    parent = tile.parent()
    table.add_row("parent", str(parent) if parent is not None else "-")
    metatile = tile.metatile(cfg["scale"])
    table.add_row("metatile", str(metatile) if metatile is not None else "-")
    table.add_row("mod_tile", tile.modtile_metatile().path(cfg["extension"]))
    for scheme in PathScheme:
        table.add_row(f"path ({scheme.value})", tile.path(scheme, cfg["extension"]))
    table.add_row("world file", str(tile.world_file()).strip().replace("\n", " "))

    console.print(table)


def cmd_count(args, cfg):
    if args.bbox is None:
        hint = AllTilesToZoomIterator(args.max_zoom).size_hint()
        total = "unknown" if hint.upper is None else str(hint.upper)
        console.print(f"zoom 0-{args.max_zoom}: {total}", highlight=False)
        return

    bbox = BBox.from_str(args.bbox)
    scale = _scale(args, cfg)
    table = Table(title=f"范围 {args.bbox}")
    table.add_column("zoom", style="cyan")
    table.add_column("tiles")
    table.add_column(f"metatiles ({scale})")
    for zoom in range(args.min_zoom, args.max_zoom + 1):
        tiles = size_bbox_zoom(bbox, zoom)
        metatiles = size_bbox_zoom_metatiles(bbox, zoom, scale)
        table.add_row(
            str(zoom),
            "unknown" if tiles is None else str(tiles),
            "unknown" if metatiles is None else str(metatiles),
        )
    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slippy-tiles", description="slippy map 瓦片 / metatile 坐标工具"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="JSON 配置文件（默认读取环境变量 SLIPPY_TILES_CONFIG）")
    parser.add_argument("--log-level", help="日志级别")
    parser.add_argument("--log-dir", help="日志目录")
    subparsers = parser.add_subparsers(dest="cmd")

    schemes = [s.value for s in PathScheme]

    p_tiles = subparsers.add_parser("tiles", help="列出覆盖范围的瓦片路径")
    p_tiles.add_argument("--bbox", required=True, help='"minlon minlat maxlon maxlat"')
    p_tiles.add_argument("--min-zoom", type=int)
    p_tiles.add_argument("--max-zoom", type=int)
    p_tiles.add_argument("--scheme", choices=schemes)
    p_tiles.add_argument("--ext")
    p_tiles.add_argument("--limit", type=int)

    p_meta = subparsers.add_parser("metatiles", help="列出覆盖范围的 metatile，或回放 metatile 列表")
    source = p_meta.add_mutually_exclusive_group(required=True)
    source.add_argument("--bbox", help='"minlon minlat maxlon maxlat"')
    source.add_argument("--file", help="每行一个 \"<scale> <zoom>/<x>/<y>\" 的文件")
    p_meta.add_argument("--scale", type=int)
    p_meta.add_argument("--min-zoom", type=int)
    p_meta.add_argument("--max-zoom", type=int)
    p_meta.add_argument("--limit", type=int)

    p_path = subparsers.add_parser("path", help="瓦片在缓存目录中的路径")
    p_path.add_argument("tile", help="zoom/x/y")
    p_path.add_argument("--scheme", choices=schemes)
    p_path.add_argument("--ext")

    p_info = subparsers.add_parser("info", help="显示瓦片的角点、父瓦片、metatile、World File")
    p_info.add_argument("tile", help="zoom/x/y")

    p_count = subparsers.add_parser("count", help="统计瓦片数量")
    p_count.add_argument("--max-zoom", type=int, required=True)
    p_count.add_argument("--min-zoom", type=int, default=0)
    p_count.add_argument("--bbox", help='"minlon minlat maxlon maxlat"，不指定时统计整个世界')
    p_count.add_argument("--scale", type=int)

    return parser


COMMANDS = {
    "tiles": cmd_tiles,
    "metatiles": cmd_metatiles,
    "path": cmd_path,
    "info": cmd_info,
    "count": cmd_count,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cmd is None:
        parser.print_help()
        return 0

    try:
        cfg = load_config(args.config)
        setup_logging(args.log_level or cfg["log_level"], args.log_dir or cfg["log_dir"])
        COMMANDS[args.cmd](args, cfg)
    except (SlippyTilesError, ValueError, OSError) as e:
        logger.debug(f"{args.cmd} 失败: {e!r}")
        console.print(f"[bold red]错误:[/bold red] {escape(str(e))}", highlight=False)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
