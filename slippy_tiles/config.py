# slippy_tiles/config.py
"""
命令行工具的 JSON 配置

配置文件只需要包含想覆盖的键，其余使用 DEFAULT_CONFIG 中的默认值。
"""
import json
import os
from typing import Any, Dict, Optional

from loguru import logger

from .core.metatile import is_valid_scale
from .errors import ConfigError
from .paths import PathScheme
from .tile_math import MAX_ZOOM

CONFIG_ENV_VAR = "SLIPPY_TILES_CONFIG"

DEFAULT_CONFIG: Dict[str, Any] = {
    "scale": 8,
    "min_zoom": 0,
    "max_zoom": 18,
    "extension": "png",
    "scheme": "zxy",
    "log_dir": "log",
    "log_level": "INFO",
}


def validate_config(cfg: Dict[str, Any]):
    """
    检查配置的键和取值

    Raises:
        ConfigError: 有未知的键，或某个值无效
    """
    unknown = set(cfg) - set(DEFAULT_CONFIG)
    if unknown:
        raise ConfigError(f"未知的配置项: {', '.join(sorted(unknown))}")

    for key in ("scale", "min_zoom", "max_zoom"):
        if not isinstance(cfg[key], int) or isinstance(cfg[key], bool):
            raise ConfigError(f"{key} 必须是整数: {cfg[key]!r}")

    if not is_valid_scale(cfg["scale"]):
        raise ConfigError(f"scale 必须是 2 的幂: {cfg['scale']}")
    if not 0 <= cfg["min_zoom"] <= cfg["max_zoom"] <= MAX_ZOOM:
        raise ConfigError(
            f"缩放级别范围无效: min_zoom={cfg['min_zoom']}, max_zoom={cfg['max_zoom']}"
        )

    try:
        PathScheme(cfg["scheme"])
    except ValueError:
        raise ConfigError(f"未知的目录结构: {cfg['scheme']!r}") from None

    for key in ("extension", "log_dir", "log_level"):
        if not isinstance(cfg[key], str):
            raise ConfigError(f"{key} 必须是字符串: {cfg[key]!r}")


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    加载配置

    Args:
        path: 配置文件路径，为 None 时读取环境变量 SLIPPY_TILES_CONFIG，
            都没有时直接返回默认配置

    Returns:
        Dict[str, Any]: 合并了默认值的配置

    Raises:
        OSError: 配置文件无法读取
        ConfigError: JSON 格式错误或内容无效
    """
    cfg = dict(DEFAULT_CONFIG)
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return cfg

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"配置文件不是有效的 JSON: {path}, {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"配置文件顶层必须是对象: {path}")

    cfg.update(data)
    validate_config(cfg)
    logger.debug(f"配置已加载: {path}")
    return cfg


def save_config(path: str, cfg: Dict[str, Any]):
    """
    保存配置到 JSON 文件

    Raises:
        ConfigError: 配置内容无效
    """
    merged = dict(DEFAULT_CONFIG)
    merged.update(cfg)
    validate_config(merged)

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(merged, f, ensure_ascii=False, indent=2)
    logger.info(f"配置已保存: {path}")
