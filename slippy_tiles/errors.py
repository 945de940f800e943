# slippy_tiles/errors.py


class SlippyTilesError(Exception):
    """
    slippy_tiles 所有异常的基类
    """


class TileParseError(SlippyTilesError, ValueError):
    """
    文本形式（tile / metatile / bbox）解析失败

    Attributes:
        text: 被解析的原始字符串
        reason: 失败原因
    """

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")


class GrammarMismatchError(TileParseError):
    """
    字符串不符合语法
    """


class InvalidCoordinatesError(TileParseError):
    """
    语法正确，但数值在几何上无效（例如 x >= 2^zoom）
    """


class ModTileScaleError(SlippyTilesError, ValueError):
    """
    只有 scale 为 8 的 metatile 才能转换为 ModTileMetatile
    """

    def __init__(self, scale: int):
        self.scale = scale
        super().__init__(
            f"只有 scale 为 8 的 metatile 才能转换为 ModTileMetatile，当前 scale={scale}"
        )


class ConfigError(SlippyTilesError, ValueError):
    """
    配置文件内容无效（未知的键或类型不对）
    """
