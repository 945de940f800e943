# slippy_tiles/iterators/base.py

from typing import NamedTuple, Optional

from ..tile_math import U64_MAX


class SizeHint(NamedTuple):
    """
    剩余元素个数的估计

    Attributes:
        lower: 下限
        upper: 上限，None 表示太大无法精确计算
    """
    lower: int
    upper: Optional[int]

    @property
    def is_exact(self) -> bool:
        return self.upper is not None and self.upper == self.lower


# 数量超出 u64 时返回的哨兵值
UNKNOWN_SIZE = SizeHint(U64_MAX, None)


def exact(n: int) -> SizeHint:
    return SizeHint(n, n)
