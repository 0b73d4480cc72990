"""
どこで: `common` の型定義。
何を: Vec2/RGBA などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

Vec2 = tuple[float, float]
RGBA = tuple[float, float, float, float]

# 点列として受理する入力（(x, y) の列、または (N, 2) 配列）
PointsLike = Union[np.ndarray, Sequence[Sequence[float]]]


__all__ = ["Vec2", "RGBA", "PointsLike"]
