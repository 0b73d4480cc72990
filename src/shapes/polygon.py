from __future__ import annotations

import numpy as np

from common.param_utils import ensure_vec2, require_count, require_finite, require_positive
from common.types import Vec2
from engine.core.points import PointSequence, Rect


def regular_polygon(
    center: Vec2, sides: int, radius: float, *, phase: float = 0.0
) -> PointSequence:
    """半径 `radius` の円に内接する正多角形（閉じたリング）を生成します。

    引数:
        sides: 辺の数（>= 3）。
        phase: 頂点開始角（度数法）。0 で +X 軸上に頂点を置く。
    """
    cx, cy = ensure_vec2(center, "center")
    n = require_count(sides, "sides", 3)
    r = require_positive(radius, "radius")
    theta0 = np.deg2rad(require_finite(phase, "phase"))

    t = theta0 + np.arange(n, dtype=np.float64) * (2.0 * np.pi / n)
    xy = np.stack([cx + np.cos(t) * r, cy + np.sin(t) * r], axis=1)
    return PointSequence(xy, closed=True)


def rectangle(rect: Rect) -> PointSequence:
    """矩形の 4 隅を (左上, 右上, 右下, 左下) の順で返す閉じたリング。"""
    x = require_finite(rect.x, "rect.x")
    y = require_finite(rect.y, "rect.y")
    w = require_positive(rect.width, "rect.width")
    h = require_positive(rect.height, "rect.height")
    xy = np.array([[x, y], [x + w, y], [x + w, y + h], [x, y + h]], dtype=np.float64)
    return PointSequence(xy, closed=True)


__all__ = ["regular_polygon", "rectangle"]
