from __future__ import annotations

import numpy as np

from common.param_utils import ensure_vec2, require_count, require_non_negative, require_positive
from common.types import Vec2
from engine.core.points import PointSequence


def star(
    center: Vec2,
    point_count: int,
    outer_radius: float,
    inner_radius: float,
    *,
    close: bool = False,
) -> PointSequence:
    """外半径/内半径を交互にとる星形（正多角形の一般化）の頂点列を生成します。

    頂点 0 は中心の真上（画面 Y 下向きで -Y 方向）にあり、画面上で時計回りに進みます。
    `inner_radius == outer_radius` なら正 `2 * point_count` 角形になります。
    `inner_radius > outer_radius` も拒否しません（凹/自己交差形状は呼び出し側の責務）。

    Parameters
    ----------
    center : Vec2
        中心座標。
    point_count : int
        尖りの数（>= 3）。頂点数は `2 * point_count`。
    outer_radius : float
        偶数番目の頂点の半径（> 0）。
    inner_radius : float
        奇数番目の頂点の半径（>= 0）。
    close : bool, default False
        True の場合、先頭頂点を末尾に複製して明示的に閉じたリングを返す（開いた点列として）。
    """
    cx, cy = ensure_vec2(center, "center")
    n = require_count(point_count, "point_count", 3)
    r_out = require_positive(outer_radius, "outer_radius")
    r_in = require_non_negative(inner_radius, "inner_radius")

    limit = 2 * n + 1 if close else 2 * n
    i = np.arange(limit, dtype=np.float64)
    rot = np.pi / n
    angles = np.pi - i * rot
    radii = np.where(np.arange(limit) % 2 == 0, r_out, r_in)
    xy = np.stack([cx + np.sin(angles) * radii, cy + np.cos(angles) * radii], axis=1)
    if close:
        # 浮動小数誤差を残さず先頭と完全一致させる
        xy[-1] = xy[0]
    return PointSequence(xy, closed=False)


__all__ = ["star"]
