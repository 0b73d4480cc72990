"""
どこで: `shapes.ellipse`
何を: 円/楕円を正 N 角形で近似した閉じたリングを生成する。分割数の既定値は半径から決める。
なぜ: ストローク/塗り/プリミティブ描画の円系 API が同一の頂点列を共有するため。

分割数の既定則（`default_segment_count`）:
- 周長 2πr を弧長 `CIRCLE_ARC_LENGTH` で割った値を切り上げ、
  `[CIRCLE_MIN_SEGMENTS, CIRCLE_MAX_SEGMENTS]` に丸める（既定 4.0 / 8 / 256）。
- r=50 なら 79 分割、r=5 なら 8 分割。
"""

from __future__ import annotations

import math

import numpy as np

from common.param_utils import ensure_vec2, require_count, require_finite, require_positive
from common.settings import get as get_settings
from common.types import Vec2
from engine.core.points import PointSequence

MIN_EXPLICIT_SEGMENTS = 3


def default_segment_count(radius: float) -> int:
    """半径から滑らかさに十分な分割数を返す。"""
    r = require_positive(radius, "radius")
    s = get_settings()
    n = int(math.ceil(2.0 * math.pi * r / s.CIRCLE_ARC_LENGTH))
    return max(s.CIRCLE_MIN_SEGMENTS, min(s.CIRCLE_MAX_SEGMENTS, n))


def resolve_segments(segments: int | None, radius: float) -> int:
    """明示指定（>= 3）があればそれを、無ければ既定則の分割数を返す。"""
    if segments is None:
        return default_segment_count(radius)
    return require_count(segments, "segments", MIN_EXPLICIT_SEGMENTS)


def ellipse(
    center: Vec2,
    rx: float,
    ry: float | None = None,
    segments: int | None = None,
    *,
    rotation: float = 0.0,
) -> PointSequence:
    """楕円を近似する閉じたリングを生成します。

    Parameters
    ----------
    center : Vec2
        中心座標。
    rx, ry : float
        X/Y 半径（> 0）。`ry` 省略時は円。
    segments : int | None
        分割数（>= 3）。None の場合は大きい方の半径から既定則で決める。
    rotation : float, default 0.0
        楕円軸の回転角（ラジアン）。

    Notes
    -----
    頂点 k は角度 `2πk / segments`（k=0 は +X 方向）。閉じ点は複製しない。
    """
    cx, cy = ensure_vec2(center, "center")
    a = require_positive(rx, "rx")
    b = a if ry is None else require_positive(ry, "ry")
    rot = require_finite(rotation, "rotation")
    n = resolve_segments(segments, max(a, b))

    t = np.arange(n, dtype=np.float64) * (2.0 * np.pi / n)
    x = np.cos(t) * a
    y = np.sin(t) * b
    if rot:
        c, s = math.cos(rot), math.sin(rot)
        x, y = x * c - y * s, x * s + y * c
    return PointSequence(np.stack([cx + x, cy + y], axis=1), closed=True)


def circle(center: Vec2, radius: float, segments: int | None = None) -> PointSequence:
    """円を近似する閉じたリングを生成します（`ellipse` の等方版）。"""
    return ellipse(center, radius, radius, segments)


__all__ = ["circle", "ellipse", "default_segment_count", "resolve_segments"]
