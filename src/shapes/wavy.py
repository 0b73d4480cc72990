from __future__ import annotations

import numpy as np

from common.param_utils import ensure_vec2, require_count, require_finite, require_positive
from common.types import Vec2
from engine.core.points import PointSequence


def wavy(
    count: int = 20,
    *,
    start: Vec2 = (50.0, 100.0),
    step: float = 10.0,
    amplitude: float = 10.0,
) -> PointSequence:
    """ジグザグ（のこぎり状）の開いた折れ線を生成します。

    偶数番目は基線 `start[1]`、奇数番目は `start[1] + amplitude`。X は `step` ずつ進みます。
    非凸な折れ線でのストローク（結合部）の確認用です。
    """
    n = require_count(count, "count", 2)
    x0, y0 = ensure_vec2(start, "start")
    dx = require_positive(step, "step")
    amp = require_finite(amplitude, "amplitude")

    i = np.arange(n)
    xs = x0 + i * dx
    ys = np.where(i % 2 == 0, y0, y0 + amp)
    return PointSequence(np.stack([xs, ys], axis=1), closed=False)


__all__ = ["wavy"]
