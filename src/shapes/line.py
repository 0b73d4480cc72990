from __future__ import annotations

from common.param_utils import ensure_vec2
from common.types import Vec2
from engine.core.points import PointSequence


def line(p0: Vec2, p1: Vec2) -> PointSequence:
    """2 点からなる開いた線分を生成します。

    Parameters
    ----------
    p0, p1 : Vec2
        始点と終点。同一点でも生成はできるが、ストローク時に InvalidPenGeometry となる。
    """
    a = ensure_vec2(p0, "p0")
    b = ensure_vec2(p1, "p1")
    return PointSequence([a, b], closed=False)


__all__ = ["line"]
