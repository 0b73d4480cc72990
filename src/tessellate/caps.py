"""
どこで: `tessellate.caps`
何を: 開いたパスの端点に付けるキャップ（FLAT/SQUARE/ROUND/TRIANGLE）の三角形を生成する。
なぜ: ストローク本体（リボン）と端点形状を分離し、キャップごとの幾何を単体で検証できるようにするため。

端点の定義:
- `a`, `b` はリボン端の 2 頂点（内側法線方向のオフセット lo/hi の点）。
- `tangent` は端点から外向きの単位接線（始端は -d0、終端は +d_last）。
- 張り出し量はどのキャップも線幅の半分。
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np

from paint.pen import LineCap
from shapes.ellipse import default_segment_count


class RibbonSink(Protocol):
    """頂点/三角形の追加先（`tessellate.stroke._Ribbon`）。"""

    def add(self, p: np.ndarray) -> int: ...

    def tri(self, a: int, b: int, c: int) -> None: ...

    def point(self, i: int) -> np.ndarray: ...


def round_steps(radius: float, sweep: float) -> int:
    """半径と掃引角から円弧の分割数を決める（円テッセレーションの既定則に合わせる）。"""
    if radius <= 0.0 or sweep <= 0.0:
        return 1
    full = default_segment_count(radius)
    return max(1, int(math.ceil(full * sweep / (2.0 * math.pi))))


def add_cap(
    sink: RibbonSink,
    a: int,
    b: int,
    tangent: np.ndarray,
    width: float,
    cap: LineCap,
) -> None:
    """端点ペア `(a, b)` に `cap` の形状を追加する。FLAT は何もしない。"""
    if cap is LineCap.FLAT:
        return
    pa = sink.point(a)
    pb = sink.point(b)
    half = 0.5 * width
    t = np.asarray(tangent, dtype=np.float64)

    if cap is LineCap.SQUARE:
        a2 = sink.add(pa + t * half)
        b2 = sink.add(pb + t * half)
        sink.tri(a, b, b2)
        sink.tri(a, b2, a2)
        return

    mid = 0.5 * (pa + pb)
    if cap is LineCap.TRIANGLE:
        tip = sink.add(mid + t * half)
        sink.tri(a, b, tip)
        return

    # ROUND: 端辺の中点を中心とする半円（a 側から外向き接線を通って b 側へ）
    ua = (pa - mid) / half
    turn = 1.0 if (ua[0] * t[1] - ua[1] * t[0]) >= 0.0 else -1.0
    steps = max(2, round_steps(half, math.pi))
    center = sink.add(mid)
    prev = a
    for j in range(1, steps):
        ang = turn * math.pi * j / steps
        c, s = math.cos(ang), math.sin(ang)
        u = np.array([ua[0] * c - ua[1] * s, ua[0] * s + ua[1] * c])
        cur = sink.add(mid + u * half)
        sink.tri(center, prev, cur)
        prev = cur
    sink.tri(center, prev, b)


__all__ = ["add_cap", "round_steps", "RibbonSink"]
