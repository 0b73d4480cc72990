"""
どこで: `tessellate.path`
何を: Pen と点列を束ねたストローク対象 `Path`。
なぜ: 呼び出し側の点列を生成時に複製し、後からの書き換えに影響されない描画単位を作るため。
"""

from __future__ import annotations

from common.errors import InvalidPenGeometry
from common.types import PointsLike
from engine.core.mesh import Mesh
from engine.core.points import PointSequence
from paint.pen import Pen

from .stroke import stroke_points


class Path:
    """1 本の Pen と所有する点列のペア。

    - `pen` は共有してよい（不変）。
    - 点列は生成時にコピーされる（`PointSequence` は読み取り専用配列を持つ）。
    - `stroke()` は何度呼んでも同じ `Mesh` 内容を返す。
    """

    __slots__ = ("_pen", "_points")

    def __init__(self, pen: Pen, points: PointsLike | PointSequence, closed: bool | None = None) -> None:
        if not isinstance(pen, Pen):
            raise InvalidPenGeometry(f"Path には Pen が必要です: {type(pen).__name__}")
        if isinstance(points, PointSequence):
            seq = PointSequence(points.points, points.closed if closed is None else closed)
        else:
            seq = PointSequence(points, bool(closed))
        self._pen = pen
        self._points = seq

    @property
    def pen(self) -> Pen:
        return self._pen

    @property
    def points(self) -> PointSequence:
        return self._points

    @property
    def closed(self) -> bool:
        return self._points.closed

    def stroke(self) -> Mesh:
        """Pen に従ってリボン三角形を生成する。"""
        return stroke_points(self._points, self._pen)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Path(N={len(self._points)}, closed={self.closed}, width={self._pen.width})"


__all__ = ["Path"]
