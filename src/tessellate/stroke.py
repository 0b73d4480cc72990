"""
どこで: `tessellate.stroke`
何を: 点列 + Pen を三角形リボン（`Mesh`, TRIANGLES）へ変換する。
なぜ: 線幅・配置（INSET/CENTER/OUTSET）・結合・キャップを GPU 非依存の純関数で確定させるため。

座標系と向き:
- 各辺の単位方向 `d` に対し左法線 `(-d.y, d.x)` をとる。
- 内側法線 = 左法線 × `s`。閉じたパスは `s = sign(signed_area)`（面積 0 は +1）、
  開いたパスは `s = +1`（INSET は進行方向の左）。
- リボンは内側法線方向のオフセット区間 `[lo, hi]`（`Pen.offset_range()`）を占める。

結合（各頂点・各側）:
- 基本は 2 本のオフセット線の交点 `p + d·m`（`m = (n0 + n1) / (1 + n0·n1)`）。
- 折れの外側かつオフセット非 0 の側で、`|m| > miter_limit`（MITER）または BEVEL/ROUND の場合は
  `p + d·n0`、[円弧点]、`p + d·n1` を置き、反対側の点を要とする扇で隙間を埋める。
- 180° 折り返し（反平行）は両側とも `p + d·n0`, `p + d·n1` を置く（平らな折り返し）。

辺の四角形は「頂点 a の各側の最後の点」と「頂点 b の各側の最初の点」を結ぶ。
"""

from __future__ import annotations

import logging
import math

import numpy as np

from common.errors import InvalidPenGeometry
from engine.core.mesh import Mesh, PrimitiveKind
from engine.core.points import PointSequence
from paint.pen import LineJoin, Pen

from .attributes import vertex_attributes
from .caps import add_cap, round_steps

logger = logging.getLogger(__name__)

_EPS = 1e-12


class _Ribbon:
    """頂点と三角形インデックスを蓄積するビルダー。"""

    __slots__ = ("_verts", "_tris")

    def __init__(self) -> None:
        self._verts: list[np.ndarray] = []
        self._tris: list[tuple[int, int, int]] = []

    def add(self, p: np.ndarray) -> int:
        self._verts.append(np.asarray(p, dtype=np.float64))
        return len(self._verts) - 1

    def tri(self, a: int, b: int, c: int) -> None:
        self._tris.append((a, b, c))

    def point(self, i: int) -> np.ndarray:
        return self._verts[i]

    def quad(self, a0: int, a1: int, b1: int, b0: int) -> None:
        self.tri(a0, a1, b1)
        self.tri(a0, b1, b0)

    def arrays(self) -> tuple[np.ndarray, np.ndarray]:
        if not self._verts:
            return np.zeros((0, 2), dtype=np.float64), np.zeros((0,), dtype=np.uint32)
        pos = np.vstack(self._verts)
        idx = np.asarray(self._tris, dtype=np.uint32).reshape(-1)
        return pos, idx


def _cross(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[1] - a[1] * b[0])


def _arc(
    ribbon: _Ribbon, p: np.ndarray, d: float, n0: np.ndarray, n1: np.ndarray
) -> list[int]:
    """`p + d·n0` から `p + d·n1` まで、短い側を回る円弧点を追加する。"""
    radius = abs(d)
    u0 = n0 * math.copysign(1.0, d)
    u1 = n1 * math.copysign(1.0, d)
    sweep = math.atan2(_cross(u0, u1), float(np.dot(u0, u1)))
    steps = round_steps(radius, abs(sweep))
    ids = []
    for j in range(steps + 1):
        ang = sweep * j / steps
        c, s = math.cos(ang), math.sin(ang)
        u = np.array([u0[0] * c - u0[1] * s, u0[0] * s + u0[1] * c])
        ids.append(ribbon.add(p + u * radius))
    return ids


def _join(
    ribbon: _Ribbon,
    p: np.ndarray,
    dir0: np.ndarray,
    dir1: np.ndarray,
    n0: np.ndarray,
    n1: np.ndarray,
    offsets: tuple[float, float],
    pen: Pen,
    s: float,
) -> list[list[int]]:
    """結合頂点の両側（lo, hi）の点インデックス列を返す。"""
    denom = 1.0 + float(np.dot(n0, n1))
    turn = _cross(dir0, dir1)

    if denom <= 1e-9:
        # 反平行: 平らな折り返し
        return [[ribbon.add(p + d * n0), ribbon.add(p + d * n1)] for d in offsets]

    m = (n0 + n1) / denom
    ratio = float(np.hypot(m[0], m[1]))
    limit = pen.resolved_miter_limit()

    sides: list[list[int]] = []
    outer_side = -1
    for k, d in enumerate(offsets):
        is_outer = d != 0.0 and abs(turn) > _EPS and (d * s) * turn < 0.0
        if not is_outer:
            sides.append([ribbon.add(p + d * m)])
            continue
        outer_side = k
        if pen.join is LineJoin.MITER and ratio <= limit:
            sides.append([ribbon.add(p + d * m)])
        elif pen.join is LineJoin.ROUND:
            sides.append(_arc(ribbon, p, d, n0, n1))
        else:
            sides.append([ribbon.add(p + d * n0), ribbon.add(p + d * n1)])

    if outer_side >= 0 and len(sides[outer_side]) > 1:
        pivot = sides[1 - outer_side][0]
        fan = sides[outer_side]
        for a, b in zip(fan[:-1], fan[1:]):
            ribbon.tri(pivot, a, b)
    return sides


def stroke_points(points: PointSequence, pen: Pen) -> Mesh:
    """点列を Pen でストロークし、三角形リボンの `Mesh` を返す。

    引数:
        points: 入力点列（`closed` を尊重）。
        pen: 線幅・配置・キャップ・結合を持つ Pen。

    返り値:
        `Mesh(primitive=TRIANGLES)`。全頂点に pen の色（パターンブラシは UV も）。

    例外:
        InvalidPenGeometry: 重複除去後の点が 2 未満、または pen の幅が 0 以下。
    """
    if not (pen.width > 0.0):
        raise InvalidPenGeometry(f"Pen の幅は正である必要があります: {pen.width!r}")
    seq = points.deduplicated()
    pts = seq.points
    n = len(pts)
    if n < 2:
        raise InvalidPenGeometry("ストロークには少なくとも 2 つの異なる点が必要です。")
    closed = seq.closed and n >= 3

    if closed:
        area = seq.signed_area()
        s = -1.0 if area < 0.0 else 1.0
        vec = np.roll(pts, -1, axis=0) - pts
    else:
        s = 1.0
        vec = pts[1:] - pts[:-1]
    lengths = np.hypot(vec[:, 0], vec[:, 1])
    dirs = vec / lengths[:, None]
    normals = np.column_stack([-dirs[:, 1], dirs[:, 0]]) * s

    lo, hi = pen.offset_range()
    offsets = (lo, hi)
    ribbon = _Ribbon()
    sides: list[list[list[int]]] = []

    for k in range(n):
        p = pts[k]
        if not closed and k == 0:
            sides.append([[ribbon.add(p + d * normals[0])] for d in offsets])
        elif not closed and k == n - 1:
            sides.append([[ribbon.add(p + d * normals[-1])] for d in offsets])
        else:
            e_in = k - 1  # 閉じたパスでは -1 が末尾の辺
            sides.append(
                _join(ribbon, p, dirs[e_in], dirs[k], normals[e_in], normals[k], offsets, pen, s)
            )

    edge_count = n if closed else n - 1
    for e in range(edge_count):
        a, b = e, (e + 1) % n
        ribbon.quad(sides[a][0][-1], sides[a][1][-1], sides[b][1][0], sides[b][0][0])

    if not closed:
        add_cap(ribbon, sides[0][0][0], sides[0][1][0], -dirs[0], pen.width, pen.start_cap)
        add_cap(ribbon, sides[-1][0][0], sides[-1][1][0], dirs[-1], pen.width, pen.end_cap)

    positions, indices = ribbon.arrays()
    colors, uvs = vertex_attributes(positions, pen.color, pen.brush)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "stroke: points=%d closed=%s vertices=%d triangles=%d",
            n,
            closed,
            positions.shape[0],
            indices.size // 3,
        )
    return Mesh(positions, colors, indices, PrimitiveKind.TRIANGLES, uvs=uvs)


__all__ = ["stroke_points"]
