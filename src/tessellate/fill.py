"""
どこで: `tessellate.fill`
何を: 閉じた点列（ポリゴン）を耳切り法で三角形分割し、ブラシ色/UV 付きの `Mesh` を返す。
なぜ: 非凸の単純ポリゴンも GPU で塗れる三角形列に落とすため。

処理の流れ:
1) 連続重複点と明示的な閉じ点を除去（3 点未満は InvalidFillGeometry）。
2) 数学座標で反時計回りに揃える（符号付き面積 < 0 なら反転）。
3) numba カーネル `_ear_clip_njit` で耳切り。1 周しても耳が見つからない場合
   （自己交差や退化入力）は現在の頂点をそのまま切り落とし、必ず n-2 枚で終了する。
4) 反転した場合はインデックスを元の順序へ戻す。
5) shapely の `Polygon.is_valid` で自己交差を検出し DEBUG ログに残す（設定で無効化可）。

UV:
- パターンブラシは外接矩形基準の `(p - min) / tile_size`（未指定なら `/ extent`）。
  三角形分割の結果に依存しない。
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit
from shapely.geometry import Polygon
from shapely.validation import explain_validity

from common.errors import InvalidFillGeometry
from common.settings import get as get_settings
from engine.core.mesh import Mesh, PrimitiveKind
from engine.core.points import PointSequence
from paint.brush import Brush

from .attributes import vertex_attributes

logger = logging.getLogger(__name__)


@njit(cache=True)
def _point_in_triangle_njit(
    px: float, py: float, ax: float, ay: float, bx: float, by: float, cx: float, cy: float
) -> bool:
    """三角形 abc（反時計回り）の内部または辺上なら True。"""
    eps = 1e-12
    d1 = (bx - ax) * (py - ay) - (by - ay) * (px - ax)
    d2 = (cx - bx) * (py - by) - (cy - by) * (px - bx)
    d3 = (ax - cx) * (py - cy) - (ay - cy) * (px - cx)
    return d1 >= -eps and d2 >= -eps and d3 >= -eps


@njit(cache=True)
def _is_ear_njit(xy: np.ndarray, idx: np.ndarray, m: int, ip: int, ic: int, inx: int) -> bool:
    eps = 1e-12
    ax, ay = xy[ip, 0], xy[ip, 1]
    bx, by = xy[ic, 0], xy[ic, 1]
    cx, cy = xy[inx, 0], xy[inx, 1]
    cross = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)
    if cross <= eps:
        return False
    for t in range(m):
        j = idx[t]
        if j == ip or j == ic or j == inx:
            continue
        px, py = xy[j, 0], xy[j, 1]
        # 三角形の頂点と一致する点（接触点）は遮蔽とみなさない
        if (abs(px - ax) <= eps and abs(py - ay) <= eps) or (
            abs(px - bx) <= eps and abs(py - by) <= eps
        ) or (abs(px - cx) <= eps and abs(py - cy) <= eps):
            continue
        if _point_in_triangle_njit(px, py, ax, ay, bx, by, cx, cy):
            return False
    return True


@njit(cache=True)
def _ear_clip_njit(xy: np.ndarray) -> np.ndarray:
    """反時計回りリング `(n, 2)` を耳切りし `(n-2, 3) int32` の三角形インデックスを返す。"""
    n = xy.shape[0]
    if n < 3:
        return np.empty((0, 3), dtype=np.int32)
    out = np.empty((n - 2, 3), dtype=np.int32)
    idx = np.empty(n, dtype=np.int32)
    for i in range(n):
        idx[i] = i

    m = n
    t = 0
    k = 0
    miss = 0
    while m > 3:
        if k >= m:
            k = 0
        ip = idx[(k - 1 + m) % m]
        ic = idx[k]
        inx = idx[(k + 1) % m]
        if miss >= m or _is_ear_njit(xy, idx, m, ip, ic, inx):
            out[t, 0] = ip
            out[t, 1] = ic
            out[t, 2] = inx
            t += 1
            for j in range(k, m - 1):
                idx[j] = idx[j + 1]
            m -= 1
            miss = 0
        else:
            k += 1
            miss += 1
    out[t, 0] = idx[0]
    out[t, 1] = idx[1]
    out[t, 2] = idx[2]
    return out


def triangulate_ring(ring: np.ndarray) -> np.ndarray:
    """任意向きのリング `(n, 2)` を三角形分割し、元の順序の `(n-2, 3)` インデックスを返す。

    出力三角形は数学座標で反時計回り（画面 Y 下向きでは時計回り）に揃う。
    """
    pts = np.ascontiguousarray(np.asarray(ring, dtype=np.float64))
    n = pts.shape[0]
    if n < 3:
        return np.empty((0, 3), dtype=np.int32)
    x = pts[:, 0]
    y = pts[:, 1]
    area2 = float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))
    if area2 < 0.0:
        tris = _ear_clip_njit(np.ascontiguousarray(pts[::-1]))
        return (n - 1) - tris
    return _ear_clip_njit(pts)


def is_simple_polygon(ring: np.ndarray) -> bool:
    """shapely で自己交差のない単純ポリゴンかを判定する。"""
    return bool(Polygon(np.asarray(ring, dtype=np.float64)).is_valid)


def fill_points(points: PointSequence, brush: Brush) -> Mesh:
    """点列を閉じたポリゴンとして塗りつぶす三角形 `Mesh` を返す。

    引数:
        points: ポリゴン頂点（`closed` フラグは問わず常に閉じて扱う）。
        brush: 塗りのブラシ（色は全頂点へ、パターンは UV も付与）。

    例外:
        InvalidFillGeometry: 重複除去後の点が 3 未満。
    """
    if not isinstance(brush, Brush):
        raise InvalidFillGeometry(f"塗りには Brush が必要です: {type(brush).__name__}")
    seq = points.with_closed(True).deduplicated()
    ring = seq.points
    if len(ring) < 3:
        raise InvalidFillGeometry("塗りには少なくとも 3 つの異なる点が必要です。")

    if get_settings().CHECK_SIMPLE_POLYGON and logger.isEnabledFor(logging.DEBUG):
        if not is_simple_polygon(ring):
            logger.debug("fill: 単純でないポリゴン (%s)", explain_validity(Polygon(ring)))

    tris = triangulate_ring(ring)
    colors, uvs = vertex_attributes(ring, brush.color, brush)
    return Mesh(ring, colors, tris.astype(np.uint32), PrimitiveKind.TRIANGLES, uvs=uvs)


__all__ = ["fill_points", "triangulate_ring", "is_simple_polygon"]
