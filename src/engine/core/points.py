"""
点列データモデル（描画コアの入力表現）

本モジュールは、生成関数（shapes）・ストローク（tessellate.stroke）・塗り（tessellate.fill）
の間で受け渡す唯一の点列表現 `PointSequence` と、矩形 `Rect` を提供する。

データモデル（不変条件）:
- `points: float64 ndarray (N, 2)`: 行は XY。N >= 1。すべて有限値。
- `closed: bool`: True の場合、末尾→先頭の辺を暗黙に持つ。
- 生成時に入力をコピーし、以後は読み取り専用（`setflags(write=False)`）。
  呼び出し側が元の配列/リストを書き換えても影響しない。

補足:
- 明示的に閉じたリング（末尾 == 先頭）を開いた点列として渡すことも許容する
  （プリミティブ描画で輪郭を重ね描きする用途）。`deduplicated()` は閉じた点列に限り
  この重複終点を落とす。

使用例:
    from engine.core.points import PointSequence
    seq = PointSequence.from_points([(0, 0), (10, 0), (10, 10)], closed=True)
    area = seq.signed_area()  # 50.0（数学座標の反時計回りで正）
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from common.errors import InvalidGeometryParameter
from common.types import PointsLike, Vec2


def _normalize_points(points: PointsLike) -> np.ndarray:
    """`PointSequence` 生成時の内部正規化ヘルパ。"""
    try:
        arr = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidGeometryParameter(f"点列を数値配列に変換できません: {e}") from e
    if arr.ndim == 1 and arr.size == 2:
        arr = arr.reshape(1, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidGeometryParameter(f"点列は形状 (N, 2) である必要があります: {arr.shape}")
    if arr.shape[0] == 0:
        raise InvalidGeometryParameter("点列は少なくとも 1 点を含む必要があります。")
    if not np.all(np.isfinite(arr)):
        raise InvalidGeometryParameter("点列に非有限値（NaN/Inf）が含まれています。")
    arr = np.ascontiguousarray(arr)
    arr.setflags(write=False)
    return arr


class PointSequence:
    """順序付き 2D 点列（開/閉フラグ付き）。

    フィールド:
    - `points (N,2) float64`: 読み取り専用の点配列。
    - `closed`: 末尾→先頭の辺を持つかどうか。

    設計意図:
    - 生成/ストローク/塗りの境界を 1 種の表現に揃える。
    - 値オブジェクトとして扱い、変換系は新しいインスタンスを返す。
    """

    __slots__ = ("points", "closed")

    points: np.ndarray
    closed: bool

    def __init__(self, points: PointsLike, closed: bool = False) -> None:
        self.points = _normalize_points(points)
        self.closed = bool(closed)

    # ── ファクトリ ───────────────────
    @classmethod
    def from_points(cls, points: PointsLike, *, closed: bool = False) -> "PointSequence":
        """(x, y) の列または (N, 2) 配列から生成する。"""
        if isinstance(points, PointSequence):
            return cls(points.points, closed)
        return cls(points, closed)

    # ── 基本操作（すべて純粋） ────────
    def as_array(self, *, copy: bool = False) -> np.ndarray:
        """点配列を返す。`copy=False` は読み取り専用ビュー。"""
        if copy:
            return self.points.copy()
        return self.points

    def with_closed(self, closed: bool) -> "PointSequence":
        """閉フラグだけを差し替えた新しい点列を返す。"""
        return PointSequence(self.points, closed)

    def translate(self, dx: float = 0.0, dy: float = 0.0) -> "PointSequence":
        """平行移動（純関数）。"""
        return PointSequence(self.points + np.array([dx, dy], dtype=np.float64), self.closed)

    def deduplicated(self, eps: float = 1e-9) -> "PointSequence":
        """連続する重複点を除いた点列を返す。

        閉じた点列では、明示的な閉じ点（末尾 == 先頭）も除去する。
        すべてが同一点の場合は 1 点だけ残す。
        """
        pts = self.points
        if len(pts) > 1:
            step = np.linalg.norm(np.diff(pts, axis=0), axis=1)
            keep = np.concatenate([[True], step > eps])
            pts = pts[keep]
        if self.closed and len(pts) > 1 and np.linalg.norm(pts[-1] - pts[0]) <= eps:
            pts = pts[:-1]
        return PointSequence(pts, self.closed)

    def signed_area(self) -> float:
        """靴紐公式による符号付き面積（数学座標の反時計回りで正）。

        開いた点列も先頭と末尾を結んだリングとして評価する。
        """
        x = self.points[:, 0]
        y = self.points[:, 1]
        return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))

    def bounds(self) -> tuple[float, float, float, float]:
        """外接矩形 `(min_x, min_y, max_x, max_y)` を返す。"""
        lo = self.points.min(axis=0)
        hi = self.points.max(axis=0)
        return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])

    def edge_count(self) -> int:
        """辺の本数（閉じている場合は末尾→先頭の辺を含む）。"""
        n = len(self.points)
        if n < 2:
            return 0
        return n if self.closed else n - 1

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def __iter__(self) -> Iterator[Vec2]:
        for x, y in self.points:
            yield float(x), float(y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointSequence):
            return NotImplemented
        return self.closed == other.closed and np.array_equal(self.points, other.points)

    def __hash__(self) -> int:
        return hash((self.closed, self.points.tobytes()))

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        kind = "closed" if self.closed else "open"
        return f"PointSequence(N={len(self)}, {kind})"


@dataclass(frozen=True)
class Rect:
    """軸平行矩形（左上 x, y と幅/高さ。画面座標は Y 下向き）。"""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return float(self.x)

    @property
    def top(self) -> float:
        return float(self.y)

    @property
    def right(self) -> float:
        return float(self.x + self.width)

    @property
    def bottom(self) -> float:
        return float(self.y + self.height)

    @property
    def center(self) -> Vec2:
        return (float(self.x + self.width * 0.5), float(self.y + self.height * 0.5))


__all__ = ["PointSequence", "Rect"]
