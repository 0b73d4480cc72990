"""
統合 Mesh 型（頂点/インデックスバッファ）

ストローク・塗り・プリミティブ線のいずれもこの `Mesh` を出力し、DrawBatch はこれを
そのまま DrawCommand に積んでラスタライザへ送る。

データモデル（不変条件）:
- `positions: float32 ndarray (N, 2)`: 頂点座標（変換前。Transform は flush 時に適用）。
- `colors: float32 ndarray (N, 4)`: 頂点色 RGBA(0–1)。
- `uvs: float32 ndarray (N, 2)`: テクスチャ座標（パターンブラシ以外は 0）。
- `indices: uint32 ndarray (K,)`: `primitive` が TRIANGLES なら K % 3 == 0、LINES なら K % 2 == 0。
  すべて `< N`。
- dtype/形状は常に上記に正規化される。

直感図（三角形 2 枚の矩形）:

    positions: [[0,0], [1,0], [1,1], [0,1]]
    indices:   [0, 1, 2,  0, 2, 3]
    primitive: TRIANGLES

補足:
- 空メッシュは `positions.shape == (0, 2)`, `indices.size == 0`。
- `interleaved()` は GPU 転送用に `x, y, r, g, b, a, u, v` を 1 行に並べた `(N, 8)` を返す。
"""

from __future__ import annotations

from enum import Enum

import numpy as np


class PrimitiveKind(str, Enum):
    """インデックスの解釈。"""

    TRIANGLES = "triangles"
    LINES = "lines"


VERTEX_STRIDE = 8  # x, y, r, g, b, a, u, v


def _normalize_mesh_input(
    positions: np.ndarray,
    colors: np.ndarray,
    uvs: np.ndarray | None,
    indices: np.ndarray,
    primitive: PrimitiveKind,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """`Mesh` 生成時の内部正規化ヘルパ。"""
    pos = np.ascontiguousarray(np.asarray(positions, dtype=np.float32))
    if pos.ndim != 2 or pos.shape[1] != 2:
        raise ValueError("positions は形状 (N, 2) の配列である必要があります。")
    n = pos.shape[0]

    col = np.asarray(colors, dtype=np.float32)
    if col.ndim == 1 and col.shape[0] == 4:
        col = np.broadcast_to(col, (n, 4))
    col = np.ascontiguousarray(col, dtype=np.float32)
    if col.shape != (n, 4):
        raise ValueError(f"colors は形状 ({n}, 4) である必要があります: {col.shape}")

    if uvs is None:
        uv = np.zeros((n, 2), dtype=np.float32)
    else:
        uv = np.ascontiguousarray(np.asarray(uvs, dtype=np.float32))
        if uv.shape != (n, 2):
            raise ValueError(f"uvs は形状 ({n}, 2) である必要があります: {uv.shape}")

    idx = np.ascontiguousarray(np.asarray(indices, dtype=np.uint32).reshape(-1))
    group = 3 if primitive is PrimitiveKind.TRIANGLES else 2
    if idx.size % group != 0:
        raise ValueError(f"indices の長さは {group} の倍数である必要があります: {idx.size}")
    if idx.size and int(idx.max()) >= n:
        raise ValueError("indices が頂点数を超えています。")

    return pos, col, uv, idx


class Mesh:
    """描画可能な頂点/インデックスバッファ。

    フィールド:
    - `positions (N,2) float32`, `colors (N,4) float32`, `uvs (N,2) float32`
    - `indices (K,) uint32`
    - `primitive`: `PrimitiveKind.TRIANGLES` | `PrimitiveKind.LINES`

    設計意図:
    - 生成時に dtype/形状を検証し、正規化済み状態だけを許容する。
    - 変換は持たない（Transform は DrawBatch が flush 時にラスタライザへ渡す）。
    """

    __slots__ = ("positions", "colors", "uvs", "indices", "primitive")

    positions: np.ndarray
    colors: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray
    primitive: PrimitiveKind

    def __init__(
        self,
        positions: np.ndarray,
        colors: np.ndarray,
        indices: np.ndarray,
        primitive: PrimitiveKind = PrimitiveKind.TRIANGLES,
        uvs: np.ndarray | None = None,
    ) -> None:
        primitive = PrimitiveKind(primitive)
        pos, col, uv, idx = _normalize_mesh_input(positions, colors, uvs, indices, primitive)
        self.positions = pos
        self.colors = col
        self.uvs = uv
        self.indices = idx
        self.primitive = primitive

    # ── ファクトリ ───────────────────
    @classmethod
    def empty(cls, primitive: PrimitiveKind = PrimitiveKind.TRIANGLES) -> "Mesh":
        return cls(
            np.empty((0, 2), dtype=np.float32),
            np.empty((0, 4), dtype=np.float32),
            np.empty((0,), dtype=np.uint32),
            primitive,
        )

    # ── 基本操作（すべて純粋） ────────
    @property
    def is_empty(self) -> bool:
        return self.positions.shape[0] == 0

    @property
    def n_vertices(self) -> int:
        """頂点数 `N` を返す。"""
        return int(self.positions.shape[0])

    @property
    def n_primitives(self) -> int:
        """三角形数（TRIANGLES）または線分数（LINES）を返す。"""
        group = 3 if self.primitive is PrimitiveKind.TRIANGLES else 2
        return int(self.indices.size // group)

    def triangles(self) -> np.ndarray:
        """TRIANGLES のインデックスを `(T, 3)` で返す。"""
        if self.primitive is not PrimitiveKind.TRIANGLES:
            raise ValueError("triangles() は TRIANGLES メッシュでのみ使用できます。")
        return self.indices.reshape(-1, 3)

    def triangle_area(self) -> float:
        """三角形の（符号なし）面積の総和。重なりは重複計上される。"""
        tri = self.triangles()
        if tri.size == 0:
            return 0.0
        p = self.positions.astype(np.float64)
        a = p[tri[:, 0]]
        b = p[tri[:, 1]]
        c = p[tri[:, 2]]
        cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
        return float(0.5 * np.abs(cross).sum())

    def bounds(self) -> tuple[float, float, float, float]:
        """頂点の外接矩形 `(min_x, min_y, max_x, max_y)`。空メッシュは ValueError。"""
        if self.is_empty:
            raise ValueError("空メッシュの外接矩形は定義されません。")
        lo = self.positions.min(axis=0)
        hi = self.positions.max(axis=0)
        return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])

    def interleaved(self) -> np.ndarray:
        """GPU 転送用の `(N, 8) float32`（x, y, r, g, b, a, u, v）を返す。"""
        return np.ascontiguousarray(
            np.hstack([self.positions, self.colors, self.uvs]), dtype=np.float32
        )

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Mesh(N={self.n_vertices}, {self.primitive.value}={self.n_primitives})"


__all__ = ["Mesh", "PrimitiveKind", "VERTEX_STRIDE"]
