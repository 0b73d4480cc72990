"""
どこで: `engine.core` の変換ユーティリティ。
何を: 2D アフィン変換 `Transform`（3x3 同次行列）と、その生成/合成/適用。
なぜ: DrawBatch がセッション単位で保持し、flush 時にラスタライザへ渡す唯一の変換表現とするため。

規約:
- 点は列ベクトル `[x, y, 1]^T` とし、`a @ b` は「b を適用してから a を適用」。
- 値オブジェクト（不変）。合成/生成はすべて新しいインスタンスを返す。
- メッシュの頂点には焼き込まない（`apply` はテストやヘッドレス確認用）。
"""

from __future__ import annotations

import math

import numpy as np

from common.types import PointsLike, Vec2


class Transform:
    """2D アフィン変換（不変）。"""

    __slots__ = ("_m",)

    def __init__(self, matrix: np.ndarray | None = None) -> None:
        if matrix is None:
            m = np.eye(3, dtype=np.float64)
        else:
            m = np.array(matrix, dtype=np.float64)
            if m.shape == (2, 3):
                m = np.vstack([m, [0.0, 0.0, 1.0]])
            if m.shape != (3, 3):
                raise ValueError(f"Transform は (3, 3) または (2, 3) 行列が必要です: {m.shape}")
            if not np.allclose(m[2], [0.0, 0.0, 1.0]):
                raise ValueError("Transform の最終行は [0, 0, 1] である必要があります。")
        m.setflags(write=False)
        self._m = m

    # ── ファクトリ ───────────────────
    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> "Transform":
        return cls(np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]]))

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None, center: Vec2 = (0.0, 0.0)) -> "Transform":
        """拡大縮小。`sy` 省略時は等方。`center` を基準点とする。"""
        if sy is None:
            sy = sx
        cx, cy = center
        return cls(
            np.array([[sx, 0.0, cx - sx * cx], [0.0, sy, cy - sy * cy], [0.0, 0.0, 1.0]])
        )

    @classmethod
    def rotation(cls, angle_rad: float, center: Vec2 = (0.0, 0.0)) -> "Transform":
        """回転（ラジアン）。数学座標では反時計回り、Y 下向き画面では時計回りに見える。"""
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        cx, cy = center
        return cls(
            np.array(
                [
                    [c, -s, cx - c * cx + s * cy],
                    [s, c, cy - s * cx - c * cy],
                    [0.0, 0.0, 1.0],
                ]
            )
        )

    # ── 基本操作 ─────────────────────
    @property
    def matrix(self) -> np.ndarray:
        """読み取り専用の 3x3 行列。"""
        return self._m

    @property
    def is_identity(self) -> bool:
        return bool(np.array_equal(self._m, np.eye(3)))

    def then(self, other: "Transform") -> "Transform":
        """self を適用した後に other を適用する変換。"""
        return Transform(other._m @ self._m)

    def __matmul__(self, other: "Transform") -> "Transform":
        return Transform(self._m @ other._m)

    def apply(self, points: PointsLike) -> np.ndarray:
        """`(N, 2)` 点列へ適用した新しい配列を返す。"""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts @ self._m[:2, :2].T + self._m[:2, 2]

    def to_mat4(self) -> np.ndarray:
        """シェーダ uniform 用の 4x4（ModernGL 向けに転置済み, float32）。"""
        m = self._m
        mat4 = np.array(
            [
                [m[0, 0], m[0, 1], 0.0, m[0, 2]],
                [m[1, 0], m[1, 1], 0.0, m[1, 2]],
                [0.0, 0.0, 1.0, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ],
            dtype="f4",
        ).T
        return np.ascontiguousarray(mat4)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    def __hash__(self) -> int:
        return hash(self._m.tobytes())

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        rows = ", ".join("[" + ", ".join(f"{v:g}" for v in r) + "]" for r in self._m[:2])
        return f"Transform({rows})"


def build_projection(width: float, height: float) -> np.ndarray:
    """画面ピクセル（左上原点・Y 下向き）をクリップ空間へ写す正射影行列（ModernGL 用の転置済み）。"""
    proj = np.array(
        [
            [2 / width, 0, 0, -1],
            [0, -2 / height, 0, 1],
            [0, 0, -1, 0],
            [0, 0, 0, 1],
        ],
        dtype="f4",
    ).T
    return np.ascontiguousarray(proj)


__all__ = ["Transform", "build_projection"]
