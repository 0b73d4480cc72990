"""
どこで: `tessellate.attributes`
何を: 頂点色と UV（パターンブラシ用）を位置配列から決める共通ヘルパ。
なぜ: ストロークと塗りで「外接矩形基準の UV」を同じ規則で作り、三角形分割に依存させないため。
"""

from __future__ import annotations

import numpy as np

from common.types import RGBA
from paint.brush import Brush


def bbox_uvs(positions: np.ndarray, tile_size: tuple[float, float] | None = None) -> np.ndarray:
    """外接矩形の左上を原点とする UV を返す。

    - `tile_size` 指定時は `(p - min) / tile_size`（1 を超えると繰り返し）。
    - 未指定時は `(p - min) / extent` で 0..1 に収める（幅 0 の軸は 0）。
    """
    pos = np.asarray(positions, dtype=np.float64)
    if pos.shape[0] == 0:
        return np.zeros((0, 2), dtype=np.float32)
    lo = pos.min(axis=0)
    if tile_size is not None:
        scale = np.array(tile_size, dtype=np.float64)
    else:
        scale = pos.max(axis=0) - lo
        scale[scale <= 0.0] = 1.0
    return ((pos - lo) / scale).astype(np.float32)


def vertex_attributes(
    positions: np.ndarray, color: RGBA, brush: Brush | None = None
) -> tuple[np.ndarray, np.ndarray | None]:
    """`(colors (N,4), uvs (N,2) | None)` を返す。パターンブラシ以外の uvs は None。"""
    n = int(np.asarray(positions).shape[0])
    colors = np.tile(np.asarray(color, dtype=np.float32), (n, 1))
    if brush is not None and brush.is_pattern:
        return colors, bbox_uvs(positions, brush.tile_size)
    return colors, None


__all__ = ["bbox_uvs", "vertex_attributes"]
