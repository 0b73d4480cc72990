"""
どこで: `tessellate.primitive`
何を: プリミティブ描画（1 ユニット幅の線）用の LINES メッシュを作る。
なぜ: 幅・キャップ・配置を無視し、点列の辺をそのまま線分として送るため。
"""

from __future__ import annotations

import numpy as np

from common.errors import InvalidPenGeometry
from common.types import RGBA
from engine.core.mesh import Mesh, PrimitiveKind
from engine.core.points import PointSequence


def primitive_lines(points: PointSequence, color: RGBA) -> Mesh:
    """点列の各辺を線分とする `Mesh(primitive=LINES)` を返す。

    閉じた点列は末尾→先頭の辺を含む。重複点は除去しない（長さ 0 の線分は無害）。
    """
    n = len(points)
    if n < 2:
        raise InvalidPenGeometry("プリミティブ線には少なくとも 2 点が必要です。")
    start = np.arange(n - 1, dtype=np.uint32)
    indices = np.column_stack([start, start + 1])
    if points.closed and n >= 3:
        indices = np.vstack([indices, np.array([[n - 1, 0]], dtype=np.uint32)])
    return Mesh(points.points, np.asarray(color, dtype=np.float32), indices, PrimitiveKind.LINES)


__all__ = ["primitive_lines"]
