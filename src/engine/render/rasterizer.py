"""
どこで: `engine.render.rasterizer`
何を: DrawBatch が flush 時に呼ぶ送信インターフェイス `Rasterizer` と、記録専用実装。
なぜ: バッチの記録ロジックを GPU から切り離し、ヘッドレスで送信内容を検証できるようにするため。

契約:
- `submit(vertices, indices, primitive, transform, config, *, texture=None, stencil=None) -> bool`
  - `vertices`: `(N, 8) float32`（x, y, r, g, b, a, u, v）。
  - `indices`: `(K,) uint32`。`primitive` が TRIANGLES なら 3 の倍数、LINES なら 2 の倍数。
  - 失敗時は False を返すか例外を送出する（DrawBatch が RasterizerError に変換）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import numpy as np

from engine.core.mesh import PrimitiveKind
from engine.core.transform_utils import Transform

from .types import RasterizerConfig


@runtime_checkable
class Rasterizer(Protocol):
    def submit(
        self,
        vertices: np.ndarray,
        indices: np.ndarray,
        primitive: PrimitiveKind,
        transform: Transform,
        config: RasterizerConfig,
        *,
        texture: Any = None,
        stencil: Any = None,
    ) -> bool: ...


@dataclass(frozen=True)
class Submission:
    """`RecordingRasterizer` が保持する 1 回分の送信内容（配列は複製）。"""

    vertices: np.ndarray
    indices: np.ndarray
    primitive: PrimitiveKind
    transform: Transform
    config: RasterizerConfig
    texture: Any = None
    stencil: Any = None

    def positions(self) -> np.ndarray:
        return self.vertices[:, :2]

    def bounds(self) -> tuple[float, float, float, float]:
        """変換前の頂点外接矩形 `(min_x, min_y, max_x, max_y)`。"""
        pos = self.positions()
        lo = pos.min(axis=0)
        hi = pos.max(axis=0)
        return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])

    def world_bounds(self) -> tuple[float, float, float, float]:
        """`transform` 適用後の外接矩形。"""
        pos = self.transform.apply(self.positions())
        lo = pos.min(axis=0)
        hi = pos.max(axis=0)
        return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])


class RecordingRasterizer:
    """送信内容をメモリに記録するだけのラスタライザ。

    `fail_on` に送信番号（0 始まり、累計）を渡すとその回で False を返す。
    """

    def __init__(self, *, fail_on: set[int] | None = None) -> None:
        self.submissions: list[Submission] = []
        self._fail_on = set(fail_on or ())
        self._calls = 0

    def submit(
        self,
        vertices: np.ndarray,
        indices: np.ndarray,
        primitive: PrimitiveKind,
        transform: Transform,
        config: RasterizerConfig,
        *,
        texture: Any = None,
        stencil: Any = None,
    ) -> bool:
        call = self._calls
        self._calls += 1
        if call in self._fail_on:
            return False
        self.submissions.append(
            Submission(
                vertices=np.array(vertices, dtype=np.float32, copy=True),
                indices=np.array(indices, dtype=np.uint32, copy=True),
                primitive=PrimitiveKind(primitive),
                transform=transform,
                config=config,
                texture=texture,
                stencil=stencil,
            )
        )
        return True

    def clear(self) -> None:
        self.submissions.clear()

    def __len__(self) -> int:
        return len(self.submissions)


__all__ = ["Rasterizer", "RecordingRasterizer", "Submission"]
