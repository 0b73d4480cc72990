"""
どこで: `paint.brush`
何を: 塗りスタイル `Brush`（単色 / パターン）と手続き的パターン生成 `checker_pattern`。
なぜ: 塗り（tessellate.fill）とパターン付きペンが、頂点色/UV/テクスチャ参照を一貫して決めるため。

設計:
- 生成後は不変（パターン配列は読み取り専用コピーを保持）。複数の Path/Batch から共有してよい。
- パターンは `uint8 (H, W, 4)` の RGBA 画像。UV は形状の外接矩形基準で決まり、
  `tile_size` があればその大きさで繰り返す（テクスチャは repeat で貼られる前提）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from common.errors import InvalidFillGeometry, InvalidGeometryParameter
from common.types import RGBA, Vec2
from util.color import normalize_color, to_u8_rgba


class BrushKind(str, Enum):
    SOLID = "solid"
    PATTERN = "pattern"


def _freeze_pattern(pattern: object) -> np.ndarray:
    try:
        arr = np.array(pattern)
    except (TypeError, ValueError) as e:
        raise InvalidFillGeometry(f"pattern を配列に変換できません: {e}") from e
    if arr.dtype.kind not in "biuf":
        raise InvalidFillGeometry(f"pattern は数値配列である必要があります: dtype={arr.dtype}")
    if arr.ndim != 3 or arr.shape[2] != 4 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidFillGeometry(f"pattern は形状 (H, W, 4) の RGBA 画像である必要があります: {arr.shape}")
    if arr.dtype != np.uint8:
        if np.issubdtype(arr.dtype, np.floating) and float(arr.max(initial=0.0)) <= 1.0:
            arr = np.round(arr * 255.0)
        arr = np.clip(arr, 0, 255).astype(np.uint8)
    arr = np.ascontiguousarray(arr)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Brush:
    """塗りスタイル（不変）。

    Attributes
    ----------
    kind : BrushKind
        SOLID または PATTERN。
    color : RGBA
        単色ブラシの色。パターンブラシでは頂点色（テクスチャに乗算する tint）。
    pattern : np.ndarray | None
        PATTERN のときの RGBA 画像 `uint8 (H, W, 4)`。
    tile_size : Vec2 | None
        パターン 1 枚が覆う大きさ（描画座標）。None なら外接矩形に 1 枚を引き伸ばす。
    """

    kind: BrushKind = BrushKind.SOLID
    color: RGBA = (0.0, 0.0, 0.0, 1.0)
    pattern: np.ndarray | None = field(default=None, repr=False)
    tile_size: Vec2 | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "kind", BrushKind(self.kind))
            object.__setattr__(self, "color", normalize_color(self.color))
        except (TypeError, ValueError) as e:
            raise InvalidFillGeometry(f"ブラシの指定が不正です: {e}") from e
        if self.kind is BrushKind.PATTERN:
            if self.pattern is None:
                raise InvalidFillGeometry("PATTERN ブラシには pattern が必要です。")
            object.__setattr__(self, "pattern", _freeze_pattern(self.pattern))
        elif self.pattern is not None:
            raise InvalidFillGeometry("SOLID ブラシに pattern は指定できません。")
        if self.tile_size is not None:
            try:
                tw, th = (float(v) for v in self.tile_size)
            except (TypeError, ValueError) as e:
                raise InvalidFillGeometry(f"tile_size は 2 つの数値である必要があります: {self.tile_size!r}") from e
            if not (math.isfinite(tw) and math.isfinite(th) and tw > 0.0 and th > 0.0):
                raise InvalidFillGeometry(f"tile_size は正である必要があります: {self.tile_size!r}")
            object.__setattr__(self, "tile_size", (tw, th))

    # ── ファクトリ ───────────────────
    @classmethod
    def solid(cls, color: object) -> "Brush":
        return cls(BrushKind.SOLID, color)  # type: ignore[arg-type]

    @classmethod
    def from_pattern(
        cls,
        pattern: object,
        *,
        tint: object = (1.0, 1.0, 1.0, 1.0),
        tile_size: Vec2 | None = None,
    ) -> "Brush":
        return cls(BrushKind.PATTERN, tint, pattern, tile_size)  # type: ignore[arg-type]

    @property
    def is_pattern(self) -> bool:
        return self.kind is BrushKind.PATTERN

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Brush):
            return NotImplemented
        if (self.kind, self.color, self.tile_size) != (other.kind, other.color, other.tile_size):
            return False
        if self.pattern is None or other.pattern is None:
            return self.pattern is other.pattern
        return bool(np.array_equal(self.pattern, other.pattern))

    def __hash__(self) -> int:
        pat = None if self.pattern is None else (self.pattern.shape, self.pattern.tobytes())
        return hash((self.kind, self.color, self.tile_size, pat))


def checker_pattern(
    cell: int = 8,
    color_a: object = "white",
    color_b: object = "lightgray",
) -> np.ndarray:
    """2x2 セルの市松模様 `uint8 (2*cell, 2*cell, 4)` を返す。"""
    if int(cell) < 1:
        raise InvalidGeometryParameter(f"cell は 1 以上である必要があります: {cell!r}")
    c = int(cell)
    a = np.array(to_u8_rgba(color_a), dtype=np.uint8)
    b = np.array(to_u8_rgba(color_b), dtype=np.uint8)
    yy, xx = np.mgrid[0 : 2 * c, 0 : 2 * c]
    mask = ((yy // c) + (xx // c)) % 2 == 0
    return np.where(mask[..., None], a, b).astype(np.uint8)


__all__ = ["Brush", "BrushKind", "checker_pattern"]
