"""
どこで: `paint.pen`
何を: ストロークスタイル `Pen`（幅・色/ブラシ・始端/終端キャップ・結合・位置合わせ）。
なぜ: Path とバッチの描画呼び出しが共有する不変の値オブジェクトを 1 つに定めるため。

位置合わせ（PenAlignment）:
- CENTER: 中心線の両側に幅の半分ずつ。
- INSET: 幅すべてを内側へ（中心線がストロークの外縁と一致）。
- OUTSET: 幅すべてを外側へ（中心線がストロークの内縁と一致）。
内側/外側は閉じたパスでは巻き方向、開いたパスでは進行方向の左（数学座標）を内側とみなす。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from common.errors import InvalidPenGeometry
from common.types import RGBA
from util.color import normalize_color

from .brush import Brush


class LineCap(str, Enum):
    FLAT = "flat"
    SQUARE = "square"
    ROUND = "round"
    TRIANGLE = "triangle"


class LineJoin(str, Enum):
    MITER = "miter"
    BEVEL = "bevel"
    ROUND = "round"


class PenAlignment(str, Enum):
    INSET = "inset"
    CENTER = "center"
    OUTSET = "outset"


@dataclass(frozen=True)
class Pen:
    """ストロークスタイル（不変）。

    Attributes
    ----------
    color : RGBA
        線色。色名/Hex/タプルを受理し RGBA(0–1) に正規化される。
    width : float, default 1.0
        線幅（> 0）。0 以下は `InvalidPenGeometry`。
    brush : Brush | None
        指定時は色の代わりにブラシで塗る（単色ならその色、パターンなら UV 付き）。
    start_cap, end_cap : LineCap
        開いたパスの始端/終端の形状。閉じたパスでは使われない。
    join : LineJoin, default MITER
        結合部の処理。MITER は `miter_limit` を超えると BEVEL に落ちる。
    miter_limit : float | None
        miter 長の上限（幅の半分に対する倍率）。None なら設定値（既定 4）。
    alignment : PenAlignment, default CENTER
        中心線に対する線幅の置き方。
    """

    color: RGBA = (0.0, 0.0, 0.0, 1.0)
    width: float = 1.0
    brush: Brush | None = None
    start_cap: LineCap = LineCap.FLAT
    end_cap: LineCap = LineCap.FLAT
    join: LineJoin = LineJoin.MITER
    miter_limit: float | None = None
    alignment: PenAlignment = PenAlignment.CENTER

    def __post_init__(self) -> None:
        try:
            w = float(self.width)
        except (TypeError, ValueError) as e:
            raise InvalidPenGeometry(f"ペン幅は数値である必要があります: {self.width!r}") from e
        if not math.isfinite(w) or w <= 0.0:
            raise InvalidPenGeometry(f"ペン幅は正の有限値である必要があります: {self.width!r}")
        object.__setattr__(self, "width", w)
        if self.brush is not None and not isinstance(self.brush, Brush):
            raise InvalidPenGeometry(f"brush は Brush である必要があります: {type(self.brush).__name__}")
        color = self.brush.color if self.brush is not None else self.color
        try:
            object.__setattr__(self, "color", normalize_color(color))
            object.__setattr__(self, "start_cap", LineCap(self.start_cap))
            object.__setattr__(self, "end_cap", LineCap(self.end_cap))
            object.__setattr__(self, "join", LineJoin(self.join))
            object.__setattr__(self, "alignment", PenAlignment(self.alignment))
        except (TypeError, ValueError) as e:
            raise InvalidPenGeometry(f"ペンの指定が不正です: {e}") from e
        if self.miter_limit is not None:
            try:
                ml = float(self.miter_limit)
            except (TypeError, ValueError) as e:
                raise InvalidPenGeometry(f"miter_limit は数値である必要があります: {self.miter_limit!r}") from e
            if not math.isfinite(ml) or ml < 1.0:
                raise InvalidPenGeometry(f"miter_limit は 1 以上である必要があります: {self.miter_limit!r}")
            object.__setattr__(self, "miter_limit", ml)

    @property
    def half_width(self) -> float:
        return self.width * 0.5

    def resolved_miter_limit(self) -> float:
        if self.miter_limit is not None:
            return float(self.miter_limit)
        from common.settings import get as _get_settings

        return float(_get_settings().MITER_LIMIT)

    def offset_range(self) -> tuple[float, float]:
        """内側法線方向のオフセット区間 `(lo, hi)` を返す（hi - lo == width）。"""
        w = self.width
        if self.alignment is PenAlignment.INSET:
            return 0.0, w
        if self.alignment is PenAlignment.OUTSET:
            return -w, 0.0
        return -0.5 * w, 0.5 * w

    def with_(self, **changes: Any) -> "Pen":
        """一部のフィールドを差し替えた新しい Pen を返す。"""
        return replace(self, **changes)


__all__ = ["Pen", "LineCap", "LineJoin", "PenAlignment"]
