"""
どこで: `paint` パッケージ。
何を: ストローク/塗りのスタイル値（Pen/Brush）と、それらを名前で引く PaintContext。
なぜ: 幾何（shapes/tessellate）と見た目の指定を分離し、不変値として安全に共有するため。
"""

from .brush import Brush, BrushKind, checker_pattern
from .context import PaintContext
from .pen import LineCap, LineJoin, Pen, PenAlignment

__all__ = [
    "Brush",
    "BrushKind",
    "LineCap",
    "LineJoin",
    "PaintContext",
    "Pen",
    "PenAlignment",
    "checker_pattern",
]
