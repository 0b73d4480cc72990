"""
どこで: `tessellate` パッケージ
何を: 点列 + Pen/Brush を描画可能な `Mesh` へ変換する純関数群（ストローク/塗り/プリミティブ線）。
なぜ: 幾何の確定を GPU/ウィンドウから切り離し、ヘッドレスで検証できるようにするため。
"""

from .fill import fill_points, is_simple_polygon, triangulate_ring
from .path import Path
from .primitive import primitive_lines
from .stroke import stroke_points

__all__ = [
    "Path",
    "stroke_points",
    "fill_points",
    "triangulate_ring",
    "is_simple_polygon",
    "primitive_lines",
]
