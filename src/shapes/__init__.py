"""
どこで: `shapes` パッケージ。
何を: 点列生成関数（星形・ジグザグ・円/楕円・正多角形・矩形・線分）を提供する。
なぜ: 生成ステージを純関数に限定し、ストローク/塗り/バッチから同じ頂点列を再利用するため。

すべての関数は決定的で、不正な入力は `InvalidGeometryParameter` を送出する（部分的な出力はない）。
"""

from .ellipse import circle, default_segment_count, ellipse, resolve_segments
from .line import line
from .polygon import rectangle, regular_polygon
from .star import star
from .wavy import wavy

__all__ = [
    "circle",
    "default_segment_count",
    "ellipse",
    "line",
    "rectangle",
    "regular_polygon",
    "resolve_segments",
    "star",
    "wavy",
]
