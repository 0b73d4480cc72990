"""
どこで: `engine.render` サブパッケージ。
何を: 描画呼び出しの記録（DrawBatch）と送信先（Rasterizer 実装群）を提供。
なぜ: 幾何の確定（tessellate）と GPU への送信を分離し、GPU リソース管理を局所化するため。

ModernGL 依存の `gl_rasterizer`/`mesh_buffer`/`shader` はここでは import しない。
"""

from .batch import DrawBatch
from .rasterizer import Rasterizer, RecordingRasterizer, Submission
from .types import DrawCallKind, DrawCommand, FillMode, RasterizerConfig, SessionState

__all__ = [
    "DrawBatch",
    "Rasterizer",
    "RecordingRasterizer",
    "Submission",
    "DrawCallKind",
    "DrawCommand",
    "FillMode",
    "RasterizerConfig",
    "SessionState",
]
