"""
どこで: `api` 入口（高レベル公開 API）。
何を: テストシートのホスト実行 `run` と、描画に必要な主要型を再輸出。
なぜ: 利用者が単一名前空間からペン/ブラシ作成→バッチ記録→ウィンドウ表示まで完結できるようにするため。

Usage:
    from api import run
    run("Pen Alignment")
"""

from engine.core.points import PointSequence, Rect
from engine.render.batch import DrawBatch
from engine.render.rasterizer import RecordingRasterizer
from paint import Brush, LineCap, LineJoin, PaintContext, Pen, PenAlignment
from sheets import SheetOptions, build_default_registry, render, run_sheet
from tessellate import Path

from .runner import HostSettings, run

__all__ = [
    "run",
    "HostSettings",
    "DrawBatch",
    "RecordingRasterizer",
    "Pen",
    "Brush",
    "LineCap",
    "LineJoin",
    "PenAlignment",
    "PaintContext",
    "Path",
    "PointSequence",
    "Rect",
    "SheetOptions",
    "build_default_registry",
    "render",
    "run_sheet",
]

# バージョン情報
__version__ = "0.1.0"
