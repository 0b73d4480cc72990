"""
どこで: `sheets.builtin`
何を: 組み込みテストシート 4 枚（プリミティブ/アウトライン/ペン配置/塗り）の描画関数と登録関数。
なぜ: ストローク・塗り・ペン配置の見た目を並べて確認できる固定の描画シーケンスを提供するため。

各シートは `fn(batch, options)` の形で、ちょうど 1 回の begin/end を行う。
"""

from __future__ import annotations

from engine.core.points import Rect
from engine.render.batch import DrawBatch
from paint.pen import LineCap, PenAlignment
from shapes import star, wavy
from tessellate.path import Path

from .registry import SheetRegistry
from .runner import SheetOptions

PRIMITIVE_SHAPES = "Primitive Shapes"
OUTLINE_SHAPES = "Outline Shapes"
PEN_ALIGNMENT = "Pen Alignment"
FILLED_SHAPES = "Filled Shapes"

# 星形の共通パラメータ（5 つの突起、外径 100、内径 50）
_STAR_POINTS = 5
_STAR_OUTER = 100.0
_STAR_INNER = 50.0


def draw_primitive_shapes(batch: DrawBatch, options: SheetOptions = SheetOptions()) -> None:
    paint = options.paint_context()
    batch.begin(rasterizer=options.rasterizer_config())
    batch.draw_primitive_line((50, 50), (250, 50), paint.pen("Blue"))
    batch.draw_primitive_path(wavy(), paint.pen("Red"))
    batch.draw_primitive_rectangle(Rect(50, 160, 200, 100), paint.pen("Magenta"))
    batch.draw_primitive_circle((350, 100), 50, paint.pen("Black"))
    batch.draw_primitive_circle((350, 225), 50, paint.pen("DarkGray"), segments=16)
    batch.end()


def draw_outline_shapes(batch: DrawBatch, options: SheetOptions = SheetOptions()) -> None:
    paint = options.paint_context()
    thick_blue = paint.pen("Blue").with_(width=15)
    thick_red = paint.pen("Red").with_(width=15, start_cap=LineCap.SQUARE, end_cap=LineCap.SQUARE)
    thick_magenta = paint.pen("Magenta").with_(width=15)
    thick_black = paint.pen("Black").with_(width=15)
    thick_dark_gray = paint.pen("DarkGray").with_(width=15)

    wavy_path = Path(thick_red, wavy())

    batch.begin(rasterizer=options.rasterizer_config())
    batch.draw_line((50, 50), (250, 50), thick_blue)
    batch.draw_path(wavy_path)
    batch.draw_rectangle(Rect(50, 160, 200, 100), thick_magenta)
    batch.draw_circle((350, 100), 50, thick_black)
    batch.draw_circle((350, 225), 50, thick_dark_gray, segments=16)
    batch.end()


def draw_pen_alignment(batch: DrawBatch, options: SheetOptions = SheetOptions()) -> None:
    """同じ星形を INSET/CENTER/OUTSET の 10px ペンで描き、中心線を 1px で重ねる。"""
    paint = options.paint_context()
    base = paint.pen("MediumTurquoise").with_(width=10)
    guide = paint.pen("OrangeRed")

    rows = (
        ((125.0, 150.0), PenAlignment.INSET),
        ((350.0, 275.0), PenAlignment.CENTER),
        ((125.0, 400.0), PenAlignment.OUTSET),
    )

    batch.begin(rasterizer=options.rasterizer_config())
    for center, alignment in rows:
        outline = star(center, _STAR_POINTS, _STAR_OUTER, _STAR_INNER)
        batch.draw_path(Path(base.with_(alignment=alignment), outline, closed=True))
        ring = star(center, _STAR_POINTS, _STAR_OUTER, _STAR_INNER, close=True)
        batch.draw_primitive_path(ring, guide)
    batch.end()


def draw_filled_shapes(batch: DrawBatch, options: SheetOptions = SheetOptions()) -> None:
    paint = options.paint_context()
    batch.begin(rasterizer=options.rasterizer_config())
    batch.fill_rectangle(Rect(50, 50, 200, 100), paint.brush("Green"))
    batch.fill_circle((350, 100), 50, paint.brush("Blue"))
    batch.fill_circle((500, 100), 50, paint.brush("Blue"), segments=16)
    batch.fill_path(star((150, 300), 8, _STAR_OUTER, _STAR_INNER), paint.brush("Gray"))
    batch.end()


def register_builtin_sheets(registry: SheetRegistry) -> SheetRegistry:
    """組み込みシートを表示順に登録する。"""
    registry.add(PRIMITIVE_SHAPES, draw_primitive_shapes)
    registry.add(OUTLINE_SHAPES, draw_outline_shapes)
    registry.add(PEN_ALIGNMENT, draw_pen_alignment)
    registry.add(FILLED_SHAPES, draw_filled_shapes)
    return registry


def build_default_registry() -> SheetRegistry:
    """組み込みシートを登録した新しいレジストリを返す。"""
    return register_builtin_sheets(SheetRegistry())


__all__ = [
    "build_default_registry",
    "draw_primitive_shapes",
    "draw_outline_shapes",
    "draw_pen_alignment",
    "draw_filled_shapes",
    "register_builtin_sheets",
    "PRIMITIVE_SHAPES",
    "OUTLINE_SHAPES",
    "PEN_ALIGNMENT",
    "FILLED_SHAPES",
]
