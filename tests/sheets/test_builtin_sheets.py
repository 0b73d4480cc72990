from __future__ import annotations

import numpy as np
import pytest
from shapely.geometry import Point, Polygon

from engine.core.mesh import PrimitiveKind
from engine.render import DrawBatch, FillMode, RecordingRasterizer
from paint import PaintContext
from sheets import SheetOptions, build_default_registry, run_sheet
from sheets.builtin import (
    FILLED_SHAPES,
    OUTLINE_SHAPES,
    PEN_ALIGNMENT,
    PRIMITIVE_SHAPES,
    draw_filled_shapes,
    draw_outline_shapes,
    draw_pen_alignment,
    draw_primitive_shapes,
)
from shapes import star

T = PrimitiveKind.TRIANGLES
L = PrimitiveKind.LINES


def _run(sheet, options: SheetOptions | None = None) -> RecordingRasterizer:  # noqa: ANN001
    rec = RecordingRasterizer()
    run_sheet(DrawBatch(rec), sheet, options)
    return rec


@pytest.mark.parametrize(
    "title, kinds",
    [
        (PRIMITIVE_SHAPES, [L, L, L, L, L]),
        (OUTLINE_SHAPES, [T, T, T, T, T]),
        (PEN_ALIGNMENT, [T, L, T, L, T, L]),
        (FILLED_SHAPES, [T, T, T, T]),
    ],
)
def test_sheet_submission_kinds(title: str, kinds: list[PrimitiveKind]) -> None:
    rec = _run(build_default_registry().get_sheet(title))
    assert [s.primitive for s in rec.submissions] == kinds


def test_primitive_shapes_geometry() -> None:
    subs = _run(draw_primitive_shapes).submissions
    assert subs[0].bounds() == (50.0, 50.0, 250.0, 50.0)
    assert subs[2].bounds() == (50.0, 160.0, 250.0, 260.0)
    # 既定分割（r=50 → 79）と明示 16 分割
    assert subs[3].vertices.shape[0] == 79
    assert subs[4].vertices.shape[0] == 16
    assert subs[4].indices.size == 32


def test_outline_shapes_geometry() -> None:
    subs = _run(draw_outline_shapes).submissions
    assert subs[0].bounds() == pytest.approx((50.0, 42.5, 250.0, 57.5))
    # 赤のジグザグは SQUARE キャップで両端が半幅だけ伸びる
    x0, _, x1, _ = subs[1].bounds()
    assert x0 < 50.0 - 7.0
    assert x1 > 240.0 + 7.0
    assert subs[2].bounds() == pytest.approx((42.5, 152.5, 257.5, 267.5))


def _star_polygon(center: tuple[float, float]) -> Polygon:
    return Polygon(star(center, 5, 100, 50).points)


def test_pen_alignment_inset_stays_inside() -> None:
    subs = _run(draw_pen_alignment).submissions
    poly = _star_polygon((125.0, 150.0))
    inside = poly.buffer(1e-3)
    pos = subs[0].positions()
    assert all(inside.contains(Point(float(x), float(y))) for x, y in pos)
    for vx, vy in star((125.0, 150.0), 5, 100, 50).points:
        assert np.any(np.all(np.isclose(pos, (vx, vy), atol=1e-3), axis=1))


def test_pen_alignment_outset_stays_outside() -> None:
    subs = _run(draw_pen_alignment).submissions
    core = _star_polygon((125.0, 400.0)).buffer(-1e-3)
    pos = subs[4].positions()
    assert not any(core.contains(Point(float(x), float(y))) for x, y in pos)


def test_pen_alignment_center_straddles_outline() -> None:
    subs = _run(draw_pen_alignment).submissions
    poly = _star_polygon((350.0, 275.0))
    pos = subs[2].positions()
    flags = [poly.contains(Point(float(x), float(y))) for x, y in pos]
    assert any(flags) and not all(flags)


def test_pen_alignment_guides_are_closed_rings() -> None:
    subs = _run(draw_pen_alignment).submissions
    for guide in subs[1::2]:
        assert guide.vertices.shape[0] == 11
        assert guide.indices.size == 20
        assert np.allclose(guide.vertices[:, 2:6], [1.0, 69 / 255, 0.0, 1.0])


def test_filled_shapes_geometry() -> None:
    subs = _run(draw_filled_shapes).submissions
    assert subs[0].bounds() == (50.0, 50.0, 250.0, 150.0)
    assert subs[0].indices.size == 6
    assert subs[2].vertices.shape[0] == 16
    assert subs[2].indices.size == 14 * 3
    assert subs[3].vertices.shape[0] == 16
    assert subs[3].indices.size == 14 * 3


def test_sheets_are_deterministic() -> None:
    reg = build_default_registry()
    for title in reg.names():
        a = _run(reg.get_sheet(title)).submissions
        b = _run(reg.get_sheet(title)).submissions
        assert len(a) == len(b)
        for sa, sb in zip(a, b):
            assert sa.vertices.tobytes() == sb.vertices.tobytes()
            assert sa.indices.tobytes() == sb.indices.tobytes()


def test_options_flow_into_every_submission() -> None:
    with PaintContext() as paint:
        opts = SheetOptions(fill_mode=FillMode.WIREFRAME, antialias=False, paint=paint)
        rec = _run(draw_filled_shapes, opts)
    assert all(s.config.fill_mode is FillMode.WIREFRAME for s in rec.submissions)
    assert all(s.config.antialias is False for s in rec.submissions)
