from __future__ import annotations

import numpy as np
import pytest

from common.errors import InvalidPenGeometry
from engine.core.mesh import PrimitiveKind
from engine.core.points import PointSequence
from paint import Brush, Pen, checker_pattern
from shapes import star
from tessellate import Path, primitive_lines


def test_path_copies_caller_points() -> None:
    src = [[0.0, 0.0], [100.0, 0.0]]
    path = Path(Pen("Black", 10), src)
    src[1][0] = 5.0
    assert path.points.points[1, 0] == 100.0
    assert path.closed is False
    assert path.stroke().bounds()[2] == pytest.approx(100.0)


def test_path_closed_override() -> None:
    seq = star((0, 0), 5, 100, 50)
    assert Path(Pen(), seq).closed is False
    assert Path(Pen(), seq, closed=True).closed is True
    assert Path(Pen(), seq.with_closed(True)).closed is True


def test_path_requires_pen() -> None:
    with pytest.raises(InvalidPenGeometry):
        Path("Black", [(0, 0), (1, 1)])  # type: ignore[arg-type]


def test_path_stroke_is_repeatable() -> None:
    path = Path(Pen("Blue", 3), star((0, 0), 5, 100, 50), closed=True)
    a = path.stroke()
    b = path.stroke()
    assert np.array_equal(a.positions, b.positions)
    assert np.array_equal(a.indices, b.indices)


def test_degenerate_path_raises_on_stroke() -> None:
    with pytest.raises(InvalidPenGeometry):
        Path(Pen("Black", 2), [(1, 1), (1, 1)]).stroke()


def test_pattern_pen_gets_bbox_uvs() -> None:
    brush = Brush.from_pattern(checker_pattern(4), tint="White")
    mesh = Path(Pen(width=10, brush=brush), [(0, 0), (100, 0)]).stroke()
    assert mesh.uvs.min(axis=0) == pytest.approx((0.0, 0.0))
    assert mesh.uvs.max(axis=0) == pytest.approx((1.0, 1.0))
    assert np.allclose(mesh.colors, 1.0)


def test_primitive_lines_open_and_closed() -> None:
    open_seq = PointSequence([(0, 0), (1, 0), (1, 1)])
    m = primitive_lines(open_seq, (0.0, 0.0, 1.0, 1.0))
    assert m.primitive is PrimitiveKind.LINES
    assert m.indices.tolist() == [0, 1, 1, 2]
    closed = primitive_lines(open_seq.with_closed(True), (0.0, 0.0, 1.0, 1.0))
    assert closed.indices.tolist() == [0, 1, 1, 2, 2, 0]
    assert np.allclose(closed.colors, [0.0, 0.0, 1.0, 1.0])


def test_primitive_lines_keeps_explicit_closing_point() -> None:
    ring = star((0, 0), 5, 100, 50, close=True)
    m = primitive_lines(ring, (1.0, 0.0, 0.0, 1.0))
    assert m.n_vertices == 11
    assert m.n_primitives == 10


def test_primitive_lines_needs_two_points() -> None:
    with pytest.raises(InvalidPenGeometry):
        primitive_lines(PointSequence([(0, 0)]), (0.0, 0.0, 0.0, 1.0))
    # 2 点の閉じた点列は辺 1 本
    assert primitive_lines(PointSequence([(0, 0), (1, 0)], closed=True), (0, 0, 0, 1)).n_primitives == 1
