from __future__ import annotations

import numpy as np
import pytest

from common.errors import InvalidGeometryParameter
from engine.core.points import PointSequence, Rect


def test_points_are_copied_and_read_only() -> None:
    src = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0]])
    seq = PointSequence(src, closed=True)
    src[0, 0] = 99.0
    assert seq.points[0, 0] == 0.0
    assert seq.points.dtype == np.float64
    with pytest.raises(ValueError):
        seq.points[0, 0] = 1.0


def test_from_points_accepts_lists_and_sequences() -> None:
    a = PointSequence.from_points([(0, 0), (1, 2)])
    b = PointSequence.from_points(a, closed=True)
    assert a.closed is False
    assert b.closed is True
    assert np.array_equal(a.points, b.points)
    assert list(a) == [(0.0, 0.0), (1.0, 2.0)]


@pytest.mark.parametrize(
    "bad",
    [
        [],
        [[0.0, 0.0, 0.0]],
        [[0.0, np.nan]],
        [[np.inf, 0.0]],
        "abc",
    ],
)
def test_invalid_points_raise(bad: object) -> None:
    with pytest.raises(InvalidGeometryParameter):
        PointSequence(bad)  # type: ignore[arg-type]


def test_signed_area_and_bounds() -> None:
    square = PointSequence([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True)
    assert square.signed_area() == pytest.approx(100.0)
    assert PointSequence(square.points[::-1], closed=True).signed_area() == pytest.approx(-100.0)
    assert square.bounds() == (0.0, 0.0, 10.0, 10.0)
    assert square.edge_count() == 4
    assert square.with_closed(False).edge_count() == 3


def test_deduplicated_drops_repeats_and_explicit_closing_point() -> None:
    ring = PointSequence([(0, 0), (0, 0), (5, 0), (5, 5), (0, 0)], closed=True)
    d = ring.deduplicated()
    assert len(d) == 3
    assert d.closed is True

    # 開いた点列では明示的な閉じ点を残す
    open_ring = ring.with_closed(False).deduplicated()
    assert len(open_ring) == 4

    single = PointSequence([(1, 1), (1, 1)]).deduplicated()
    assert len(single) == 1


def test_translate_and_equality() -> None:
    a = PointSequence([(0, 0), (1, 0)])
    b = a.translate(2, 3)
    assert np.allclose(b.points, [[2, 3], [3, 3]])
    assert a == PointSequence([(0, 0), (1, 0)])
    assert a != a.with_closed(True)
    assert hash(a) == hash(PointSequence([(0, 0), (1, 0)]))


def test_rect_edges() -> None:
    r = Rect(50, 160, 200, 100)
    assert (r.left, r.top, r.right, r.bottom) == (50.0, 160.0, 250.0, 260.0)
    assert r.center == (150.0, 210.0)
