from __future__ import annotations

import numpy as np
import pytest

from common.errors import InvalidGeometryParameter
from shapes import star


def test_star_vertex_layout() -> None:
    seq = star((125, 150), 5, 100, 50)
    pts = seq.points
    assert len(seq) == 10
    assert seq.closed is False
    assert np.allclose(pts[0], [125.0, 50.0])
    radii = np.hypot(pts[:, 0] - 125.0, pts[:, 1] - 150.0)
    assert np.allclose(radii[0::2], 100.0)
    assert np.allclose(radii[1::2], 50.0)


def test_star_close_duplicates_first_vertex_exactly() -> None:
    seq = star((0, 0), 5, 100, 50, close=True)
    assert len(seq) == 11
    assert seq.closed is False
    assert np.array_equal(seq.points[-1], seq.points[0])


def test_star_is_screen_clockwise() -> None:
    # Y 下向き画面で時計回り = 靴紐公式（数学座標）で正
    assert star((0, 0), 5, 100, 50).signed_area() > 0


def test_equal_radii_give_regular_polygon() -> None:
    seq = star((0, 0), 4, 10, 10)
    edges = np.linalg.norm(np.diff(np.vstack([seq.points, seq.points[:1]]), axis=0), axis=1)
    assert np.allclose(edges, edges[0])


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(point_count=2, outer_radius=100, inner_radius=50),
        dict(point_count=5, outer_radius=0, inner_radius=50),
        dict(point_count=5, outer_radius=100, inner_radius=-1),
        dict(point_count=5.5, outer_radius=100, inner_radius=50),
    ],
)
def test_star_invalid_parameters(kwargs: dict) -> None:
    with pytest.raises(InvalidGeometryParameter):
        star((0, 0), **kwargs)


def test_star_is_deterministic() -> None:
    assert star((3, 4), 8, 100, 50) == star((3, 4), 8, 100, 50)
