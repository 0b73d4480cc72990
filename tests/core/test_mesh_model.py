from __future__ import annotations

import numpy as np
import pytest

from engine.core.mesh import VERTEX_STRIDE, Mesh, PrimitiveKind


def _quad() -> Mesh:
    return Mesh(
        np.array([[0, 0], [1, 0], [1, 1], [0, 1]]),
        np.array([1.0, 0.0, 0.0, 1.0]),
        np.array([0, 1, 2, 0, 2, 3]),
    )


def test_normalizes_dtypes_and_broadcasts_color() -> None:
    m = _quad()
    assert m.positions.dtype == np.float32
    assert m.colors.shape == (4, 4)
    assert m.uvs.shape == (4, 2) and not m.uvs.any()
    assert m.indices.dtype == np.uint32
    assert m.n_vertices == 4
    assert m.n_primitives == 2
    assert m.triangle_area() == pytest.approx(1.0)
    assert m.bounds() == (0.0, 0.0, 1.0, 1.0)


@pytest.mark.parametrize(
    "positions, colors, indices, primitive",
    [
        (np.zeros((3, 3)), np.ones(4), [0, 1, 2], PrimitiveKind.TRIANGLES),
        (np.zeros((3, 2)), np.ones((2, 4)), [0, 1, 2], PrimitiveKind.TRIANGLES),
        (np.zeros((3, 2)), np.ones(4), [0, 1], PrimitiveKind.TRIANGLES),
        (np.zeros((3, 2)), np.ones(4), [0, 1, 2], PrimitiveKind.LINES),
        (np.zeros((3, 2)), np.ones(4), [0, 1, 3], PrimitiveKind.TRIANGLES),
    ],
)
def test_validation(positions, colors, indices, primitive) -> None:  # noqa: ANN001
    with pytest.raises(ValueError):
        Mesh(positions, colors, np.asarray(indices), primitive)


def test_interleaved_layout() -> None:
    m = Mesh(
        np.array([[1, 2], [3, 4]]),
        np.array([[0.1, 0.2, 0.3, 0.4], [0.5, 0.6, 0.7, 0.8]]),
        np.array([0, 1]),
        PrimitiveKind.LINES,
        uvs=np.array([[0.0, 1.0], [1.0, 0.0]]),
    )
    inter = m.interleaved()
    assert inter.shape == (2, VERTEX_STRIDE)
    assert inter.dtype == np.float32
    assert np.allclose(inter[1], [3, 4, 0.5, 0.6, 0.7, 0.8, 1.0, 0.0])
    with pytest.raises(ValueError):
        m.triangles()


def test_empty_mesh() -> None:
    m = Mesh.empty()
    assert m.is_empty
    assert m.triangle_area() == 0.0
    with pytest.raises(ValueError):
        m.bounds()
