from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.transform_utils import Transform, build_projection


def test_identity_and_translation() -> None:
    t = Transform.identity()
    assert t.is_identity
    moved = Transform.translation(5, -2).apply([(1, 1)])
    assert np.allclose(moved, [[6, -1]])


def test_composition_order() -> None:
    s = Transform.scaling(2.0)
    tr = Transform.translation(10, 0)
    # then: s を適用してから tr
    assert np.allclose(s.then(tr).apply([(1, 0)]), [[12, 0]])
    # @: 右を先に適用
    assert np.allclose((s @ tr).apply([(1, 0)]), [[22, 0]])


def test_rotation_about_center() -> None:
    r = Transform.rotation(math.pi / 2, center=(1.0, 1.0))
    p = r.apply([(2.0, 1.0)])
    assert np.allclose(p, [[1.0, 2.0]])
    # 中心は動かない
    assert np.allclose(r.apply([(1.0, 1.0)]), [[1.0, 1.0]])


def test_rejects_non_affine_matrix() -> None:
    with pytest.raises(ValueError):
        Transform(np.ones((3, 3)))
    with pytest.raises(ValueError):
        Transform(np.eye(4))
    assert Transform(np.array([[1, 0, 3], [0, 1, 4]])) == Transform.translation(3, 4)


def test_to_mat4_is_transposed_float32() -> None:
    m4 = Transform.translation(3, 4).to_mat4()
    assert m4.dtype == np.float32
    assert m4.shape == (4, 4)
    # 転置済みなので平行移動成分は最終行に来る
    assert m4[3, 0] == pytest.approx(3.0)
    assert m4[3, 1] == pytest.approx(4.0)


def test_projection_maps_screen_corners_to_clip_space() -> None:
    proj = build_projection(640, 480).T  # 列ベクトル規約へ戻す
    tl = proj @ np.array([0.0, 0.0, 0.0, 1.0])
    br = proj @ np.array([640.0, 480.0, 0.0, 1.0])
    assert np.allclose(tl[:2], [-1.0, 1.0])
    assert np.allclose(br[:2], [1.0, -1.0])
