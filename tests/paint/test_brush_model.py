from __future__ import annotations

import numpy as np
import pytest

from common.errors import InvalidFillGeometry, InvalidGeometryParameter
from paint import Brush, BrushKind, checker_pattern


def test_solid_brush() -> None:
    b = Brush.solid("Green")
    assert b.kind is BrushKind.SOLID
    assert b.color == pytest.approx((0.0, 128 / 255, 0.0, 1.0))
    assert not b.is_pattern
    assert b == Brush.solid((0, 128, 0))
    assert hash(b) == hash(Brush.solid((0, 128, 0)))


def test_checker_pattern_shape_and_cells() -> None:
    pat = checker_pattern(4)
    assert pat.shape == (8, 8, 4)
    assert pat.dtype == np.uint8
    assert pat[0, 0].tolist() == [255, 255, 255, 255]
    assert pat[0, 4].tolist() == [211, 211, 211, 255]
    assert pat[4, 4].tolist() == [255, 255, 255, 255]
    with pytest.raises(InvalidGeometryParameter):
        checker_pattern(0)


def test_pattern_brush_copies_and_freezes() -> None:
    pat = checker_pattern(2)
    b = Brush.from_pattern(pat, tile_size=(16, 16))
    pat[0, 0] = 0
    assert b.pattern is not None
    assert b.pattern[0, 0].tolist() == [255, 255, 255, 255]
    assert not b.pattern.flags.writeable
    assert b.tile_size == (16.0, 16.0)
    assert b.is_pattern


def test_float_pattern_is_scaled_to_u8() -> None:
    b = Brush.from_pattern(np.ones((2, 2, 4), dtype=np.float32))
    assert b.pattern is not None
    assert b.pattern.dtype == np.uint8
    assert int(b.pattern.max()) == 255


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(kind=BrushKind.PATTERN),
        dict(kind=BrushKind.SOLID, pattern=np.zeros((2, 2, 4), dtype=np.uint8)),
        dict(kind=BrushKind.PATTERN, pattern=np.zeros((2, 2, 3), dtype=np.uint8)),
        dict(kind=BrushKind.SOLID, tile_size=(0, 1)),
    ],
)
def test_invalid_brushes(kwargs: dict) -> None:
    with pytest.raises(InvalidFillGeometry):
        Brush(**kwargs)


@pytest.mark.parametrize(
    "build",
    [
        lambda: Brush.from_pattern(checker_pattern(2), tile_size=(0, 1)),
        lambda: Brush.from_pattern(checker_pattern(2), tile_size=("a", 1)),
        lambda: Brush.from_pattern(checker_pattern(2), tile_size=(float("nan"), 1)),
        lambda: Brush.from_pattern([["x", "y"]]),
        lambda: Brush.from_pattern(checker_pattern(2), tint="notacolor"),
        lambda: Brush.solid("notacolor"),
        lambda: Brush(kind="gradient"),
    ],
)
def test_malformed_brush_raises_invalid_fill_geometry(build) -> None:  # noqa: ANN001
    with pytest.raises(InvalidFillGeometry):
        build()
