"""
どこで: `common` のパラメータ検証ユーティリティ。
何を: 生成関数の入力（点・半径・分割数など）を検証し、正規化した値を返す小ヘルパ群。
なぜ: shapes/tessellate の各関数が同一の受理仕様と例外（InvalidGeometryParameter）を使うため。
"""

from __future__ import annotations

import math
from typing import Iterable

from .errors import InvalidGeometryParameter
from .types import Vec2


def ensure_vec2(v: float | Iterable[float], name: str = "point") -> Vec2:
    """(x, y) を有限 float の 2 要素タプルへ正規化する（スカラは (v, v)）。"""
    if isinstance(v, (int, float)):
        t = (float(v), float(v))
    else:
        try:
            t = tuple(float(x) for x in v)
        except (TypeError, ValueError) as e:
            raise InvalidGeometryParameter(f"{name} は (x, y) で指定してください: {v!r}") from e
        if len(t) != 2:
            raise InvalidGeometryParameter(f"{name} は 2 要素で指定してください: {v!r}")
    if not (math.isfinite(t[0]) and math.isfinite(t[1])):
        raise InvalidGeometryParameter(f"{name} に非有限値が含まれています: {v!r}")
    return (t[0], t[1])


def require_positive(value: float, name: str) -> float:
    """`value > 0` かつ有限であることを検証して float で返す。"""
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidGeometryParameter(f"{name} は数値である必要があります: {value!r}") from e
    if not math.isfinite(f) or f <= 0.0:
        raise InvalidGeometryParameter(f"{name} は正の有限値である必要があります: {value!r}")
    return f


def require_non_negative(value: float, name: str) -> float:
    """`value >= 0` かつ有限であることを検証して float で返す。"""
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidGeometryParameter(f"{name} は数値である必要があります: {value!r}") from e
    if not math.isfinite(f) or f < 0.0:
        raise InvalidGeometryParameter(f"{name} は 0 以上の有限値である必要があります: {value!r}")
    return f


def require_finite(value: float, name: str) -> float:
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidGeometryParameter(f"{name} は数値である必要があります: {value!r}") from e
    if not math.isfinite(f):
        raise InvalidGeometryParameter(f"{name} は有限値である必要があります: {value!r}")
    return f


def require_count(value: int, name: str, minimum: int) -> int:
    """整数で `value >= minimum` を検証する（bool と非整数の float は拒否）。"""
    if isinstance(value, bool):
        raise InvalidGeometryParameter(f"{name} は整数である必要があります: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidGeometryParameter(f"{name} は整数である必要があります: {value!r}")
    try:
        n = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidGeometryParameter(f"{name} は整数である必要があります: {value!r}") from e
    if n < minimum:
        raise InvalidGeometryParameter(f"{name} は {minimum} 以上である必要があります: {value!r}")
    return n


__all__ = [
    "ensure_vec2",
    "require_positive",
    "require_non_negative",
    "require_finite",
    "require_count",
]
