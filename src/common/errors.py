"""
どこで: `common.errors`
何を: 描画コア全体で共有する例外階層（ジオメトリ生成・ペン/塗り・バッチ状態・ラスタライザ）。
なぜ: 失敗の種類を呼び出し側が区別できるようにし、ValueError/RuntimeError とも互換に扱うため。

分類:
- `InvalidGeometryParameter`: 生成関数（star/circle/...）への不正入力。
- `InvalidPenGeometry`: ストローク不能なペン/点列の組み合わせ（幅 <= 0、2 点未満）。
- `InvalidFillGeometry`: 塗り不能な点列（3 点未満）。
- `IllegalStateError`: DrawBatch のプロトコル違反（二重 begin、begin 前の描画、begin 無しの end）。
- `RasterizerError`: end() でのラスタライザ送出失敗（再試行はしない）。

いずれも同期・局所的・非一時的な失敗であり、自動リトライは行わない。
"""

from __future__ import annotations


class DrawingError(Exception):
    """描画コアの例外基底。"""


class InvalidGeometryParameter(DrawingError, ValueError):
    """生成パラメータが不正。"""


class InvalidPenGeometry(DrawingError, ValueError):
    """ペンと点列からストロークを構築できない。"""


class InvalidFillGeometry(DrawingError, ValueError):
    """点列から塗り領域を構築できない。"""


class IllegalStateError(DrawingError, RuntimeError):
    """DrawBatch の呼び出し順序違反。"""


class RasterizerError(DrawingError, RuntimeError):
    """ラスタライザへの送出に失敗した。"""


__all__ = [
    "DrawingError",
    "InvalidGeometryParameter",
    "InvalidPenGeometry",
    "InvalidFillGeometry",
    "IllegalStateError",
    "RasterizerError",
]
