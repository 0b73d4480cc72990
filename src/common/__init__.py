"""
どこで: `common` パッケージ。
何を: 全層で使う軽量基盤（例外階層・レジストリ基底・設定/環境変数・ロギング）。
なぜ: 依存の向きを内側へ揃え、描画コアと外周（sheets/api）の双方から再利用するため。
"""

from .base_registry import BaseRegistry
from .errors import (
    DrawingError,
    IllegalStateError,
    InvalidFillGeometry,
    InvalidGeometryParameter,
    InvalidPenGeometry,
    RasterizerError,
)

__all__ = [
    "BaseRegistry",
    "DrawingError",
    "IllegalStateError",
    "InvalidFillGeometry",
    "InvalidGeometryParameter",
    "InvalidPenGeometry",
    "RasterizerError",
]
