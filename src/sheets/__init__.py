"""
どこで: `sheets` パッケージ
何を: テストシート（固定の描画シーケンス）の登録表・組み込みシート・実行入口。
"""

from .builtin import build_default_registry, register_builtin_sheets
from .registry import SheetRegistry
from .runner import SheetOptions, render, run_sheet

__all__ = [
    "SheetRegistry",
    "build_default_registry",
    "register_builtin_sheets",
    "SheetOptions",
    "render",
    "run_sheet",
]
