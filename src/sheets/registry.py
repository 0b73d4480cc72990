"""
どこで: `sheets` のレジストリ層。
何を: テストシート名 → 描画関数 `fn(batch, options=SheetOptions())` の対応表。
なぜ: 起動時に明示的に組み立てた表だけを使い、import の副作用による暗黙登録を避けるため。
"""

from __future__ import annotations

from typing import Any, Callable

from common.base_registry import BaseRegistry

SheetFn = Callable[..., None]


class SheetRegistry(BaseRegistry):
    """テストシートの登録表。キーは正規化され、表示名（タイトル）は登録時の文字列。"""

    def sheet(self, title: str) -> Callable[[SheetFn], SheetFn]:
        """`@registry.sheet("Primitive Shapes")` 形式の登録デコレータ。"""
        if not isinstance(title, str):
            raise TypeError(f"シート名は str である必要があります: {title!r}")
        return self.register(title)

    def get_sheet(self, name: str) -> SheetFn:
        return self.get(name)

    def names(self) -> list[str]:
        """登録順の表示名一覧。"""
        return self.list_titles()

    def add(self, name: str, obj: Any) -> Any:
        if not callable(obj):
            raise TypeError(f"シートは呼び出し可能である必要があります: {obj!r}")
        return super().add(name, obj)


__all__ = ["SheetRegistry", "SheetFn"]
