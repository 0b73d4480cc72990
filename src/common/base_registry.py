"""
共通レジストリ基底クラス
sheets/ の登録テーブルなど、名前→関数の明示的な対応表に使用する。
"""

import re
from typing import Any, Callable


class BaseRegistry:
    """名前付き登録テーブルの基底クラス。

    - 文字列キーは正規化されます（大文字小文字・空白/ハイフン・キャメル→スネークを吸収）。
    - 登録時の表示名（タイトル）は別に保持し、一覧表示に使えます。
    - デコレータは名前省略可。省略時は関数名から自動推論します。
    """

    def __init__(self) -> None:
        self._registry: dict[str, Any] = {}
        self._titles: dict[str, str] = {}

    # === 内部ユーティリティ ===
    @staticmethod
    def _camel_to_snake(name: str) -> str:
        s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
        s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
        return s2.lower()

    @classmethod
    def _normalize_key(cls, name: str) -> str:
        """レジストリキーの正規化（例: "Pen Alignment" -> "pen_alignment", "MySheet" -> "my_sheet"）。"""
        if not isinstance(name, str):
            raise TypeError("レジストリキーは str である必要があります")
        stripped = name.strip()
        if not stripped:
            raise ValueError("レジストリキーは空であってはなりません")
        if re.search(r"[\s\-_]", stripped):
            # 区切り文字を含む場合は単純に小文字化して '_' で連結
            parts = [p for p in re.split(r"[\s\-_]+", stripped) if p]
            return "_".join(p.lower() for p in parts)
        return cls._camel_to_snake(stripped) if any(c.isupper() for c in stripped) else stripped.lower()

    def add(self, name: str, obj: Any) -> Any:
        """`name` で `obj` を登録する（同名の別オブジェクトは ValueError）。"""
        key = self._normalize_key(name)
        if key in self._registry and self._registry[key] is not obj:
            raise ValueError(f"'{key}' は既に登録されています")
        self._registry[key] = obj
        self._titles[key] = name.strip()
        return obj

    def register(self, name: str | None = None) -> Callable:
        """関数をレジストリに登録するデコレータ。"""

        def decorator(obj: Any) -> Any:
            return self.add(name if name else obj.__name__, obj)

        return decorator

    def get(self, name: str) -> Any:
        """登録された関数を取得。"""
        key = self._normalize_key(name)
        if key not in self._registry:
            raise KeyError(f"'{name}' は登録されていません")
        return self._registry[key]

    def title_of(self, name: str) -> str:
        """登録時の表示名を返す。"""
        key = self._normalize_key(name)
        if key not in self._titles:
            raise KeyError(f"'{name}' は登録されていません")
        return self._titles[key]

    def list_all(self) -> list[str]:
        """登録されているすべてのキーを登録順で取得。"""
        return list(self._registry.keys())

    def list_titles(self) -> list[str]:
        """登録されているすべての表示名を登録順で取得。"""
        return [self._titles[k] for k in self._registry]

    def is_registered(self, name: str) -> bool:
        """指定された名前が登録されているかチェック"""
        return self._normalize_key(name) in self._registry

    def unregister(self, name: str) -> None:
        """レジストリから削除（名前が存在しない場合は無視）。"""
        key = self._normalize_key(name)
        self._registry.pop(key, None)
        self._titles.pop(key, None)

    def clear(self) -> None:
        """レジストリをクリア"""
        self._registry.clear()
        self._titles.clear()

    def __len__(self) -> int:
        return len(self._registry)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    @property
    def registry(self) -> dict[str, Any]:
        """レジストリの読み取り専用アクセス"""
        return self._registry.copy()
