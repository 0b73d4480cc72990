"""
どこで: `paint.context`
何を: 名前付きの既定ペン/ブラシを保持する明示的なコンテキスト `PaintContext`。
なぜ: プロセス全体のグローバル登録（初期化順序に依存する静的レジストリ）をやめ、
      描画面のライフサイクル（initialize/teardown）に結び付いた値として受け渡すため。

使用例:
    ctx = PaintContext()
    ctx.initialize()
    batch.draw_line((0, 0), (10, 0), ctx.pen("Blue"))
    ctx.teardown()

    # またはコンテキストマネージャとして
    with PaintContext() as ctx:
        ...
"""

from __future__ import annotations

import logging
from typing import Mapping

from common.errors import IllegalStateError
from util.color import NAMED_COLORS

from .brush import Brush
from .pen import Pen

logger = logging.getLogger(__name__)


def _key(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


class PaintContext:
    """名前→Pen/Brush の対応表（初期化〜破棄の間だけ有効）。"""

    def __init__(self, colors: Mapping[str, object] | None = None) -> None:
        self._colors: dict[str, object] = dict(colors) if colors is not None else dict(NAMED_COLORS)
        self._pens: dict[str, Pen] = {}
        self._brushes: dict[str, Brush] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> "PaintContext":
        """色ごとに幅 1 のペンと単色ブラシを作る（多重呼び出しは no-op）。"""
        if self._initialized:
            return self
        for name, color in self._colors.items():
            k = _key(name)
            self._pens[k] = Pen(color, 1.0)
            self._brushes[k] = Brush.solid(color)
        self._initialized = True
        logger.debug("PaintContext initialized: %d pens/brushes", len(self._pens))
        return self

    def teardown(self) -> None:
        """保持しているペン/ブラシを破棄する。"""
        self._pens.clear()
        self._brushes.clear()
        self._initialized = False

    def _require(self) -> None:
        if not self._initialized:
            raise IllegalStateError("PaintContext は initialize() されていません。")

    def pen(self, name: str) -> Pen:
        self._require()
        try:
            return self._pens[_key(name)]
        except KeyError:
            raise KeyError(f"未知のペン名です: {name!r}") from None

    def brush(self, name: str) -> Brush:
        self._require()
        try:
            return self._brushes[_key(name)]
        except KeyError:
            raise KeyError(f"未知のブラシ名です: {name!r}") from None

    def add_pen(self, name: str, pen: Pen) -> None:
        self._require()
        self._pens[_key(name)] = pen

    def add_brush(self, name: str, brush: Brush) -> None:
        self._require()
        self._brushes[_key(name)] = brush

    def __enter__(self) -> "PaintContext":
        return self.initialize()

    def __exit__(self, *exc: object) -> None:
        self.teardown()


__all__ = ["PaintContext"]
