"""
どこで: `sheets.runner`
何を: シート 1 枚を DrawBatch 上で実行し、begin/end の括り（1 セッション完了）を検証する。
なぜ: ホスト（ウィンドウ/ループ）から独立した純粋な描画入口 `render(batch, sheet)` を提供するため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from common.errors import IllegalStateError
from engine.render.batch import DrawBatch
from engine.render.types import FillMode, RasterizerConfig
from paint.context import PaintContext

from .registry import SheetFn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetOptions:
    """シート共通の実行オプション。

    - `fill_mode` / `antialias`: 各シートが begin() に渡すラスタライザ設定。
    - `paint`: 名前付きペン/ブラシ。None ならシート側で一時的に初期化する。
    """

    fill_mode: FillMode = FillMode.SOLID
    antialias: bool = True
    paint: PaintContext | None = None

    def rasterizer_config(self) -> RasterizerConfig:
        return RasterizerConfig(fill_mode=self.fill_mode, antialias=self.antialias)

    def paint_context(self) -> PaintContext:
        if self.paint is not None:
            return self.paint
        return PaintContext().initialize()


def run_sheet(batch: DrawBatch, sheet: SheetFn, options: SheetOptions | None = None) -> None:
    """シートを実行し、ちょうど 1 回の begin/end が完了したことを検証する。

    例外:
        IllegalStateError: 実行前に batch が記録中、実行後も記録中、または
            完了したセッション数が 1 でない場合。
    """
    if batch.is_recording:
        raise IllegalStateError("シート実行前に batch が記録中です。")
    opts = options if options is not None else SheetOptions()
    before = batch.sessions_completed
    sheet(batch, opts)
    if batch.is_recording:
        raise IllegalStateError(
            f"シート {getattr(sheet, '__name__', sheet)!r} が end() を呼ばずに終了しました。"
        )
    done = batch.sessions_completed - before
    if done != 1:
        raise IllegalStateError(
            f"シート {getattr(sheet, '__name__', sheet)!r} は begin/end を 1 回だけ行う必要があります: {done}"
        )
    logger.debug("sheet %s rendered", getattr(sheet, "__name__", sheet))


def render(batch: DrawBatch, sheet: SheetFn, options: SheetOptions | None = None) -> None:
    """ホストのフレームごとに呼ぶ描画入口（`run_sheet` の別名）。"""
    run_sheet(batch, sheet, options)


__all__ = ["SheetOptions", "run_sheet", "render"]
