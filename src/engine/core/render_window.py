"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（任意の MSAA/背景クリア）と描画コールバック・終了コールバック登録を提供。
なぜ: ラスタライザ/シート層から GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(640, 480, bg_color=(0.97, 0.97, 1.0, 1.0), antialias=True)

    def draw_sheet():
        render(batch, sheet)

    win.add_draw_callback(draw_sheet)
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor

logger = logging.getLogger(__name__)


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
        antialias: bool = True,
        caption: str = "pathbatch",
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            bg_color: 背景色 RGBA（0.0〜1.0）。
            antialias: True なら 4x MSAA を要求する。
            caption: タイトルバーの文字列。
        """
        if antialias:
            config = Config(double_buffer=True, sample_buffers=1, samples=4, vsync=True)
        else:
            config = Config(double_buffer=True, vsync=True)
        super().__init__(width=width, height=height, caption=caption, config=config)
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []
        self._close_callbacks: list[Callable[[], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def add_close_callback(self, func: Callable[[], None]) -> None:
        """ウィンドウを閉じる直前に呼ぶ後始末関数を登録する（登録順）。"""
        self._close_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。背景をクリアし、登録された描画コールバックを呼び出す。"""
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    def on_close(self):
        for cb in self._close_callbacks:
            cb()
        logger.debug("window closed")
        super().on_close()
