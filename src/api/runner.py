"""
どこで: `api.runner`（ホスト: ウィンドウ + ループ）
何を: 設定を解決して pyglet ウィンドウ・ModernGL コンテキスト・ラスタライザ・DrawBatch を組み立て、
      選択中のテストシートを毎フレーム描画する。
なぜ: 描画コア（純粋な `sheets.runner.render`）とウィンドウ/イベントループの責務を分離するため。

処理の流れ:
1) ロギング初期化（未設定時のみ）と `configs/default.yaml` + `config.yaml` の読み込み。
2) 引数 > 設定 > 既定 の順で `HostSettings` を解決し、シート名をレジストリで検証。
3) `init_only=True` ならここで `HostSettings` を返す（ウィンドウ生成なし）。
4) RenderWindow（MSAA は antialias に従う）→ ModernGL → ModernGLRasterizer → DrawBatch。
5) `PaintContext.initialize()`。ウィンドウを閉じると teardown とラスタライザ解放を行う。

キー操作:
- 1〜9: 登録順のシートへ切り替え
- W: 塗りつぶし/ワイヤーフレームの切り替え
- ESC: 終了（pyglet 既定）
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping

from common.logging import setup_default_logging
from engine.render.types import FillMode
from sheets.builtin import build_default_registry
from sheets.registry import SheetRegistry
from sheets.runner import SheetOptions, render
from util.color import normalize_color
from util.utils import load_config

logger = logging.getLogger(__name__)

_DEFAULT_WIDTH = 640
_DEFAULT_HEIGHT = 540
_DEFAULT_FPS = 60
_DEFAULT_CLEAR = "GhostWhite"
_DEFAULT_SHEET = "Primitive Shapes"


@dataclass(frozen=True)
class HostSettings:
    width: int = _DEFAULT_WIDTH
    height: int = _DEFAULT_HEIGHT
    clear_color: tuple[float, float, float, float] = normalize_color(_DEFAULT_CLEAR)
    fps: int = _DEFAULT_FPS
    sheet: str = _DEFAULT_SHEET
    fill_mode: FillMode = FillMode.SOLID
    antialias: bool = True


def _section(cfg: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = cfg.get(name, {}) if isinstance(cfg, Mapping) else {}
    return value if isinstance(value, Mapping) else {}


def resolve_host_settings(cfg: Mapping[str, Any] | None = None, **overrides: Any) -> HostSettings:
    """設定辞書と明示引数（None は未指定扱い）から `HostSettings` を決める。

    例外:
        ValueError: サイズ/fps が 1 未満、または fill_mode/色が解釈できない場合。
    """
    cfg = cfg or {}
    window = _section(cfg, "window")
    raster = _section(cfg, "rasterizer")

    def pick(key: str, source: Mapping[str, Any], cfg_key: str, default: Any) -> Any:
        value = overrides.get(key)
        if value is not None:
            return value
        return source.get(cfg_key, default)

    width = int(pick("width", window, "width", _DEFAULT_WIDTH))
    height = int(pick("height", window, "height", _DEFAULT_HEIGHT))
    fps = int(pick("fps", window, "fps", _DEFAULT_FPS))
    if width < 1 or height < 1:
        raise ValueError(f"ウィンドウサイズは 1 以上である必要があります: {width}x{height}")
    if fps < 1:
        raise ValueError(f"fps は 1 以上である必要があります: {fps}")

    return HostSettings(
        width=width,
        height=height,
        clear_color=normalize_color(pick("clear_color", window, "clear_color", _DEFAULT_CLEAR)),
        fps=fps,
        sheet=str(pick("sheet", cfg, "sheet", _DEFAULT_SHEET)),
        fill_mode=FillMode(str(pick("fill_mode", raster, "fill_mode", FillMode.SOLID.value)).lower()),
        antialias=bool(pick("antialias", raster, "antialias", True)),
    )


def run(
    sheet: str | None = None,
    *,
    width: int | None = None,
    height: int | None = None,
    clear_color: Any = None,
    fill_mode: FillMode | str | None = None,
    antialias: bool | None = None,
    fps: int | None = None,
    registry: SheetRegistry | None = None,
    init_only: bool = False,
) -> HostSettings | None:
    """テストシートをウィンドウで表示する。

    引数:
        sheet: 表示するシート名（None で設定の `sheet`）。
        width/height/clear_color/fps: ウィンドウ設定（None で設定値）。
        fill_mode/antialias: ラスタライザ設定（None で設定値）。
        registry: シート登録表（None で組み込みシート）。
        init_only: True なら設定とシート名の解決だけを行い、`HostSettings` を返す。

    例外:
        KeyError: シート名が登録されていない場合。
    """
    setup_default_logging()
    settings = resolve_host_settings(
        load_config(),
        sheet=sheet,
        width=width,
        height=height,
        clear_color=clear_color,
        fill_mode=fill_mode.value if isinstance(fill_mode, FillMode) else fill_mode,
        antialias=antialias,
        fps=fps,
    )
    reg = registry if registry is not None else build_default_registry()
    reg.get_sheet(settings.sheet)
    if init_only:
        return settings

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import moderngl
    import pyglet
    from pyglet.window import key

    from engine.core.render_window import RenderWindow
    from engine.render.batch import DrawBatch
    from engine.render.gl_rasterizer import ModernGLRasterizer
    from paint.context import PaintContext

    window = RenderWindow(
        settings.width,
        settings.height,
        bg_color=settings.clear_color,
        antialias=settings.antialias,
        caption=f"pathbatch - {reg.title_of(settings.sheet)}",
    )
    ctx = moderngl.create_context()
    ctx.enable(moderngl.BLEND)
    ctx.blend_func = (moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA)

    rasterizer = ModernGLRasterizer(ctx, settings.width, settings.height)
    batch = DrawBatch(rasterizer)
    paint = PaintContext().initialize()
    state = {"settings": settings}

    def _options() -> SheetOptions:
        s = state["settings"]
        return SheetOptions(fill_mode=s.fill_mode, antialias=s.antialias, paint=paint)

    def _draw() -> None:
        render(batch, reg.get_sheet(state["settings"].sheet), _options())

    def _teardown() -> None:
        paint.teardown()
        rasterizer.release()
        logger.info("host closed")

    window.add_draw_callback(_draw)
    window.add_close_callback(_teardown)

    @window.event
    def on_key_press(symbol: int, modifiers: int) -> None:  # noqa: ARG001
        s = state["settings"]
        if symbol == key.W:
            mode = FillMode.SOLID if s.fill_mode is FillMode.WIREFRAME else FillMode.WIREFRAME
            state["settings"] = replace(s, fill_mode=mode)
            logger.info("fill mode: %s", mode.value)
            return
        titles = reg.names()
        if key._1 <= symbol <= key._9 and symbol - key._1 < len(titles):
            title = titles[symbol - key._1]
            state["settings"] = replace(s, sheet=title)
            window.set_caption(f"pathbatch - {title}")
            logger.info("sheet: %s", title)

    @window.event
    def on_resize(w: int, h: int) -> None:
        rasterizer.set_viewport_size(w, h)

    logger.info("showing sheet %r (%dx%d)", settings.sheet, settings.width, settings.height)
    pyglet.app.run(1.0 / settings.fps)
    return None


__all__ = ["HostSettings", "resolve_host_settings", "run"]
