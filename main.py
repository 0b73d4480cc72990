"""
pathbatch デモの起動スクリプト。

    python main.py --list
    python main.py --sheet "Pen Alignment" --wireframe
    python main.py --headless        # ウィンドウを開かず全シートを記録のみ
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from common.logging import setup_default_logging
from engine.render.batch import DrawBatch
from engine.render.rasterizer import RecordingRasterizer
from engine.render.types import FillMode
from sheets import SheetOptions, build_default_registry, run_sheet

logger = logging.getLogger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="2D パス/ストローク/塗りのテストシートを表示する。")
    parser.add_argument("--sheet", default=None, help="表示するシート名（既定: 設定ファイル）")
    parser.add_argument("--list", action="store_true", help="シート名を一覧表示して終了")
    parser.add_argument("--wireframe", action="store_true", help="ワイヤーフレームで描画")
    parser.add_argument("--no-aa", action="store_true", help="マルチサンプル AA を無効化")
    parser.add_argument("--log-level", default=None, help="ログレベル（DEBUG/INFO/...）")
    parser.add_argument("--headless", action="store_true", help="ウィンドウを開かずに全シートを記録する")
    return parser


def run_headless(options: SheetOptions) -> int:
    """全シートを RecordingRasterizer で 1 回ずつ実行し、送信数をログに出す。"""
    registry = build_default_registry()
    for title in registry.names():
        recorder = RecordingRasterizer()
        run_sheet(DrawBatch(recorder), registry.get_sheet(title), options)
        vertices = sum(s.vertices.shape[0] for s in recorder.submissions)
        boxes = [s.world_bounds() for s in recorder.submissions]
        extent = (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )
        logger.info(
            "%s: submissions=%d vertices=%d extent=(%.1f, %.1f, %.1f, %.1f)",
            title,
            len(recorder),
            vertices,
            *extent,
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)

    if args.list:
        for title in build_default_registry().names():
            print(title)
        return 0

    fill_mode = FillMode.WIREFRAME if args.wireframe else None
    antialias = False if args.no_aa else None

    if args.headless or os.environ.get("PATHBATCH_HEADLESS") == "1":
        return run_headless(
            SheetOptions(fill_mode=fill_mode or FillMode.SOLID, antialias=antialias is not False)
        )

    from api.runner import run

    run(args.sheet, fill_mode=fill_mode, antialias=antialias)
    return 0


if __name__ == "__main__":
    sys.exit(main())
