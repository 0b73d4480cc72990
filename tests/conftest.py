"""共通フィクスチャ。

- 乱数シード固定
- 記録用ラスタライザと DrawBatch
- 初期化済みの PaintContext
- 環境変数由来の設定を差し替えて復元するヘルパ
"""

from __future__ import annotations

from typing import Callable, Iterator

import numpy as np
import pytest

from common import settings as settings_mod
from engine.render.batch import DrawBatch
from engine.render.rasterizer import RecordingRasterizer
from paint.context import PaintContext


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def recorder() -> RecordingRasterizer:
    return RecordingRasterizer()


@pytest.fixture()
def batch(recorder: RecordingRasterizer) -> DrawBatch:
    return DrawBatch(recorder)


@pytest.fixture()
def paint() -> Iterator[PaintContext]:
    with PaintContext() as ctx:
        yield ctx


@pytest.fixture()
def set_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[..., None]]:
    """`set_env(PB_MITER_LIMIT="2")` のように設定を差し替え、終了時に既定へ戻す。"""

    def _apply(**values: str) -> None:
        for k, v in values.items():
            monkeypatch.setenv(k, v)
        settings_mod.reload_from_env()

    yield _apply
    monkeypatch.undo()
    settings_mod.reload_from_env()
