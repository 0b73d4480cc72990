"""
どこで: `engine.render` 型定義。
何を: DrawBatch のセッション状態・描画コマンド・ラスタライザ設定の軽量データクラス。
なぜ: バッチ（記録）とラスタライザ（送信）の間で受け渡す値を 1 か所に固定するため。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from engine.core.mesh import Mesh
from engine.core.transform_utils import Transform


class SessionState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"


class FillMode(str, Enum):
    SOLID = "solid"
    WIREFRAME = "wireframe"


class DrawCallKind(str, Enum):
    """DrawCommand の発行元 API。"""

    PRIMITIVE_LINE = "primitive_line"
    PRIMITIVE_PATH = "primitive_path"
    PRIMITIVE_RECTANGLE = "primitive_rectangle"
    PRIMITIVE_CIRCLE = "primitive_circle"
    PRIMITIVE_ELLIPSE = "primitive_ellipse"
    LINE = "line"
    PATH = "path"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    FILL_RECTANGLE = "fill_rectangle"
    FILL_CIRCLE = "fill_circle"
    FILL_ELLIPSE = "fill_ellipse"
    FILL_PATH = "fill_path"

    @property
    def is_primitive(self) -> bool:
        return self.value.startswith("primitive_")

    @property
    def is_fill(self) -> bool:
        return self.value.startswith("fill_")


@dataclass(frozen=True)
class RasterizerConfig:
    """セッション単位のラスタライザ設定（begin 時に 1 回だけ取り込む）。"""

    fill_mode: FillMode = FillMode.SOLID
    antialias: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "fill_mode", FillMode(self.fill_mode))
        object.__setattr__(self, "antialias", bool(self.antialias))


@dataclass(frozen=True)
class DrawCommand:
    """1 回の描画呼び出しで確定したメッシュと、その時点のセッション状態。"""

    kind: DrawCallKind
    mesh: Mesh
    transform: Transform = field(default_factory=Transform.identity)
    rasterizer: RasterizerConfig = field(default_factory=RasterizerConfig)
    texture: Any = None  # パターンブラシの RGBA uint8 (H, W, 4)。単色は None
    stencil: Any = None


__all__ = ["SessionState", "FillMode", "DrawCallKind", "RasterizerConfig", "DrawCommand"]
