"""
どこで: `engine.render.gl_rasterizer`
何を: `Rasterizer.submit` を ModernGL で実装する（塗りつぶし/ワイヤーフレーム、パターンテクスチャ、TRIANGLES/LINES）。
なぜ: DrawBatch の送信契約を実 GPU へ橋渡しし、GL 側の失敗を False として呼び出し側へ返すため。

補足:
- アンチエイリアスはウィンドウ側の MSAA（`RenderWindow(antialias=True)`）で有効化される。
- パターンテクスチャは内容のハッシュでキャッシュし、`release()` でまとめて解放する。
- ステンシルは受け取るだけで使用しない（DEBUG ログのみ）。
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any

import moderngl as mgl
import numpy as np

from common.settings import get as get_settings
from engine.core.mesh import PrimitiveKind
from engine.core.transform_utils import Transform, build_projection

from .mesh_buffer import MeshBuffer
from .shader import Shader
from .types import FillMode, RasterizerConfig

logger = logging.getLogger(__name__)


def _texture_key(pattern: np.ndarray) -> bytes:
    h = hashlib.blake2b(digest_size=16)
    h.update(np.asarray(pattern.shape, dtype=np.int64).tobytes())
    h.update(np.ascontiguousarray(pattern).tobytes())
    return h.digest()


class ModernGLRasterizer:
    """ModernGL コンテキスト上で DrawBatch の送信を描画するラスタライザ。"""

    def __init__(self, ctx: Any, width: int, height: int, *, initial_reserve: int | None = None):
        self.ctx = ctx
        self.program = Shader.create_shader(ctx)
        reserve = initial_reserve if initial_reserve is not None else get_settings().GL_INITIAL_RESERVE
        self.buffer = MeshBuffer(ctx, self.program, initial_reserve=reserve)
        self._textures: dict[bytes, Any] = {}
        self.set_viewport_size(width, height)

    def set_viewport_size(self, width: int, height: int) -> None:
        """射影行列を画面サイズ（ピクセル, 左上原点）に合わせて更新する。"""
        self.program["projection"].write(build_projection(float(width), float(height)).tobytes())

    def clear(self, color: tuple[float, float, float, float]) -> None:
        """画面を指定色でクリア"""
        self.ctx.clear(*color)

    def _texture_for(self, pattern: np.ndarray) -> Any:
        key = _texture_key(pattern)
        tex = self._textures.get(key)
        if tex is None:
            h, w = int(pattern.shape[0]), int(pattern.shape[1])
            tex = self.ctx.texture((w, h), 4, data=np.ascontiguousarray(pattern, dtype=np.uint8).tobytes())
            tex.repeat_x = True
            tex.repeat_y = True
            tex.filter = (mgl.NEAREST, mgl.NEAREST)
            self._textures[key] = tex
        return tex

    def submit(
        self,
        vertices: np.ndarray,
        indices: np.ndarray,
        primitive: PrimitiveKind,
        transform: Transform,
        config: RasterizerConfig,
        *,
        texture: Any = None,
        stencil: Any = None,
    ) -> bool:
        if stencil is not None:
            logger.debug("stencil override is ignored by the ModernGL rasterizer")
        try:
            self.ctx.wireframe = config.fill_mode is FillMode.WIREFRAME
            self.program["transform"].write(transform.to_mat4().tobytes())
            if texture is not None:
                self._texture_for(texture).use(location=0)
                self.program["use_texture"].value = 1
            else:
                self.program["use_texture"].value = 0
            self.buffer.upload(vertices, indices)
            if self.buffer.index_count == 0:
                return True
            mode = mgl.LINES if PrimitiveKind(primitive) is PrimitiveKind.LINES else mgl.TRIANGLES
            self.buffer.vao.render(mode=mode, vertices=self.buffer.index_count)
        except mgl.Error as e:
            logger.error("ModernGL submit failed: %s", e)
            return False
        return True

    def release(self) -> None:
        """GPU リソースを解放。"""
        for tex in self._textures.values():
            tex.release()
        self._textures.clear()
        self.buffer.release()
        self.program.release()


__all__ = ["ModernGLRasterizer"]
