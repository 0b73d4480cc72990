"""
どこで: `engine.render` の低レベルメッシュ層。
何を: VBO/IBO/VAO の確保・更新・解放を担当し、`Mesh.interleaved()` をそのまま GPU へ送る。
なぜ: GPU 転送の詳細をラスタライザから切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .shader import VERTEX_ATTRIBUTES, VERTEX_FORMAT


class MeshBuffer:
    """
    GPUに頂点やインデックスなどの描画データを送り込む作業を管理
    """

    def __init__(self, ctx: Any, program: Any, initial_reserve: int = 1024 * 1024):
        """
        ctx: moderngl コンテキスト
        program: `Shader.create_shader` のプログラム
        initial_reserve: VBO/IBO の初期確保量（バイト）。不足時は自動拡張。
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = int(initial_reserve)

        self.vbo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.vao = self._build_vao()
        self.index_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program,
            [(self.vbo, VERTEX_FORMAT, *VERTEX_ATTRIBUTES)],
            index_buffer=self.ibo,
            index_element_size=4,
        )

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, vbo_size: int, ibo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        grown = False
        if vbo_size > self.vbo.size:
            self.vbo.release()
            self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.initial_reserve), dynamic=True)
            grown = True

        if ibo_size > self.ibo.size:
            self.ibo.release()
            self.ibo = self.ctx.buffer(reserve=max(ibo_size, self.initial_reserve), dynamic=True)
            grown = True

        # VAO は VBO/IBO が差し替わったときだけ張り直す
        if grown:
            self.vao.release()
            self.vao = self._build_vao()

    def upload(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """実際にデータをGPUへ送り込む"""
        verts = np.ascontiguousarray(vertices, dtype=np.float32)
        inds = np.ascontiguousarray(indices, dtype=np.uint32)
        self._ensure_capacity(verts.nbytes, inds.nbytes)

        self.vbo.orphan()
        self.vbo.write(verts.tobytes())

        self.ibo.orphan()
        self.ibo.write(inds.tobytes())

        self.index_count = int(inds.size)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vao.release()
        self.vbo.release()
        self.ibo.release()


__all__ = ["MeshBuffer"]
