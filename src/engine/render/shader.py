"""
どこで: `engine.render.shader`
何を: 塗り/ストローク/プリミティブ線で共通に使う ModernGL シェーダプログラム。
なぜ: 頂点色とパターンテクスチャ（UV）を 1 本のプログラムで扱い、描画モードだけを切り替えるため。

頂点レイアウト（`Mesh.interleaved()` と一致）:
    in_pos (2f), in_color (4f), in_uv (2f)

uniform:
    projection (mat4), transform (mat4), use_texture (int), pattern (sampler2D)
"""

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 330
uniform mat4 projection;
uniform mat4 transform;
in vec2 in_pos;
in vec4 in_color;
in vec2 in_uv;
out vec4 v_color;
out vec2 v_uv;
void main() {
    gl_Position = projection * transform * vec4(in_pos, 0.0, 1.0);
    v_color = in_color;
    v_uv = in_uv;
}
"""

FRAGMENT_SHADER = """
#version 330
uniform int use_texture;
uniform sampler2D pattern;
in vec4 v_color;
in vec2 v_uv;
out vec4 f_color;
void main() {
    if (use_texture == 1) {
        f_color = texture(pattern, v_uv) * v_color;
    } else {
        f_color = v_color;
    }
}
"""

VERTEX_FORMAT = "2f 4f 2f"
VERTEX_ATTRIBUTES = ("in_pos", "in_color", "in_uv")


class Shader:
    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """ModernGL プログラムを生成し、テクスチャユニット 0 を割り当てて返す。"""
        program = ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)
        program["pattern"].value = 0
        program["use_texture"].value = 0
        return program


__all__ = ["Shader", "VERTEX_FORMAT", "VERTEX_ATTRIBUTES"]
