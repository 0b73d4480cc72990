"""
どこで: `engine.render.batch`
何を: begin/描画/end で描画呼び出しを記録し、end 時にまとめてラスタライザへ送る `DrawBatch`。
なぜ: 幾何の生成（即時・失敗は即例外）と GPU への送信（遅延・発行順）を分け、
      セッション外の呼び出しを状態機械で確実に拒否するため。

状態遷移:
    IDLE --begin()--> RECORDING --end()--> IDLE

- RECORDING 以外での描画呼び出し/end()、RECORDING 中の begin() は `IllegalStateError`。
  このとき状態・記録済みコマンドは変化しない。
- 描画呼び出しはその場で幾何を確定し、失敗時は例外を送出して何も積まない。
- end() は発行順に `Rasterizer.submit` を呼ぶ。成否に関わらずコマンドは破棄され IDLE に戻る。
  送信が False を返すか例外を送出した時点で中断し `RasterizerError` を送出する（再試行なし）。

使用例:
    batch = DrawBatch(RecordingRasterizer())
    batch.begin()
    batch.draw_primitive_line((50, 50), (250, 50), pen)
    batch.fill_circle((350, 100), 50, brush)
    batch.end()
"""

from __future__ import annotations

import logging
from typing import Any

from common.errors import (
    IllegalStateError,
    InvalidFillGeometry,
    InvalidPenGeometry,
    RasterizerError,
)
from common.types import PointsLike, Vec2
from engine.core.mesh import Mesh
from engine.core.points import PointSequence, Rect
from engine.core.transform_utils import Transform
from paint.brush import Brush
from paint.pen import Pen
from shapes.ellipse import circle as circle_points
from shapes.ellipse import ellipse as ellipse_points
from shapes.line import line as line_points
from shapes.polygon import rectangle as rectangle_points
from tessellate.fill import fill_points
from tessellate.path import Path
from tessellate.primitive import primitive_lines

from .rasterizer import Rasterizer
from .types import DrawCallKind, DrawCommand, RasterizerConfig, SessionState

logger = logging.getLogger(__name__)


class DrawBatch:
    """描画呼び出しを記録し、end() で発行順に送信するバッチ。

    再利用可能（begin/end を何度でも繰り返せる）だが再入不可。
    """

    def __init__(self, rasterizer: Rasterizer) -> None:
        self._rasterizer = rasterizer
        self._state = SessionState.IDLE
        self._commands: list[DrawCommand] = []
        self._default_pen: Pen | None = None
        self._default_brush: Brush | None = None
        self._stencil: Any = None
        self._config = RasterizerConfig()
        self._transform = Transform.identity()
        self._sessions_completed = 0

    # ── 状態 ─────────────────────────
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is SessionState.RECORDING

    @property
    def pending(self) -> tuple[DrawCommand, ...]:
        """記録済み（未送信）のコマンド。"""
        return tuple(self._commands)

    @property
    def sessions_completed(self) -> int:
        """送信まで成功した begin/end セッション数。"""
        return self._sessions_completed

    @property
    def rasterizer(self) -> Rasterizer:
        return self._rasterizer

    # ── セッション ───────────────────
    def begin(
        self,
        brush: Brush | None = None,
        pen: Pen | None = None,
        stencil: Any = None,
        rasterizer: RasterizerConfig | None = None,
        transform: Transform | None = None,
    ) -> None:
        """記録を開始する。引数はこのセッションの既定値として保持される。"""
        if self._state is SessionState.RECORDING:
            raise IllegalStateError("begin() は end() の前に再度呼び出せません。")
        self._default_brush = brush
        self._default_pen = pen
        self._stencil = stencil
        self._config = rasterizer if rasterizer is not None else RasterizerConfig()
        self._transform = transform if transform is not None else Transform.identity()
        self._commands = []
        self._state = SessionState.RECORDING
        logger.debug("batch begin: config=%s", self._config)

    def end(self) -> int:
        """記録済みコマンドを発行順に送信し IDLE へ戻る。送信したコマンド数を返す。"""
        if self._state is not SessionState.RECORDING:
            raise IllegalStateError("end() は begin() の後にのみ呼び出せます。")
        commands = self._commands
        self._commands = []
        self._state = SessionState.IDLE
        self._default_pen = None
        self._default_brush = None
        self._stencil = None

        for i, cmd in enumerate(commands):
            mesh = cmd.mesh
            try:
                ok = self._rasterizer.submit(
                    mesh.interleaved(),
                    mesh.indices,
                    mesh.primitive,
                    cmd.transform,
                    cmd.rasterizer,
                    texture=cmd.texture,
                    stencil=cmd.stencil,
                )
            except Exception as e:
                logger.error("rasterizer raised on command %d (%s): %s", i, cmd.kind.value, e)
                raise RasterizerError(
                    f"ラスタライザがコマンド {i} ({cmd.kind.value}) で例外を送出しました。"
                ) from e
            if not ok:
                logger.error("rasterizer rejected command %d (%s)", i, cmd.kind.value)
                raise RasterizerError(
                    f"ラスタライザがコマンド {i} ({cmd.kind.value}) を拒否しました。"
                )
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "submitted %s: vertices=%d indices=%d",
                    cmd.kind.value,
                    mesh.n_vertices,
                    mesh.indices.size,
                )

        self._sessions_completed += 1
        logger.debug("batch end: commands=%d", len(commands))
        return len(commands)

    # ── 内部ヘルパ ───────────────────
    def _require_recording(self, op: str) -> None:
        if self._state is not SessionState.RECORDING:
            raise IllegalStateError(f"{op}() は begin() と end() の間でのみ呼び出せます。")

    def _resolve_pen(self, pen: Pen | None) -> Pen:
        resolved = pen if pen is not None else self._default_pen
        if not isinstance(resolved, Pen):
            raise InvalidPenGeometry("Pen が指定されておらず、セッションの既定 Pen もありません。")
        return resolved

    def _resolve_brush(self, brush: Brush | None) -> Brush:
        resolved = brush if brush is not None else self._default_brush
        if not isinstance(resolved, Brush):
            raise InvalidFillGeometry(
                "Brush が指定されておらず、セッションの既定 Brush もありません。"
            )
        return resolved

    def _append(self, kind: DrawCallKind, mesh: Mesh, brush: Brush | None = None) -> None:
        texture = brush.pattern if brush is not None and brush.is_pattern else None
        self._commands.append(
            DrawCommand(
                kind=kind,
                mesh=mesh,
                transform=self._transform,
                rasterizer=self._config,
                texture=texture,
                stencil=self._stencil,
            )
        )

    def _primitive(self, kind: DrawCallKind, seq: PointSequence, pen: Pen | None) -> None:
        p = self._resolve_pen(pen)
        self._append(kind, primitive_lines(seq, p.color))

    def _stroke(self, kind: DrawCallKind, seq: PointSequence, pen: Pen | None) -> None:
        p = self._resolve_pen(pen)
        self._append(kind, Path(p, seq).stroke(), p.brush)

    def _fill(self, kind: DrawCallKind, seq: PointSequence, brush: Brush | None) -> None:
        b = self._resolve_brush(brush)
        self._append(kind, fill_points(seq, b), b)

    # ── プリミティブ（1 ユニット幅の線） ──
    def draw_primitive_line(self, p0: Vec2, p1: Vec2, pen: Pen | None = None) -> None:
        self._require_recording("draw_primitive_line")
        self._primitive(DrawCallKind.PRIMITIVE_LINE, line_points(p0, p1), pen)

    def draw_primitive_path(
        self, points: PointsLike | PointSequence, pen: Pen | None = None, *, closed: bool = False
    ) -> None:
        """点列を折れ線として描く。`closed=True` は末尾→先頭の線分を加える。"""
        self._require_recording("draw_primitive_path")
        if isinstance(points, PointSequence):
            closed = closed or points.closed
        seq = PointSequence.from_points(points, closed=closed)
        self._primitive(DrawCallKind.PRIMITIVE_PATH, seq, pen)

    def draw_primitive_rectangle(self, rect: Rect, pen: Pen | None = None) -> None:
        self._require_recording("draw_primitive_rectangle")
        self._primitive(DrawCallKind.PRIMITIVE_RECTANGLE, rectangle_points(rect), pen)

    def draw_primitive_circle(
        self, center: Vec2, radius: float, pen: Pen | None = None, segments: int | None = None
    ) -> None:
        self._require_recording("draw_primitive_circle")
        seq = circle_points(center, radius, segments)
        self._primitive(DrawCallKind.PRIMITIVE_CIRCLE, seq, pen)

    def draw_primitive_ellipse(
        self,
        center: Vec2,
        rx: float,
        ry: float,
        pen: Pen | None = None,
        segments: int | None = None,
        *,
        rotation: float = 0.0,
    ) -> None:
        self._require_recording("draw_primitive_ellipse")
        seq = ellipse_points(center, rx, ry, segments, rotation=rotation)
        self._primitive(DrawCallKind.PRIMITIVE_ELLIPSE, seq, pen)

    # ── ストローク ───────────────────
    def draw_line(self, p0: Vec2, p1: Vec2, pen: Pen | None = None) -> None:
        self._require_recording("draw_line")
        self._stroke(DrawCallKind.LINE, line_points(p0, p1), pen)

    def draw_path(self, path: Path) -> None:
        """Path（Pen 付き点列）をストロークする。"""
        self._require_recording("draw_path")
        if not isinstance(path, Path):
            raise InvalidPenGeometry(f"draw_path には Path が必要です: {type(path).__name__}")
        self._append(DrawCallKind.PATH, path.stroke(), path.pen.brush)

    def draw_rectangle(self, rect: Rect, pen: Pen | None = None) -> None:
        self._require_recording("draw_rectangle")
        self._stroke(DrawCallKind.RECTANGLE, rectangle_points(rect), pen)

    def draw_circle(
        self, center: Vec2, radius: float, pen: Pen | None = None, segments: int | None = None
    ) -> None:
        self._require_recording("draw_circle")
        self._stroke(DrawCallKind.CIRCLE, circle_points(center, radius, segments), pen)

    def draw_ellipse(
        self,
        center: Vec2,
        rx: float,
        ry: float,
        pen: Pen | None = None,
        segments: int | None = None,
        *,
        rotation: float = 0.0,
    ) -> None:
        self._require_recording("draw_ellipse")
        seq = ellipse_points(center, rx, ry, segments, rotation=rotation)
        self._stroke(DrawCallKind.ELLIPSE, seq, pen)

    # ── 塗り ─────────────────────────
    def fill_rectangle(self, rect: Rect, brush: Brush | None = None) -> None:
        self._require_recording("fill_rectangle")
        self._fill(DrawCallKind.FILL_RECTANGLE, rectangle_points(rect), brush)

    def fill_circle(
        self, center: Vec2, radius: float, brush: Brush | None = None, segments: int | None = None
    ) -> None:
        self._require_recording("fill_circle")
        self._fill(DrawCallKind.FILL_CIRCLE, circle_points(center, radius, segments), brush)

    def fill_ellipse(
        self,
        center: Vec2,
        rx: float,
        ry: float,
        brush: Brush | None = None,
        segments: int | None = None,
        *,
        rotation: float = 0.0,
    ) -> None:
        self._require_recording("fill_ellipse")
        seq = ellipse_points(center, rx, ry, segments, rotation=rotation)
        self._fill(DrawCallKind.FILL_ELLIPSE, seq, brush)

    def fill_path(self, points: PointsLike | PointSequence, brush: Brush | None = None) -> None:
        """点列を閉じたポリゴンとして塗る（非凸可）。"""
        self._require_recording("fill_path")
        self._fill(DrawCallKind.FILL_PATH, PointSequence.from_points(points, closed=True), brush)


__all__ = ["DrawBatch"]
