from __future__ import annotations

import pytest

from common.errors import IllegalStateError
from engine.render import DrawBatch, RecordingRasterizer
from paint import Pen
from sheets import render, run_sheet
from sheets.builtin import draw_primitive_shapes


def test_run_sheet_completes_one_session(batch: DrawBatch, recorder: RecordingRasterizer) -> None:
    run_sheet(batch, draw_primitive_shapes)
    assert batch.sessions_completed == 1
    render(batch, draw_primitive_shapes)
    assert batch.sessions_completed == 2
    assert len(recorder) == 10


def test_sheet_without_session_is_rejected(batch: DrawBatch) -> None:
    with pytest.raises(IllegalStateError):
        run_sheet(batch, lambda b, o: None)


def test_sheet_left_recording_is_rejected(batch: DrawBatch) -> None:
    with pytest.raises(IllegalStateError):
        run_sheet(batch, lambda b, o: b.begin())
    assert batch.is_recording
    batch.end()


def test_sheet_with_two_sessions_is_rejected(batch: DrawBatch) -> None:
    def twice(b: DrawBatch, _o: object) -> None:
        for _ in range(2):
            b.begin()
            b.draw_line((0, 0), (1, 0), Pen())
            b.end()

    with pytest.raises(IllegalStateError):
        run_sheet(batch, twice)


def test_batch_already_recording_is_rejected(batch: DrawBatch) -> None:
    batch.begin()
    with pytest.raises(IllegalStateError):
        run_sheet(batch, draw_primitive_shapes)
    assert batch.pending == ()
    batch.end()
