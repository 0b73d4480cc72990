from __future__ import annotations

import pytest

from api.runner import HostSettings, resolve_host_settings
from engine.render.types import FillMode


def test_defaults_without_config() -> None:
    s = resolve_host_settings()
    assert s == HostSettings()
    assert s.clear_color == pytest.approx((248 / 255, 248 / 255, 1.0, 1.0))
    assert s.fps == 60


def test_config_values_are_used() -> None:
    cfg = {
        "window": {"width": 320, "height": 200, "clear_color": "Black", "fps": 30},
        "sheet": "Filled Shapes",
        "rasterizer": {"fill_mode": "WIREFRAME", "antialias": False},
    }
    s = resolve_host_settings(cfg)
    assert (s.width, s.height, s.fps) == (320, 200, 30)
    assert s.clear_color == (0.0, 0.0, 0.0, 1.0)
    assert s.sheet == "Filled Shapes"
    assert s.fill_mode is FillMode.WIREFRAME
    assert s.antialias is False


def test_explicit_arguments_win_and_none_means_unset() -> None:
    cfg = {"window": {"width": 320}, "sheet": "Filled Shapes"}
    s = resolve_host_settings(cfg, width=None, height=100, sheet="Outline Shapes")
    assert s.width == 320
    assert s.height == 100
    assert s.sheet == "Outline Shapes"


def test_malformed_sections_are_ignored() -> None:
    s = resolve_host_settings({"window": "oops", "rasterizer": 3})
    assert s == HostSettings()


@pytest.mark.parametrize(
    "overrides",
    [dict(width=0), dict(height=-5), dict(fps=0), dict(fill_mode="dotted"), dict(clear_color="nope")],
)
def test_invalid_values(overrides: dict) -> None:
    with pytest.raises(ValueError):
        resolve_host_settings(**overrides)
