"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_str


@dataclass
class _Settings:
    # ストローク
    MITER_LIMIT: float = 4.0

    # 円/楕円のテッセレーション
    CIRCLE_ARC_LENGTH: float = 4.0
    CIRCLE_MIN_SEGMENTS: int = 8
    CIRCLE_MAX_SEGMENTS: int = 256

    # 塗り
    CHECK_SIMPLE_POLYGON: bool = True

    # Renderer
    GL_INITIAL_RESERVE: int = 1024 * 1024

    # Misc
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int`、float は `env_float` を使用。
    - 一部は下限丸めやフォールバックを適用。
    """
    # miter 比は 1 未満だと常に bevel になるため 1 で下限丸め
    _settings.MITER_LIMIT = env_float("PB_MITER_LIMIT", 4.0, min_value=1.0)

    _settings.CIRCLE_ARC_LENGTH = env_float("PB_CIRCLE_ARC_LENGTH", 4.0)
    if _settings.CIRCLE_ARC_LENGTH <= 0.0:
        _settings.CIRCLE_ARC_LENGTH = 4.0
    _settings.CIRCLE_MIN_SEGMENTS = env_int("PB_CIRCLE_MIN_SEGMENTS", 8, min_value=3) or 8
    _settings.CIRCLE_MAX_SEGMENTS = env_int("PB_CIRCLE_MAX_SEGMENTS", 256, min_value=3) or 256
    if _settings.CIRCLE_MAX_SEGMENTS < _settings.CIRCLE_MIN_SEGMENTS:
        _settings.CIRCLE_MAX_SEGMENTS = _settings.CIRCLE_MIN_SEGMENTS

    _settings.CHECK_SIMPLE_POLYGON = env_bool("PB_CHECK_SIMPLE_POLYGON", True)

    _settings.GL_INITIAL_RESERVE = (
        env_int("PB_GL_INITIAL_RESERVE", 1024 * 1024, min_value=1024) or 1024 * 1024
    )

    _settings.LOG_LEVEL = env_str("PB_LOG_LEVEL", "INFO")


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
