from __future__ import annotations

from pydantic import Field

from .common import CamelModel


class UserSettings(CamelModel):
    """Global study preferences (single record, not per user)."""

    daily_goal: int = 20
    tts_speed: float = 0.85
    tts_voice: str = "en-US"


class UserSettingsUpdate(CamelModel):
    """部分更新用。送られたキーだけが既存値を上書きする。"""

    daily_goal: int | None = Field(default=None, ge=1)
    tts_speed: float | None = Field(default=None, gt=0, le=4)
    tts_voice: str | None = Field(default=None, min_length=1)
