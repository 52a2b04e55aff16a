from __future__ import annotations

from enum import Enum

from pydantic import Field

from .common import CamelModel


class ChunkStatus(str, Enum):
    """Outcome recorded for a chunk in a study session."""

    unreviewed = "unreviewed"
    correct = "correct"
    wrong = "wrong"
    skipped = "skipped"


class ProgressUpdateRequest(CamelModel):
    group_id: str | None = None
    chunk_id: int | str | None = None
    status: ChunkStatus | None = None


class ConfidenceRecord(CamelModel):
    """Spaced-repetition state of one chunk (level 0..5)."""

    level: int = Field(ge=0, le=5)
    next_review: str | None = None
    last_reviewed: str | None = None


class ConfidenceUpdateRequest(CamelModel):
    group_id: str | None = None
    chunk_id: int | str | None = None
    is_correct: bool | None = None


class DayStat(CamelModel):
    date: str
    correct: int = 0
    wrong: int = 0
    total: int = 0


class StatsRecordRequest(CamelModel):
    """1 回の回答で加算する正解/不正解数（通常は 1/0 または 0/1）。"""

    correct: int = 0
    wrong: int = 0


class StreakInfo(CamelModel):
    current_streak: int
    longest_streak: int
    today_count: int
    daily_goal: int
    goal_reached: bool
