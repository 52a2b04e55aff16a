"""Spaced-repetition confidence scoring for chunks.

各チャンクは 0〜5 の確信度レベルを持つ。正解で +1、不正解で -2 し、
次回復習日は固定の間隔テーブルから決める（不正解は常に翌日）。
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

MIN_LEVEL = 0
MAX_LEVEL = 5
REVIEW_INTERVALS_DAYS: tuple[int, ...] = (1, 2, 4, 7, 14, 30)
WRONG_PENALTY = 2
WRONG_REVIEW_OFFSET_DAYS = 1


def next_confidence(current: dict[str, Any] | None, is_correct: bool, today: date) -> dict[str, Any]:
    """Return the record that follows ``current`` after one answer."""

    try:
        level = int((current or {}).get("level", 0))
    except (TypeError, ValueError):
        level = 0
    level = max(MIN_LEVEL, min(MAX_LEVEL, level))

    if is_correct:
        level = min(MAX_LEVEL, level + 1)
        offset = REVIEW_INTERVALS_DAYS[min(level, MAX_LEVEL)]
    else:
        level = max(MIN_LEVEL, level - WRONG_PENALTY)
        offset = WRONG_REVIEW_OFFSET_DAYS

    return {
        "level": level,
        "nextReview": (today + timedelta(days=offset)).isoformat(),
        "lastReviewed": today.isoformat(),
    }


def update_confidence(
    doc: dict[str, Any],
    group_id: str,
    chunk_id: int | str,
    is_correct: bool,
    today: date,
) -> dict[str, Any]:
    """Apply one correct/wrong answer to ``doc["confidence"]`` in place.

    記録は `confidence[groupId][str(chunkId)]` に格納する（JSON のキーは文字列）。
    保存は呼び出し側が行う。
    """

    group_map = doc.setdefault("confidence", {}).setdefault(group_id, {})
    key = str(chunk_id)
    record = next_confidence(group_map.get(key), is_correct, today)
    group_map[key] = record
    return record
