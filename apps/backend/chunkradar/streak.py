"""Daily stats recording and study-streak derivation.

日次統計（DayStat）は UTC 暦日ごとに 1 件。ストリークは保存せず、読み出しの
たびに統計履歴から計算し直す（最長記録 longestStreak だけを永続化する）。
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from .store.common import normalize_non_negative_int
from .store.metadata import DEFAULT_SETTINGS

DEFAULT_STATS_WINDOW = 30


def _daily_goal(doc: dict[str, Any]) -> int:
    raw = (doc.get("settings") or {}).get("dailyGoal", DEFAULT_SETTINGS["dailyGoal"])
    try:
        return int(raw)
    except (TypeError, ValueError):
        return int(DEFAULT_SETTINGS["dailyGoal"])


def _stat_total(stat: dict[str, Any]) -> int:
    return normalize_non_negative_int(stat.get("total"))


def record_answers(
    doc: dict[str, Any],
    correct: Any,
    wrong: Any,
    today: date,
    *,
    window: int = DEFAULT_STATS_WINDOW,
) -> dict[str, Any]:
    """Add answer counts to today's DayStat and trim history to ``window`` days.

    total は加算分ではなく累計の correct + wrong から毎回再計算する。
    """

    correct_delta = normalize_non_negative_int(correct)
    wrong_delta = normalize_non_negative_int(wrong)
    day = today.isoformat()
    stats: list[dict[str, Any]] = doc.setdefault("stats", [])

    entry = next((s for s in stats if s.get("date") == day), None)
    if entry is None:
        entry = {"date": day, "correct": 0, "wrong": 0, "total": 0}
        stats.append(entry)
    entry["correct"] = normalize_non_negative_int(entry.get("correct")) + correct_delta
    entry["wrong"] = normalize_non_negative_int(entry.get("wrong")) + wrong_delta
    entry["total"] = entry["correct"] + entry["wrong"]

    # 古い日付から順に捨てる単純なスライディングウィンドウ
    stats.sort(key=lambda s: str(s.get("date", "")))
    if len(stats) > window:
        del stats[: len(stats) - window]
    return entry


def current_streak(stats: list[dict[str, Any]], daily_goal: int, today: date) -> int:
    """Count consecutive goal-meeting days ending today (or yesterday).

    今日まだ記録がない場合は昨日を起点に数え、学習前でもストリークが
    途切れて見えないようにする。日付の欠落があればそこで打ち切る。
    """

    ordered = sorted(stats, key=lambda s: str(s.get("date", "")), reverse=True)
    if not ordered:
        return 0

    anchor = today
    if ordered[0].get("date") != today.isoformat():
        anchor = today - timedelta(days=1)

    streak = 0
    for i, stat in enumerate(ordered):
        expected = (anchor - timedelta(days=i)).isoformat()
        if stat.get("date") == expected and _stat_total(stat) >= daily_goal:
            streak += 1
        else:
            break
    return streak


def calculate_streak(doc: dict[str, Any], today: date) -> dict[str, Any]:
    """Derive streak info from ``doc`` and raise ``longestStreak`` when beaten.

    ``doc["longestStreak"]`` は必要時にのみ更新される。保存は呼び出し側の責務。
    """

    daily_goal = _daily_goal(doc)
    stats = doc.get("stats") or []
    streak = current_streak(stats, daily_goal, today)

    longest = normalize_non_negative_int(doc.get("longestStreak"))
    if streak > longest:
        longest = streak
        doc["longestStreak"] = longest

    today_key = today.isoformat()
    today_count = next((_stat_total(s) for s in stats if s.get("date") == today_key), 0)
    return {
        "currentStreak": streak,
        "longestStreak": longest,
        "todayCount": today_count,
        "dailyGoal": daily_goal,
        "goalReached": today_count >= daily_goal,
    }
