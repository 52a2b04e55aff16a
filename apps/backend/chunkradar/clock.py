"""現在日時の取得を一箇所に集約する。

日付境界はすべて UTC の暦日で判定する（統計・ストリーク・復習日の整合のため）。
テストではこのモジュールの関数を monkeypatch して日付を固定する。
"""

from __future__ import annotations

from datetime import UTC, date, datetime


def now() -> datetime:
    return datetime.now(UTC)


def today() -> date:
    return now().date()


def now_ms() -> int:
    return int(now().timestamp() * 1000)
