"""ID 生成ユーティリティ。

チャンクとストーリーの ID は既存データとの互換性のためミリ秒タイムスタンプ
（整数）を維持する。ただし同一ミリ秒に連続作成された場合でも衝突しないよう、
直前に払い出した ID および対象コレクション内の既存 ID より必ず大きい値にする。
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from . import clock


class IdFactory:
    """Monotonic integer id source seeded from the wall clock (epoch ms)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def next_id(self, existing: Iterable[object] = ()) -> int:
        floor = self._last
        for value in existing:
            try:
                floor = max(floor, int(value))  # type: ignore[call-overload]
            except (TypeError, ValueError):
                continue
        with self._lock:
            candidate = max(clock.now_ms(), floor + 1, self._last + 1)
            self._last = candidate
            return candidate


id_factory = IdFactory()
