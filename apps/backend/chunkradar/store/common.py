from __future__ import annotations

from typing import Any


def normalize_non_negative_int(value: Any) -> int:
    """与えられた値を非負整数に正規化する。

    日次統計の correct/wrong 加算値は UI のバグで負値や文字列が送られると
    累計が壊れるため、保存前にゼロ以上の整数へ矯正しておく。"""

    if isinstance(value, bool):
        return int(value)
    try:
        ivalue = int(value)
    except (TypeError, ValueError):
        return 0
    return ivalue if ivalue >= 0 else 0
