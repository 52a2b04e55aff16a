from __future__ import annotations

import re

from . import clock

_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w\-]+", re.ASCII)
_MULTI_HYPHEN_RE = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Turn a group name into its id.

    小文字化・前後空白除去 → 空白を `-` → ASCII 英数字/`_`/`-` 以外を除去 → 連続 `-` を 1 つに。
    結果が空（記号だけの名前など）の場合は `group-<epoch ms>` を返す。
    """

    slug = str(text).lower().strip()
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _NON_WORD_RE.sub("", slug)
    slug = _MULTI_HYPHEN_RE.sub("-", slug)
    return slug or f"group-{clock.now_ms()}"
