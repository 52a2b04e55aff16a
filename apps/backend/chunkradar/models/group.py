from __future__ import annotations

from pydantic import BaseModel


class Group(BaseModel):
    """A named collection of chunks backed by one JSON file."""

    id: str
    name: str
    file: str


class GroupNameRequest(BaseModel):
    """グループ作成/改名のリクエスト。`name` 欠落時はルーター側で 400 を返す。"""

    name: str | None = None
