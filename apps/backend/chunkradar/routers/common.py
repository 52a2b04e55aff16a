from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import HTTPException, Request

from ..logging import logger
from ..store import AppJsonStore, StoreWriteError, find_group


def get_store(request: Request) -> AppJsonStore:
    """FastAPI dependency returning the store attached in `create_app`."""

    return request.app.state.store


@contextmanager
def store_failure(message: str, **log_fields: Any) -> Iterator[None]:
    """Convert persistence failures into a generic 500 with ``message``.

    なぜ: 書き込み失敗の詳細（パスや OS エラー）はログにだけ残し、
    クライアントには英語の短いメッセージのみを返す。
    """

    try:
        yield
    except StoreWriteError as exc:
        logger.error("store_failure", message=message, error=repr(exc.cause), **log_fields)
        raise HTTPException(status_code=500, detail=message) from exc


def require_group(doc: dict[str, Any], group_id: str) -> dict[str, Any]:
    group = find_group(doc, group_id)
    if group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    return group
