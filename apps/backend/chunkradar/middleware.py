from __future__ import annotations

import time
import uuid
from collections.abc import Mapping
from typing import Any, Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from structlog import contextvars as structlog_contextvars

from .logging import logger
from .metrics import registry

__all__ = [
    "AccessLogAndMetricsMiddleware",
    "RequestIDMiddleware",
    "route_template",
]


def route_template(path: str, path_params: Mapping[str, Any] | None) -> str:
    """Rebuild the route template of ``path`` from its matched path parameters.

    `/api/chunks/default/17` は `/api/chunks/{group_id}/{chunk_id}` になる。
    `scope["route"].path` は include_router の prefix を含まない版があるため、
    実際のパスの末尾側からパラメータ値のセグメントを置き換えて求める。
    """

    if not path_params:
        return path
    segments = path.split("/")
    cursor = len(segments)
    for name, value in reversed(list(path_params.items())):
        for idx in range(cursor - 1, -1, -1):
            if segments[idx] == str(value):
                segments[idx] = "{" + name + "}"
                cursor = idx
                break
    return "/".join(segments)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign a request ID to each incoming request and expose it in headers.

    - Sets `request.state.request_id`
    - Binds `request_id` into structlog contextvars for the request duration
    - Adds `X-Request-ID` to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:  # type: ignore[override]
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        structlog_contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog_contextvars.unbind_contextvars("request_id")
        response.headers["X-Request-ID"] = request_id
        return response


class AccessLogAndMetricsMiddleware(BaseHTTPMiddleware):
    """Emit one structured `request_complete` log per call and record latency.

    なぜ: JSON ファイルへの読み書きはリクエストごとに丸ごと行われるため、
    遅延やエラーをルート単位で可視化しておくとデータ肥大化に早く気付ける。
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:  # type: ignore[override]
        start = time.perf_counter()
        path = request.url.path
        method = request.method
        status_code: int | None = None
        error_type: str | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as exc:
            status_code = 500
            error_type = exc.__class__.__name__
            raise
        finally:
            latency_ms = (time.perf_counter() - start) * 1000
            # パスパラメータ込みの URL ではなくルートテンプレートで集計する
            route_path = route_template(path, request.scope.get("path_params"))
            is_error = status_code is None or status_code >= 500
            registry.record(f"{method} {route_path}", latency_ms, is_error=is_error)
            log_method = logger.error if is_error else logger.info
            log_method(
                "request_complete",
                path=path,
                route=route_path,
                method=method,
                status_code=status_code,
                latency_ms=round(latency_ms, 2),
                is_error=is_error,
                error_type=error_type,
                request_id=getattr(request.state, "request_id", None),
                client_ip=request.client.host if request.client else "unknown",
            )
