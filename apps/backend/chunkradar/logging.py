"""Logging utilities.

構造化ログの初期化をまとめて提供する。すべてのログは JSON 1 行で出力され、
リクエスト ID などの ContextVar に束縛された値も自動的に付与される。
"""

import logging

import structlog
from structlog import contextvars as structlog_contextvars

from .config import settings


def _resolve_level(raw: str | None) -> int:
    """Translate a textual level (``"debug"`` etc.) into a stdlib level number."""

    value = logging.getLevelName((raw or "INFO").strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging() -> None:
    """Configure structlog for application-wide logging.

    アプリ全体のロギング設定を行う。標準 logging を初期化し、
    structlog で ISO タイムスタンプと JSON 形式の出力を有効化する。
    """
    # stdlib 側の出力に余計なプレフィックス（"INFO:logger:" など）を付けない
    # ため、フォーマットはメッセージのみ(%(message)s)に固定する。
    # force=True で既存ハンドラ（uvicorn 等）を上書きして一貫化。
    logging.basicConfig(
        level=_resolve_level(settings.log_level),
        format="%(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog_contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )

    # Optional: Sentry integration (enabled if DSN is provided)
    if settings.sentry_dsn:
        try:
            import sentry_sdk  # type: ignore
            from sentry_sdk.integrations.logging import LoggingIntegration  # type: ignore
        except ImportError:
            logger.warning("sentry_unavailable", reason="sentry_sdk not installed")
            return
        sentry_logging = LoggingIntegration(
            level=logging.INFO,
            event_level=logging.ERROR,
        )
        sentry_sdk.init(dsn=settings.sentry_dsn, integrations=[sentry_logging])


logger = structlog.get_logger()
