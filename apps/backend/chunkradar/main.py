from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .logging import configure_logging, logger
from .middleware import AccessLogAndMetricsMiddleware, RequestIDMiddleware
from .routers import chunks, groups, health, progress, stats, stories, user_settings
from .store import AppJsonStore, create_store


def create_app(store: AppJsonStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    `store` を渡すとその JSON ストアを使う（テストでは tmp_path 配下を指定）。
    省略時は設定値 `CHUNK_RADAR_DATA_DIR` から生成する。
    """
    configure_logging()
    app = FastAPI(title="Chunk Radar API", version=__version__)
    app.state.store = store if store is not None else create_store()
    logger.info(
        "app_configured",
        environment=settings.environment,
        data_dir=str(app.state.store.data_dir),
    )

    configured_origins = list(settings.allowed_cors_origins)
    allow_credentials = bool(configured_origins)
    if not configured_origins:
        configured_origins = ["*"]

    # なぜ: ワイルドカード許可時は資格情報付き CORS を無効化し、
    # 設定で明示されたオリジンの場合のみ許可する。
    app.add_middleware(
        CORSMiddleware,
        allow_origins=configured_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Middleware stack (inner → outer): CORS → RequestID → AccessLog
    # Starlette では後から追加したミドルウェアが外側で実行される。RequestID で
    # 採番した `request_id` を AccessLog 側が構造化ログとメトリクスに記録する。
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(AccessLogAndMetricsMiddleware)

    app.include_router(health.router)
    app.include_router(groups.router, prefix="/api/groups")
    app.include_router(chunks.router, prefix="/api/chunks")
    app.include_router(stories.router, prefix="/api/stories")
    app.include_router(progress.router, prefix="/api")
    app.include_router(stats.router, prefix="/api")
    app.include_router(user_settings.router, prefix="/api")

    return app


app = create_app()
