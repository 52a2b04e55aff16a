from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources.types import NoDecode


DEFAULT_DATA_DIR = ".data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    環境変数から読み込まれるアプリ設定クラス。
    - environment: 実行環境（development/staging/production など）
    - data_dir: JSON ファイル群（metadata/グループ別チャンク/ストーリー）の保存先
    - stats_window_days: 日次統計を保持する最大日数
    """

    environment: str = Field(
        default="development",
        description="Runtime environment / 実行環境",
    )
    data_dir: str = Field(
        default=DEFAULT_DATA_DIR,
        validation_alias=AliasChoices("chunk_radar_data_dir", "data_dir"),
        description="Directory holding metadata.json and group chunk files / JSON 保存ディレクトリ",
    )
    stats_window_days: int = Field(
        default=30,
        ge=1,
        description="Number of most recent DayStat entries to keep / 日次統計の保持件数",
    )
    allowed_cors_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(),
        validation_alias=AliasChoices("allowed_cors_origins", "cors_allowed_origins"),
        description=(
            "Comma separated origins allowed for CORS / CORS を許可するオリジン（カンマ区切り）"
        ),
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level / ルートロガーのログレベル",
    )
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN (enable if set)")

    # Pydantic v2 settings config
    # - env_file: .env を読み込む
    # - extra: .env に存在する未使用キーを無視
    # - case_sensitive: 環境変数キーの大小文字を区別しない
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("allowed_cors_origins", mode="before")
    @classmethod
    def _normalise_allowed_cors_origins(
        cls, raw_origins: object
    ) -> tuple[str, ...] | object:  # pragma: no cover - pydantic handles typing
        """Normalise CORS origins into a trimmed, deduplicated tuple.

        なぜ: 末尾の空白や重複が残ると CORSMiddleware の照合が期待通りに
        動かないため、読み込み時点でトリムと重複排除を行う。
        """

        if raw_origins is None:
            candidates: list[str] = []
        elif isinstance(raw_origins, str):
            candidates = raw_origins.split(",")
        else:
            try:
                candidates = list(raw_origins)
            except TypeError:
                return raw_origins

        normalised: list[str] = []
        seen: set[str] = set()
        for candidate in candidates:
            if not isinstance(candidate, str):
                continue
            trimmed = candidate.strip().rstrip("/")
            if not trimmed or trimmed in seen:
                continue
            seen.add(trimmed)
            normalised.append(trimmed)

        return tuple(normalised)


settings = Settings()
