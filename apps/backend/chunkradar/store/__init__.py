from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..config import settings
from .chunks import ChunkFileStore
from .json_files import StoreWriteError
from .metadata import (
    DEFAULT_CHUNK_FILE,
    DEFAULT_GROUP_ID,
    DEFAULT_SETTINGS,
    MetadataStore,
    default_group,
)
from .stories import StoryStore


class AppJsonStore:
    """JSON ファイル群をまとめて扱うストア。

    ルーターはこのオブジェクト経由でのみ永続化層に触れる。`load`/`save` の
    契約さえ守れば、ファイルロックや組み込み DB への差し替えは業務ロジックに
    影響しない。
    """

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.metadata = MetadataStore(self.data_dir)
        self.chunks = ChunkFileStore(self.data_dir)
        self.stories = StoryStore(self.data_dir)

    def load(self) -> dict[str, Any]:
        return self.metadata.load()

    def save(self, doc: dict[str, Any]) -> None:
        self.metadata.save(doc)

    def ensure_default_group(self, doc: dict[str, Any]) -> bool:
        """Re-seed the default group when the group list became empty.

        Returns True when the document was modified (caller saves it).
        """

        if doc["groups"]:
            return False
        doc["groups"].append(default_group())
        if not self.chunks.path_for(default_group()).exists():
            self.chunks.create_file(default_group())
        return True


def find_group(doc: Mapping[str, Any], group_id: str) -> dict[str, Any] | None:
    for group in doc.get("groups", []):
        if group.get("id") == group_id:
            return group
    return None


def create_store(data_dir: Path | str | None = None) -> AppJsonStore:
    """設定値（CHUNK_RADAR_DATA_DIR）からアプリ共有のストアを初期化する。"""

    return AppJsonStore(data_dir if data_dir is not None else settings.data_dir)


__all__ = [
    "AppJsonStore",
    "ChunkFileStore",
    "DEFAULT_CHUNK_FILE",
    "DEFAULT_GROUP_ID",
    "DEFAULT_SETTINGS",
    "MetadataStore",
    "StoreWriteError",
    "StoryStore",
    "create_store",
    "find_group",
]
