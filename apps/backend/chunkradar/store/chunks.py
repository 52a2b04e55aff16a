from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..logging import logger
from .json_files import read_json, write_json
from .metadata import DEFAULT_CHUNK_FILE


class ChunkFileStore:
    """One JSON array of chunk records per group, named by ``group["file"]``."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, group: Mapping[str, Any]) -> Path:
        # グループ名由来のファイル名でディレクトリ外へ出ないよう basename のみ使う
        return self.data_dir / Path(str(group["file"])).name

    def read_chunks(self, group: Mapping[str, Any]) -> list[dict[str, Any]]:
        chunks = read_json(self.path_for(group), [])
        if not isinstance(chunks, list):
            return []
        return [c for c in chunks if isinstance(c, dict)]

    def write_chunks(self, group: Mapping[str, Any], chunks: list[dict[str, Any]]) -> None:
        write_json(self.path_for(group), chunks)

    def create_file(self, group: Mapping[str, Any]) -> None:
        self.write_chunks(group, [])

    def delete_file(self, group: Mapping[str, Any]) -> bool:
        """Remove the group's file; the default `chunks.json` is always kept."""

        path = self.path_for(group)
        if path.name == DEFAULT_CHUNK_FILE:
            return False
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as exc:
            logger.error("group_file_delete_failed", path=str(path), error=repr(exc))
            return False
        return True
