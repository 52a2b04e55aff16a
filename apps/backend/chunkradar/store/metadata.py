from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from ..logging import logger
from .json_files import read_json, write_json

METADATA_FILENAME = "metadata.json"
LEGACY_STATS_FILENAME = "stats.json"

DEFAULT_GROUP_ID = "default"
DEFAULT_GROUP_NAME = "Günlük Popüler"
DEFAULT_CHUNK_FILE = "chunks.json"

DEFAULT_SETTINGS: dict[str, Any] = {
    "dailyGoal": 20,
    "ttsSpeed": 0.85,
    "ttsVoice": "en-US",
}


def default_group() -> dict[str, str]:
    return {"id": DEFAULT_GROUP_ID, "name": DEFAULT_GROUP_NAME, "file": DEFAULT_CHUNK_FILE}


def empty_document() -> dict[str, Any]:
    """Return a fresh metadata document holding only the default group."""

    return {
        "groups": [default_group()],
        "stats": [],
        "progress": {},
        "confidence": {},
        "settings": copy.deepcopy(DEFAULT_SETTINGS),
        "longestStreak": 0,
    }


def _complete_document(doc: dict[str, Any]) -> dict[str, Any]:
    """Fill keys missing from an object-shaped document with their defaults."""

    groups = doc.get("groups")
    doc["groups"] = [g for g in groups if isinstance(g, dict)] if isinstance(groups, list) else []
    stats = doc.get("stats")
    doc["stats"] = [s for s in stats if isinstance(s, dict)] if isinstance(stats, list) else []
    for key in ("progress", "confidence"):
        if not isinstance(doc.get(key), dict):
            doc[key] = {}
    settings = doc.get("settings")
    merged = copy.deepcopy(DEFAULT_SETTINGS)
    if isinstance(settings, dict):
        merged.update(settings)
    doc["settings"] = merged
    try:
        doc["longestStreak"] = max(0, int(doc.get("longestStreak") or 0))
    except (TypeError, ValueError):
        doc["longestStreak"] = 0
    return doc


class MetadataStore:
    """Single JSON document holding every non-chunk piece of application state.

    groups / stats / progress / confidence / settings / longestStreak を
    `metadata.json` 1 ファイルに保持し、リクエストごとに丸ごと読み込み・
    丸ごと書き戻す（部分更新はしない）。
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / METADATA_FILENAME

    @property
    def default_chunk_path(self) -> Path:
        return self.data_dir / DEFAULT_CHUNK_FILE

    def load(self) -> dict[str, Any]:
        raw = read_json(self.path, None)
        if isinstance(raw, dict):
            return _complete_document(raw)
        if isinstance(raw, list):
            return self._migrate_legacy(raw)
        return self._initialise()

    def save(self, doc: dict[str, Any]) -> None:
        write_json(self.path, doc)

    def _ensure_default_chunk_file(self) -> None:
        if not self.default_chunk_path.exists():
            write_json(self.default_chunk_path, [])

    def _initialise(self) -> dict[str, Any]:
        doc = empty_document()
        self.save(doc)
        self._ensure_default_chunk_file()
        logger.info("metadata_initialised", path=str(self.path))
        return doc

    def _migrate_legacy(self, legacy_groups: list[Any]) -> dict[str, Any]:
        """Convert the old bare-array `metadata.json` into the unified document.

        旧形式ではグループ配列だけが metadata.json に、日次統計が stats.json に
        分かれていた。統計を取り込んだ後の stats.json は `.bak` に退避する。
        """

        doc = empty_document()
        groups = [g for g in legacy_groups if isinstance(g, dict) and g.get("id")]
        if not any(g.get("id") == DEFAULT_GROUP_ID for g in groups):
            groups.insert(0, default_group())
        doc["groups"] = groups

        stats_path = self.data_dir / LEGACY_STATS_FILENAME
        legacy_stats = read_json(stats_path, [])
        if isinstance(legacy_stats, list):
            doc["stats"] = [s for s in legacy_stats if isinstance(s, dict)]

        self.save(doc)
        self._ensure_default_chunk_file()
        if stats_path.exists():
            backup = stats_path.with_name(stats_path.name + ".bak")
            try:
                stats_path.replace(backup)
            except OSError as exc:
                logger.warning("legacy_stats_backup_failed", path=str(stats_path), error=repr(exc))
        logger.info(
            "metadata_migrated",
            path=str(self.path),
            groups=len(doc["groups"]),
            stats=len(doc["stats"]),
        )
        return doc
