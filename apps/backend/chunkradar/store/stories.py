from __future__ import annotations

from pathlib import Path
from typing import Any

from .json_files import read_json, write_json

STORIES_FILENAME = "stories.json"


class StoryStore:
    """Reading-practice stories kept as one JSON array in `stories.json`."""

    def __init__(self, data_dir: Path) -> None:
        self.path = Path(data_dir) / STORIES_FILENAME

    def read_stories(self) -> list[dict[str, Any]]:
        stories = read_json(self.path, [])
        if not isinstance(stories, list):
            return []
        return [s for s in stories if isinstance(s, dict)]

    def write_stories(self, stories: list[dict[str, Any]]) -> None:
        write_json(self.path, stories)


def count_words(text: str | None) -> int:
    return len((text or "").split())
