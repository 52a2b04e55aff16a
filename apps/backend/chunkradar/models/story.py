from __future__ import annotations

from enum import Enum

from pydantic import ConfigDict

from .common import CamelModel


class StoryDifficulty(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class Story(CamelModel):
    """Short bilingual text for reading practice."""

    model_config = ConfigDict(extra="allow")

    id: int
    title: str
    title_turkish: str = ""
    content: str
    content_turkish: str = ""
    difficulty: StoryDifficulty = StoryDifficulty.beginner
    tags: list[str] | None = None
    word_count: int | None = None
    created_at: str
    updated_at: str


class StoryFields(CamelModel):
    """Create/update body. On create `title` and `content` are required."""

    title: str | None = None
    title_turkish: str | None = None
    content: str | None = None
    content_turkish: str | None = None
    difficulty: StoryDifficulty | None = None
    tags: list[str] | None = None
    word_count: int | None = None
