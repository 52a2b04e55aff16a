from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .common import CamelModel


class ChunkFields(CamelModel):
    """Chunk body sent by the client; unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    english: str | None = None
    turkish: str | None = None
    examples: list[str] | None = None
    example_translations: list[str] | None = None

    def to_record(self) -> dict[str, Any]:
        """Only the non-null keys the client actually sent, with camelCase names.

        `null` は未送信と同じ扱いで、保存済みの値を null で上書きしない。
        """

        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class Chunk(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: int
    english: str = ""
    turkish: str = ""
    examples: list[str] = Field(default_factory=list)
    example_translations: list[str] | None = None


class ChunkCreateRequest(CamelModel):
    group_id: str | None = None
    chunk: ChunkFields | None = None


class ChunkUpdateRequest(BaseModel):
    chunk: ChunkFields | None = None
