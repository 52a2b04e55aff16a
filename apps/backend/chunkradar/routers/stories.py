"""Reading-practice story endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from .. import clock
from ..id_factory import id_factory
from ..logging import logger
from ..models.common import SuccessResponse
from ..models.story import Story, StoryDifficulty, StoryFields
from ..store import AppJsonStore
from ..store.stories import count_words
from .common import get_store, store_failure

router = APIRouter(tags=["stories"])


def _find_index(stories: list[dict[str, Any]], story_id: int) -> int:
    for idx, story in enumerate(stories):
        if str(story.get("id")) == str(story_id):
            return idx
    raise HTTPException(status_code=404, detail="Story not found")


@router.get("", response_model=list[Story], summary="ストーリー一覧")
def list_stories(store: AppJsonStore = Depends(get_store)) -> list[dict]:
    return store.stories.read_stories()


@router.post("", response_model=Story, summary="ストーリーを作成")
def create_story(req: StoryFields, store: AppJsonStore = Depends(get_store)) -> dict:
    """Create a story; `wordCount` is derived from `content` when not supplied."""
    if not (req.title or "").strip() or not (req.content or "").strip():
        raise HTTPException(status_code=400, detail="title and content are required")

    now_iso = clock.now().isoformat()
    with store_failure("Failed to create story"):
        stories = store.stories.read_stories()
        record: dict[str, Any] = {
            "titleTurkish": "",
            "contentTurkish": "",
            "difficulty": StoryDifficulty.beginner.value,
        }
        record.update(req.model_dump(mode="json", by_alias=True, exclude_none=True))
        record.setdefault("wordCount", count_words(record["content"]))
        record["id"] = id_factory.next_id(s.get("id") for s in stories)
        record["createdAt"] = now_iso
        record["updatedAt"] = now_iso
        stories.append(record)
        store.stories.write_stories(stories)

    logger.info("story_created", story_id=record["id"], word_count=record["wordCount"])
    return record


@router.put("/{story_id}", response_model=Story, summary="ストーリーを更新")
def update_story(story_id: int, req: StoryFields, store: AppJsonStore = Depends(get_store)) -> dict:
    changes = req.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)
    with store_failure("Failed to update story", story_id=story_id):
        stories = store.stories.read_stories()
        idx = _find_index(stories, story_id)
        updated = {**stories[idx], **changes}
        if "content" in changes and "wordCount" not in changes:
            updated["wordCount"] = count_words(updated["content"])
        updated["updatedAt"] = clock.now().isoformat()
        stories[idx] = updated
        store.stories.write_stories(stories)

    logger.info("story_updated", story_id=story_id, fields=sorted(changes))
    return updated


@router.delete("/{story_id}", response_model=SuccessResponse, summary="ストーリーを削除")
def delete_story(story_id: int, store: AppJsonStore = Depends(get_store)) -> SuccessResponse:
    with store_failure("Failed to delete story", story_id=story_id):
        stories = store.stories.read_stories()
        idx = _find_index(stories, story_id)
        stories.pop(idx)
        store.stories.write_stories(stories)

    logger.info("story_deleted", story_id=story_id)
    return SuccessResponse()
