"""Per-chunk study progress and spaced-repetition confidence endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from .. import clock
from ..logging import logger
from ..models.common import SuccessResponse
from ..models.progress import ConfidenceRecord, ConfidenceUpdateRequest, ProgressUpdateRequest
from ..srs import update_confidence
from ..store import AppJsonStore
from .common import get_store, store_failure

router = APIRouter(tags=["progress"])


@router.get("/progress", summary="全グループの進捗")
def get_all_progress(store: AppJsonStore = Depends(get_store)) -> dict[str, dict[str, str]]:
    with store_failure("Failed to read progress"):
        doc = store.load()
    return doc["progress"]


@router.get("/progress/{group_id}", summary="グループの進捗（chunkId → status）")
def get_group_progress(group_id: str, store: AppJsonStore = Depends(get_store)) -> dict[str, str]:
    with store_failure("Failed to read progress", group_id=group_id):
        doc = store.load()
    return doc["progress"].get(group_id, {})


@router.post("/progress", response_model=SuccessResponse, summary="チャンクの回答状態を保存")
def save_progress(req: ProgressUpdateRequest, store: AppJsonStore = Depends(get_store)) -> SuccessResponse:
    """Record one chunk's status; the per-group map is created lazily."""
    if not req.group_id or req.chunk_id is None or req.status is None:
        raise HTTPException(status_code=400, detail="groupId, chunkId and status are required")

    with store_failure("Failed to save progress", group_id=req.group_id):
        doc = store.load()
        doc["progress"].setdefault(req.group_id, {})[str(req.chunk_id)] = req.status.value
        store.save(doc)
    return SuccessResponse()


@router.delete("/progress/{group_id}", response_model=SuccessResponse, summary="グループの進捗をリセット")
def reset_progress(group_id: str, store: AppJsonStore = Depends(get_store)) -> SuccessResponse:
    """Clear a group's status map to `{}`; confidence data is left untouched."""
    with store_failure("Failed to reset progress", group_id=group_id):
        doc = store.load()
        doc["progress"][group_id] = {}
        store.save(doc)
    logger.info("progress_reset", group_id=group_id)
    return SuccessResponse()


@router.get("/confidence", summary="全グループの確信度")
def get_all_confidence(store: AppJsonStore = Depends(get_store)) -> dict[str, dict[str, ConfidenceRecord]]:
    with store_failure("Failed to read confidence"):
        doc = store.load()
    return doc["confidence"]


@router.get("/confidence/{group_id}", summary="グループの確信度（chunkId → record）")
def get_group_confidence(
    group_id: str, store: AppJsonStore = Depends(get_store)
) -> dict[str, ConfidenceRecord]:
    with store_failure("Failed to read confidence", group_id=group_id):
        doc = store.load()
    return doc["confidence"].get(group_id, {})


@router.post("/confidence", response_model=ConfidenceRecord, summary="正誤から確信度と次回復習日を更新")
def post_confidence(req: ConfidenceUpdateRequest, store: AppJsonStore = Depends(get_store)) -> dict:
    """Apply a correct/wrong signal to the chunk's level and next review date.

    - 正解: level +1（上限 5）、間隔テーブル [1, 2, 4, 7, 14, 30] 日
    - 不正解: level -2（下限 0）、翌日に再出題
    """
    if not req.group_id or req.chunk_id is None or req.is_correct is None:
        raise HTTPException(status_code=400, detail="groupId, chunkId and isCorrect are required")

    with store_failure("Failed to update confidence", group_id=req.group_id):
        doc = store.load()
        record = update_confidence(doc, req.group_id, req.chunk_id, req.is_correct, clock.today())
        store.save(doc)

    logger.info(
        "confidence_updated",
        group_id=req.group_id,
        chunk_id=str(req.chunk_id),
        is_correct=req.is_correct,
        level=record["level"],
        next_review=record["nextReview"],
    )
    return record
