from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ..id_factory import id_factory
from ..logging import logger
from ..models.chunk import Chunk, ChunkCreateRequest, ChunkUpdateRequest
from ..models.common import SuccessResponse
from ..store import AppJsonStore
from .common import get_store, require_group, store_failure

router = APIRouter(tags=["chunks"])


def _same_id(chunk: dict[str, Any], chunk_id: str) -> bool:
    # パスパラメータは文字列、保存値は整数なので文字列化して比較する
    return str(chunk.get("id")) == str(chunk_id)


@router.get("/{group_id}", response_model=list[Chunk], summary="グループのチャンク一覧")
def list_chunks(group_id: str, store: AppJsonStore = Depends(get_store)) -> list[dict]:
    with store_failure("Failed to read chunks", group_id=group_id):
        doc = store.load()
    group = require_group(doc, group_id)
    return store.chunks.read_chunks(group)


@router.post("", response_model=Chunk, summary="チャンクを追加")
def create_chunk(req: ChunkCreateRequest, store: AppJsonStore = Depends(get_store)) -> dict:
    """Append a chunk to a group and assign it a fresh integer id."""
    if not req.group_id:
        raise HTTPException(status_code=400, detail="groupId is required")
    if req.chunk is None:
        raise HTTPException(status_code=400, detail="chunk is required")

    with store_failure("Failed to add chunk", group_id=req.group_id):
        doc = store.load()
        group = require_group(doc, req.group_id)
        chunks = store.chunks.read_chunks(group)
        record = {"english": "", "turkish": "", "examples": []}
        record.update(req.chunk.to_record())
        record["id"] = id_factory.next_id(c.get("id") for c in chunks)
        chunks.append(record)
        store.chunks.write_chunks(group, chunks)

    logger.info("chunk_created", group_id=req.group_id, chunk_id=record["id"])
    return record


@router.put("/{group_id}/{chunk_id}", response_model=Chunk, summary="チャンクを更新")
def update_chunk(
    group_id: str,
    chunk_id: str,
    req: ChunkUpdateRequest,
    store: AppJsonStore = Depends(get_store),
) -> dict:
    """Shallow-merge the supplied fields into the stored chunk; the id never changes."""
    if req.chunk is None:
        raise HTTPException(status_code=400, detail="chunk is required")

    with store_failure("Failed to update chunk", group_id=group_id, chunk_id=chunk_id):
        doc = store.load()
        group = require_group(doc, group_id)
        chunks = store.chunks.read_chunks(group)
        idx = next((i for i, c in enumerate(chunks) if _same_id(c, chunk_id)), None)
        if idx is None:
            raise HTTPException(status_code=404, detail="Chunk not found")
        changes = req.chunk.to_record()
        changes.pop("id", None)
        chunks[idx] = {**chunks[idx], **changes}
        store.chunks.write_chunks(group, chunks)

    logger.info("chunk_updated", group_id=group_id, chunk_id=chunk_id, fields=sorted(changes))
    return chunks[idx]


@router.delete("/{group_id}/{chunk_id}", response_model=SuccessResponse, summary="チャンクを削除")
def delete_chunk(
    group_id: str, chunk_id: str, store: AppJsonStore = Depends(get_store)
) -> SuccessResponse:
    """Remove a chunk; deleting an id that is not present still succeeds."""
    with store_failure("Failed to delete chunk", group_id=group_id, chunk_id=chunk_id):
        doc = store.load()
        group = require_group(doc, group_id)
        chunks = store.chunks.read_chunks(group)
        remaining = [c for c in chunks if not _same_id(c, chunk_id)]
        store.chunks.write_chunks(group, remaining)

    logger.info(
        "chunk_deleted",
        group_id=group_id,
        chunk_id=chunk_id,
        removed=len(chunks) - len(remaining),
    )
    return SuccessResponse()
