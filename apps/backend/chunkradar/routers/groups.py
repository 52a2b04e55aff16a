from fastapi import APIRouter, Depends, HTTPException

from ..logging import logger
from ..models.common import SuccessResponse
from ..models.group import Group, GroupNameRequest
from ..slug import slugify
from ..store import AppJsonStore, find_group
from .common import get_store, require_group, store_failure

router = APIRouter(tags=["groups"])


@router.get("", response_model=list[Group], summary="グループ一覧を取得")
def list_groups(store: AppJsonStore = Depends(get_store)) -> list[dict]:
    """Return every group; re-create the default group when none remain."""

    with store_failure("Failed to read metadata"):
        doc = store.load()
        if store.ensure_default_group(doc):
            store.save(doc)
    return doc["groups"]


@router.post("", response_model=Group, summary="グループを作成")
def create_group(req: GroupNameRequest, store: AppJsonStore = Depends(get_store)) -> dict:
    """Create a group whose id is the slug of its name and an empty chunk file.

    - 同じ slug のグループが既にあれば 400
    - 記号や空白だけの名前などで slug が空になる場合は `group-<epoch ms>` を採番
    - 名前は送られた文字列のまま保存する（空文字と未指定のみ 400）
    """
    name = req.name or ""
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    group_id = slugify(name)
    with store_failure("Failed to create group", group_id=group_id):
        doc = store.load()
        if find_group(doc, group_id) is not None:
            raise HTTPException(status_code=400, detail="Group already exists")
        group = {"id": group_id, "name": name, "file": f"{group_id}.json"}
        doc["groups"].append(group)
        store.save(doc)
        store.chunks.create_file(group)

    logger.info("group_created", group_id=group_id, name=name)
    return group


@router.put("/{group_id}", response_model=Group, summary="グループ名を変更")
def rename_group(
    group_id: str, req: GroupNameRequest, store: AppJsonStore = Depends(get_store)
) -> dict:
    name = req.name or ""
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    with store_failure("Failed to update group", group_id=group_id):
        doc = store.load()
        group = require_group(doc, group_id)
        group["name"] = name
        store.save(doc)

    logger.info("group_renamed", group_id=group_id, name=name)
    return group


@router.delete("/{group_id}", response_model=SuccessResponse, summary="グループを削除")
def delete_group(group_id: str, store: AppJsonStore = Depends(get_store)) -> SuccessResponse:
    """Delete a group and its chunk file.

    - 既定グループのファイル `chunks.json` は削除しない（メタデータ上の削除は許可）
    - progress/confidence のエントリは削除せず残す
    """
    with store_failure("Failed to delete group", group_id=group_id):
        doc = store.load()
        group = require_group(doc, group_id)
        file_removed = store.chunks.delete_file(group)
        doc["groups"] = [g for g in doc["groups"] if g.get("id") != group_id]
        store.save(doc)

    logger.info("group_deleted", group_id=group_id, file_removed=file_removed)
    return SuccessResponse()
