from fastapi import APIRouter, Depends

from ..logging import logger
from ..models.settings import UserSettings, UserSettingsUpdate
from ..store import AppJsonStore
from .common import get_store, store_failure

router = APIRouter(tags=["settings"])


@router.get("/settings", response_model=UserSettings, summary="学習設定を取得")
def get_settings(store: AppJsonStore = Depends(get_store)) -> dict:
    with store_failure("Failed to read settings"):
        doc = store.load()
    return doc["settings"]


@router.put("/settings", response_model=UserSettings, summary="学習設定を部分更新")
def update_settings(req: UserSettingsUpdate, store: AppJsonStore = Depends(get_store)) -> dict:
    """Overwrite only the fields present in the request body."""
    changes = req.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    with store_failure("Failed to save settings"):
        doc = store.load()
        doc["settings"].update(changes)
        store.save(doc)
    logger.info("settings_updated", fields=sorted(changes))
    return doc["settings"]
