"""Daily answer statistics and streak endpoints."""

from fastapi import APIRouter, Depends

from .. import clock
from ..config import settings
from ..models.common import SuccessResponse
from ..models.progress import DayStat, StatsRecordRequest, StreakInfo
from ..store import AppJsonStore
from ..streak import calculate_streak, record_answers
from .common import get_store, store_failure

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=list[DayStat], summary="日次統計（直近分）")
def get_stats(store: AppJsonStore = Depends(get_store)) -> list[dict]:
    with store_failure("Failed to read stats"):
        doc = store.load()
    return doc["stats"]


@router.post("/stats", response_model=SuccessResponse, summary="回答数を当日の統計に加算")
def post_stats(req: StatsRecordRequest, store: AppJsonStore = Depends(get_store)) -> SuccessResponse:
    with store_failure("Failed to save stats"):
        doc = store.load()
        record_answers(
            doc,
            req.correct,
            req.wrong,
            clock.today(),
            window=settings.stats_window_days,
        )
        store.save(doc)
    return SuccessResponse()


@router.get("/streak", response_model=StreakInfo, summary="連続学習日数と本日の達成状況")
def get_streak(store: AppJsonStore = Depends(get_store)) -> dict:
    """Recompute the streak from the stats history on every call.

    現在のストリークが最長記録を超えた場合のみ longestStreak を保存する。
    """
    with store_failure("Failed to read streak"):
        doc = store.load()
        longest_before = doc["longestStreak"]
        info = calculate_streak(doc, clock.today())
        if doc["longestStreak"] != longest_before:
            store.save(doc)
    return info
