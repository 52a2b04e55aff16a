"""Client-side controller for one study pass over a group's chunks.

セッションは `loading → in_session → finished` の状態を遷移する。グループ変更や
`restart()` のたびに loading から入り直し、チャンクは毎回シャッフルし直す
（シード固定はしないため再現性はない。テストでは `rng` を注入する）。
"""

from __future__ import annotations

import random
import time
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .logging import logger
from .models.progress import ChunkStatus

REVIEW_LEVEL_THRESHOLD = 3


class SessionPhase(str, Enum):
    loading = "loading"
    in_session = "in_session"
    finished = "finished"


class FocusMode(str, Enum):
    all = "all"
    wrong = "wrong"
    skipped = "skipped"
    review = "review"


class StudyApi(Protocol):
    """Subset of `ChunkRadarClient` the session depends on."""

    def fetch_chunks(self, group_id: str) -> list[dict[str, Any]]: ...

    def fetch_progress(self, group_id: str) -> dict[str, str]: ...

    def fetch_confidence(self, group_id: str) -> dict[str, dict[str, Any]]: ...

    def save_progress(self, group_id: str, chunk_id: int, status: str) -> bool: ...

    def update_confidence(self, group_id: str, chunk_id: int, is_correct: bool) -> bool: ...

    def save_stats(self, correct: int, wrong: int) -> bool: ...

    def fetch_streak(self) -> dict[str, Any]: ...


@dataclass
class CardState:
    chunk: dict[str, Any]
    status: ChunkStatus = ChunkStatus.unreviewed

    @property
    def chunk_id(self) -> int:
        return self.chunk["id"]


def _coerce_status(raw: object) -> ChunkStatus:
    try:
        return ChunkStatus(str(raw))
    except ValueError:
        return ChunkStatus.unreviewed


class StudySession:
    def __init__(
        self,
        api: StudyApi,
        *,
        rng: random.Random | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.api = api
        self._rng = rng or random.Random()
        self._timer = timer
        self.group_id: str | None = None
        self.phase = SessionPhase.loading
        self.cards: list[CardState] = []
        self.confidence: dict[str, dict[str, Any]] = {}
        self.current_index = 0
        self.is_flipped = False
        self.focus = FocusMode.all
        self.streak: dict[str, Any] = {}
        self._card_started_at = self._timer()
        self._session_started_at = self._card_started_at

    # --- lifecycle ---
    def select_group(self, group_id: str) -> None:
        """Load, shuffle and initialise a session for ``group_id``."""

        self.group_id = group_id
        self.phase = SessionPhase.loading
        chunks = list(self.api.fetch_chunks(group_id))
        self._rng.shuffle(chunks)
        persisted = self.api.fetch_progress(group_id) or {}
        self.confidence = self.api.fetch_confidence(group_id) or {}
        self.cards = [
            CardState(chunk=c, status=_coerce_status(persisted.get(str(c.get("id")), "unreviewed")))
            for c in chunks
        ]
        self.current_index = 0
        self.is_flipped = False
        self._card_started_at = self._timer()
        self._session_started_at = self._card_started_at
        self.phase = SessionPhase.in_session if self.cards else SessionPhase.finished
        logger.info("study_session_loaded", group_id=group_id, cards=len(self.cards))

    def restart(self) -> None:
        if self.group_id is None:
            raise RuntimeError("no group selected")
        self.select_group(self.group_id)

    # --- card interaction ---
    @property
    def current_card(self) -> CardState | None:
        if self.phase is not SessionPhase.in_session or not self.cards:
            return None
        return self.cards[self.current_index]

    @property
    def current_chunk(self) -> dict[str, Any] | None:
        card = self.current_card
        return card.chunk if card is not None else None

    def flip(self) -> None:
        if self.current_card is not None:
            self.is_flipped = not self.is_flipped

    def card_elapsed(self) -> float:
        return self._timer() - self._card_started_at

    def session_elapsed(self) -> float:
        """Seconds since the current group was (re)loaded; not reset between cards."""
        return self._timer() - self._session_started_at

    def answer(self, status: ChunkStatus | str) -> None:
        """Record the outcome of the current card and advance.

        回答状態は常に保存し、確信度と日次統計は correct/wrong のときだけ更新する
        （skipped は確信度に影響しない）。
        """

        card = self.current_card
        if card is None:
            raise RuntimeError(f"cannot answer while session is {self.phase.value}")
        status = ChunkStatus(status)
        if status is ChunkStatus.unreviewed:
            raise ValueError("answer status must be correct, wrong or skipped")

        card.status = status
        self.api.save_progress(self.group_id, card.chunk_id, status.value)
        if status in (ChunkStatus.correct, ChunkStatus.wrong):
            is_correct = status is ChunkStatus.correct
            self.api.update_confidence(self.group_id, card.chunk_id, is_correct)
            self.api.save_stats(1 if is_correct else 0, 0 if is_correct else 1)
        self.streak = self.api.fetch_streak()

        if self.current_index + 1 < len(self.cards):
            self.current_index += 1
            self.is_flipped = False
            self._card_started_at = self._timer()
        else:
            self.phase = SessionPhase.finished
            logger.info(
                "study_session_finished",
                group_id=self.group_id,
                elapsed_s=round(self.session_elapsed(), 1),
                **self.summary(),
            )

    # --- focus filter ---
    def set_focus(self, focus: FocusMode | str) -> None:
        self.focus = FocusMode(focus)

    def _confidence_level(self, card: CardState) -> int:
        record = self.confidence.get(str(card.chunk_id)) or {}
        try:
            return int(record.get("level", 0))
        except (TypeError, ValueError):
            return 0

    def matches_focus(self, card: CardState) -> bool:
        if self.focus is FocusMode.all:
            return True
        if self.focus is FocusMode.wrong:
            return card.status is ChunkStatus.wrong
        if self.focus is FocusMode.skipped:
            return card.status is ChunkStatus.skipped
        return (
            self._confidence_level(card) < REVIEW_LEVEL_THRESHOLD
            or card.status in (ChunkStatus.wrong, ChunkStatus.skipped)
        )

    def navigable_indices(self) -> list[int]:
        """Indices of cards visible under the focus filter, in session order."""

        return [i for i, card in enumerate(self.cards) if self.matches_focus(card)]

    def next_focus_index(self) -> int | None:
        """First navigable index after the current one, or None."""

        return next((i for i in self.navigable_indices() if i > self.current_index), None)

    def go_to(self, index: int) -> None:
        if not 0 <= index < len(self.cards):
            raise IndexError(index)
        self.current_index = index
        self.is_flipped = False
        self._card_started_at = self._timer()
        if self.phase is SessionPhase.finished:
            self.phase = SessionPhase.in_session

    def summary(self) -> dict[str, int]:
        counts = Counter(card.status.value for card in self.cards)
        return {status.value: counts.get(status.value, 0) for status in ChunkStatus}
