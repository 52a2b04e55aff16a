"""学習セッションの状態遷移・回答時の副作用・フォーカスフィルタを検証する。"""

import random

import pytest

from chunkradar.models.progress import ChunkStatus
from chunkradar.study_session import FocusMode, SessionPhase, StudySession


class FakeApi:
    """In-memory stand-in for `ChunkRadarClient` that records every call."""

    def __init__(self, chunks=None, progress=None, confidence=None):
        self.chunks = chunks if chunks is not None else [
            {"id": 1, "english": "one"},
            {"id": 2, "english": "two"},
            {"id": 3, "english": "three"},
        ]
        self.progress = dict(progress or {})
        self.confidence = dict(confidence or {})
        self.calls: list[tuple] = []

    def fetch_chunks(self, group_id):
        return list(self.chunks)

    def fetch_progress(self, group_id):
        return dict(self.progress)

    def fetch_confidence(self, group_id):
        return dict(self.confidence)

    def save_progress(self, group_id, chunk_id, status):
        self.calls.append(("save_progress", group_id, chunk_id, status))
        return True

    def update_confidence(self, group_id, chunk_id, is_correct):
        self.calls.append(("update_confidence", group_id, chunk_id, is_correct))
        return True

    def save_stats(self, correct, wrong):
        self.calls.append(("save_stats", correct, wrong))
        return True

    def fetch_streak(self):
        self.calls.append(("fetch_streak",))
        return {"currentStreak": 1, "todayCount": 1}


class FakeTimer:
    def __init__(self):
        self.value = 100.0

    def __call__(self):
        return self.value


def _session(api=None, timer=None):
    return StudySession(api or FakeApi(), rng=random.Random(7), timer=timer or FakeTimer())


def test_select_group_shuffles_and_restores_statuses():
    api = FakeApi(progress={"2": "wrong", "3": "bogus"})
    session = _session(api)

    session.select_group("default")

    assert session.phase is SessionPhase.in_session
    assert sorted(card.chunk_id for card in session.cards) == [1, 2, 3]
    statuses = {card.chunk_id: card.status for card in session.cards}
    assert statuses == {1: ChunkStatus.unreviewed, 2: ChunkStatus.wrong, 3: ChunkStatus.unreviewed}
    assert session.current_index == 0
    assert session.is_flipped is False


def test_empty_group_finishes_immediately():
    session = _session(FakeApi(chunks=[]))

    session.select_group("default")

    assert session.phase is SessionPhase.finished
    assert session.current_card is None


def test_correct_answer_saves_progress_confidence_and_stats():
    api = FakeApi()
    session = _session(api)
    session.select_group("default")
    first_id = session.current_card.chunk_id
    session.flip()

    session.answer("correct")

    assert api.calls == [
        ("save_progress", "default", first_id, "correct"),
        ("update_confidence", "default", first_id, True),
        ("save_stats", 1, 0),
        ("fetch_streak",),
    ]
    assert session.current_index == 1
    assert session.is_flipped is False
    assert session.streak["currentStreak"] == 1


def test_wrong_answer_counts_as_wrong_stat():
    api = FakeApi()
    session = _session(api)
    session.select_group("default")

    session.answer(ChunkStatus.wrong)

    assert ("save_stats", 0, 1) in api.calls
    assert any(call[0] == "update_confidence" and call[3] is False for call in api.calls)


def test_skip_does_not_touch_confidence_or_stats():
    api = FakeApi()
    session = _session(api)
    session.select_group("default")

    session.answer("skipped")

    assert [call[0] for call in api.calls] == ["save_progress", "fetch_streak"]
    assert session.cards[0].status is ChunkStatus.skipped


def test_answering_last_card_finishes_session():
    session = _session()
    session.select_group("default")

    for status in ("correct", "wrong", "skipped"):
        session.answer(status)

    assert session.phase is SessionPhase.finished
    assert session.summary() == {"unreviewed": 0, "correct": 1, "wrong": 1, "skipped": 1}
    with pytest.raises(RuntimeError):
        session.answer("correct")


def test_unreviewed_is_not_a_valid_answer():
    session = _session()
    session.select_group("default")

    with pytest.raises(ValueError):
        session.answer("unreviewed")


def test_restart_resets_progress_in_memory():
    session = _session()
    with pytest.raises(RuntimeError):
        session.restart()

    session.select_group("default")
    session.answer("correct")
    session.restart()

    assert session.phase is SessionPhase.in_session
    assert session.current_index == 0


def test_review_focus_selects_low_confidence_and_missed_cards():
    api = FakeApi(
        progress={"1": "correct", "3": "skipped"},
        confidence={"1": {"level": 4}, "2": {"level": 1}, "3": {"level": 5}},
    )
    session = _session(api)
    session.select_group("default")

    session.set_focus("review")

    visible = {session.cards[i].chunk_id for i in session.navigable_indices()}
    assert visible == {2, 3}


def test_wrong_and_skipped_focus():
    api = FakeApi(progress={"1": "wrong", "2": "skipped"})
    session = _session(api)
    session.select_group("default")

    session.set_focus(FocusMode.wrong)
    assert [session.cards[i].chunk_id for i in session.navigable_indices()] == [1]
    session.set_focus(FocusMode.skipped)
    assert [session.cards[i].chunk_id for i in session.navigable_indices()] == [2]
    session.set_focus(FocusMode.all)
    assert len(session.navigable_indices()) == 3


def test_next_focus_index_and_go_to():
    api = FakeApi(progress={"1": "wrong", "2": "wrong", "3": "wrong"})
    session = _session(api)
    session.select_group("default")
    session.set_focus("wrong")

    assert session.next_focus_index() == 1
    session.go_to(2)
    assert session.next_focus_index() is None
    with pytest.raises(IndexError):
        session.go_to(3)


def test_card_timer_restarts_on_advance():
    timer = FakeTimer()
    session = _session(timer=timer)
    session.select_group("default")

    timer.value = 104.5
    assert session.card_elapsed() == pytest.approx(4.5)

    session.answer("skipped")
    timer.value = 105.0
    assert session.card_elapsed() == pytest.approx(0.5)


def test_session_timer_runs_across_cards_and_resets_on_restart():
    timer = FakeTimer()
    session = _session(timer=timer)
    session.select_group("default")

    timer.value = 103.0
    session.answer("skipped")
    timer.value = 110.0

    assert session.session_elapsed() == pytest.approx(10.0)
    assert session.card_elapsed() == pytest.approx(7.0)

    session.restart()
    timer.value = 112.0
    assert session.session_elapsed() == pytest.approx(2.0)
