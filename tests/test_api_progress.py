"""回答状態（/api/progress）と確信度（/api/confidence）の API を検証する。"""


def _answer(client, chunk_id, is_correct, group_id="default"):
    return client.post(
        "/api/confidence",
        json={"groupId": group_id, "chunkId": chunk_id, "isCorrect": is_correct},
    )


def test_progress_round_trip_per_group(client):
    client.post("/api/progress", json={"groupId": "default", "chunkId": 7, "status": "correct"})
    client.post("/api/progress", json={"groupId": "default", "chunkId": 8, "status": "skipped"})

    assert client.get("/api/progress/default").json() == {"7": "correct", "8": "skipped"}
    assert client.get("/api/progress").json() == {"default": {"7": "correct", "8": "skipped"}}


def test_progress_of_unknown_group_is_empty(client):
    assert client.get("/api/progress/elsewhere").json() == {}


def test_progress_overwrites_previous_status(client):
    client.post("/api/progress", json={"groupId": "default", "chunkId": 7, "status": "wrong"})
    client.post("/api/progress", json={"groupId": "default", "chunkId": 7, "status": "correct"})

    assert client.get("/api/progress/default").json() == {"7": "correct"}


def test_progress_requires_all_fields(client):
    resp = client.post("/api/progress", json={"groupId": "default", "chunkId": 7})

    assert resp.status_code == 400
    assert resp.json() == {"detail": "groupId, chunkId and status are required"}


def test_reset_progress_keeps_confidence(client):
    client.post("/api/progress", json={"groupId": "default", "chunkId": 7, "status": "correct"})
    _answer(client, 7, True)

    resp = client.delete("/api/progress/default")

    assert resp.json() == {"success": True}
    assert client.get("/api/progress/default").json() == {}
    assert client.get("/api/confidence/default").json()["7"]["level"] == 1


def test_first_correct_answer_schedules_two_days_out(client, today):
    resp = _answer(client, 7, True)

    assert resp.status_code == 200
    assert resp.json() == {"level": 1, "nextReview": "2024-03-17", "lastReviewed": "2024-03-15"}


def test_five_correct_answers_reach_max_level(client):
    offsets = []
    for _ in range(5):
        offsets.append(_answer(client, 7, True).json()["nextReview"])

    record = client.get("/api/confidence/default").json()["7"]
    assert record["level"] == 5
    assert record["nextReview"] == "2024-04-14"
    assert offsets == ["2024-03-17", "2024-03-19", "2024-03-22", "2024-03-29", "2024-04-14"]

    # 上限で頭打ち
    assert _answer(client, 7, True).json()["level"] == 5


def test_wrong_answer_drops_two_levels_and_reviews_tomorrow(client):
    for _ in range(5):
        _answer(client, 7, True)

    resp = _answer(client, 7, False)

    assert resp.json() == {"level": 3, "nextReview": "2024-03-16", "lastReviewed": "2024-03-15"}


def test_wrong_answer_never_goes_below_zero(client):
    assert _answer(client, 9, False).json()["level"] == 0


def test_confidence_is_keyed_by_group(client):
    _answer(client, 7, True, group_id="default")
    _answer(client, 7, False, group_id="verbs")

    everything = client.get("/api/confidence").json()
    assert everything["default"]["7"]["level"] == 1
    assert everything["verbs"]["7"]["level"] == 0
    assert client.get("/api/confidence/unknown").json() == {}


def test_confidence_requires_is_correct(client):
    resp = client.post("/api/confidence", json={"groupId": "default", "chunkId": 7})

    assert resp.status_code == 400
