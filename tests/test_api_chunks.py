"""チャンク API（/api/chunks）の CRUD を検証する。"""

import json


def _create(client, **fields):
    return client.post("/api/chunks", json={"groupId": "default", "chunk": fields})


def test_list_chunks_of_unknown_group_returns_404(client):
    resp = client.get("/api/chunks/unknown")

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Group not found"}


def test_create_chunk_assigns_integer_id_and_defaults(client, store):
    resp = _create(client, english="break the ice")

    assert resp.status_code == 200
    body = resp.json()
    assert isinstance(body["id"], int)
    assert body["english"] == "break the ice"
    assert body["turkish"] == ""
    assert body["examples"] == []

    saved = json.loads((store.data_dir / "chunks.json").read_text(encoding="utf-8"))
    assert saved[0]["id"] == body["id"]
    assert client.get("/api/chunks/default").json()[0]["english"] == "break the ice"


def test_chunks_created_back_to_back_get_distinct_ids(client):
    first = _create(client, english="one").json()["id"]
    second = _create(client, english="two").json()["id"]

    assert second > first


def test_create_chunk_requires_group_and_chunk(client):
    missing_group = client.post("/api/chunks", json={"chunk": {"english": "x"}})
    missing_chunk = client.post("/api/chunks", json={"groupId": "default"})

    assert missing_group.status_code == 400
    assert missing_chunk.status_code == 400


def test_create_chunk_in_unknown_group_returns_404(client):
    resp = client.post("/api/chunks", json={"groupId": "ghost", "chunk": {"english": "x"}})

    assert resp.status_code == 404


def test_update_chunk_merges_fields_and_keeps_id(client):
    created = _create(
        client,
        english="call it a day",
        turkish="paydos etmek",
        examples=["Let's call it a day."],
    ).json()

    resp = client.put(
        f"/api/chunks/default/{created['id']}",
        json={"chunk": {"turkish": "bugünlük bu kadar", "id": 1}},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == created["id"]
    assert body["english"] == "call it a day"
    assert body["turkish"] == "bugünlük bu kadar"
    assert body["examples"] == ["Let's call it a day."]


def test_update_unknown_chunk_returns_404(client):
    client.get("/api/groups")

    resp = client.put("/api/chunks/default/123", json={"chunk": {"english": "x"}})

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Chunk not found"}


def test_delete_chunk_removes_only_that_chunk(client):
    keep = _create(client, english="keep").json()
    drop = _create(client, english="drop").json()

    resp = client.delete(f"/api/chunks/default/{drop['id']}")

    assert resp.json() == {"success": True}
    assert [c["id"] for c in client.get("/api/chunks/default").json()] == [keep["id"]]


def test_delete_missing_chunk_still_succeeds(client):
    client.get("/api/groups")

    assert client.delete("/api/chunks/default/42").json() == {"success": True}


def test_null_fields_on_create_fall_back_to_defaults(client):
    resp = client.post(
        "/api/chunks",
        json={"groupId": "default", "chunk": {"english": None, "turkish": "x", "examples": None}},
    )

    assert resp.status_code == 200
    assert resp.json()["english"] == ""
    assert resp.json()["examples"] == []
    listed = client.get("/api/chunks/default")
    assert listed.status_code == 200
    assert listed.json()[0]["turkish"] == "x"


def test_null_fields_on_update_keep_stored_values(client):
    created = _create(client, english="on the way", examples=["I'm on the way."]).json()

    resp = client.put(
        f"/api/chunks/default/{created['id']}",
        json={"chunk": {"examples": None, "english": None, "turkish": "yolda"}},
    )

    assert resp.status_code == 200
    assert resp.json()["english"] == "on the way"
    assert resp.json()["examples"] == ["I'm on the way."]
    assert resp.json()["turkish"] == "yolda"
    assert client.get("/api/chunks/default").status_code == 200
