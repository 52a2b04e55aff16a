from chunkradar.seed_demo import DEMO_CHUNKS, seed_demo_data
from chunkradar.store import AppJsonStore


def test_seed_fills_empty_store(tmp_path):
    store = AppJsonStore(tmp_path)

    chunks_added, stories_added = seed_demo_data(store)

    assert (chunks_added, stories_added) == (len(DEMO_CHUNKS), 1)
    chunks = store.chunks.read_chunks({"file": "chunks.json"})
    assert [c["english"] for c in chunks] == [c["english"] for c in DEMO_CHUNKS]
    assert len({c["id"] for c in chunks}) == len(DEMO_CHUNKS)
    story = store.stories.read_stories()[0]
    assert story["wordCount"] == len(story["content"].split())


def test_seed_is_noop_when_data_exists_unless_forced(tmp_path):
    store = AppJsonStore(tmp_path)
    seed_demo_data(store)

    assert seed_demo_data(store) == (0, 0)
    assert seed_demo_data(store, force=True) == (len(DEMO_CHUNKS), 1)
    assert len(store.stories.read_stories()) == 2
