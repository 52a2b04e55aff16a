"""既定グループとストーリーにデモデータを投入するユーティリティ。

初回起動直後の空の環境でも UI の動作確認ができるよう、少数のチャンクと
ストーリーを 1 件だけ入れる。既存データがある場合は `force=True` でない限り何もしない。
"""

from __future__ import annotations

from typing import Any

from . import clock
from .id_factory import id_factory
from .logging import logger
from .store import DEFAULT_GROUP_ID, AppJsonStore, find_group
from .store.stories import count_words

DEMO_CHUNKS: tuple[dict[str, Any], ...] = (
    {
        "english": "make up your mind",
        "turkish": "karar vermek",
        "examples": ["You need to make up your mind before Friday."],
        "exampleTranslations": ["Cumadan önce karar vermen gerekiyor."],
    },
    {
        "english": "as far as I know",
        "turkish": "bildiğim kadarıyla",
        "examples": ["As far as I know, the shop opens at nine."],
        "exampleTranslations": ["Bildiğim kadarıyla dükkan dokuzda açılıyor."],
    },
    {
        "english": "run out of",
        "turkish": "tükenmek, bitmek",
        "examples": ["We ran out of milk this morning."],
        "exampleTranslations": ["Bu sabah sütümüz bitti."],
    },
    {
        "english": "keep in touch",
        "turkish": "iletişimi sürdürmek",
        "examples": ["Let's keep in touch after the course ends."],
        "exampleTranslations": ["Kurs bittikten sonra iletişimde kalalım."],
    },
)

DEMO_STORY: dict[str, Any] = {
    "title": "A Rainy Morning",
    "titleTurkish": "Yağmurlu Bir Sabah",
    "content": (
        "Ali woke up late and ran out of coffee. As far as he knew, the café "
        "downstairs opened early, so he made up his mind to go there."
    ),
    "contentTurkish": (
        "Ali geç uyandı ve kahvesi bitti. Bildiği kadarıyla alt kattaki kafe erken "
        "açılıyordu, bu yüzden oraya gitmeye karar verdi."
    ),
    "difficulty": "beginner",
    "tags": ["daily-life"],
}


def seed_demo_data(store: AppJsonStore, *, force: bool = False) -> tuple[int, int]:
    """Insert demo chunks into the default group and one demo story.

    Returns ``(chunks_added, stories_added)``.
    """

    doc = store.load()
    if store.ensure_default_group(doc):
        store.save(doc)
    group = find_group(doc, DEFAULT_GROUP_ID)
    chunks_added = 0
    if group is not None:
        chunks = store.chunks.read_chunks(group)
        if force or not chunks:
            for demo in DEMO_CHUNKS:
                record = dict(demo)
                record["id"] = id_factory.next_id(c.get("id") for c in chunks)
                chunks.append(record)
                chunks_added += 1
            store.chunks.write_chunks(group, chunks)

    stories_added = 0
    stories = store.stories.read_stories()
    if force or not stories:
        now_iso = clock.now().isoformat()
        story = dict(DEMO_STORY)
        story["id"] = id_factory.next_id(s.get("id") for s in stories)
        story["wordCount"] = count_words(story["content"])
        story["createdAt"] = now_iso
        story["updatedAt"] = now_iso
        stories.append(story)
        store.stories.write_stories(stories)
        stories_added = 1

    logger.info("demo_seeded", chunks=chunks_added, stories=stories_added, data_dir=str(store.data_dir))
    return chunks_added, stories_added
