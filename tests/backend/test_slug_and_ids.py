from datetime import UTC, datetime

import pytest

from chunkradar import clock
from chunkradar.id_factory import IdFactory
from chunkradar.slug import slugify

FROZEN = datetime(2024, 3, 15, 9, 30, tzinfo=UTC)
FROZEN_MS = int(FROZEN.timestamp() * 1000)


@pytest.fixture(autouse=True)
def _freeze_clock(monkeypatch):
    monkeypatch.setattr(clock, "now", lambda: FROZEN)


@pytest.mark.parametrize(
    ("name", "slug"),
    [
        ("Phrasal Verbs", "phrasal-verbs"),
        ("  Hello   World  ", "hello-world"),
        ("a -- b", "a-b"),
        ("Café", "caf"),
        ("snake_case ok", "snake_case-ok"),
    ],
)
def test_slugify(name, slug):
    assert slugify(name) == slug


def test_slugify_falls_back_to_timestamp():
    assert slugify("?!*") == f"group-{FROZEN_MS}"


def test_id_factory_is_strictly_increasing_within_one_millisecond():
    ids = IdFactory()

    assert ids.next_id() == FROZEN_MS
    assert ids.next_id() == FROZEN_MS + 1


def test_id_factory_skips_past_existing_ids():
    ids = IdFactory()

    assert ids.next_id([FROZEN_MS + 10, "not-a-number", None]) == FROZEN_MS + 11
