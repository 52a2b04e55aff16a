"""Pytest configuration shared by API and unit tests.

`apps/backend` を import パスに加え、データディレクトリを一時ディレクトリへ
向けてから `chunkradar` を読み込む（設定クラスは import 時点で環境変数を読むため）。
"""

import os
import sys
import tempfile
from datetime import UTC, date, datetime
from pathlib import Path

import pytest

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "apps" / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

os.environ.setdefault("CHUNK_RADAR_DATA_DIR", tempfile.mkdtemp(prefix="chunkradar-test-"))

from fastapi.testclient import TestClient  # noqa: E402

from chunkradar import clock  # noqa: E402
from chunkradar.main import create_app  # noqa: E402
from chunkradar.metrics import registry  # noqa: E402
from chunkradar.store import AppJsonStore  # noqa: E402

FIXED_NOW = datetime(2024, 3, 15, 9, 30, tzinfo=UTC)


@pytest.fixture()
def store(tmp_path: Path) -> AppJsonStore:
    return AppJsonStore(tmp_path / "data")


@pytest.fixture()
def today(monkeypatch: pytest.MonkeyPatch) -> date:
    """Freeze the application clock; returns the frozen calendar date."""

    monkeypatch.setattr(clock, "now", lambda: FIXED_NOW)
    return FIXED_NOW.date()


@pytest.fixture()
def client(store: AppJsonStore, today: date) -> TestClient:
    registry.reset()
    return TestClient(create_app(store=store))
