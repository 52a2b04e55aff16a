"""HTTP client for the Chunk Radar REST API.

フロントエンドの API 層と同じ方針で、通信失敗や非 2xx 応答は例外にせず
ログに記録したうえで中立的な既定値（空リスト/空辞書/None/False）を返す。
学習セッションは 1 件の保存失敗で止まらないことを優先する。
"""

from __future__ import annotations

from typing import Any

import httpx

from .logging import logger

DEFAULT_BASE_URL = "http://localhost:3001"

DEFAULT_USER_SETTINGS: dict[str, Any] = {"dailyGoal": 20, "ttsSpeed": 0.85, "ttsVoice": "en-US"}
DEFAULT_STREAK: dict[str, Any] = {
    "currentStreak": 0,
    "longestStreak": 0,
    "todayCount": 0,
    "dailyGoal": 20,
    "goalReached": False,
}


class ChunkRadarClient:
    """Thin wrapper around `httpx.Client`; pass ``http`` to reuse a client (e.g. TestClient)."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ChunkRadarClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, action: str, method: str, path: str, **kwargs: Any) -> httpx.Response | None:
        try:
            resp = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("api_request_failed", action=action, path=path, error=repr(exc))
            return None
        if resp.is_error:
            logger.warning("api_request_rejected", action=action, path=path, status_code=resp.status_code)
            return None
        return resp

    def _json(self, action: str, method: str, path: str, default: Any, **kwargs: Any) -> Any:
        resp = self._request(action, method, path, **kwargs)
        if resp is None:
            return default
        try:
            return resp.json()
        except ValueError:
            logger.warning("api_response_not_json", action=action, path=path)
            return default

    # --- groups ---
    def fetch_groups(self) -> list[dict[str, Any]]:
        return self._json("fetch_groups", "GET", "/api/groups", [])

    def create_group(self, name: str) -> dict[str, Any] | None:
        return self._json("create_group", "POST", "/api/groups", None, json={"name": name})

    def rename_group(self, group_id: str, name: str) -> dict[str, Any] | None:
        return self._json("rename_group", "PUT", f"/api/groups/{group_id}", None, json={"name": name})

    def delete_group(self, group_id: str) -> bool:
        return self._request("delete_group", "DELETE", f"/api/groups/{group_id}") is not None

    # --- chunks ---
    def fetch_chunks(self, group_id: str) -> list[dict[str, Any]]:
        if not group_id:
            return []
        data = self._json("fetch_chunks", "GET", f"/api/chunks/{group_id}", [])
        return data if isinstance(data, list) else []

    def create_chunk(self, group_id: str, chunk: dict[str, Any]) -> dict[str, Any] | None:
        return self._json(
            "create_chunk", "POST", "/api/chunks", None, json={"groupId": group_id, "chunk": chunk}
        )

    def update_chunk(self, group_id: str, chunk_id: int, chunk: dict[str, Any]) -> dict[str, Any] | None:
        return self._json(
            "update_chunk", "PUT", f"/api/chunks/{group_id}/{chunk_id}", None, json={"chunk": chunk}
        )

    def delete_chunk(self, group_id: str, chunk_id: int) -> bool:
        return self._request("delete_chunk", "DELETE", f"/api/chunks/{group_id}/{chunk_id}") is not None

    # --- progress / confidence ---
    def fetch_progress(self, group_id: str) -> dict[str, str]:
        return self._json("fetch_progress", "GET", f"/api/progress/{group_id}", {})

    def save_progress(self, group_id: str, chunk_id: int, status: str) -> bool:
        payload = {"groupId": group_id, "chunkId": chunk_id, "status": status}
        return self._request("save_progress", "POST", "/api/progress", json=payload) is not None

    def reset_progress(self, group_id: str) -> bool:
        return self._request("reset_progress", "DELETE", f"/api/progress/{group_id}") is not None

    def fetch_confidence(self, group_id: str) -> dict[str, dict[str, Any]]:
        return self._json("fetch_confidence", "GET", f"/api/confidence/{group_id}", {})

    def update_confidence(self, group_id: str, chunk_id: int, is_correct: bool) -> bool:
        payload = {"groupId": group_id, "chunkId": chunk_id, "isCorrect": is_correct}
        return self._request("update_confidence", "POST", "/api/confidence", json=payload) is not None

    # --- stats / streak / settings ---
    def fetch_stats(self) -> list[dict[str, Any]]:
        return self._json("fetch_stats", "GET", "/api/stats", [])

    def save_stats(self, correct: int, wrong: int) -> bool:
        payload = {"correct": correct, "wrong": wrong}
        return self._request("save_stats", "POST", "/api/stats", json=payload) is not None

    def fetch_streak(self) -> dict[str, Any]:
        return self._json("fetch_streak", "GET", "/api/streak", dict(DEFAULT_STREAK))

    def fetch_settings(self) -> dict[str, Any]:
        return self._json("fetch_settings", "GET", "/api/settings", dict(DEFAULT_USER_SETTINGS))

    def save_settings(self, **changes: Any) -> bool:
        return self._request("save_settings", "PUT", "/api/settings", json=changes) is not None

    # --- stories ---
    def fetch_stories(self) -> list[dict[str, Any]]:
        return self._json("fetch_stories", "GET", "/api/stories", [])

    def create_story(self, story: dict[str, Any]) -> dict[str, Any] | None:
        return self._json("create_story", "POST", "/api/stories", None, json=story)

    def update_story(self, story_id: int, story: dict[str, Any]) -> dict[str, Any] | None:
        return self._json("update_story", "PUT", f"/api/stories/{story_id}", None, json=story)

    def delete_story(self, story_id: int) -> bool:
        return self._request("delete_story", "DELETE", f"/api/stories/{story_id}") is not None
