from __future__ import annotations

import threading
from collections import defaultdict, deque
from dataclasses import dataclass


@dataclass
class RouteStats:
    latencies_ms: deque[float]
    errors: int
    total: int


class MetricsRegistry:
    """In-memory request metrics keyed by route template.

    - Per-route rolling latency window for p95 calculation
    - Error counter (handler exceptions and 5xx responses)
    """

    def __init__(self, window_size: int = 200) -> None:
        self._window_size = window_size
        self._lock = threading.Lock()
        self._per_route: dict[str, RouteStats] = defaultdict(self._new_stats)

    def _new_stats(self) -> RouteStats:
        return RouteStats(latencies_ms=deque(maxlen=self._window_size), errors=0, total=0)

    def record(self, route: str, latency_ms: float, *, is_error: bool = False) -> None:
        with self._lock:
            stats = self._per_route[route]
            stats.latencies_ms.append(latency_ms)
            stats.total += 1
            if is_error:
                stats.errors += 1

    def snapshot(self) -> dict[str, dict[str, float | int]]:
        with self._lock:
            result: dict[str, dict[str, float | int]] = {}
            for route, stats in self._per_route.items():
                result[route] = {
                    "p95_ms": round(calculate_p95(list(stats.latencies_ms)), 2),
                    "count": stats.total,
                    "errors": stats.errors,
                }
            return result

    def reset(self) -> None:
        with self._lock:
            self._per_route.clear()


def calculate_p95(values: list[float]) -> float:
    if not values:
        return 0.0
    sorted_vals = sorted(values)
    k = int(0.95 * (len(sorted_vals) - 1))
    return sorted_vals[k]


registry = MetricsRegistry()
