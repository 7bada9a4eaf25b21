"""
In-process request counters.

Exposed as a snapshot on /v1/metrics for an external scraper; nothing here
aggregates across workers.
"""

import threading
from collections import Counter
from typing import Dict, Union


class RequestMetrics:
    """Thread-safe named counters plus per-status response counts"""

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: Counter = Counter()
        self._responses_by_status: Counter = Counter()

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[name] += amount

    def record_response(self, status_code: int, duration_us: int) -> None:
        with self._lock:
            self._counters["total_responses_sent"] += 1
            self._counters["total_processing_time_us"] += duration_us
            self._responses_by_status[str(status_code)] += 1

    def get(self, name: str) -> int:
        with self._lock:
            return self._counters[name]

    def snapshot(self) -> Dict[str, Union[int, Dict[str, int]]]:
        with self._lock:
            data: Dict[str, Union[int, Dict[str, int]]] = dict(self._counters)
            data["responses_by_status"] = dict(self._responses_by_status)
            return data
