from __future__ import annotations

from collections import defaultdict, deque
from threading import Lock
import time
from typing import Deque

from fastapi import Request


class FailedAttemptLimiter:
    """Counts failed PIN attempts per client inside a sliding window."""

    def __init__(self) -> None:
        self._buckets: dict[str, Deque[float]] = defaultdict(deque)
        self._lock = Lock()

    def _trim(self, bucket: Deque[float], earliest: float) -> None:
        while bucket and bucket[0] < earliest:
            bucket.popleft()

    def is_blocked(self, *, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        now = time.time()
        with self._lock:
            bucket = self._buckets[key]
            self._trim(bucket, now - window_seconds)
            if len(bucket) >= limit:
                return True, max(1, int(bucket[0] + window_seconds - now))
        return False, 0

    def record_failure(self, key: str) -> None:
        with self._lock:
            self._buckets[key].append(time.time())

    def reset(self, key: str) -> None:
        with self._lock:
            self._buckets.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()


pin_limiter = FailedAttemptLimiter()


def client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def clear_rate_limiter() -> None:
    pin_limiter.clear()
