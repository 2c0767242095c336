"""Failed-login throttling, enforced server side.

A key (client IP + email) is blocked once it accumulates LOGIN_MAX_ATTEMPTS
failures inside a fixed window that starts at the first failure. When the
window elapses the record is dropped and the next failure starts over at 1.
A successful login clears the key.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class _FailureRecord:
    count: int
    first_attempt: float


@dataclass
class ThrottleState:
    blocked: bool
    remaining_ms: int | None = None


class LoginThrottle:
    """In-memory failure counters (single instance; swap for Redis when scaling out)."""

    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._records: dict[str, _FailureRecord] = {}
        self._last_cleanup = clock()
        self._cleanup_interval = 300  # 5 minutes

    def _live_record(self, key: str) -> _FailureRecord | None:
        record = self._records.get(key)
        if record is None:
            return None
        if self._clock() - record.first_attempt > self.window_seconds:
            del self._records[key]
            return None
        return record

    def get_state(self, key: str) -> ThrottleState:
        record = self._live_record(key)
        if record is None or record.count < self.max_attempts:
            return ThrottleState(blocked=False)
        elapsed = self._clock() - record.first_attempt
        remaining = max(0.0, self.window_seconds - elapsed)
        return ThrottleState(blocked=True, remaining_ms=int(remaining * 1000))

    def record_failed_attempt(self, key: str) -> int:
        """Count a failure; returns the count inside the current window."""
        self._maybe_cleanup()
        record = self._live_record(key)
        if record is None:
            record = _FailureRecord(count=0, first_attempt=self._clock())
            self._records[key] = record
        record.count += 1
        if record.count == self.max_attempts:
            logger.warning("Login blocked for %s after %d failures", key, record.count)
        return record.count

    def _maybe_cleanup(self) -> None:
        now = self._clock()
        if now - self._last_cleanup < self._cleanup_interval:
            return
        self._last_cleanup = now
        stale = [k for k, r in self._records.items() if now - r.first_attempt > self.window_seconds]
        for k in stale:
            del self._records[k]

    def clear(self, key: str) -> None:
        self._records.pop(key, None)

    def reset(self) -> None:
        """Drop every counter — used in tests."""
        self._records.clear()


login_throttle = LoginThrottle(
    max_attempts=settings.LOGIN_MAX_ATTEMPTS,
    window_seconds=settings.LOGIN_WINDOW_SECONDS,
)


def throttle_key(client_ip: str, email: str) -> str:
    return f"{client_ip}:{email.strip().lower()}"
