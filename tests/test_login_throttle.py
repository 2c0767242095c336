"""Tests for failed-login throttling."""
from __future__ import annotations

from src.services.login_throttle import LoginThrottle, throttle_key


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _throttle(clock: FakeClock) -> LoginThrottle:
    return LoginThrottle(max_attempts=5, window_seconds=900, clock=clock)


def test_not_blocked_below_limit():
    throttle = _throttle(FakeClock())
    for i in range(4):
        assert throttle.record_failed_attempt("k") == i + 1
    assert throttle.get_state("k").blocked is False


def test_blocked_at_limit_with_remaining_time():
    clock = FakeClock()
    throttle = _throttle(clock)
    for _ in range(5):
        throttle.record_failed_attempt("k")
    clock.now += 60
    state = throttle.get_state("k")
    assert state.blocked is True
    assert state.remaining_ms == 840_000


def test_window_expiry_restarts_count():
    clock = FakeClock()
    throttle = _throttle(clock)
    for _ in range(5):
        throttle.record_failed_attempt("k")
    clock.now += 901
    assert throttle.get_state("k").blocked is False
    assert throttle.record_failed_attempt("k") == 1


def test_clear_unblocks():
    throttle = _throttle(FakeClock())
    for _ in range(5):
        throttle.record_failed_attempt("k")
    throttle.clear("k")
    assert throttle.get_state("k").blocked is False


def test_keys_are_independent():
    throttle = _throttle(FakeClock())
    for _ in range(5):
        throttle.record_failed_attempt("a")
    assert throttle.get_state("b").blocked is False


def test_throttle_key_normalizes_email():
    assert throttle_key("10.0.0.1", "  Ana@Example.COM ") == "10.0.0.1:ana@example.com"


def test_expired_keys_swept_on_next_failure():
    clock = FakeClock()
    throttle = _throttle(clock)
    for i in range(10_000):
        throttle.record_failed_attempt(f"10.0.0.1:user{i}@example.com")
    clock.now += 10 * 900
    throttle.record_failed_attempt("10.0.0.2:nuevo@example.com")
    assert len(throttle._records) == 1


def test_sweep_keeps_live_keys():
    clock = FakeClock()
    throttle = _throttle(clock)
    throttle.record_failed_attempt("old")
    clock.now += 600
    throttle.record_failed_attempt("recent")
    clock.now += 400
    throttle.record_failed_attempt("new")
    assert "old" not in throttle._records
    assert throttle._records["recent"].count == 1
