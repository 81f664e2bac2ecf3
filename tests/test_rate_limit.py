from __future__ import annotations

import threading

import pytest

from codepulse.rate_limit import Decision, FixedWindowRateLimiter


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_limiter(max_requests: int = 2, window: float = 60) -> tuple[FixedWindowRateLimiter, FakeClock]:
    clock = FakeClock()
    return FixedWindowRateLimiter(max_requests, window, clock=clock), clock


def test_admits_up_to_capacity_then_rejects():
    limiter, _ = make_limiter(max_requests=3)

    decisions = [limiter.admit("10.0.0.1") for _ in range(4)]

    assert decisions == [Decision.ADMIT, Decision.ADMIT, Decision.ADMIT, Decision.REJECT]


def test_rejected_requests_do_not_consume_quota():
    limiter, clock = make_limiter(max_requests=1)
    limiter.admit("a")
    for _ in range(5):
        assert limiter.admit("a") is Decision.REJECT

    clock.advance(61)

    assert limiter.admit("a") is Decision.ADMIT
    assert limiter.remaining("a") == 0


def test_window_resets_after_elapsed_duration():
    limiter, clock = make_limiter(max_requests=2, window=60)
    assert limiter.admit("A") is Decision.ADMIT
    assert limiter.admit("A") is Decision.ADMIT
    assert limiter.admit("A") is Decision.REJECT

    clock.advance(60.5)

    assert limiter.admit("A") is Decision.ADMIT


def test_window_boundary_is_exclusive():
    limiter, clock = make_limiter(max_requests=1, window=60)
    limiter.admit("A")

    clock.advance(60)

    assert limiter.admit("A") is Decision.REJECT


def test_explicit_timestamp_overrides_clock():
    limiter, clock = make_limiter(max_requests=1, window=60)
    limiter.admit("A", now=clock.now)

    assert limiter.admit("A", now=clock.now + 30) is Decision.REJECT
    assert limiter.admit("A", now=clock.now + 61) is Decision.ADMIT


def test_clients_are_counted_separately():
    limiter, _ = make_limiter(max_requests=2)
    limiter.admit("A")
    limiter.admit("A")

    assert limiter.admit("A") is Decision.REJECT
    assert limiter.admit("B") is Decision.ADMIT
    assert limiter.admit("B") is Decision.ADMIT


def test_client_keys_are_not_normalized():
    limiter, _ = make_limiter(max_requests=1)

    assert limiter.admit("10.0.0.1") is Decision.ADMIT
    assert limiter.admit("10.0.0.1:5000") is Decision.ADMIT


def test_rollover_by_one_client_resets_every_client():
    limiter, clock = make_limiter(max_requests=2, window=60)
    for key in ("A", "B", "B"):
        limiter.admit(key)
    assert limiter.admit("B") is Decision.REJECT

    clock.advance(61)
    assert limiter.admit("A") is Decision.ADMIT

    assert limiter.admit("B") is Decision.ADMIT
    assert limiter.remaining("B") == 1


def test_burst_across_window_boundary_is_allowed():
    limiter, clock = make_limiter(max_requests=2, window=60)
    clock.advance(59.9)
    assert limiter.admit("A") is Decision.ADMIT
    assert limiter.admit("A") is Decision.ADMIT

    clock.advance(0.2)

    assert limiter.admit("A") is Decision.ADMIT
    assert limiter.admit("A") is Decision.ADMIT
    assert limiter.admit("A") is Decision.REJECT


def test_concurrent_admits_never_exceed_limit():
    limiter = FixedWindowRateLimiter(max_requests=5, window_seconds=60)
    barrier = threading.Barrier(50)
    results: list[Decision] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        decision = limiter.admit("shared")
        with results_lock:
            results.append(decision)

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(Decision.ADMIT) == 5
    assert results.count(Decision.REJECT) == 45


def test_remaining_and_reset():
    limiter, clock = make_limiter(max_requests=2)
    assert limiter.remaining("A") == 2
    limiter.admit("A")
    assert limiter.remaining("A") == 1

    limiter.reset()

    assert limiter.remaining("A") == 2
    clock.advance(120)
    assert limiter.remaining("A") == 2


def test_allow_reports_admission_as_bool():
    limiter, _ = make_limiter(max_requests=1)

    assert limiter.allow("A") is True
    assert limiter.allow("A") is False


@pytest.mark.parametrize("max_requests, window", [(0, 60), (2, 0), (2, -1)])
def test_invalid_configuration_is_rejected(max_requests, window):
    with pytest.raises(ValueError):
        FixedWindowRateLimiter(max_requests, window)
