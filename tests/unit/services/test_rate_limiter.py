import asyncio

import pytest

from src.adapter.services.rate_limiter import ClientRateLimiter


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return ClientRateLimiter(rps=2, burst=4, clock=clock)


def test_burst_then_reject(limiter):
    """burst + 1 instantaneous requests: exactly the last one is rejected"""
    decisions = [limiter.admit("10.0.0.1") for _ in range(5)]

    assert decisions == [True, True, True, True, False]


def test_refill_admits_after_waiting(limiter, clock):
    for _ in range(4):
        limiter.admit("10.0.0.1")
    assert limiter.admit("10.0.0.1") is False

    clock.advance(0.5)  # one token at 2 rps

    assert limiter.admit("10.0.0.1") is True
    assert limiter.admit("10.0.0.1") is False


def test_requests_below_rate_always_admitted(limiter, clock):
    for _ in range(50):
        assert limiter.admit("10.0.0.1") is True
        clock.advance(0.6)


def test_refill_never_exceeds_burst(limiter, clock):
    limiter.admit("10.0.0.1")
    clock.advance(3600)

    decisions = [limiter.admit("10.0.0.1") for _ in range(5)]

    assert decisions.count(True) == 4


def test_clients_are_isolated(limiter):
    for _ in range(4):
        limiter.admit("10.0.0.1")
    assert limiter.admit("10.0.0.1") is False

    assert limiter.admit("10.0.0.2") is True


def test_disabled_admits_everything_and_keeps_no_state(clock):
    limiter = ClientRateLimiter(rps=1, burst=1, enabled=False, clock=clock)

    assert all(limiter.admit("10.0.0.1") for _ in range(100))
    assert limiter.client_count == 0


def test_empty_identity_rejected(limiter):
    with pytest.raises(ValueError):
        limiter.admit("")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"rps": 0, "burst": 4},
        {"rps": -1, "burst": 4},
        {"rps": 2, "burst": 0},
        {"rps": 2, "burst": 4, "idle_timeout": 0},
        {"rps": 2, "burst": 4, "sweep_interval": 0},
    ],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        ClientRateLimiter(**kwargs)


def test_evicts_only_idle_clients(limiter, clock):
    limiter.admit("idle")
    clock.advance(120)
    limiter.admit("active")
    clock.advance(61)  # idle: 181s, active: 61s

    evicted = limiter.evict_idle()

    assert evicted == 1
    assert limiter.client_count == 1


def test_client_at_exact_idle_timeout_is_kept(limiter, clock):
    limiter.admit("10.0.0.1")
    clock.advance(180)

    assert limiter.evict_idle() == 0
    assert limiter.client_count == 1


def test_rejected_request_refreshes_last_seen(limiter, clock):
    for _ in range(5):
        limiter.admit("10.0.0.1")
    clock.advance(170)
    limiter.admit("10.0.0.1")
    clock.advance(170)

    assert limiter.evict_idle() == 0


def test_evicted_client_returns_with_full_bucket(limiter, clock):
    for _ in range(4):
        limiter.admit("10.0.0.1")
    clock.advance(181)
    limiter.evict_idle()

    decisions = [limiter.admit("10.0.0.1") for _ in range(5)]

    assert decisions == [True, True, True, True, False]


@pytest.mark.asyncio
async def test_sweeper_evicts_on_interval(clock):
    limiter = ClientRateLimiter(
        rps=2, burst=4, idle_timeout=1, sweep_interval=0.01, clock=clock
    )
    limiter.admit("10.0.0.1")
    clock.advance(5)

    limiter.start_sweeper()
    await asyncio.sleep(0.05)
    await limiter.stop_sweeper()

    assert limiter.client_count == 0


@pytest.mark.asyncio
async def test_start_sweeper_is_idempotent(limiter):
    first = limiter.start_sweeper()
    second = limiter.start_sweeper()

    assert first is second

    await limiter.stop_sweeper()
    assert first.cancelled()


@pytest.mark.asyncio
async def test_stop_sweeper_without_start(limiter):
    await limiter.stop_sweeper()
