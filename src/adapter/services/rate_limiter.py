"""
In-memory token-bucket rate limiter keyed by client identity.

Notes:
- Per-process only: every worker keeps its own client table.
- One lock guards the whole table; admit and the idle sweep both take it,
  so a client is never evicted mid-decision nor inserted twice.
"""

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from src.app.services.rate_limiter import IRateLimiter

logger = logging.getLogger(__name__)


@dataclass
class _TokenBucket:
    """Refills at `rate` tokens per second up to `capacity`"""

    rate: float
    capacity: float
    tokens: float
    last_refill: float

    def allow(self, now: float) -> bool:
        elapsed = max(0.0, now - self.last_refill)
        self.tokens = min(self.capacity, self.tokens + elapsed * self.rate)
        self.last_refill = now

        if self.tokens >= 1.0:
            self.tokens -= 1.0
            return True
        return False


@dataclass
class ClientState:
    bucket: _TokenBucket
    last_seen: float


class ClientRateLimiter(IRateLimiter):
    """
    Token bucket per client identity with idle eviction.

    Business Rules:
    - A new client starts with a full bucket (burst tokens)
    - Each request consumes one token; an empty bucket rejects the request
    - Clients idle longer than idle_timeout are dropped by the sweeper
    - When disabled, every request is admitted and no state is kept
    """

    def __init__(
        self,
        *,
        rps: float,
        burst: int,
        enabled: bool = True,
        idle_timeout: float = 180.0,
        sweep_interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rps <= 0:
            raise ValueError("rps must be > 0")
        if burst < 1:
            raise ValueError("burst must be >= 1")
        if idle_timeout <= 0:
            raise ValueError("idle_timeout must be > 0")
        if sweep_interval <= 0:
            raise ValueError("sweep_interval must be > 0")

        self.rps = rps
        self.burst = burst
        self.enabled = enabled
        self.idle_timeout = idle_timeout
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._lock = threading.Lock()
        self._clients: Dict[str, ClientState] = {}
        self._sweeper: Optional[asyncio.Task] = None

    def admit(self, client_identity: str) -> bool:
        if not self.enabled:
            return True
        if not client_identity:
            raise ValueError("client_identity must be a non-empty string")

        with self._lock:
            now = self._clock()
            client = self._clients.get(client_identity)
            if client is None:
                client = ClientState(
                    bucket=_TokenBucket(
                        rate=self.rps,
                        capacity=float(self.burst),
                        tokens=float(self.burst),
                        last_refill=now,
                    ),
                    last_seen=now,
                )
                self._clients[client_identity] = client
            client.last_seen = now
            return client.bucket.allow(now)

    def evict_idle(self) -> int:
        """Drop clients idle longer than idle_timeout; returns the eviction count"""
        with self._lock:
            now = self._clock()
            stale = [
                identity
                for identity, client in self._clients.items()
                if now - client.last_seen > self.idle_timeout
            ]
            for identity in stale:
                del self._clients[identity]

        if stale:
            logger.debug(f"Evicted {len(stale)} idle rate-limit client(s)")
        return len(stale)

    @property
    def client_count(self) -> int:
        with self._lock:
            return len(self._clients)

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            self.evict_idle()

    def start_sweeper(self) -> asyncio.Task:
        """Start the background sweep on the running event loop"""
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.get_running_loop().create_task(self._sweep_forever())
            logger.info(
                f"Rate limiter sweeper started (interval={self.sweep_interval}s, "
                f"idle_timeout={self.idle_timeout}s)"
            )
        return self._sweeper

    async def stop_sweeper(self) -> None:
        """Cancel the sweep; only the sleep between sweeps can be interrupted"""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
        logger.info("Rate limiter sweeper stopped")
