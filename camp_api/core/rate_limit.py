"""Rate limiting for the camp API.

Two layers:

- ``limiter``: slowapi limiter applying a general per-minute cap to every
  route (disabled under TESTING).
- ``RateLimiter`` implementations: per-source fixed-window counters used by
  the public application and click-tracking endpoints. They are injected
  through FastAPI dependencies, so handlers never touch module state.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Callable, Protocol

import redis
from slowapi import Limiter
from slowapi.util import get_remote_address

from camp_api.core.config import settings
from camp_api.core.redis_client import get_redis_url, get_sync_redis_client

logger = logging.getLogger(__name__)

REDIS_ERROR_TYPES: tuple[type[Exception], ...] = (redis.RedisError, OSError)

IS_TESTING = os.getenv("TESTING", "").lower() in ("1", "true", "yes")
DEFAULT_LIMITS = (
    []
    if IS_TESTING or settings.RATE_LIMIT_API <= 0
    else [f"{settings.RATE_LIMIT_API}/minute"]
)

# Fall back to in-memory storage if Redis is not configured (dev/test mode)
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=get_redis_url() or "memory://",
    default_limits=DEFAULT_LIMITS,
)


# =============================================================================
# Per-source fixed window counters
# =============================================================================


class RateLimiter(Protocol):
    """Capability to admit or reject one request from a source."""

    def check_and_consume(self, source_key: str) -> bool:
        """Return True if the request is allowed (and count it)."""
        ...

    def sweep(self) -> int:
        """Drop expired state; return how many entries were removed."""
        ...


@dataclass
class WindowEntry:
    count: int
    reset_at: float


class InMemoryRateLimiter:
    """
    Process-local fixed window counter keyed by source.

    State lives only for the process lifetime: a restart resets every
    counter. When the table grows past ``sweep_threshold`` entries, expired
    entries are dropped before a new window is opened.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        sweep_threshold: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self.sweep_threshold = sweep_threshold
        self._clock = clock
        self._entries: dict[str, WindowEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def check_and_consume(self, source_key: str) -> bool:
        with self._lock:
            now = self._clock()
            entry = self._entries.get(source_key)

            if entry is None or now > entry.reset_at:
                if len(self._entries) > self.sweep_threshold:
                    self._sweep_locked(now)
                self._entries[source_key] = WindowEntry(
                    count=1, reset_at=now + self.window_seconds
                )
                return True

            if entry.count >= self.limit:
                return False

            entry.count += 1
            return True

    def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked(self._clock())

    def _sweep_locked(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if now > entry.reset_at]
        for key in expired:
            del self._entries[key]
        return len(expired)


class RedisRateLimiter:
    """
    Fixed window counter shared across instances through Redis.

    Each source gets a key created with the window TTL and incremented per
    request; both steps run in one MULTI/EXEC so a key never exists without
    an expiry. Redis errors fail open onto an in-memory limiter.
    """

    def __init__(
        self,
        client,
        limit: int,
        window_seconds: float,
        *,
        prefix: str,
        fallback: RateLimiter | None = None,
    ):
        self.client = client
        self.limit = limit
        self.window_seconds = window_seconds
        self.prefix = prefix
        self.fallback = (
            fallback if fallback is not None else InMemoryRateLimiter(limit, window_seconds)
        )

    def _key(self, source_key: str) -> str:
        return f"ratelimit:{self.prefix}:{source_key}"

    def check_and_consume(self, source_key: str) -> bool:
        key = self._key(source_key)
        try:
            pipe = self.client.pipeline(transaction=True)
            # Opens the window; no-op while the key is still live
            pipe.set(key, 0, nx=True, px=int(self.window_seconds * 1000))
            pipe.incr(key)
            _, count = pipe.execute()
            count = int(count)
        except REDIS_ERROR_TYPES as e:
            logger.warning(f"Redis rate limit check failed for {self.prefix}, using memory: {e}")
            return self.fallback.check_and_consume(source_key)
        return count <= self.limit

    def sweep(self) -> int:
        # Keys expire on their own
        return self.fallback.sweep()


def build_rate_limiter(prefix: str, limit: int, window_seconds: float) -> RateLimiter:
    """Build a shared limiter when Redis is configured, else a local one."""
    client = get_sync_redis_client()
    if client is None:
        return InMemoryRateLimiter(
            limit,
            window_seconds,
            sweep_threshold=settings.RATE_LIMIT_SWEEP_THRESHOLD,
        )
    return RedisRateLimiter(
        client,
        limit,
        window_seconds,
        prefix=prefix,
        fallback=InMemoryRateLimiter(
            limit,
            window_seconds,
            sweep_threshold=settings.RATE_LIMIT_SWEEP_THRESHOLD,
        ),
    )


def build_application_limiter() -> RateLimiter:
    return build_rate_limiter(
        "applications",
        settings.RATE_LIMIT_APPLICATIONS,
        settings.RATE_LIMIT_APPLICATIONS_WINDOW_SECONDS,
    )


def build_click_limiter() -> RateLimiter:
    return build_rate_limiter(
        "clicks",
        settings.RATE_LIMIT_CLICKS,
        settings.RATE_LIMIT_CLICKS_WINDOW_SECONDS,
    )


async def sweep_periodically(rate_limiter: RateLimiter, interval_seconds: float) -> None:
    """Sweep expired entries every interval until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = rate_limiter.sweep()
        if removed:
            logger.debug("Swept %s expired rate limit entries", removed)
