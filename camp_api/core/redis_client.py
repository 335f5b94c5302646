"""Shared Redis connection for cross-instance rate limit counters.

Redis is optional: with REDIS_URL unset (or "memory://") every helper here
reports it as disabled and callers keep their state in-process.
"""

from __future__ import annotations

import logging

import redis

from camp_api.core.config import settings

logger = logging.getLogger(__name__)

REDIS_DISABLED_URL = "memory://"

# Connection tuning
CONNECT_TIMEOUT_SECONDS = 2.0
SOCKET_TIMEOUT_SECONDS = 2.0
HEALTH_CHECK_SECONDS = 30

_client: redis.Redis | None = None


def get_redis_url() -> str | None:
    """Configured Redis URL, or None when the shared store is disabled."""
    url = (settings.REDIS_URL or "").strip()
    if not url or url.lower() == REDIS_DISABLED_URL:
        return None
    return url


def get_sync_redis_client() -> redis.Redis | None:
    """Process-wide pooled client, created on first use."""
    global _client

    url = get_redis_url()
    if not url:
        return None

    if _client is None:
        pool = redis.ConnectionPool.from_url(
            url,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            socket_connect_timeout=CONNECT_TIMEOUT_SECONDS,
            socket_timeout=SOCKET_TIMEOUT_SECONDS,
            health_check_interval=HEALTH_CHECK_SECONDS,
            retry_on_timeout=True,
        )
        _client = redis.Redis(connection_pool=pool)
    return _client


def redis_status() -> str:
    """Return "disabled", "ok" or "unavailable" for the health endpoint."""
    client = get_sync_redis_client()
    if client is None:
        return "disabled"
    try:
        client.ping()
    except (redis.RedisError, OSError) as e:
        logger.warning(f"Redis ping failed: {e}")
        return "unavailable"
    return "ok"
