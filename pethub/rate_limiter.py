"""
Sliding window rate limiting, in memory with an optional Redis store.

In-memory windows are per process: they reset on restart and are not shared
between workers. Set REDIS_URL to enforce a limit across all instances.
"""

import logging
import time
import uuid
from collections import deque
from threading import Lock
from typing import Optional

import redis

from . import config

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None

# Format: {key: deque of request timestamps inside the current window}
memory_windows: dict[str, deque] = {}
cache_lock = Lock()

MEMORY_CLEANUP_INTERVAL = 60  # Drop idle keys every 60 seconds
last_cleanup_time = 0.0


def get_redis_client() -> Optional[redis.Redis]:
    """
    Get or create the Redis client. Returns None when REDIS_URL is not set,
    in which case limits are enforced per process only.
    """
    global redis_client

    if redis_client is None and config.REDIS_URL:
        logger.info("Initializing Redis connection for rate limiting...")
        try:
            redis_client = redis.from_url(
                config.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30,
            )
            redis_client.ping()
            logger.info("Redis connected successfully via URL")
        except redis.RedisError as e:
            logger.error(f"Failed to connect to Redis: {e}")
            logger.warning("Rate limiting will use in-memory windows only")
            redis_client = None

    return redis_client


def reset_rate_limits() -> None:
    """Forget every in-memory window"""
    global last_cleanup_time
    with cache_lock:
        memory_windows.clear()
    last_cleanup_time = 0.0


def cleanup_expired_windows(window_seconds: int, now: float) -> None:
    """Remove keys whose newest request is older than the window"""
    global last_cleanup_time

    if now - last_cleanup_time < MEMORY_CLEANUP_INTERVAL:
        return

    with cache_lock:
        expired_keys = [k for k, v in memory_windows.items() if not v or now - v[-1] >= window_seconds]
        for k in expired_keys:
            del memory_windows[k]

        if expired_keys:
            logger.debug(f"Cleaned up {len(expired_keys)} idle rate limit windows")

    last_cleanup_time = now


def _check_memory(key: str, limit: int, window_seconds: int, now: float) -> tuple[bool, int, int]:
    with cache_lock:
        window = memory_windows.setdefault(key, deque())
        while window and now - window[0] >= window_seconds:
            window.popleft()

        is_allowed = len(window) < limit
        if is_allowed:
            window.append(now)

        retry_after = 0 if is_allowed else max(1, int(window[0] + window_seconds - now + 0.999))
        return is_allowed, len(window), retry_after


def _check_redis(
    client: redis.Redis, key: str, limit: int, window_seconds: int, now: float
) -> tuple[bool, int, int]:
    redis_key = f"rate_limit:{key}"
    pipe = client.pipeline()
    pipe.zremrangebyscore(redis_key, 0, now - window_seconds)
    pipe.zcard(redis_key)
    _, current_count = pipe.execute()

    is_allowed = current_count < limit
    if is_allowed:
        pipe = client.pipeline()
        pipe.zadd(redis_key, {f"{now}:{uuid.uuid4().hex}": now})
        pipe.expire(redis_key, window_seconds)
        pipe.execute()
        current_count += 1

    return is_allowed, current_count, 0 if is_allowed else window_seconds


def check_rate_limit(
    key: str,
    limit: int,
    window_seconds: int,
    now: Optional[float] = None,
) -> tuple[bool, int, int]:
    """Check and record one request for key.

    A request is allowed when fewer than `limit` requests were recorded for the
    key during the last `window_seconds`. Rejected requests are not recorded.

    Returns:
        Tuple of (is_allowed, current_count, retry_after_seconds)
    """
    now = time.time() if now is None else now

    client = get_redis_client()
    if client is not None:
        try:
            return _check_redis(client, key, limit, window_seconds, now)
        except redis.RedisError as e:
            logger.warning(f"Redis rate limit check failed, using memory only: {e}")

    cleanup_expired_windows(window_seconds, now)
    is_allowed, current_count, retry_after = _check_memory(key, limit, window_seconds, now)

    if not is_allowed:
        logger.warning(f"Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")

    return is_allowed, current_count, retry_after
