"""
Hybrid in-memory + Redis rate limiting for the login endpoint.

Counts are kept in process memory and synced to Redis periodically so
several workers roughly share a window. Without Redis the limiter keeps
counting in memory alone.
"""

import logging
import os
import time
from threading import Lock
from typing import Optional

import redis
from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None
_redis_unavailable_until = 0.0

# Format: {key: {'count': int, 'reset_time': int, 'last_redis_sync': int}}
memory_cache: dict[str, dict] = {}
cache_lock = Lock()

MEMORY_CACHE_SYNC_INTERVAL = 10  # Sync to Redis every 10 seconds
REDIS_RETRY_INTERVAL = 60  # Don't retry a failed connection on every request

# Every attempt counts, successful or not
RATE_LIMITED = "Too many login attempts. Please try again later."


def get_redis_client() -> Optional[redis.Redis]:
    """Get or create the Redis client; None when Redis is not reachable"""
    global redis_client, _redis_unavailable_until

    if redis_client is not None:
        return redis_client
    if time.time() < _redis_unavailable_until:
        return None

    redis_url = os.getenv("REDIS_URL")
    if not redis_url:
        _redis_unavailable_until = float("inf")
        logger.info("ℹ️ REDIS_URL not set - login rate limiting is per process")
        return None

    try:
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
        client.ping()
    except redis.RedisError as e:
        _redis_unavailable_until = time.time() + REDIS_RETRY_INTERVAL
        logger.warning(f"⚠️ Redis unavailable, rate limiting in memory only: {e}")
        return None

    redis_client = client
    logger.info("Redis connected for rate limiting")
    return redis_client


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis]
) -> tuple[bool, int, int]:
    """Check if the rate limit for key is exceeded

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    current_time = int(time.time())

    with cache_lock:
        entry = memory_cache.get(key)
        if entry is None:
            entry = {"count": 0, "reset_time": current_time + window_seconds, "last_redis_sync": 0}
            if client is not None:
                try:
                    redis_count = client.get(key)
                    redis_ttl = client.ttl(key)
                    if redis_count and redis_ttl > 0:
                        entry = {
                            "count": int(redis_count),
                            "reset_time": current_time + redis_ttl,
                            "last_redis_sync": current_time,
                        }
                except redis.RedisError as e:
                    logger.warning(f"⚠️ Failed to load {key} from Redis, using memory only: {e}")
            memory_cache[key] = entry

        if current_time >= entry["reset_time"]:
            entry["count"] = 0
            entry["reset_time"] = current_time + window_seconds
            entry["last_redis_sync"] = 0

        is_allowed = entry["count"] < limit
        if is_allowed:
            entry["count"] += 1

        if client is not None and current_time - entry["last_redis_sync"] >= MEMORY_CACHE_SYNC_INTERVAL:
            try:
                client.set(key, entry["count"], ex=window_seconds)
                entry["last_redis_sync"] = current_time
            except redis.RedisError as e:
                logger.warning(f"⚠️ Failed to sync {key} to Redis: {e}")

        return is_allowed, entry["count"], max(0, entry["reset_time"] - current_time)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a per-IP rate limiter dependency

    Example usage:
        rate_limit_login = create_rate_limiter(limit=10, window_seconds=300, key_prefix="login")

        @router.post("/login")
        async def login(data: LoginRequest, _: None = Depends(rate_limit_login)):
            ...
    """

    async def rate_limiter(request: Request) -> None:
        key = f"{key_prefix}:{client_ip(request)}"
        is_allowed, current_count, ttl = check_rate_limit(
            key, limit, window_seconds, get_redis_client()
        )
        if not is_allowed:
            logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit}")
            raise HTTPException(
                status_code=429,
                detail=RATE_LIMITED,
                headers={"Retry-After": str(ttl)},
            )

    return rate_limiter
