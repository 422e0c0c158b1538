"""Rate limiting — Redis fixed-window counters consulted before dispatch.

Rules (window = RATE_LIMIT_WINDOW_SECONDS, default 15 min, per client IP):
  - general: every endpoint            100 req/window
  - create:  resource-creation POSTs    20 req/window
  - auth:    register / login            5 req/window

Key pattern: "ratelimit:{client_ip}:{group}". The first INCR in a window
sets the EXPIRE, so the window starts at the first request and the counter
disappears on its own once the window closes.

Each limiter is a FastAPI dependency; routers attach it with
``dependencies=[Depends(create_limiter)]``.
"""

import logging

import redis.asyncio as aioredis
from fastapi import Depends
from starlette.requests import Request

from config.settings import settings
from src.tf_common.errors import RateLimitError
from src.tf_common.redis_client import get_redis

logger = logging.getLogger("tf.ratelimit")


def client_address(request: Request) -> str:
    """Real client IP: first X-Forwarded-For hop when behind a proxy."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


class RateLimiter:
    def __init__(self, group: str, limit: int, window_seconds: int | None = None) -> None:
        self.group = group
        self.limit = limit
        self.window_seconds = window_seconds or settings.RATE_LIMIT_WINDOW_SECONDS

    def key_for(self, address: str) -> str:
        return f"ratelimit:{address}:{self.group}"

    async def __call__(
        self,
        request: Request,
        redis: aioredis.Redis = Depends(get_redis),
    ) -> None:
        key = self.key_for(client_address(request))
        count = await redis.incr(key)
        if count == 1:
            await redis.expire(key, self.window_seconds)
        if count > self.limit:
            ttl = await redis.ttl(key)
            retry_after = ttl if ttl > 0 else self.window_seconds
            logger.warning("Rate limit hit: %s (%d/%d)", key, count, self.limit)
            raise RateLimitError(retry_after)


general_limiter = RateLimiter("general", settings.RATE_LIMIT_GENERAL)
create_limiter = RateLimiter("create", settings.RATE_LIMIT_CREATE)
auth_limiter = RateLimiter("auth", settings.RATE_LIMIT_AUTH)
