"""Integration-test fixtures (requires running PG + Redis, migrated schema).

Skipped unless RUN_INTEGRATION=1. All integration tests share a single
event-loop so that the module-level SQLAlchemy async engine pool and Redis
pool (both created at import time) remain valid across the entire session.
"""

import os

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.tf_common.redis_client import get_redis

if os.environ.get("RUN_INTEGRATION") != "1":
    collect_ignore_glob = ["test_*.py"]


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(loop_scope="session", autouse=True)
async def reset_rate_limits() -> None:
    """Every test starts with empty rate limit windows (auth allows only 5)."""
    redis = await get_redis()
    async for key in redis.scan_iter(match="ratelimit:*"):
        await redis.delete(key)

