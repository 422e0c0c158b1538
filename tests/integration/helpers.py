"""Shared helpers for integration tests."""

import uuid

from httpx import AsyncClient


def unique_user() -> dict[str, str]:
    """Fresh credentials per call to avoid test pollution."""
    uid = uuid.uuid4().hex[:8]
    return {
        "name": f"Test {uid}",
        "email": f"test_{uid}@example.com",
        "password": "secret123",
    }


async def register(client: AsyncClient) -> dict[str, str]:
    """Register a fresh user; returns {"Authorization": "Bearer ..."}."""
    resp = await client.post("/api/v1/auth/register", json=unique_user())
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['token']}"}
